from __future__ import annotations

from datetime import date

import pytest

from schoolforms.pdf.flow import FlowRenderer
from schoolforms.pdf.generate import default_filename, generate_pdf, renderer_for, save_pdf
from schoolforms.pdf.loader import PdfLoadError, TemplateStore
from schoolforms.pdf.stamper import OverlayRenderer
from schoolforms.templates.forms import PERISCOLAIRE_TEMPLATE
from schoolforms.templates.overlays import ALSH_EDPP_TEMPLATE
from schoolforms.templates.registry import TemplateNotFoundError


def test_renderer_selection() -> None:
    flow = renderer_for(PERISCOLAIRE_TEMPLATE)
    overlay = renderer_for(ALSH_EDPP_TEMPLATE)
    assert isinstance(flow, FlowRenderer) and flow.editable is True
    assert isinstance(overlay, OverlayRenderer) and overlay.editable is False
    assert renderer_for(PERISCOLAIRE_TEMPLATE, editable=False).editable is False


def test_generate_by_id(emma_family) -> None:
    document = generate_pdf("edpp", emma_family)
    assert document.content.startswith(b"%PDF-")
    assert document.field_names


def test_generate_unknown_id(emma_family) -> None:
    with pytest.raises(TemplateNotFoundError):
        generate_pdf("nope", emma_family)


def test_missing_overlay_file_fails(tmp_path, emma_family) -> None:
    with pytest.raises(PdfLoadError):
        generate_pdf(ALSH_EDPP_TEMPLATE, emma_family, store=TemplateStore(tmp_path))


def test_default_filename() -> None:
    assert default_filename(PERISCOLAIRE_TEMPLATE, date(2025, 9, 1)) == "Périscolaire_2025-09-01.pdf"


def test_save_pdf(tmp_path, empty_family) -> None:
    document = generate_pdf(PERISCOLAIRE_TEMPLATE, empty_family, editable=False)
    path = save_pdf(document, tmp_path / "out", PERISCOLAIRE_TEMPLATE)
    assert path.parent == tmp_path / "out"
    assert path.name.startswith("Périscolaire_")
    assert path.read_bytes() == document.content

    named = save_pdf(document.content, tmp_path, PERISCOLAIRE_TEMPLATE, filename="fiche.pdf")
    assert named.name == "fiche.pdf"
