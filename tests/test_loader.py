from __future__ import annotations

from urllib.parse import quote

import pytest

from schoolforms.model.document import LoadedPdf
from schoolforms.pdf.importer import list_form_fields
from schoolforms.pdf.loader import PdfLoadError, TemplateStore, filename_variants, load_pdf_bytes

OFFICIAL_NAME = "PERISCOLAIRE – 2025-2026 - Fiche d’inscription (1).pdf"


def test_bytes_without_signature_are_rejected() -> None:
    with pytest.raises(PdfLoadError):
        load_pdf_bytes(b"<html>404 Not Found</html>", source="missing.pdf")


def test_load_reports_pages(pdf_factory) -> None:
    document = load_pdf_bytes(pdf_factory(pages=2), source="two.pdf")
    assert isinstance(document, LoadedPdf)
    assert document.page_count == 2
    assert document.page_size(0) == pytest.approx((595.27, 841.89), abs=0.01)
    assert document.has_acroform is False


def test_filename_variants_cover_dash_apostrophe_and_encoding() -> None:
    variants = filename_variants(OFFICIAL_NAME)
    assert variants[0] == OFFICIAL_NAME
    assert quote(OFFICIAL_NAME) in variants
    assert "PERISCOLAIRE - 2025-2026 - Fiche d'inscription (1).pdf" in variants
    assert len(variants) == len(set(variants))


def test_plain_name_has_few_variants() -> None:
    assert filename_variants("test-edpp.pdf") == ["test-edpp.pdf"]


def test_store_falls_back_to_ascii_spelling(tmp_path, pdf_factory) -> None:
    (tmp_path / "PERISCOLAIRE - 2025-2026 - Fiche d'inscription (1).pdf").write_bytes(pdf_factory())
    content = TemplateStore(tmp_path).fetch(OFFICIAL_NAME)
    assert content.startswith(b"%PDF-")


def test_store_skips_variants_that_are_not_pdfs(tmp_path, pdf_factory) -> None:
    (tmp_path / OFFICIAL_NAME).write_bytes(b"not a pdf")
    (tmp_path / "PERISCOLAIRE - 2025-2026 - Fiche d'inscription (1).pdf").write_bytes(pdf_factory())
    assert TemplateStore(tmp_path).load(OFFICIAL_NAME).page_count == 1


def test_store_lists_attempts_when_nothing_matches(tmp_path) -> None:
    with pytest.raises(PdfLoadError, match="tried"):
        TemplateStore(tmp_path).fetch(OFFICIAL_NAME)


def test_list_form_fields(pdf_factory) -> None:
    document = load_pdf_bytes(pdf_factory(with_form=True))
    fields = {field.name: field for field in list_form_fields(document)}
    assert set(fields) == {"test.name", "test.homme", "test.femme", "other"}
    assert fields["test.name"].kind == "text"
    assert fields["test.homme"].kind == "button"
    assert fields["test.homme"].checked is False
    assert fields["test.name"].width == pytest.approx(200)
    assert document.has_acroform is True
