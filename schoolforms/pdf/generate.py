"""Entry points: pick the right renderer for a template and produce a document."""

from __future__ import annotations

from datetime import date
import logging
from pathlib import Path
from typing import Protocol

from schoolforms.model.document import RenderedDocument
from schoolforms.model.family import Family
from schoolforms.model.field import FormTemplate
from schoolforms.model.overlay import OverlayTemplate
from schoolforms.pdf.flow import FlowRenderer, LayoutConfig
from schoolforms.pdf.loader import TemplateStore
from schoolforms.pdf.stamper import OverlayRenderer
from schoolforms.templates.registry import Template, get_template

logger = logging.getLogger(__name__)


class DocumentRenderer(Protocol):
    def render(self, template, family: Family) -> RenderedDocument: ...


def renderer_for(
    template: Template,
    editable: bool | None = None,
    layout: LayoutConfig | None = None,
    store: TemplateStore | None = None,
) -> DocumentRenderer:
    """Flow templates default to interactive fields; overlays default to flat stamping."""
    if isinstance(template, FormTemplate):
        return FlowRenderer(layout=layout, editable=True if editable is None else editable)
    if isinstance(template, OverlayTemplate):
        return OverlayRenderer(store=store, editable=bool(editable))
    raise TypeError(f"Unsupported template type: {type(template).__name__}")


def generate_pdf(
    template: Template | str,
    family: Family,
    editable: bool | None = None,
    layout: LayoutConfig | None = None,
    store: TemplateStore | None = None,
) -> RenderedDocument:
    if isinstance(template, str):
        template = get_template(template)
    renderer = renderer_for(template, editable=editable, layout=layout, store=store)
    return renderer.render(template, family)


def default_filename(template: Template, today: date | None = None) -> str:
    day = today or date.today()
    return f"{template.name}_{day.isoformat()}.pdf"


def save_pdf(
    document: RenderedDocument | bytes,
    directory: str | Path,
    template: Template,
    filename: str | None = None,
) -> Path:
    content = document.content if isinstance(document, RenderedDocument) else document
    target_dir = Path(directory)
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / (filename or default_filename(template))
    path.write_bytes(content)
    logger.info("Saved %s (%d bytes)", path, len(content))
    return path
