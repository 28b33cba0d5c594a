"""Document models for loaded source PDFs and generated output."""

from __future__ import annotations

from dataclasses import dataclass, field

from pypdf import PdfReader


@dataclass(slots=True)
class LoadedPdf:
    source: str
    content: bytes
    reader: PdfReader

    @property
    def page_count(self) -> int:
        return len(self.reader.pages)

    def page_size(self, page_index: int) -> tuple[float, float]:
        page = self.reader.pages[page_index]
        return float(page.mediabox.width), float(page.mediabox.height)

    @property
    def has_acroform(self) -> bool:
        root = self.reader.trailer["/Root"].get_object()
        return "/AcroForm" in root


@dataclass(frozen=True, slots=True)
class FieldPlacement:
    page_index: int
    field_id: str
    x: float
    top: float
    width: float
    height: float
    lines: tuple[str, ...] = ()
    widget_name: str | None = None

    @property
    def bottom(self) -> float:
        return self.top - self.height


@dataclass(slots=True)
class RenderedDocument:
    content: bytes
    page_count: int
    placements: list[FieldPlacement] = field(default_factory=list)
    field_names: list[str] = field(default_factory=list)

    def placements_on_page(self, page_index: int) -> list[FieldPlacement]:
        return [placement for placement in self.placements if placement.page_index == page_index]


@dataclass(frozen=True, slots=True)
class ExistingField:
    """A form field already present in a source PDF."""

    page_index: int
    name: str
    kind: str
    x: float
    y: float
    width: float
    height: float
    value: str = ""
    checked: bool = False
    required: bool = False
