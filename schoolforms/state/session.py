"""Per-generation render state: canvas, cursor and widget naming."""

from __future__ import annotations

from dataclasses import dataclass, field

from reportlab.pdfgen import canvas

from schoolforms.model.document import FieldPlacement


class FieldCreationError(RuntimeError):
    """Raised when an interactive field cannot be registered on the document."""


@dataclass(slots=True)
class GenerationSession:
    report: canvas.Canvas
    page_width: float
    page_height: float
    top: float
    bottom: float
    page_index: int = 0
    y: float = 0.0
    field_counter: int = 0
    used_names: set[str] = field(default_factory=set)
    placements: list[FieldPlacement] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.y = self.top

    def fits(self, height: float) -> bool:
        return self.y - height >= self.bottom

    def new_page(self) -> None:
        self.report.showPage()
        self.page_index += 1
        self.y = self.top

    def next_field_name(self, field_id: str) -> str:
        name = f"{field_id}_{self.field_counter}"
        self.field_counter += 1
        return name

    def register_name(self, name: str) -> None:
        if name in self.used_names:
            raise FieldCreationError(f"Duplicate field name: {name}")
        self.used_names.add(name)

    def record(self, placement: FieldPlacement) -> None:
        self.placements.append(placement)

    def field_names(self) -> list[str]:
        return [p.widget_name for p in self.placements if p.widget_name is not None]
