"""Form template and field descriptor definitions."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from schoolforms.model.family import Family

FieldValue = Union[str, bool, int, float]
ExtractedData = dict[str, FieldValue]
Getter = Callable[["Family"], FieldValue]


class FieldType(str, Enum):
    TEXT = "text"
    DATE = "date"
    EMAIL = "email"
    PHONE = "phone"
    TEXTAREA = "textarea"
    SELECT = "select"
    CHECKBOX = "checkbox"


class WidgetKind(str, Enum):
    """Interactive widget created for a field in editable documents."""

    TEXT = "text"
    TEXTAREA = "textarea"
    CHECKBOX = "checkbox"
    DROPDOWN = "dropdown"


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    id: str
    label: str
    field_type: FieldType = FieldType.TEXT
    required: bool = False
    options: tuple[str, ...] = ()
    max_length: int | None = None

    @property
    def default_value(self) -> FieldValue:
        return False if self.field_type is FieldType.CHECKBOX else ""

    def widget_kind(self, value: FieldValue | None) -> WidgetKind:
        if self.field_type is FieldType.CHECKBOX:
            return WidgetKind.CHECKBOX
        if self.field_type is FieldType.SELECT and self.options:
            text = "" if value is None else str(value)
            if not text or text in self.options:
                return WidgetKind.DROPDOWN
            return WidgetKind.TEXT
        if self.field_type is FieldType.TEXTAREA:
            return WidgetKind.TEXTAREA
        return WidgetKind.TEXT


@dataclass(frozen=True, slots=True)
class Section:
    id: str
    title: str
    fields: tuple[FieldDescriptor, ...]


@dataclass(frozen=True, slots=True)
class FormTemplate:
    """Static description of a document built from scratch by the flow engine."""

    id: str
    name: str
    title: str
    sections: tuple[Section, ...]
    extractors: Mapping[str, Getter] = field(default_factory=dict)
    description: str = ""

    def iter_fields(self):
        for section in self.sections:
            yield from section.fields
