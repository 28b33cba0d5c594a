"""Pure mapping functions from a family record to flat template data.

Extraction never fails: missing records or attributes fall back to the
field's default (empty string, ``False`` for checkboxes).
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import date, datetime
import logging
import re

from schoolforms.model.family import Family, Parent, ParentType
from schoolforms.model.field import ExtractedData, FieldValue, FormTemplate, Getter
from schoolforms.model.overlay import OverlayTemplate

logger = logging.getLogger(__name__)

DEFAULT_NATIONALITY = "Française"
FRENCH_DATE_FORMAT = "%d/%m/%Y"
_FRENCH_DATE = re.compile(r"^\d{2}/\d{2}/\d{4}$")

PARENT_TITLES = {
    ParentType.FATHER: "Père",
    ParentType.MOTHER: "Mère",
    ParentType.GUARDIAN: "Tuteur légal",
}


def format_date(value: date | datetime | str | None) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.strftime(FRENCH_DATE_FORMAT)
    if isinstance(value, date):
        return value.strftime(FRENCH_DATE_FORMAT)
    text = str(value).strip()
    if not text or _FRENCH_DATE.match(text):
        return text
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).strftime(FRENCH_DATE_FORMAT)
    except ValueError:
        return text


def join_list(values: Iterable[str] | None) -> str:
    return ", ".join(value for value in (values or []) if value)


def parent_title(parent: Parent | None) -> str:
    if parent is None or parent.parent_type is None:
        return ""
    return PARENT_TITLES[parent.parent_type]


def attr(obj: object, *names: str, default: FieldValue = "") -> FieldValue:
    """Follow ``names`` through nested attributes, returning ``default`` on any gap."""
    current = obj
    for name in names:
        if current is None:
            return default
        current = getattr(current, name, None)
    if current is None or current == "":
        return default
    return current


def student(*names: str, index: int = 0, transform: Callable | None = None) -> Getter:
    def getter(family: Family) -> FieldValue:
        value = attr(family.student(index), *names, default="")
        return transform(value) if transform else value

    return getter


def parent(*names: str, index: int = 0) -> Getter:
    return lambda family: attr(family.parent(index), *names)


def parent_by_type(parent_type: ParentType, *names: str) -> Getter:
    return lambda family: attr(family.parent_of_type(parent_type), *names)


def address(name: str) -> Getter:
    return lambda family: attr(family.address, name)


def emergency(*names: str, index: int = 0) -> Getter:
    return lambda family: attr(family.emergency_contact(index), *names)


def medical(name: str, index: int = 0) -> Getter:
    def getter(family: Family) -> FieldValue:
        value = attr(family.student(index), "medical_info", name, default="")
        if isinstance(value, list):
            return join_list(value)
        return value

    return getter


def constant(value: FieldValue) -> Getter:
    return lambda family: value


def today(family: Family) -> str:
    return date.today().strftime(FRENCH_DATE_FORMAT)


def student_full_name(family: Family) -> str:
    child = family.student()
    if child is None:
        return ""
    return f"{child.first_name} {child.last_name}".strip()


def activity_selected(activity_id: str, index: int = 0) -> Getter:
    def getter(family: Family) -> bool:
        child = family.student(index)
        if child is None:
            return False
        return any(item.selected for item in child.activities if item.id == activity_id)

    return getter


def first_of(*getters: Getter) -> Getter:
    """Return the first non-empty value among ``getters``."""

    def getter(family: Family) -> FieldValue:
        for candidate in getters:
            value = candidate(family)
            if value not in ("", None):
                return value
        return ""

    return getter


def extract(template: FormTemplate | OverlayTemplate, family: Family) -> ExtractedData:
    data: ExtractedData = {}
    for key, getter in template.extractors.items():
        data[key] = _safe(getter, family, key)

    if isinstance(template, FormTemplate):
        for descriptor in template.iter_fields():
            if data.get(descriptor.id) is None:
                data[descriptor.id] = descriptor.default_value
    return {key: "" if value is None else value for key, value in data.items()}


def extract_acroform_values(template: OverlayTemplate, family: Family) -> ExtractedData:
    values = {name: _safe(getter, family, name) for name, getter in template.acroform_fields.items()}
    return {name: "" if value is None else value for name, value in values.items()}


def _safe(getter: Getter, family: Family, key: str) -> FieldValue | None:
    """Run one getter; ``None`` means no value, so the caller can apply the field default."""
    try:
        return getter(family)
    except (AttributeError, IndexError, KeyError, TypeError, ValueError) as exc:
        logger.debug("Extraction of %s fell back to default: %s", key, exc)
        return None
