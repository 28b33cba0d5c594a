"""Lookup of every known template by id or source file name."""

from __future__ import annotations

from schoolforms.model.field import FormTemplate
from schoolforms.model.overlay import OverlayTemplate
from schoolforms.templates.forms import EDPP_TEMPLATE, PERISCOLAIRE_TEMPLATE
from schoolforms.templates.overlays import (
    ALSH_EDPP_TEMPLATE,
    EDPP_CONTRACT_TEMPLATE,
    EDPP_WEDNESDAY_TEMPLATE,
    PERISCOLAIRE_OVERLAY_TEMPLATE,
    TEST_EDPP_TEMPLATE,
    TEST_PERISCOLAIRE_TEMPLATE,
)

Template = FormTemplate | OverlayTemplate


class TemplateNotFoundError(KeyError):
    pass


_TEMPLATES: dict[str, Template] = {
    template.id: template
    for template in (
        PERISCOLAIRE_TEMPLATE,
        EDPP_TEMPLATE,
        ALSH_EDPP_TEMPLATE,
        PERISCOLAIRE_OVERLAY_TEMPLATE,
        EDPP_CONTRACT_TEMPLATE,
        EDPP_WEDNESDAY_TEMPLATE,
        TEST_PERISCOLAIRE_TEMPLATE,
        TEST_EDPP_TEMPLATE,
    )
}


def get_template(template_id: str) -> Template:
    try:
        return _TEMPLATES[template_id]
    except KeyError as exc:
        raise TemplateNotFoundError(f"Unknown template: {template_id!r}") from exc


def get_template_by_filename(file_name: str) -> OverlayTemplate | None:
    for template in _TEMPLATES.values():
        if isinstance(template, OverlayTemplate) and template.file_name == file_name:
            return template
    return None


def all_templates() -> list[Template]:
    return list(_TEMPLATES.values())


def template_ids() -> list[str]:
    return list(_TEMPLATES)
