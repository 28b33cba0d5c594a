"""Overlay templates: official PDFs stamped at calibrated coordinates.

Coordinates are PDF points with the origin at the bottom-left corner of the
page, measured against the files shipped in the templates directory.
"""

from __future__ import annotations

from schoolforms.model.family import Family, ParentType
from schoolforms.model.field import Getter
from schoolforms.model.overlay import FieldCoordinate as At
from schoolforms.model.overlay import OverlayTemplate
from schoolforms.templates.extractors import (
    DEFAULT_NATIONALITY,
    address,
    attr,
    constant,
    first_of,
    format_date,
    medical,
    parent,
    student,
    student_full_name,
    today,
)

SCHOOL_YEAR = "2025-2026"


def _main_parent_is(family: Family, parent_type: ParentType) -> bool:
    main = family.parent(0)
    return main is not None and main.parent_type is parent_type


def main_parent_as(parent_type: ParentType, *names: str) -> Getter:
    """Value from the first listed parent, only when that parent has ``parent_type``."""
    return lambda family: attr(family.parent(0), *names) if _main_parent_is(family, parent_type) else ""


def main_parent_constant(parent_type: ParentType, value: str) -> Getter:
    return lambda family: value if _main_parent_is(family, parent_type) else ""


def main_parent_address(parent_type: ParentType) -> Getter:
    return lambda family: attr(family.address, "street") if _main_parent_is(family, parent_type) else ""


def emergency_or_parent(name: str, fallback: str = "") -> Getter:
    """Emergency contact value, falling back to the first parent; empty without a contact."""

    def getter(family: Family):
        contact = family.emergency_contact(0)
        if contact is None:
            return ""
        return attr(contact, name) or attr(family.parent(0), name) or fallback

    return getter


def student_is(gender: str) -> Getter:
    return lambda family: attr(family.student(), "gender") == gender


def _parent_block(prefix: str, parent_type: ParentType) -> dict[str, Getter]:
    return {
        f"{prefix}.firstName": main_parent_as(parent_type, "first_name"),
        f"{prefix}.nationality": main_parent_constant(parent_type, DEFAULT_NATIONALITY),
        f"{prefix}.address": main_parent_address(parent_type),
        f"{prefix}.profession": main_parent_as(parent_type, "profession"),
        f"{prefix}.employer": main_parent_as(parent_type, "work_address", "street"),
        f"{prefix}.mobile": main_parent_as(parent_type, "phone"),
        f"{prefix}.email": main_parent_as(parent_type, "email"),
    }


ALSH_EDPP_TEMPLATE = OverlayTemplate(
    id="alsh-edpp-2025-2026",
    name="ALSH EDPP 2025-2026",
    file_name="Dossier d'inscription ALSH - EDPP 2025-2026.pdf",
    description="Dossier d'inscription pour ALSH EDPP année scolaire 2025-2026",
    coordinates={
        "child.lastName": At(235, 765),
        "child.firstName": At(425, 765),
        "child.birthDate": At(175, 740),
        "child.nationality": At(505, 740),
        "child.grade": At(140, 600),
        "child.school": At(300, 600),
        "address.street": At(115, 700, font_size=9),
        "address.postalCode": At(145, 680),
        "address.city": At(355, 680),
        "address.country": At(500, 680),
        "father.lastName": At(235, 580),
        "father.firstName": At(425, 580),
        "father.nationality": At(190, 555),
        "father.address": At(115, 555, font_size=9),
        "father.profession": At(165, 530, font_size=9),
        "father.employer": At(405, 530, font_size=9),
        "father.mobile": At(165, 510, font_size=9),
        "father.email": At(355, 510, font_size=9),
        "mother.maidenName": At(355, 455),
        "mother.marriedName": At(505, 455),
        "mother.firstName": At(205, 435),
        "mother.nationality": At(425, 435),
        "mother.address": At(115, 410, font_size=9),
        "mother.profession": At(165, 385, font_size=9),
        "mother.employer": At(405, 385, font_size=9),
        "mother.mobile": At(165, 365, font_size=9),
        "mother.email": At(355, 365, font_size=9),
        "emergency.lastName": At(200, 320, font_size=9),
        "emergency.firstName": At(350, 320, font_size=9),
        "emergency.phone": At(450, 320, font_size=9),
        "emergency.relationship": At(200, 300, font_size=9),
        "medical.allergies": At(150, 260, font_size=8, max_width=400),
        "medical.medications": At(150, 240, font_size=8, max_width=400),
        "medical.conditions": At(150, 220, font_size=8, max_width=400),
        "medical.notes": At(150, 200, font_size=8, max_width=400),
        "admin.date": At(400, 100),
        "admin.place": At(300, 100),
        "admin.year": At(450, 780, font_size=12),
        "admin.institution": At(300, 780, font_size=12),
    },
    extractors={
        "child.lastName": first_of(student("last_name"), parent("last_name")),
        "child.firstName": student("first_name"),
        "child.birthDate": student("birth_date", transform=format_date),
        "child.nationality": lambda family: DEFAULT_NATIONALITY if family.student() is not None else "",
        "child.grade": student("grade"),
        "child.school": student("school"),
        "address.street": address("street"),
        "address.postalCode": address("postal_code"),
        "address.city": address("city"),
        "address.country": address("country"),
        "father.lastName": main_parent_as(ParentType.FATHER, "last_name"),
        **_parent_block("father", ParentType.FATHER),
        "mother.maidenName": main_parent_as(ParentType.MOTHER, "last_name"),
        "mother.marriedName": main_parent_as(ParentType.MOTHER, "last_name"),
        **_parent_block("mother", ParentType.MOTHER),
        "emergency.lastName": emergency_or_parent("last_name"),
        "emergency.firstName": emergency_or_parent("first_name"),
        "emergency.phone": emergency_or_parent("phone"),
        "emergency.relationship": lambda family: (
            (attr(family.emergency_contact(0), "relationship") or "Parent")
            if family.emergency_contact(0) is not None
            else ""
        ),
        "medical.allergies": medical("allergies"),
        "medical.medications": medical("medications"),
        "medical.conditions": medical("conditions"),
        "medical.notes": medical("notes"),
        "admin.date": today,
        "admin.place": address("city"),
        "admin.year": constant(SCHOOL_YEAR),
        "admin.institution": constant("ALSH - EDPP"),
    },
)

_BASIC_EXTRACTORS: dict[str, Getter] = {
    "child.lastName": student("last_name"),
    "child.firstName": student("first_name"),
    "child.birthDate": student("birth_date", transform=format_date),
    "child.grade": student("grade"),
    "address.street": address("street"),
    "address.city": address("city"),
    "address.postalCode": address("postal_code"),
    "parent.lastName": parent("last_name"),
    "parent.firstName": parent("first_name"),
    "parent.phone": parent("phone"),
    "parent.email": parent("email"),
    "admin.date": today,
}


def _basic(*keys: str) -> dict[str, Getter]:
    return {key: _BASIC_EXTRACTORS[key] for key in keys}


# TODO: recalibrate against the printed fiche; these positions are first estimates.
PERISCOLAIRE_OVERLAY_TEMPLATE = OverlayTemplate(
    id="periscolaire-2025-2026",
    name="Périscolaire 2025-2026",
    file_name="PERISCOLAIRE – 2025-2026 - Fiche d'inscription (1).pdf",
    description="Fiche d'inscription périscolaire année scolaire 2025-2026",
    coordinates={
        "child.lastName": At(200, 750),
        "child.firstName": At(400, 750),
        "child.birthDate": At(150, 720),
        "address.street": At(120, 680, font_size=9),
        "address.city": At(350, 680),
        "address.postalCode": At(150, 660),
        "parent.lastName": At(200, 600),
        "parent.firstName": At(400, 600),
        "parent.phone": At(150, 580, font_size=9),
        "parent.email": At(350, 580, font_size=9),
    },
    extractors=_basic(
        "child.lastName",
        "child.firstName",
        "child.birthDate",
        "address.street",
        "address.city",
        "address.postalCode",
        "parent.lastName",
        "parent.firstName",
        "parent.phone",
        "parent.email",
    ),
)

EDPP_CONTRACT_TEMPLATE = OverlayTemplate(
    id="edpp-contract-2025-2026",
    name="EDPP Contrat d'engagement 2025-2026",
    file_name="EDPP Contrat d'engagement 2025-2026.pdf",
    description="Contrat d'engagement EDPP année scolaire 2025-2026",
    coordinates={
        "child.lastName": At(180, 720),
        "child.firstName": At(380, 720),
        "parent.lastName": At(180, 650),
        "parent.firstName": At(380, 650),
        "parent.signature": At(400, 150),
        "admin.date": At(200, 150),
    },
    extractors={
        **_basic("child.lastName", "child.firstName", "parent.lastName", "parent.firstName", "admin.date"),
        "parent.signature": lambda family: " ".join(
            part for part in (attr(family.parent(0), "first_name"), attr(family.parent(0), "last_name")) if part
        ),
    },
)

EDPP_WEDNESDAY_TEMPLATE = OverlayTemplate(
    id="edpp-wednesday-2025-2026",
    name="EDPP Mercredis & Vacances 2025-2026",
    file_name="Fiche d'inscription EDPP - Mercredis Vacs sco 25-26.pdf",
    description="Fiche d'inscription EDPP pour les mercredis et vacances scolaires 2025-2026",
    coordinates={
        "child.lastName": At(220, 740),
        "child.firstName": At(420, 740),
        "child.grade": At(150, 710),
        "address.street": At(130, 670, font_size=9),
        "address.city": At(360, 670),
        "parent.lastName": At(220, 610),
        "parent.firstName": At(420, 610),
        "parent.phone": At(160, 590, font_size=9),
        "parent.email": At(360, 590, font_size=9),
    },
    extractors=_basic(
        "child.lastName",
        "child.firstName",
        "child.grade",
        "address.street",
        "address.city",
        "parent.lastName",
        "parent.firstName",
        "parent.phone",
        "parent.email",
    ),
)

_TEST_FIELDS: dict[str, Getter] = {
    "test.name": student_full_name,
    "test.homme": student_is("M"),
    "test.femme": student_is("F"),
}

TEST_PERISCOLAIRE_TEMPLATE = OverlayTemplate(
    id="test-periscolaire",
    name="Périscolaire (Test)",
    file_name="test-periscolaire.pdf",
    description="Formulaire d'inscription périscolaire - Version test",
    acroform_fields=_TEST_FIELDS,
)

TEST_EDPP_TEMPLATE = OverlayTemplate(
    id="test-edpp",
    name="EDPP (Test)",
    file_name="test-edpp.pdf",
    description="Dossier d'inscription ALSH - EDPP - Version test",
    acroform_fields=_TEST_FIELDS,
)
