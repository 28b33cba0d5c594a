"""Flow-layout templates: documents generated from scratch."""

from __future__ import annotations

from schoolforms.model.family import ParentType
from schoolforms.model.field import FieldDescriptor, FieldType, FormTemplate, Section
from schoolforms.templates.extractors import (
    DEFAULT_NATIONALITY,
    activity_selected,
    address,
    constant,
    emergency,
    format_date,
    parent,
    parent_by_type,
    parent_title,
    student,
)

GRADES = ("CP", "CE1", "CE2", "CM1", "CM2", "6ème", "5ème", "4ème", "3ème")
PARENT_TITLE_OPTIONS = ("Père", "Mère", "Tuteur légal")


def _text(field_id: str, label: str, required: bool = False, max_length: int | None = None) -> FieldDescriptor:
    return FieldDescriptor(field_id, label, FieldType.TEXT, required=required, max_length=max_length)


def _typed(field_id: str, label: str, field_type: FieldType, required: bool = False) -> FieldDescriptor:
    return FieldDescriptor(field_id, label, field_type, required=required)


def _select(field_id: str, label: str, options: tuple[str, ...], required: bool = False) -> FieldDescriptor:
    return FieldDescriptor(field_id, label, FieldType.SELECT, required=required, options=options)


def _parent_fields(prefix: str, required: bool) -> tuple[FieldDescriptor, ...]:
    return (
        _select(f"{prefix}_title", "Titre (Père/Mère/Tuteur)", PARENT_TITLE_OPTIONS, required),
        _text(f"{prefix}_lastName", "Nom", required, 50),
        _text(f"{prefix}_firstName", "Prénom", required, 50),
        _typed(f"{prefix}_phone", "Téléphone", FieldType.PHONE, required),
        _typed(f"{prefix}_email", "Email", FieldType.EMAIL, required),
        _text(f"{prefix}_profession", "Profession", max_length=100),
    )


def _parent_extractors(prefix: str, index: int) -> dict:
    return {
        f"{prefix}_title": lambda family: parent_title(family.parent(index)),
        f"{prefix}_lastName": parent("last_name", index=index),
        f"{prefix}_firstName": parent("first_name", index=index),
        f"{prefix}_phone": parent("phone", index=index),
        f"{prefix}_email": parent("email", index=index),
        f"{prefix}_profession": parent("profession", index=index),
    }


PERISCOLAIRE_TEMPLATE = FormTemplate(
    id="periscolaire",
    name="Périscolaire",
    title="FICHE D'INSCRIPTION PÉRISCOLAIRE 2025-2026",
    description="Inscription aux activités périscolaires",
    sections=(
        Section(
            "child_info",
            "INFORMATIONS SUR L'ENFANT",
            (
                _text("child_lastName", "Nom de l'enfant", True, 50),
                _text("child_firstName", "Prénom", True, 50),
                _typed("child_birthDate", "Date de naissance", FieldType.DATE, True),
                _select("child_grade", "Classe", GRADES, True),
                _text("child_school", "École/Établissement", True, 100),
            ),
        ),
        Section(
            "address_info",
            "ADRESSE DE L'ENFANT",
            (
                FieldDescriptor("address_street", "Adresse", FieldType.TEXTAREA, required=True, max_length=200),
                _text("address_postalCode", "Code postal", True, 10),
                _text("address_city", "Ville", True, 50),
            ),
        ),
        Section(
            "parent_info",
            "REPRÉSENTANTS LÉGAUX",
            _parent_fields("parent1", required=True) + _parent_fields("parent2", required=False),
        ),
        Section(
            "emergency_contact",
            "PERSONNE À PRÉVENIR EN CAS D'URGENCE",
            (
                _text("emergency_lastName", "Nom", True, 50),
                _text("emergency_firstName", "Prénom", True, 50),
                _typed("emergency_phone", "Téléphone", FieldType.PHONE, True),
                _text("emergency_relationship", "Lien de parenté", True, 50),
            ),
        ),
        Section(
            "activities",
            "ACTIVITÉS DEMANDÉES",
            (
                _typed("garderie_matin", "Garderie du matin (7h30-8h30)", FieldType.CHECKBOX),
                _typed("cantine", "Cantine (12h00-13h30)", FieldType.CHECKBOX),
                _typed("garderie_soir", "Garderie du soir (16h30-18h30)", FieldType.CHECKBOX),
                _typed("etude", "Étude surveillée (16h30-17h30)", FieldType.CHECKBOX),
            ),
        ),
    ),
    extractors={
        "child_lastName": student("last_name"),
        "child_firstName": student("first_name"),
        "child_birthDate": student("birth_date", transform=format_date),
        "child_grade": student("grade"),
        "child_school": student("school"),
        "address_street": address("street"),
        "address_postalCode": address("postal_code"),
        "address_city": address("city"),
        **_parent_extractors("parent1", 0),
        **_parent_extractors("parent2", 1),
        "emergency_lastName": emergency("last_name"),
        "emergency_firstName": emergency("first_name"),
        "emergency_phone": emergency("phone"),
        "emergency_relationship": emergency("relationship"),
        "garderie_matin": activity_selected("garderie_matin"),
        "cantine": activity_selected("cantine"),
        "garderie_soir": activity_selected("garderie_soir"),
        "etude": activity_selected("etude"),
    },
)


def _edpp_parent_fields(prefix: str) -> tuple[FieldDescriptor, ...]:
    return (
        _text(f"{prefix}_firstName", "Prénom", max_length=50),
        _text(f"{prefix}_nationality", "Nationalité", max_length=50),
        _text(f"{prefix}_profession", "Profession", max_length=100),
        _text(f"{prefix}_employer", "Employeur", max_length=100),
        _typed(f"{prefix}_phone", "Téléphone", FieldType.PHONE),
        _typed(f"{prefix}_mobile", "Mobile", FieldType.PHONE),
        _typed(f"{prefix}_email", "Email", FieldType.EMAIL),
    )


def _edpp_parent_extractors(prefix: str, parent_type: ParentType) -> dict:
    def nationality(family) -> str:
        return DEFAULT_NATIONALITY if family.parent_of_type(parent_type) is not None else ""

    return {
        f"{prefix}_firstName": parent_by_type(parent_type, "first_name"),
        f"{prefix}_nationality": nationality,
        f"{prefix}_profession": parent_by_type(parent_type, "profession"),
        f"{prefix}_employer": parent_by_type(parent_type, "work_address", "street"),
        f"{prefix}_phone": parent_by_type(parent_type, "work_phone"),
        f"{prefix}_mobile": parent_by_type(parent_type, "phone"),
        f"{prefix}_email": parent_by_type(parent_type, "email"),
    }


EDPP_TEMPLATE = FormTemplate(
    id="edpp",
    name="EDPP",
    title="DOSSIER D'INSCRIPTION ALSH - EDPP 2025-2026",
    description="Inscription à l'Accueil de Loisirs Sans Hébergement - École de Pédagogie Par le Projet",
    sections=(
        Section(
            "child_info",
            "INFORMATIONS SUR L'ENFANT",
            (
                _text("child_lastName", "Nom de l'enfant", True, 50),
                _text("child_firstName", "Prénom", True, 50),
                _typed("child_birthDate", "Date de naissance", FieldType.DATE, True),
                _text("child_nationality", "Nationalité", True, 50),
                _select("child_grade", "Classe en 2025-2026", GRADES, True),
            ),
        ),
        Section(
            "address_info",
            "ADRESSE",
            (
                FieldDescriptor("address_street", "Adresse", FieldType.TEXTAREA, required=True, max_length=200),
                _text("address_postalCode", "Code postal", True, 10),
                _text("address_city", "Ville", True, 50),
            ),
        ),
        Section(
            "father_info",
            "INFORMATIONS PÈRE",
            (_text("father_lastName", "Nom du père", max_length=50),)
            + _edpp_parent_fields("father"),
        ),
        Section(
            "mother_info",
            "INFORMATIONS MÈRE",
            (
                _text("mother_maidenName", "Nom de jeune fille", max_length=50),
                _text("mother_marriedName", "Nom marital", max_length=50),
            )
            + _edpp_parent_fields("mother"),
        ),
        Section(
            "authorizations",
            "AUTORISATIONS",
            (
                _typed("photo_authorization", "Autorisation de droit à l'image", FieldType.CHECKBOX),
                _typed("transport_authorization", "Autorisation de transport", FieldType.CHECKBOX),
                FieldDescriptor("special_needs", "Besoins particuliers", FieldType.TEXTAREA, max_length=500),
            ),
        ),
    ),
    extractors={
        "child_lastName": student("last_name"),
        "child_firstName": student("first_name"),
        "child_birthDate": student("birth_date", transform=format_date),
        "child_nationality": constant(DEFAULT_NATIONALITY),
        "child_grade": student("grade"),
        "address_street": address("street"),
        "address_postalCode": address("postal_code"),
        "address_city": address("city"),
        "father_lastName": parent_by_type(ParentType.FATHER, "last_name"),
        **_edpp_parent_extractors("father", ParentType.FATHER),
        "mother_maidenName": constant(""),
        "mother_marriedName": parent_by_type(ParentType.MOTHER, "last_name"),
        **_edpp_parent_extractors("mother", ParentType.MOTHER),
        "photo_authorization": student("photo_authorization", transform=bool),
        "transport_authorization": student("transport_authorization", transform=bool),
        "special_needs": student("special_needs"),
    },
)

