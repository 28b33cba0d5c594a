from __future__ import annotations

from datetime import date, datetime

import pytest

from schoolforms.model.family import Family, ParentType
from schoolforms.model.field import FieldDescriptor, FieldType, FormTemplate, Section
from schoolforms.templates.extractors import (
    extract,
    extract_acroform_values,
    format_date,
    join_list,
    parent_title,
)
from schoolforms.templates.forms import EDPP_TEMPLATE, PERISCOLAIRE_TEMPLATE
from schoolforms.templates.overlays import ALSH_EDPP_TEMPLATE, TEST_PERISCOLAIRE_TEMPLATE
from schoolforms.templates.registry import (
    TemplateNotFoundError,
    all_templates,
    get_template,
    get_template_by_filename,
    template_ids,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (date(2016, 9, 12), "12/09/2016"),
        (datetime(2016, 9, 12, 10, 0), "12/09/2016"),
        ("2016-09-12", "12/09/2016"),
        ("12/09/2016", "12/09/2016"),
        ("pas une date", "pas une date"),
        ("", ""),
        (None, ""),
    ],
)
def test_format_date(value, expected) -> None:
    assert format_date(value) == expected


def test_small_transforms() -> None:
    assert join_list(["Arachides", "", "Pollen"]) == "Arachides, Pollen"
    assert join_list(None) == ""
    family = Family.from_dict({"parents": [{"type": "guardian"}]})
    assert parent_title(family.parent(0)) == "Tuteur légal"
    assert parent_title(None) == ""


def test_emma_scenario(emma_family) -> None:
    data = extract(PERISCOLAIRE_TEMPLATE, emma_family)
    assert data["child_firstName"] == "Emma"
    assert data["child_birthDate"] == "12/09/2016"
    assert data["parent1_title"] == "Mère"
    assert data["parent2_firstName"] == "Paul"
    assert data["cantine"] is True
    assert data["etude"] is False


def test_every_field_gets_a_value_for_an_empty_family(empty_family) -> None:
    for template in (PERISCOLAIRE_TEMPLATE, EDPP_TEMPLATE):
        data = extract(template, empty_family)
        for descriptor in template.iter_fields():
            assert data[descriptor.id] == descriptor.default_value or data[descriptor.id] == "Française"


def test_extraction_is_idempotent(emma_family) -> None:
    assert extract(EDPP_TEMPLATE, emma_family) == extract(EDPP_TEMPLATE, emma_family)


def test_edpp_looks_parents_up_by_type(emma_family) -> None:
    data = extract(EDPP_TEMPLATE, emma_family)
    assert data["mother_firstName"] == "Claire"
    assert data["mother_employer"] == "Cabinet Dupont"
    assert data["father_firstName"] == "Paul"
    assert data["father_nationality"] == "Française"
    assert data["photo_authorization"] is True


def test_overlay_fills_section_of_main_parent_only(emma_family) -> None:
    data = extract(ALSH_EDPP_TEMPLATE, emma_family)
    assert emma_family.parent(0).parent_type is ParentType.MOTHER
    assert data["mother.firstName"] == "Claire"
    assert data["father.firstName"] == ""
    assert data["medical.allergies"] == "Arachides, Pollen"
    assert data["emergency.relationship"] == "Grand-mère"
    assert data["admin.place"] == "Lyon"
    assert data["admin.year"] == "2025-2026"


def test_overlay_child_name_falls_back_to_parent() -> None:
    family = Family.from_dict({"students": [{"firstName": "Léo"}], "parents": [{"type": "father", "lastName": "Petit"}]})
    assert extract(ALSH_EDPP_TEMPLATE, family)["child.lastName"] == "Petit"


def test_acroform_values(emma_family) -> None:
    values = extract_acroform_values(TEST_PERISCOLAIRE_TEMPLATE, emma_family)
    assert values == {"test.name": "Emma Martin", "test.homme": False, "test.femme": True}


def test_registry_lookups() -> None:
    assert get_template("periscolaire") is PERISCOLAIRE_TEMPLATE
    assert get_template_by_filename(ALSH_EDPP_TEMPLATE.file_name) is ALSH_EDPP_TEMPLATE
    assert get_template_by_filename("inconnu.pdf") is None
    assert len(all_templates()) == len(template_ids()) == 8
    assert "test-edpp" in template_ids()
    with pytest.raises(TemplateNotFoundError):
        get_template("missing")


def test_failing_getter_yields_field_default(empty_family) -> None:
    def broken(family: Family):
        return family.parents[5].first_name

    template = FormTemplate(
        id="broken",
        name="Broken",
        title="CASSÉ",
        sections=(
            Section(
                "s",
                "S",
                (
                    FieldDescriptor("c", "Accord", FieldType.CHECKBOX),
                    FieldDescriptor("t", "Nom"),
                ),
            ),
        ),
        extractors={"c": broken, "t": broken, "extra": broken},
    )
    assert extract(template, empty_family) == {"c": False, "t": "", "extra": ""}
