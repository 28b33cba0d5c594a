from __future__ import annotations

from io import BytesIO
import logging

from pypdf import PdfReader
import pytest

from schoolforms.model.overlay import ChoiceGroup, FieldCoordinate, OverlayTemplate
from schoolforms.pdf.loader import TemplateStore, load_pdf_bytes
from schoolforms.pdf.stamper import OverlayRenderer, stamp
from schoolforms.templates.overlays import ALSH_EDPP_TEMPLATE, TEST_PERISCOLAIRE_TEMPLATE

SEX = ChoiceGroup(
    name="child_sex",
    options={"M": FieldCoordinate(300, 500), "F": FieldCoordinate(360, 500)},
)


def _text(content: bytes) -> str:
    return "\n".join(page.extract_text() for page in PdfReader(BytesIO(content)).pages)


def test_values_are_stamped_on_their_page(pdf_factory) -> None:
    document = load_pdf_bytes(pdf_factory(pages=2))
    result = stamp(
        document,
        {"child.lastName": "Martin", "admin.note": "Deuxième page", "empty": ""},
        {
            "child.lastName": FieldCoordinate(200, 700),
            "admin.note": FieldCoordinate(100, 400, page=1),
            "empty": FieldCoordinate(100, 300),
        },
    )
    reader = PdfReader(BytesIO(result.content))
    assert result.page_count == 2
    assert "Martin" in reader.pages[0].extract_text()
    assert "Deuxième page" in reader.pages[1].extract_text()
    assert "Formulaire officiel page 1" in reader.pages[0].extract_text()


def test_coordinate_outside_document_is_skipped(pdf_factory, caplog) -> None:
    document = load_pdf_bytes(pdf_factory())
    with caplog.at_level(logging.WARNING, logger="schoolforms.pdf.stamper"):
        result = stamp(document, {"x": "Perdu"}, {"x": FieldCoordinate(100, 100, page=3)})
    assert "Perdu" not in _text(result.content)
    assert "targets page 3" in caplog.text


def test_flat_choice_group_marks_selected_option(pdf_factory) -> None:
    document = load_pdf_bytes(pdf_factory())
    result = stamp(document, {"child_sex": "F"}, {}, choice_groups=(SEX,))
    assert "X" in _text(result.content)


def test_editable_choice_group_shares_one_name(pdf_factory) -> None:
    document = load_pdf_bytes(pdf_factory())
    result = stamp(
        document,
        {"child.lastName": "Martin", "child_sex": "F"},
        {"child.lastName": FieldCoordinate(200, 700)},
        choice_groups=(SEX,),
        editable=True,
    )
    fields = PdfReader(BytesIO(result.content)).get_fields()
    assert fields["child_lastName"]["/V"] == "Martin"
    assert str(fields["child_sex"].get("/V")).lstrip("/") == "F"
    assert sorted(result.field_names) == ["child_lastName", "child_sex"]


def test_existing_form_fields_are_filled(pdf_factory, caplog) -> None:
    document = load_pdf_bytes(pdf_factory(with_form=True))
    with caplog.at_level(logging.WARNING, logger="schoolforms.pdf.writer"):
        result = stamp(
            document,
            {},
            {},
            acroform_values={"test.name": "Emma Martin", "test.femme": True, "test.homme": False, "absent": "x"},
        )
    fields = PdfReader(BytesIO(result.content)).get_fields()
    assert fields["test.name"]["/V"] == "Emma Martin"
    assert fields["test.femme"]["/V"] != "/Off"
    assert fields["test.homme"]["/V"] == "/Off"
    assert "'absent' not found" in caplog.text


def test_renderer_resolves_template_file(tmp_path, pdf_factory, emma_family) -> None:
    (tmp_path / ALSH_EDPP_TEMPLATE.file_name).write_bytes(pdf_factory())
    document = OverlayRenderer(TemplateStore(tmp_path)).render(ALSH_EDPP_TEMPLATE, emma_family)
    text = _text(document.content)
    assert "Emma" in text
    assert "ALSH - EDPP" in text
    assert "Claire" in text


def test_renderer_fills_acroform_template(tmp_path, pdf_factory, emma_family) -> None:
    (tmp_path / TEST_PERISCOLAIRE_TEMPLATE.file_name).write_bytes(pdf_factory(with_form=True))
    document = OverlayRenderer(TemplateStore(tmp_path)).render(TEST_PERISCOLAIRE_TEMPLATE, emma_family)
    fields = PdfReader(BytesIO(document.content)).get_fields()
    assert fields["test.name"]["/V"] == "Emma Martin"


def test_long_value_shrinks_to_max_width(pdf_factory) -> None:
    template = OverlayTemplate(
        id="narrow",
        name="Narrow",
        file_name="narrow.pdf",
        coordinates={"notes": FieldCoordinate(50, 200, font_size=10, max_width=60)},
    )
    document = load_pdf_bytes(pdf_factory())
    result = OverlayRenderer().render_data(template, document, {"notes": "Arachides, pollen, lactose"})
    assert "Arachides" in _text(result.content)


@pytest.mark.parametrize("value", ["", "Z", None])
def test_choice_group_without_match_draws_nothing(pdf_factory, value) -> None:
    document = load_pdf_bytes(pdf_factory())
    result = stamp(document, {"child_sex": value}, {}, choice_groups=(SEX,))
    assert "X" not in _text(result.content)


def test_editable_choice_group_avoids_existing_field_names(pdf_factory) -> None:
    document = load_pdf_bytes(pdf_factory(with_form=True))
    taken = ChoiceGroup(
        name="other",
        options={"M": FieldCoordinate(300, 500), "F": FieldCoordinate(360, 500)},
    )
    result = stamp(
        document,
        {"other": "F", "child_sex": "M"},
        {"child_sex": FieldCoordinate(200, 700)},
        choice_groups=(taken, SEX),
        editable=True,
    )
    reader = PdfReader(BytesIO(result.content))
    names = [str(ref.get_object().get("/T")) for ref in reader.trailer["/Root"]["/AcroForm"]["/Fields"]]
    assert len(names) == len(set(names))
    assert result.field_names.count("other_2") == 1
    assert "child_sex" in result.field_names
    assert "child_sex_2" in result.field_names
