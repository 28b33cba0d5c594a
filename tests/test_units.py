from __future__ import annotations

import pytest

from schoolforms.pdf.units import (
    PAGE_SIZES,
    describe_page,
    field_position_issues,
    inches_to_points,
    mm_to_points,
    page_size,
    points_to_inches,
    points_to_mm,
    standard_size_name,
    to_document_y,
    to_visual_y,
    visual_rect_to_document,
)


@pytest.mark.parametrize("y", [0.0, 120.5, 420.9, 841.89])
def test_vertical_flip_round_trip(y) -> None:
    height = PAGE_SIZES["A4"][1]
    assert to_visual_y(to_document_y(y, height), height) == pytest.approx(y)


def test_top_of_page_maps_to_full_height() -> None:
    assert to_document_y(0, 792) == 792
    assert to_document_y(792, 792) == 0


def test_unit_conversions() -> None:
    assert points_to_inches(72) == pytest.approx(1.0)
    assert inches_to_points(8.5) == pytest.approx(612.0)
    assert points_to_mm(mm_to_points(210)) == pytest.approx(210)


def test_page_size_lookup_is_case_insensitive() -> None:
    assert page_size("a4") == PAGE_SIZES["A4"]
    with pytest.raises(KeyError):
        page_size("A0")


def test_standard_size_names() -> None:
    assert standard_size_name(*PAGE_SIZES["A4"]) == "A4"
    assert standard_size_name(*PAGE_SIZES["LETTER"]) == "US Letter"
    assert standard_size_name(*PAGE_SIZES["LEGAL"]) == "US Legal"
    assert standard_size_name(300, 300).startswith("Custom (")


def test_describe_page() -> None:
    info = describe_page(612, 792)
    assert info["inches"] == {"width": 8.5, "height": 11.0}
    assert info["standard_size"] == "US Letter"


def test_visual_rect_to_document_accounts_for_zoom() -> None:
    x, y, width, height = visual_rect_to_document(100, 50, 200, 40, page_height=800, zoom=2.0)
    assert (x, width, height) == (50, 100, 20)
    assert y == pytest.approx(800 - 25 - 20)


def test_field_position_issues() -> None:
    assert field_position_issues(10, 10, 50, 20, 595, 842) == []
    issues = field_position_issues(-5, 830, 50, 20, 595, 842)
    assert "X coordinate is negative" in issues
    assert "Field extends beyond page height" in issues
