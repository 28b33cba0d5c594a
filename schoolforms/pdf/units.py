"""Page sizes, unit conversions and coordinate-space helpers.

PDF point space has its origin at the bottom-left corner of the page while
screen and image space grow downwards from the top-left corner.
"""

from __future__ import annotations

from reportlab.lib.pagesizes import A4, LEGAL, LETTER
from reportlab.lib.units import inch, mm

PAGE_SIZES: dict[str, tuple[float, float]] = {
    "A4": A4,
    "LETTER": LETTER,
    "LEGAL": LEGAL,
}

_STANDARD_SIZES_MM = (
    ("A4", 210.0, 297.0),
    ("US Letter", 216.0, 279.0),
    ("US Legal", 216.0, 356.0),
)
_SIZE_TOLERANCE_MM = 5.0


def to_document_y(visual_y: float, page_height: float) -> float:
    return page_height - visual_y


def to_visual_y(document_y: float, page_height: float) -> float:
    return page_height - document_y


def points_to_inches(points: float) -> float:
    return points / inch


def points_to_mm(points: float) -> float:
    return points / mm


def inches_to_points(inches: float) -> float:
    return inches * inch


def mm_to_points(millimeters: float) -> float:
    return millimeters * mm


def page_size(name: str) -> tuple[float, float]:
    try:
        return PAGE_SIZES[name.upper()]
    except KeyError as exc:
        raise KeyError(f"Unknown page size: {name}") from exc


def standard_size_name(width: float, height: float) -> str:
    width_mm = points_to_mm(width)
    height_mm = points_to_mm(height)
    for name, ref_w, ref_h in _STANDARD_SIZES_MM:
        if abs(width_mm - ref_w) < _SIZE_TOLERANCE_MM and abs(height_mm - ref_h) < _SIZE_TOLERANCE_MM:
            return name
    return f"Custom ({width_mm:.1f} x {height_mm:.1f} mm)"


def describe_page(width: float, height: float) -> dict:
    return {
        "points": {"width": width, "height": height},
        "inches": {
            "width": round(points_to_inches(width), 2),
            "height": round(points_to_inches(height), 2),
        },
        "mm": {
            "width": round(points_to_mm(width), 2),
            "height": round(points_to_mm(height), 2),
        },
        "standard_size": standard_size_name(width, height),
    }


def visual_rect_to_document(
    left_px: float,
    top_px: float,
    width_px: float,
    height_px: float,
    page_height: float,
    zoom: float = 1.0,
) -> tuple[float, float, float, float]:
    """Convert a top-left-origin pixel rectangle to ``(x, y, width, height)`` in points."""
    scale = zoom if zoom > 0 else 1.0
    width = width_px / scale
    height = height_px / scale
    x = left_px / scale
    y = to_document_y(top_px / scale, page_height) - height
    return x, y, width, height


def field_position_issues(
    x: float,
    y: float,
    width: float | None,
    height: float | None,
    page_width: float,
    page_height: float,
) -> list[str]:
    issues: list[str] = []
    if x < 0:
        issues.append("X coordinate is negative")
    if y < 0:
        issues.append("Y coordinate is negative")
    if x > page_width:
        issues.append("X coordinate exceeds page width")
    if y > page_height:
        issues.append("Y coordinate exceeds page height")
    if width and x + width > page_width:
        issues.append("Field extends beyond page width")
    if height and y + height > page_height:
        issues.append("Field extends beyond page height")
    return issues
