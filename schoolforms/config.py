"""Configuration constants for document generation."""

from __future__ import annotations

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parents[1]
TEMPLATES_DIR = Path(os.environ.get("SCHOOLFORMS_TEMPLATES_DIR", BASE_DIR / "templates"))

PAGE_SIZE_NAME = "A4"
MARGIN_TOP = 60.0
MARGIN_BOTTOM = 60.0
MARGIN_LEFT = 60.0
MARGIN_RIGHT = 60.0

FONT_REGULAR = "Helvetica"
FONT_BOLD = "Helvetica-Bold"

TITLE_SIZE = 18.0
SECTION_TITLE_SIZE = 13.0
LABEL_SIZE = 9.0
VALUE_SIZE = 10.0
FOOTER_SIZE = 8.0

# RGB triples in the 0..1 range
PRIMARY_COLOR = (0.2, 0.4, 0.8)
ACCENT_COLOR = (0.8, 0.2, 0.4)
TEXT_COLOR = (0.1, 0.1, 0.1)
MUTED_TEXT_COLOR = (0.4, 0.4, 0.4)
LIGHT_TEXT_COLOR = (0.6, 0.6, 0.6)
BOX_FILL_COLOR = (1.0, 1.0, 1.0)
BOX_BORDER_COLOR = (0.7, 0.7, 0.7)
SECTION_FILL_COLOR = (0.97, 0.97, 0.97)
SECTION_BORDER_COLOR = (0.85, 0.85, 0.85)

TITLE_BAND_HEIGHT = 40.0
TITLE_GAP = 25.0
SECTION_BAR_HEIGHT = 25.0
SECTION_TITLE_GAP = 20.0
SECTION_GAP = 15.0
FIELD_GAP = 18.0
COLUMN_GAP = 25.0
LABEL_VALUE_GAP = 6.0

FIELD_HEIGHT = 22.0
FIELD_BORDER_WIDTH = 1.0
FIELD_PADDING_H = 8.0
FIELD_PADDING_V = 4.0
LINE_GAP = 2.0

FOOTER_RULE_OFFSET = 8.0
FOOTER_TEXT_OFFSET = 20.0
FOOTER_BANNER_OFFSET = 40.0

GENERATED_AT_TEXT = "Document généré le {date} à {time}"
EDITABLE_NOTICE_TEXT = (
    "[EDITABLE] FORMULAIRE ÉDITABLE - Vous pouvez modifier les champs directement dans ce PDF"
)

OVERLAY_FONT_SIZE = 10.0
OVERLAY_MIN_FONT_SIZE = 6.0
CHOICE_MARK = "X"
CHOICE_BOX_SIZE = 10.0
