"""Overlay template definitions for stamping values onto existing PDFs."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from schoolforms import config
from schoolforms.model.field import Getter

Color = tuple[float, float, float]


@dataclass(frozen=True, slots=True)
class FieldCoordinate:
    """Hand-calibrated position in PDF point space (origin bottom-left)."""

    x: float
    y: float
    font_size: float = config.OVERLAY_FONT_SIZE
    font_color: Color = (0.0, 0.0, 0.0)
    max_width: float | None = None
    page: int = 0


@dataclass(frozen=True, slots=True)
class ChoiceGroup:
    """Boxes placed independently on the page that share one logical answer.

    ``options`` maps each possible answer to the position of its box. Exactly
    one box is marked: the one whose key equals the extracted answer.
    """

    name: str
    options: Mapping[str, FieldCoordinate]


@dataclass(frozen=True, slots=True)
class OverlayTemplate:
    id: str
    name: str
    file_name: str
    coordinates: Mapping[str, FieldCoordinate] = field(default_factory=dict)
    extractors: Mapping[str, Getter] = field(default_factory=dict)
    choice_groups: tuple[ChoiceGroup, ...] = ()
    acroform_fields: Mapping[str, Getter] = field(default_factory=dict)
    description: str = ""
