"""Render one labelled field either as drawn text or as an AcroForm widget."""

from __future__ import annotations

from dataclasses import dataclass
import logging

from reportlab.lib import colors

from schoolforms import config
from schoolforms.model.document import FieldPlacement
from schoolforms.model.field import FieldDescriptor, FieldType, FieldValue, WidgetKind
from schoolforms.pdf.text import truncate_to_width, wrap_words
from schoolforms.state.session import GenerationSession

logger = logging.getLogger(__name__)

CHECKED_GLYPH = "[X]"
UNCHECKED_GLYPH = "[ ]"
_TRUTHY = {"true", "yes", "oui", "on", "1", "x"}


@dataclass(slots=True)
class FieldStyle:
    font_name: str = config.FONT_REGULAR
    bold_font_name: str = config.FONT_BOLD
    label_size: float = config.LABEL_SIZE
    value_size: float = config.VALUE_SIZE
    label_gap: float = config.LABEL_VALUE_GAP
    field_height: float = config.FIELD_HEIGHT
    padding_h: float = config.FIELD_PADDING_H
    padding_v: float = config.FIELD_PADDING_V
    line_gap: float = config.LINE_GAP
    border_width: float = config.FIELD_BORDER_WIDTH
    label_color: tuple[float, float, float] = config.MUTED_TEXT_COLOR
    required_color: tuple[float, float, float] = config.ACCENT_COLOR
    text_color: tuple[float, float, float] = config.TEXT_COLOR
    box_fill: tuple[float, float, float] = config.BOX_FILL_COLOR
    box_border: tuple[float, float, float] = config.BOX_BORDER_COLOR

    @property
    def label_height(self) -> float:
        return self.label_size + self.label_gap

    @property
    def line_step(self) -> float:
        return self.value_size + self.line_gap


def is_checked(value: FieldValue | None) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if value is None:
        return False
    return str(value).strip().lower() in _TRUTHY


def display_value(descriptor: FieldDescriptor, value: FieldValue | None) -> str:
    if descriptor.field_type is FieldType.CHECKBOX:
        return CHECKED_GLYPH if is_checked(value) else UNCHECKED_GLYPH
    if isinstance(value, bool):
        return "Oui" if value else "Non"
    if value is None:
        return ""
    return str(value)


class FieldRenderer:
    def __init__(
        self,
        session: GenerationSession,
        style: FieldStyle | None = None,
        editable: bool = False,
        max_box_height: float | None = None,
    ) -> None:
        self._session = session
        self._style = style or FieldStyle()
        self._editable = editable
        self._max_box_height = max_box_height

    @property
    def style(self) -> FieldStyle:
        return self._style

    def value_lines(self, descriptor: FieldDescriptor, value: FieldValue | None, width: float) -> list[str]:
        text = display_value(descriptor, value)
        if not text:
            return []
        inner = max(1.0, width - 2 * self._style.padding_h)
        return wrap_words(text, self._style.font_name, self._style.value_size, inner)

    def box_height(self, line_count: int) -> float:
        style = self._style
        needed = line_count * style.line_step - style.line_gap + 2 * style.padding_v
        height = max(style.field_height, needed)
        if self._max_box_height is not None:
            height = min(height, max(style.field_height, self._max_box_height))
        return height

    def measure(self, descriptor: FieldDescriptor, value: FieldValue | None, width: float) -> float:
        """Height of the label and box, so callers can decide page breaks before drawing."""
        if self._editable:
            return self._style.label_height + self._style.field_height
        lines = self.value_lines(descriptor, value, width)
        return self._style.label_height + self.box_height(len(lines))

    def render(
        self,
        descriptor: FieldDescriptor,
        value: FieldValue | None,
        x: float,
        y: float,
        width: float,
    ) -> FieldPlacement:
        style = self._style
        self._draw_label(descriptor, x, y, width)
        box_top = y - style.label_height

        widget_name: str | None = None
        lines: list[str]
        if self._editable:
            box_height = style.field_height
            try:
                widget_name = self._create_widget(descriptor, value, x, box_top, width, box_height)
                lines = []
            except Exception as exc:
                logger.warning("Could not create form field for %s, drawing it flat: %s", descriptor.id, exc)
                widget_name = None
                lines = self._draw_flat(descriptor, value, x, box_top, width, box_height)
        else:
            box_height = self.box_height(len(self.value_lines(descriptor, value, width)))
            lines = self._draw_flat(descriptor, value, x, box_top, width, box_height)

        placement = FieldPlacement(
            page_index=self._session.page_index,
            field_id=descriptor.id,
            x=x,
            top=y,
            width=width,
            height=style.label_height + box_height,
            lines=tuple(lines),
            widget_name=widget_name,
        )
        self._session.record(placement)
        return placement

    def _draw_label(self, descriptor: FieldDescriptor, x: float, y: float, width: float) -> None:
        style = self._style
        report = self._session.report
        text = descriptor.label + (" *" if descriptor.required else "")
        font = style.bold_font_name if descriptor.required else style.font_name
        color = style.required_color if descriptor.required else style.label_color
        report.setFont(font, style.label_size)
        report.setFillColorRGB(*color)
        report.drawString(x, y - style.label_size, truncate_to_width(text, font, style.label_size, width))

    def _draw_flat(
        self,
        descriptor: FieldDescriptor,
        value: FieldValue | None,
        x: float,
        box_top: float,
        width: float,
        box_height: float,
    ) -> list[str]:
        style = self._style
        report = self._session.report

        report.setLineWidth(style.border_width)
        report.setStrokeColorRGB(*style.box_border)
        report.setFillColorRGB(*style.box_fill)
        report.rect(x, box_top - box_height, width, box_height, stroke=1, fill=1)

        lines = self.value_lines(descriptor, value, width)
        max_lines = max(1, int((box_height - 2 * style.padding_v + style.line_gap) // style.line_step))
        if len(lines) > max_lines:
            logger.warning(
                "Value of %s needs %d lines, only %d fit: dropping the rest", descriptor.id, len(lines), max_lines
            )
            lines = lines[:max_lines]
        if not lines:
            return []

        report.setFont(style.font_name, style.value_size)
        report.setFillColorRGB(*style.text_color)
        text_x = x + style.padding_h
        if len(lines) == 1:
            baseline = box_top - box_height / 2 - style.value_size * 0.35
            report.drawString(text_x, baseline, lines[0])
        else:
            baseline = box_top - style.padding_v - style.value_size
            for line in lines:
                report.drawString(text_x, baseline, line)
                baseline -= style.line_step
        return lines

    def _create_widget(
        self,
        descriptor: FieldDescriptor,
        value: FieldValue | None,
        x: float,
        box_top: float,
        width: float,
        height: float,
    ) -> str:
        style = self._style
        session = self._session
        name = session.next_field_name(descriptor.id)
        session.register_name(name)

        form = session.report.acroForm
        kind = descriptor.widget_kind(value)
        bottom = box_top - height
        border = colors.Color(*style.box_border)
        fill = colors.Color(*style.box_fill)
        text_color = colors.Color(*style.text_color)
        logger.debug("Creating %s widget %s on page %d", kind.value, name, session.page_index)

        if kind is WidgetKind.CHECKBOX:
            size = min(width, height)
            form.checkbox(
                name=name,
                checked=is_checked(value),
                x=x,
                y=bottom + (height - size) / 2,
                size=size,
                buttonStyle="check",
                borderWidth=style.border_width,
                borderColor=border,
                fillColor=fill,
                textColor=text_color,
            )
        elif kind is WidgetKind.DROPDOWN:
            selected = "" if value is None else str(value)
            options = list(descriptor.options)
            if not selected:
                options = ["", *options]
            form.choice(
                name=name,
                value=selected,
                options=options,
                x=x,
                y=bottom,
                width=width,
                height=height,
                fieldFlags="combo",
                fontName=style.font_name,
                fontSize=style.value_size,
                borderWidth=style.border_width,
                borderColor=border,
                fillColor=fill,
                textColor=text_color,
            )
        elif kind is WidgetKind.TEXT or kind is WidgetKind.TEXTAREA:
            text = display_value(descriptor, value)
            form.textfield(
                name=name,
                value=text,
                x=x,
                y=bottom,
                width=width,
                height=height,
                fieldFlags="multiline" if kind is WidgetKind.TEXTAREA else "",
                maxlen=max(descriptor.max_length or 1000, len(text)),
                fontName=style.font_name,
                fontSize=style.value_size,
                borderWidth=style.border_width,
                borderColor=border,
                fillColor=fill,
                textColor=text_color,
                forceBorder=True,
            )
        else:
            raise ValueError(f"Unsupported widget kind: {kind}")
        return name
