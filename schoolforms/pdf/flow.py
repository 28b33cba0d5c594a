"""Flow layout engine: build a new paginated document from a form template.

The engine walks the template as a queue of atomic units (title band, section
bars, rows of fields). Each unit knows its height before it is drawn, so a
page break always happens between units and never splits a label from its box.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from io import BytesIO
import logging

from reportlab.pdfgen import canvas

from schoolforms import config
from schoolforms.model.document import RenderedDocument
from schoolforms.model.family import Family
from schoolforms.model.field import ExtractedData, FieldDescriptor, FormTemplate, Section
from schoolforms.pdf.fields import FieldRenderer, FieldStyle
from schoolforms.pdf.text import fit_font_size, text_width
from schoolforms.pdf.units import page_size
from schoolforms.state.session import GenerationSession
from schoolforms.templates.extractors import extract

logger = logging.getLogger(__name__)

Color = tuple[float, float, float]


class FlowState(str, Enum):
    RENDERING_TITLE = "rendering_title"
    RENDERING_SECTION = "rendering_section"
    NEEDS_NEW_PAGE = "needs_new_page"
    DONE = "done"


@dataclass(slots=True)
class LayoutConfig:
    page_size: tuple[float, float] = field(default_factory=lambda: page_size(config.PAGE_SIZE_NAME))
    margin_top: float = config.MARGIN_TOP
    margin_bottom: float = config.MARGIN_BOTTOM
    margin_left: float = config.MARGIN_LEFT
    margin_right: float = config.MARGIN_RIGHT
    title_size: float = config.TITLE_SIZE
    section_title_size: float = config.SECTION_TITLE_SIZE
    footer_size: float = config.FOOTER_SIZE
    title_band_height: float = config.TITLE_BAND_HEIGHT
    title_gap: float = config.TITLE_GAP
    section_bar_height: float = config.SECTION_BAR_HEIGHT
    section_title_gap: float = config.SECTION_TITLE_GAP
    section_gap: float = config.SECTION_GAP
    field_gap: float = config.FIELD_GAP
    column_gap: float = config.COLUMN_GAP
    two_column_min_fields: int = 0
    primary_color: Color = config.PRIMARY_COLOR
    title_text_color: Color = (1.0, 1.0, 1.0)
    section_fill: Color = config.SECTION_FILL_COLOR
    section_border: Color = config.SECTION_BORDER_COLOR
    text_color: Color = config.TEXT_COLOR
    footer_color: Color = config.LIGHT_TEXT_COLOR
    footer_rule_offset: float = config.FOOTER_RULE_OFFSET
    footer_text_offset: float = config.FOOTER_TEXT_OFFSET
    footer_banner_offset: float = config.FOOTER_BANNER_OFFSET
    field_style: FieldStyle = field(default_factory=FieldStyle)

    @property
    def page_width(self) -> float:
        return self.page_size[0]

    @property
    def page_height(self) -> float:
        return self.page_size[1]

    @property
    def content_width(self) -> float:
        return self.page_width - self.margin_left - self.margin_right

    @property
    def working_height(self) -> float:
        return self.page_height - self.margin_top - self.margin_bottom

    def columns(self, count: int) -> list[tuple[float, float]]:
        """``(x, width)`` of each column when a row holds ``count`` fields."""
        if count <= 1:
            return [(self.margin_left, self.content_width)]
        width = (self.content_width - self.column_gap * (count - 1)) / count
        return [(self.margin_left + i * (width + self.column_gap), width) for i in range(count)]


@dataclass(slots=True)
class _Unit:
    kind: str
    height: float
    advance: float
    draw: Callable[[GenerationSession], None]


class FlowRenderer:
    def __init__(
        self,
        layout: LayoutConfig | None = None,
        editable: bool = True,
        show_editable_notice: bool = True,
    ) -> None:
        self.layout = layout or LayoutConfig()
        self.editable = editable
        self.show_editable_notice = show_editable_notice

    def render(
        self,
        template: FormTemplate,
        family: Family,
        generated_at: datetime | None = None,
    ) -> RenderedDocument:
        return self.render_data(template, extract(template, family), generated_at=generated_at)

    def render_data(
        self,
        template: FormTemplate,
        data: ExtractedData,
        generated_at: datetime | None = None,
    ) -> RenderedDocument:
        layout = self.layout
        buffer = BytesIO()
        report = canvas.Canvas(buffer, pagesize=layout.page_size)
        report.setTitle(template.title)
        report.setSubject(template.description)
        report.setCreator("schoolforms")

        session = GenerationSession(
            report=report,
            page_width=layout.page_width,
            page_height=layout.page_height,
            top=layout.page_height - layout.margin_top,
            bottom=layout.margin_bottom,
        )
        fields = FieldRenderer(
            session,
            layout.field_style,
            editable=self.editable,
            max_box_height=(
                layout.working_height
                - layout.section_bar_height
                - layout.section_title_gap
                - layout.field_style.label_height
            ),
        )
        units = deque(self._plan(template, data, fields))

        state = FlowState.RENDERING_TITLE
        while state is not FlowState.DONE:
            if state is FlowState.NEEDS_NEW_PAGE:
                session.new_page()
                logger.debug("Page break, now on page %d", session.page_index + 1)
                state = FlowState.RENDERING_SECTION
                continue
            if not units:
                state = FlowState.DONE
                continue

            unit = units[0]
            at_page_top = session.y >= session.top
            if state is FlowState.RENDERING_SECTION and not at_page_top and not session.fits(unit.height):
                state = FlowState.NEEDS_NEW_PAGE
                continue

            units.popleft()
            unit.draw(session)
            session.y -= unit.advance
            state = FlowState.RENDERING_SECTION

        self._draw_footer(session, generated_at or datetime.now())
        report.save()

        content = buffer.getvalue()
        page_count = session.page_index + 1
        logger.info(
            "Generated %s: %d page(s), %d bytes, editable=%s",
            template.id,
            page_count,
            len(content),
            self.editable,
        )
        return RenderedDocument(
            content=content,
            page_count=page_count,
            placements=list(session.placements),
            field_names=session.field_names(),
        )

    def _plan(self, template: FormTemplate, data: ExtractedData, fields: FieldRenderer) -> list[_Unit]:
        layout = self.layout
        units = [
            _Unit(
                kind="title",
                height=layout.title_band_height,
                advance=layout.title_band_height + layout.title_gap,
                draw=lambda session: self._draw_title(session, template.title),
            )
        ]

        for section in template.sections:
            rows = self._rows(section, data, fields)
            first_row = rows[0].height if rows else 0.0
            # keep the bar with its first row only when both fit on an empty page
            if layout.section_bar_height + layout.section_title_gap + first_row > layout.working_height:
                first_row = 0.0
            units.append(
                _Unit(
                    kind="section",
                    height=layout.section_bar_height + layout.section_title_gap + first_row,
                    advance=layout.section_bar_height + layout.section_title_gap,
                    draw=lambda session, title=section.title: self._draw_section_title(session, title),
                )
            )
            if rows:
                rows[-1].advance += layout.section_gap
            else:
                units[-1].advance += layout.section_gap
            units.extend(rows)
        return units

    def _rows(self, section: Section, data: ExtractedData, fields: FieldRenderer) -> list[_Unit]:
        layout = self.layout
        per_row = 2 if len(section.fields) >= layout.two_column_min_fields else 1
        columns = layout.columns(per_row)

        rows: list[_Unit] = []
        for start in range(0, len(section.fields), per_row):
            cells = [
                (descriptor, _value_for(descriptor, data), x, width)
                for descriptor, (x, width) in zip(section.fields[start : start + per_row], columns)
            ]
            height = max(fields.measure(descriptor, value, width) for descriptor, value, _, width in cells)

            def draw_row(session: GenerationSession, cells=cells) -> None:
                top = session.y
                for descriptor, value, x, width in cells:
                    fields.render(descriptor, value, x, top, width)

            rows.append(_Unit(kind="row", height=height, advance=height + layout.field_gap, draw=draw_row))
        return rows

    def _draw_title(self, session: GenerationSession, title: str) -> None:
        layout = self.layout
        report = session.report
        band_bottom = session.y - layout.title_band_height

        report.setFillColorRGB(*layout.primary_color)
        report.rect(0, band_bottom, layout.page_width, layout.title_band_height, stroke=0, fill=1)

        font = layout.field_style.bold_font_name
        size = fit_font_size(title, font, layout.title_size, layout.content_width)
        report.setFont(font, size)
        report.setFillColorRGB(*layout.title_text_color)
        baseline = band_bottom + layout.title_band_height / 2 - size * 0.35
        report.drawCentredString(layout.page_width / 2, baseline, title)

    def _draw_section_title(self, session: GenerationSession, title: str) -> None:
        layout = self.layout
        report = session.report
        bar_bottom = session.y - layout.section_bar_height
        bar_x = layout.margin_left - 10

        report.setLineWidth(0.5)
        report.setStrokeColorRGB(*layout.section_border)
        report.setFillColorRGB(*layout.section_fill)
        report.rect(bar_x, bar_bottom, layout.content_width + 20, layout.section_bar_height, stroke=1, fill=1)
        report.setFillColorRGB(*layout.primary_color)
        report.rect(bar_x, bar_bottom, 4, layout.section_bar_height, stroke=0, fill=1)

        font = layout.field_style.bold_font_name
        report.setFont(font, layout.section_title_size)
        report.setFillColorRGB(*layout.text_color)
        baseline = bar_bottom + layout.section_bar_height / 2 - layout.section_title_size * 0.35
        report.drawString(layout.margin_left, baseline, title)

    def _draw_footer(self, session: GenerationSession, generated_at: datetime) -> None:
        layout = self.layout
        report = session.report
        bottom = layout.margin_bottom
        center = layout.page_width / 2

        rule_y = bottom - layout.footer_rule_offset
        report.setLineWidth(0.5)
        report.setStrokeColorRGB(*layout.section_border)
        report.line(layout.margin_left, rule_y, layout.page_width - layout.margin_right, rule_y)

        text = config.GENERATED_AT_TEXT.format(
            date=generated_at.strftime("%d/%m/%Y"),
            time=generated_at.strftime("%H:%M:%S"),
        )
        report.setFont(layout.field_style.font_name, layout.footer_size)
        report.setFillColorRGB(*layout.footer_color)
        report.drawCentredString(center, bottom - layout.footer_text_offset, text)

        if not (self.editable and self.show_editable_notice):
            return

        notice = config.EDITABLE_NOTICE_TEXT
        font = layout.field_style.bold_font_name
        width = text_width(notice, font, layout.footer_size)
        baseline = bottom - layout.footer_banner_offset
        report.setLineWidth(0.5)
        report.setStrokeColorRGB(*layout.primary_color)
        report.setFillColorRGB(*layout.section_fill)
        report.rect(center - width / 2 - 10, baseline - 5, width + 20, layout.footer_size + 7, stroke=1, fill=1)
        report.setFont(font, layout.footer_size)
        report.setFillColorRGB(*layout.primary_color)
        report.drawCentredString(center, baseline, notice)


def _value_for(descriptor: FieldDescriptor, data: ExtractedData):
    value = data.get(descriptor.id)
    return descriptor.default_value if value is None else value
