"""Coordinate overlay: stamp family data onto an existing official PDF."""

from __future__ import annotations

from collections.abc import Mapping
from io import BytesIO
import logging

from reportlab.pdfgen import canvas

from schoolforms import config
from schoolforms.model.document import LoadedPdf, RenderedDocument
from schoolforms.model.family import Family
from schoolforms.model.field import ExtractedData, FieldValue
from schoolforms.model.overlay import ChoiceGroup, FieldCoordinate, OverlayTemplate
from schoolforms.pdf.fields import is_checked
from schoolforms.pdf.loader import TemplateStore
from schoolforms.pdf.text import fit_font_size, text_width
from schoolforms.pdf.writer import (
    OverlayWidget,
    PageSize,
    add_widgets,
    existing_field_names,
    fill_form_fields,
    merge_overlay,
    open_writer,
    page_sizes,
    serialize,
)
from schoolforms.templates.extractors import extract, extract_acroform_values

logger = logging.getLogger(__name__)

WIDGET_PADDING = 4.0
MIN_WIDGET_WIDTH = 80.0


def stamp(
    document: LoadedPdf,
    values: Mapping[str, FieldValue],
    coordinates: Mapping[str, FieldCoordinate],
    choice_groups: tuple[ChoiceGroup, ...] = (),
    acroform_values: Mapping[str, FieldValue] | None = None,
    editable: bool = False,
) -> RenderedDocument:
    """Return ``document`` with ``values`` placed at their coordinates.

    Flat mode draws the text into the page content. Editable mode places a
    text field at each coordinate instead, and each choice group becomes one
    set of radio buttons sharing the group name. Values for form fields the
    document already has are filled in both modes.
    """
    writer = open_writer(document.reader)
    sizes = page_sizes(writer)
    existing = existing_field_names(document.reader)

    if acroform_values:
        fill_form_fields(writer, existing, acroform_values)

    field_names: list[str] = []
    if editable:
        taken = set(existing)
        widgets = _text_widgets(values, coordinates, sizes, taken)
        widgets += _choice_widgets(values, choice_groups, sizes, taken)
        field_names = add_widgets(writer, widgets)
    else:
        overlay, pages = _build_text_overlay(values, coordinates, choice_groups, sizes)
        if pages:
            merge_overlay(writer, overlay, pages)

    content = serialize(writer)
    logger.info(
        "Stamped %s: %d page(s), %d bytes, editable=%s",
        document.source,
        len(sizes),
        len(content),
        editable,
    )
    return RenderedDocument(content=content, page_count=len(sizes), field_names=field_names)


def _text_value(value: FieldValue | None) -> str:
    if value is None or isinstance(value, bool):
        return ""
    return str(value).strip()


def _on_page(key: str, coordinate: FieldCoordinate, sizes: list[PageSize]) -> bool:
    if 0 <= coordinate.page < len(sizes):
        return True
    logger.warning("Coordinate %s targets page %d, document has %d", key, coordinate.page, len(sizes))
    return False


def _build_text_overlay(
    values: Mapping[str, FieldValue],
    coordinates: Mapping[str, FieldCoordinate],
    choice_groups: tuple[ChoiceGroup, ...],
    sizes: list[PageSize],
) -> tuple[BytesIO, set[int]]:
    marks: dict[int, list[tuple[str, FieldCoordinate]]] = {}
    for key, coordinate in coordinates.items():
        text = _text_value(values.get(key))
        if text and _on_page(key, coordinate, sizes):
            marks.setdefault(coordinate.page, []).append((text, coordinate))

    for group in choice_groups:
        selected = _selected_option(group, values.get(group.name))
        if selected is None:
            continue
        coordinate = group.options[selected]
        if _on_page(group.name, coordinate, sizes):
            marks.setdefault(coordinate.page, []).append((config.CHOICE_MARK, coordinate))

    buffer = BytesIO()
    report = canvas.Canvas(buffer, pagesize=sizes[0])
    for page_index, size in enumerate(sizes):
        report.setPageSize(size)
        for text, coordinate in marks.get(page_index, []):
            size_pt = fit_font_size(
                text,
                config.FONT_REGULAR,
                coordinate.font_size,
                coordinate.max_width,
                min_size=config.OVERLAY_MIN_FONT_SIZE,
            )
            report.setFont(config.FONT_REGULAR, size_pt)
            report.setFillColorRGB(*coordinate.font_color)
            report.drawString(coordinate.x, coordinate.y, text)
        report.showPage()
    report.save()
    buffer.seek(0)
    return buffer, set(marks)


def _text_widgets(
    values: Mapping[str, FieldValue],
    coordinates: Mapping[str, FieldCoordinate],
    sizes: list[PageSize],
    taken: set[str],
) -> list[OverlayWidget]:
    widgets: list[OverlayWidget] = []
    for key, coordinate in coordinates.items():
        if not _on_page(key, coordinate, sizes):
            continue
        text = _text_value(values.get(key))
        page_width = sizes[coordinate.page][0]
        width = coordinate.max_width or max(
            MIN_WIDGET_WIDTH,
            text_width(text, config.FONT_REGULAR, coordinate.font_size) + 2 * WIDGET_PADDING,
        )
        width = min(width, max(1.0, page_width - coordinate.x))
        name = _unique_name(key.replace(".", "_"), taken)
        widgets.append(
            OverlayWidget(
                page_index=coordinate.page,
                name=name,
                kind="text",
                x=coordinate.x,
                # text baseline sits at coordinate.y; the box starts just below it
                y=coordinate.y - WIDGET_PADDING,
                width=width,
                height=coordinate.font_size + 2 * WIDGET_PADDING,
                value=text,
                font_size=coordinate.font_size,
            )
        )
    return widgets


def _choice_widgets(
    values: Mapping[str, FieldValue],
    choice_groups: tuple[ChoiceGroup, ...],
    sizes: list[PageSize],
    taken: set[str],
) -> list[OverlayWidget]:
    widgets: list[OverlayWidget] = []
    for group in choice_groups:
        selected = _selected_option(group, values.get(group.name))
        placed = [
            (option, coordinate)
            for option, coordinate in group.options.items()
            if _on_page(group.name, coordinate, sizes)
        ]
        if not placed:
            continue
        # every option of the group shares one field name
        name = _unique_name(group.name.replace(".", "_"), taken)
        for option, coordinate in placed:
            widgets.append(
                OverlayWidget(
                    page_index=coordinate.page,
                    name=name,
                    kind="radio",
                    x=coordinate.x,
                    y=coordinate.y,
                    width=config.CHOICE_BOX_SIZE,
                    height=config.CHOICE_BOX_SIZE,
                    export_value=option,
                    selected=option == selected,
                )
            )
    return widgets


def _selected_option(group: ChoiceGroup, value: FieldValue | None) -> str | None:
    """Option key the value designates: the key itself, or the only option for a truthy flag."""
    if isinstance(value, bool):
        if value and len(group.options) == 1:
            return next(iter(group.options))
        return None
    text = _text_value(value)
    if text in group.options:
        return text
    if text and len(group.options) == 1 and is_checked(text):
        return next(iter(group.options))
    return None


def _unique_name(base: str, taken: set[str]) -> str:
    name = base
    counter = 1
    while name in taken:
        counter += 1
        name = f"{base}_{counter}"
    taken.add(name)
    return name


class OverlayRenderer:
    def __init__(self, store: TemplateStore | None = None, editable: bool = False) -> None:
        self.store = store or TemplateStore()
        self.editable = editable

    def render(self, template: OverlayTemplate, family: Family) -> RenderedDocument:
        document = self.store.load(template.file_name)
        return self.render_data(
            template,
            document,
            extract(template, family),
            extract_acroform_values(template, family),
        )

    def render_data(
        self,
        template: OverlayTemplate,
        document: LoadedPdf,
        data: ExtractedData,
        acroform_values: ExtractedData | None = None,
    ) -> RenderedDocument:
        logger.debug("Stamping template %s onto %s", template.id, document.source)
        return stamp(
            document,
            data,
            template.coordinates,
            choice_groups=template.choice_groups,
            acroform_values=acroform_values,
            editable=self.editable,
        )
