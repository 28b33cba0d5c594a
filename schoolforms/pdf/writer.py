"""Assemble output documents: overlay merging, widget transfer, AcroForm fill."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Mapping
from dataclasses import dataclass
from io import BytesIO
import logging

from pypdf import PdfReader, PdfWriter
from pypdf.errors import PyPdfError
from pypdf.generic import ArrayObject, BooleanObject, DictionaryObject, NameObject
from reportlab.lib import colors
from reportlab.pdfgen import canvas

from schoolforms.model.field import FieldValue

logger = logging.getLogger(__name__)

PageSize = tuple[float, float]


class PdfWriteError(RuntimeError):
    """Raised when output generation fails."""


@dataclass(frozen=True, slots=True)
class OverlayWidget:
    """An interactive field to place over an existing page.

    ``kind`` is ``"text"`` or ``"radio"``. Radios sharing a ``name`` form one
    group; ``export_value`` identifies the option and ``selected`` marks the
    current answer.
    """

    page_index: int
    name: str
    kind: str
    x: float
    y: float
    width: float
    height: float
    value: str = ""
    export_value: str = ""
    selected: bool = False
    font_size: float = 10.0


def open_writer(reader: PdfReader) -> PdfWriter:
    writer = PdfWriter()
    writer.clone_document_from_reader(reader)
    return writer


def page_sizes(writer: PdfWriter) -> list[PageSize]:
    return [(float(page.mediabox.width), float(page.mediabox.height)) for page in writer.pages]


def merge_overlay(writer: PdfWriter, overlay: BytesIO, pages: set[int]) -> None:
    """Draw the content of each overlay page on top of the matching page."""
    overlay_reader = PdfReader(overlay)
    for page_index in sorted(pages):
        writer.pages[page_index].merge_page(overlay_reader.pages[page_index])


def add_widgets(writer: PdfWriter, widgets: list[OverlayWidget]) -> list[str]:
    if not widgets:
        return []
    try:
        overlay = _build_overlay_pdf(page_sizes(writer), widgets)
        pages_with_fields = {widget.page_index for widget in widgets}
        return _transfer_widget_annotations(PdfReader(overlay), writer, pages_with_fields)
    except (PyPdfError, ValueError, KeyError, IndexError) as exc:
        raise PdfWriteError("Failed to add form fields to the document") from exc


def existing_field_names(reader: PdfReader) -> dict[str, DictionaryObject]:
    return dict(reader.get_fields() or {})


def fill_form_fields(
    writer: PdfWriter,
    existing: Mapping[str, DictionaryObject],
    values: Mapping[str, FieldValue],
) -> list[str]:
    """Write ``values`` into fields the document already has. Returns the filled names."""
    updates: dict[str, str] = {}
    for name, value in values.items():
        field = existing.get(name)
        if field is None:
            logger.warning("Form field %r not found in document, skipping", name)
            continue
        if isinstance(value, bool):
            updates[name] = _on_state(field) if value else "/Off"
        else:
            updates[name] = "" if value is None else str(value)

    if not updates:
        return []

    try:
        for page in writer.pages:
            if "/Annots" not in page:
                continue
            writer.update_page_form_field_values(page, updates, auto_regenerate=False)
        writer.set_need_appearances_writer(True)
    except (PyPdfError, ValueError, KeyError) as exc:
        raise PdfWriteError("Failed to fill existing form fields") from exc

    logger.debug("Filled %d existing form field(s)", len(updates))
    return list(updates)


def serialize(writer: PdfWriter) -> bytes:
    buffer = BytesIO()
    try:
        writer.write(buffer)
    except (PyPdfError, ValueError, OSError) as exc:
        raise PdfWriteError("Failed to serialize output PDF") from exc
    return buffer.getvalue()


def _on_state(field: Mapping) -> str:
    states = [str(state) for state in field.get("/_States_", []) if str(state) != "/Off"]
    return states[0] if states else "/Yes"


def _transfer_widget_annotations(
    overlay_reader: PdfReader,
    writer: PdfWriter,
    pages_with_fields: set[int],
) -> list[str]:
    field_refs = ArrayObject()
    seen: set[tuple[int, int]] = set()
    names: list[str] = []

    for page_index in sorted(pages_with_fields):
        source_page = overlay_reader.pages[page_index]
        target_page = writer.pages[page_index]
        source_annots = source_page.get("/Annots") or []
        target_annots_obj = target_page.get("/Annots")
        if target_annots_obj is None:
            target_annots = ArrayObject()
        else:
            target_annots = target_annots_obj.get_object()

        for annot_ref in source_annots:
            annot = annot_ref.get_object()
            if annot.get("/Subtype") != "/Widget":
                continue

            cloned_ref = annot.clone(writer, ignore_fields=("/P",)).indirect_reference
            cloned_annot = cloned_ref.get_object()
            if getattr(target_page, "indirect_reference", None) is not None:
                cloned_annot[NameObject("/P")] = target_page.indirect_reference
            _clear_widget_background(cloned_annot)
            target_annots.append(cloned_ref)

            # radio kids are reached through their shared parent field
            field_ref = cloned_annot.get("/Parent") or cloned_ref
            key = (field_ref.idnum, field_ref.generation)
            if key in seen:
                continue
            seen.add(key)
            field_refs.append(field_ref)
            names.append(str(field_ref.get_object().get("/T", "")))

        target_page[NameObject("/Annots")] = target_annots

    root = writer._root_object
    if "/AcroForm" in root:
        acroform = root["/AcroForm"].get_object()
        fields = acroform.get("/Fields")
        if fields is None:
            acroform[NameObject("/Fields")] = field_refs
        else:
            fields.get_object().extend(field_refs)
        acroform[NameObject("/NeedAppearances")] = BooleanObject(True)
    else:
        acroform = DictionaryObject(
            {
                NameObject("/Fields"): field_refs,
                NameObject("/NeedAppearances"): BooleanObject(True),
            }
        )
        root[NameObject("/AcroForm")] = writer._add_object(acroform)
    return names


def _build_overlay_pdf(sizes: list[PageSize], widgets: list[OverlayWidget]) -> BytesIO:
    grouped: dict[int, list[OverlayWidget]] = defaultdict(list)
    for widget in widgets:
        grouped[widget.page_index].append(widget)

    buffer = BytesIO()
    report = canvas.Canvas(buffer, pagesize=sizes[0])

    for page_index, size in enumerate(sizes):
        report.setPageSize(size)

        for widget in grouped.get(page_index, []):
            if widget.kind == "radio":
                report.acroForm.radio(
                    name=widget.name,
                    value=widget.export_value,
                    selected=widget.selected,
                    x=widget.x,
                    y=widget.y,
                    size=min(widget.width, widget.height),
                    buttonStyle="cross",
                    borderWidth=0,
                    fillColor=None,
                    borderColor=None,
                    textColor=colors.black,
                )
            elif widget.kind == "text":
                report.acroForm.textfield(
                    name=widget.name,
                    x=widget.x,
                    y=widget.y,
                    width=widget.width,
                    height=widget.height,
                    value=widget.value,
                    fontSize=widget.font_size,
                    forceBorder=False,
                    borderWidth=0,
                    fillColor=None,
                    borderColor=None,
                    textColor=colors.black,
                )
            else:
                raise ValueError(f"Unsupported widget kind: {widget.kind}")

        report.showPage()

    report.save()
    buffer.seek(0)
    return buffer


def _clear_widget_background(widget_annot: DictionaryObject) -> None:
    mk = widget_annot.get("/MK")
    if mk is None:
        return
    mk_dict = mk.get_object()
    if "/BG" in mk_dict:
        del mk_dict["/BG"]
