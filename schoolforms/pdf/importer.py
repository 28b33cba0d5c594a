"""List AcroForm fields a source PDF already carries."""

from __future__ import annotations

from schoolforms.model.document import ExistingField, LoadedPdf

KIND_NAMES = {
    "/Tx": "text",
    "/Btn": "button",
    "/Ch": "choice",
    "/Sig": "signature",
}
_OFF_STATES = {"", "/Off", "Off"}


def list_form_fields(document: LoadedPdf) -> list[ExistingField]:
    found: list[ExistingField] = []

    for page_index, page in enumerate(document.reader.pages):
        annots = page.get("/Annots") or []
        for annot_ref in annots:
            annot = annot_ref.get_object()
            if annot.get("/Subtype") != "/Widget":
                continue

            parent = annot.get("/Parent")
            parent_obj = parent.get_object() if parent is not None else None

            field_type = _inherited(annot, parent_obj, "/FT")
            rect = annot.get("/Rect")
            if field_type is None or rect is None:
                continue

            llx, lly, urx, ury = (float(value) for value in rect)
            name = _full_name(annot, parent_obj)
            flags = int(_inherited(annot, parent_obj, "/Ff") or 0)
            raw_value = _inherited(annot, parent_obj, "/V")
            value = str(raw_value) if raw_value is not None else ""
            appearance = str(annot.get("/AS") or "")

            found.append(
                ExistingField(
                    page_index=page_index,
                    name=name,
                    kind=KIND_NAMES.get(str(field_type), str(field_type)),
                    x=min(llx, urx),
                    y=min(lly, ury),
                    width=abs(urx - llx),
                    height=abs(ury - lly),
                    value=value,
                    checked=field_type == "/Btn" and (value not in _OFF_STATES or appearance not in _OFF_STATES),
                    required=bool(flags & 2),
                )
            )

    return found


def _inherited(annot, parent_obj, key: str):
    value = annot.get(key)
    if value is None and parent_obj is not None:
        value = parent_obj.get(key)
    return value


def _full_name(annot, parent_obj) -> str:
    own = annot.get("/T")
    if parent_obj is None:
        return str(own or "")
    parent_name = str(parent_obj.get("/T") or "")
    if own is None:
        return parent_name
    return f"{parent_name}.{own}" if parent_name else str(own)
