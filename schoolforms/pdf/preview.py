"""PDF rendering helpers using PyMuPDF."""

from __future__ import annotations

import fitz


class PdfRenderError(RuntimeError):
    """Raised when a page cannot be rendered."""


def render_preview_png(content: bytes, page_index: int = 0, zoom: float = 1.25, annots: bool = True) -> bytes:
    try:
        document = fitz.open(stream=content, filetype="pdf")
    except (RuntimeError, ValueError) as exc:
        raise PdfRenderError("Failed to open PDF for preview") from exc

    try:
        if page_index < 0 or page_index >= document.page_count:
            raise PdfRenderError(f"Page index out of range: {page_index}")
        try:
            page = document.load_page(page_index)
            matrix = fitz.Matrix(zoom, zoom)
            pix = page.get_pixmap(matrix=matrix, alpha=False, annots=annots)
            return pix.tobytes("png")
        except (RuntimeError, ValueError) as exc:
            raise PdfRenderError(f"Failed to render page {page_index + 1}") from exc
    finally:
        document.close()
