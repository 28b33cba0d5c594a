from __future__ import annotations

import pytest

from schoolforms.pdf.preview import PdfRenderError, render_preview_png

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


def test_preview_is_png(pdf_factory) -> None:
    assert render_preview_png(pdf_factory(), zoom=0.5).startswith(PNG_MAGIC)


def test_preview_rejects_missing_page(pdf_factory) -> None:
    with pytest.raises(PdfRenderError):
        render_preview_png(pdf_factory(pages=1), page_index=2)


class DummyDoc:
    def __init__(self) -> None:
        self.page_count = 1
        self.closed = False

    def load_page(self, index: int):  # noqa: ARG002 - test helper
        raise RuntimeError("broken page")

    def close(self) -> None:
        self.closed = True


def test_preview_closes_document_on_failure(monkeypatch) -> None:
    doc = DummyDoc()
    monkeypatch.setattr("schoolforms.pdf.preview.fitz.open", lambda **kwargs: doc)
    with pytest.raises(PdfRenderError):
        render_preview_png(b"%PDF-1.4")
    assert doc.closed is True
