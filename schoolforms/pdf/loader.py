"""PDF loading helpers."""

from __future__ import annotations

from io import BytesIO
import logging
from pathlib import Path
import unicodedata
from urllib.parse import quote

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from schoolforms import config
from schoolforms.model.document import LoadedPdf

logger = logging.getLogger(__name__)

PDF_SIGNATURE = b"%PDF-"

_REPLACEMENTS = (
    ("–", "-"),
    ("—", "-"),
    ("’", "'"),
    ("‘", "'"),
)


class PdfLoadError(RuntimeError):
    """Raised when a PDF cannot be opened."""


def load_pdf_bytes(content: bytes, source: str = "<memory>") -> LoadedPdf:
    if not content.startswith(PDF_SIGNATURE):
        raise PdfLoadError(f"Not a PDF (missing {PDF_SIGNATURE!r} header): {source}")

    try:
        reader = PdfReader(BytesIO(content))
        page_count = len(reader.pages)
    except (PyPdfError, ValueError, KeyError) as exc:
        raise PdfLoadError(f"Failed to open PDF: {source}") from exc

    logger.debug("Loaded %s: %d page(s), %d bytes", source, page_count, len(content))
    return LoadedPdf(source=source, content=content, reader=reader)


def filename_variants(file_name: str) -> list[str]:
    """Spellings of ``file_name`` to try, original first, without duplicates.

    Official file names carry en-dashes, typographic apostrophes and accents
    that do not always survive copying onto disk.
    """
    replaced = file_name
    for old, new in _REPLACEMENTS:
        replaced = replaced.replace(old, new)

    candidates = [
        file_name,
        quote(file_name),
        replaced,
        unicodedata.normalize("NFC", file_name),
        unicodedata.normalize("NFD", file_name),
        unicodedata.normalize("NFC", replaced),
    ]

    variants: list[str] = []
    for candidate in candidates:
        if candidate not in variants:
            variants.append(candidate)
    return variants


class TemplateStore:
    """Source PDFs read from a directory on disk."""

    def __init__(self, root: str | Path | None = None) -> None:
        self.root = Path(root) if root is not None else config.TEMPLATES_DIR

    def fetch(self, file_name: str) -> bytes:
        attempts: list[str] = []
        for variant in filename_variants(file_name):
            path = self.root / variant
            try:
                content = path.read_bytes()
            except OSError as exc:
                logger.debug("Template variant %s unavailable: %s", path, exc)
                attempts.append(f"{variant}: {exc.__class__.__name__}")
                continue

            if not content.startswith(PDF_SIGNATURE):
                logger.debug("Template variant %s is not a PDF", path)
                attempts.append(f"{variant}: missing PDF header")
                continue

            logger.debug("Template %s resolved to %s", file_name, path)
            return content

        raise PdfLoadError(
            f"Template {file_name!r} not found in {self.root} (tried: {'; '.join(attempts)})"
        )

    def load(self, file_name: str) -> LoadedPdf:
        return load_pdf_bytes(self.fetch(file_name), source=file_name)
