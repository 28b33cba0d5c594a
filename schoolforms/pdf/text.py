"""Text measurement helpers built on reportlab font metrics."""

from __future__ import annotations

from reportlab.pdfbase.pdfmetrics import stringWidth


def text_width(text: str, font_name: str, font_size: float) -> float:
    return stringWidth(text, font_name, font_size)


def truncate_to_width(text: str, font_name: str, font_size: float, max_width: float) -> str:
    """Cut characters off the end until ``text`` fits. No hyphen is added."""
    if text_width(text, font_name, font_size) <= max_width:
        return text
    end = len(text)
    while end > 0 and text_width(text[:end], font_name, font_size) > max_width:
        end -= 1
    return text[:end]


def wrap_words(text: str, font_name: str, font_size: float, max_width: float) -> list[str]:
    """
    Greedy word wrapping. A single word wider than ``max_width`` is hard-truncated.
    """
    words = (text or "").split()
    if not words:
        return [""]

    lines: list[str] = []
    current = ""

    for word in words:
        candidate = f"{current} {word}" if current else word
        if text_width(candidate, font_name, font_size) <= max_width:
            current = candidate
            continue

        if current:
            lines.append(current)
        current = truncate_to_width(word, font_name, font_size, max_width)

    if current:
        lines.append(current)

    return lines


def fit_font_size(
    text: str,
    font_name: str,
    base_size: float,
    max_width: float | None,
    min_size: float = 6.0,
) -> float:
    if max_width is None:
        return base_size
    size = float(base_size)
    while size > min_size:
        if text_width(text, font_name, size) <= max_width:
            return size
        size -= 0.5
    return min_size
