from __future__ import annotations

from schoolforms.pdf.text import fit_font_size, text_width, truncate_to_width, wrap_words

FONT = "Helvetica"


def test_short_value_stays_on_one_line() -> None:
    assert wrap_words("12 rue des Écoles", FONT, 10, 300) == ["12 rue des Écoles"]


def test_long_value_wraps_within_width() -> None:
    text = "Allergie sévère aux arachides, aux fruits à coque et au pollen de bouleau"
    lines = wrap_words(text, FONT, 10, 120)
    assert len(lines) > 1
    assert all(text_width(line, FONT, 10) <= 120 for line in lines)
    assert " ".join(lines) == text


def test_oversized_word_is_truncated() -> None:
    lines = wrap_words("Anticonstitutionnellement", FONT, 10, 40)
    assert len(lines) == 1
    assert text_width(lines[0], FONT, 10) <= 40
    assert "Anticonstitutionnellement".startswith(lines[0])


def test_truncate_leaves_fitting_text_alone() -> None:
    assert truncate_to_width("Lyon", FONT, 10, 100) == "Lyon"


def test_fit_font_size_shrinks_until_it_fits() -> None:
    text = "Arachides, pollen, acariens, lactose"
    size = fit_font_size(text, FONT, 10, 100)
    assert size < 10
    assert size >= 6
    assert fit_font_size(text, FONT, 10, None) == 10
    assert fit_font_size(text * 5, FONT, 10, 20) == 6
