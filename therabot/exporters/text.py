"""
Text measurement for the PDF exporter.

Greedy line breaking on whitespace using the font's advance widths. No
hyphenation: a word wider than the column sits alone on its own line.
"""

from __future__ import annotations

from reportlab.pdfbase.pdfmetrics import getAscentDescent, stringWidth

DEFAULT_FONT = "Helvetica"

# Line gap as a fraction of font size (Helvetica AFM bbox minus ascent/descent)
LINE_GAP_RATIO = 0.231


def line_height(font_name: str = DEFAULT_FONT, font_size: float = 12) -> float:
    """Height of one line of text, including the font's line gap."""
    ascent, descent = getAscentDescent(font_name, font_size)
    return ascent - descent + LINE_GAP_RATIO * font_size


def wrap_text(
    text: str,
    width: float,
    font_name: str = DEFAULT_FONT,
    font_size: float = 12,
) -> list[str]:
    """
    Break text into lines no wider than `width` points.

    Paragraphs (separated by newlines) always start a new line; an empty
    paragraph becomes an empty line. Blank text yields no lines.
    """
    if width <= 0:
        raise ValueError(f"width must be positive, got {width}")
    if not text or not text.strip():
        return []

    space = stringWidth(" ", font_name, font_size)
    lines: list[str] = []

    for paragraph in text.splitlines():
        words = paragraph.split()
        if not words:
            lines.append("")
            continue

        current = words[0]
        current_width = stringWidth(current, font_name, font_size)
        for word in words[1:]:
            word_width = stringWidth(word, font_name, font_size)
            if current_width + space + word_width <= width:
                current = f"{current} {word}"
                current_width += space + word_width
            else:
                lines.append(current)
                current = word
                current_width = word_width
        lines.append(current)

    return lines


def measure_height(
    text: str,
    width: float,
    font_name: str = DEFAULT_FONT,
    font_size: float = 12,
) -> float:
    """Rendered height of `text` wrapped to `width`."""
    return len(wrap_text(text, width, font_name, font_size)) * line_height(font_name, font_size)
