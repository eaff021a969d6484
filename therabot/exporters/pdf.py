"""
PDF exporter for TheraBot prescriptions.

Lays out a fixed single-page template and draws it with reportlab:

    TheraBot                                   [logo]
    Diagnosis ChatBot
    ------------------------------------------------
    Disease:
        <label>
    Treatment:
        <treatment, wrapped>
    Recommendation:          <- y follows the treatment height
        <recommendation, wrapped>
                                               [signature]

Layout happens first (compose_layout) and drawing second (render_layout), so
every measurement and asset check is done before a byte of PDF is written.
The document is built in memory; callers only ever see complete bytes.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

from reportlab.lib.colors import HexColor
from reportlab.lib.pagesizes import LETTER
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase.pdfmetrics import getAscentDescent
from reportlab.pdfgen.canvas import Canvas

from therabot.errors import RenderingFailure
from therabot.exporters.text import DEFAULT_FONT, line_height, wrap_text
from therabot.models import DocumentLayout, ImageBlock, LineBlock, TextBlock

logger = logging.getLogger(__name__)

BRAND = "TheraBot"
SUBTITLE = "Diagnosis ChatBot"

BRAND_COLOR = "#6240E8"
MUTED_COLOR = "#646464"
LABEL_COLOR = "#000000"

TITLE_SIZE = 40
HEADING_SIZE = 20
BODY_SIZE = 16

LABEL_X = 30
BODY_X = 50
CONTENT_MARGIN = 60
DIVIDER_Y = 160
DIVIDER_INSET = 20
DIVIDER_WIDTH = 3

DISEASE_LABEL_Y = 200
DISEASE_BODY_Y = 230
TREATMENT_LABEL_Y = 270
TREATMENT_BODY_Y = 300
RECOMMENDATION_GAP = 10
LABEL_TO_BODY = 30

LOGO_FILE = "logo-no-bg.png"
SIGNATURE_FILE = "signature.png"


def _text(name, text, x, y, size, color, width=None, font_name=DEFAULT_FONT) -> TextBlock:
    if width is None:
        lines = tuple(text.splitlines()) or ("",)
    else:
        lines = tuple(wrap_text(text, width, font_name, size))
    return TextBlock(
        name=name,
        text=text,
        x=x,
        y=y,
        font_name=font_name,
        font_size=size,
        color=color,
        lines=lines,
        line_height=line_height(font_name, size),
        width=width,
    )


def _decoration(
    name: str,
    assets_dir: Path | None,
    filename: str,
    x: float,
    y: float,
    width: float,
    height: float,
) -> ImageBlock | None:
    """Image block for an optional asset, or None when the file is absent."""
    if assets_dir is None:
        return None
    path = Path(assets_dir) / filename
    if not path.is_file():
        logger.debug("Decoration %s not found, skipping", path)
        return None
    try:
        ImageReader(str(path)).getSize()
    except Exception as e:
        raise RenderingFailure(f"Unreadable image asset {path}: {e}") from e
    return ImageBlock(name=name, path=path, x=x, y=y, width=width, height=height)


def compose_layout(
    disease_label: str,
    recommendation: str,
    treatment: str,
    assets_dir: Path | None = None,
    pagesize: tuple[float, float] = LETTER,
) -> DocumentLayout:
    """
    Compute every block position for a prescription page.

    Only the recommendation section moves: it starts a fixed gap below the
    measured height of the wrapped treatment text.
    """
    for field_name, value in (
        ("disease_label", disease_label),
        ("recommendation", recommendation),
        ("treatment", treatment),
    ):
        if not isinstance(value, str):
            raise TypeError(f"{field_name} must be a string, got {type(value).__name__}")

    page_width, page_height = pagesize
    content_width = page_width - CONTENT_MARGIN

    treatment_body = _text(
        "treatment", treatment, BODY_X, TREATMENT_BODY_Y, BODY_SIZE, MUTED_COLOR, width=content_width
    )
    recommendation_y = TREATMENT_BODY_Y + treatment_body.height + RECOMMENDATION_GAP

    blocks = [
        _text("title", BRAND, LABEL_X, 50, TITLE_SIZE, BRAND_COLOR),
        _text("subtitle", SUBTITLE, LABEL_X, 90, HEADING_SIZE, MUTED_COLOR),
        LineBlock(
            name="divider",
            x1=DIVIDER_INSET,
            y1=DIVIDER_Y,
            x2=page_width - DIVIDER_INSET,
            y2=DIVIDER_Y,
            color=BRAND_COLOR,
            line_width=DIVIDER_WIDTH,
        ),
        _text("disease_heading", "Disease:", LABEL_X, DISEASE_LABEL_Y, HEADING_SIZE, LABEL_COLOR),
        _text("disease", disease_label, BODY_X, DISEASE_BODY_Y, BODY_SIZE, MUTED_COLOR),
        _text("treatment_heading", "Treatment:", LABEL_X, TREATMENT_LABEL_Y, HEADING_SIZE, LABEL_COLOR),
        treatment_body,
        _text(
            "recommendation_heading", "Recommendation:", LABEL_X, recommendation_y, HEADING_SIZE, LABEL_COLOR
        ),
        _text(
            "recommendation",
            recommendation,
            BODY_X,
            recommendation_y + LABEL_TO_BODY,
            BODY_SIZE,
            MUTED_COLOR,
            width=content_width,
        ),
    ]

    logo = _decoration("logo", assets_dir, LOGO_FILE, page_width - 130, 30, 100, 100)
    signature = _decoration("signature", assets_dir, SIGNATURE_FILE, page_width - 130, page_height - 80, 100, 50)
    blocks.extend(b for b in (logo, signature) if b is not None)

    return DocumentLayout(page_width=page_width, page_height=page_height, blocks=tuple(blocks))


def _draw_text(canvas: Canvas, block: TextBlock, page_height: float) -> None:
    ascent, _ = getAscentDescent(block.font_name, block.font_size)
    canvas.setFillColor(HexColor(block.color))
    canvas.setFont(block.font_name, block.font_size)
    for i, line in enumerate(block.lines):
        baseline = block.y + i * block.line_height + ascent
        canvas.drawString(block.x, page_height - baseline, line)


def render_layout(layout: DocumentLayout, title: str = "Prescription", compress: bool = True) -> bytes:
    """Draw a composed layout onto one PDF page and return the bytes."""
    buffer = io.BytesIO()
    canvas = Canvas(
        buffer,
        pagesize=(layout.page_width, layout.page_height),
        pageCompression=1 if compress else 0,
    )
    canvas.setTitle(title)
    canvas.setAuthor(BRAND)

    height = layout.page_height
    for block in layout.blocks:
        if isinstance(block, TextBlock):
            _draw_text(canvas, block, height)
        elif isinstance(block, LineBlock):
            canvas.setStrokeColor(HexColor(block.color))
            canvas.setLineWidth(block.line_width)
            canvas.line(block.x1, height - block.y1, block.x2, height - block.y2)
        elif isinstance(block, ImageBlock):
            canvas.drawImage(
                str(block.path),
                block.x,
                height - block.y - block.height,
                width=block.width,
                height=block.height,
                preserveAspectRatio=True,
                anchor="nw",
                mask="auto",
            )

    canvas.showPage()
    canvas.save()
    return buffer.getvalue()


def render(
    disease_label: str,
    recommendation: str,
    treatment: str,
    assets_dir: Path | None = None,
    compress: bool = True,
) -> bytes:
    """
    Build a complete prescription PDF.

    Raises:
        RenderingFailure: if any step of layout or drawing fails. No partial
            document is returned.
    """
    try:
        layout = compose_layout(disease_label, recommendation, treatment, assets_dir=assets_dir)
        return render_layout(layout, title=f"Prescription - {disease_label}", compress=compress)
    except RenderingFailure:
        logger.exception("Failed to render prescription for %r", disease_label)
        raise
    except Exception as e:
        logger.exception("Failed to render prescription for %r", disease_label)
        raise RenderingFailure(f"Could not render prescription: {e}") from e
