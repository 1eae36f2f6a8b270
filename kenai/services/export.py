"""PDF export of summary text using reportlab."""

import io
import logging

from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from kenai.core.exceptions import ExportError

logger = logging.getLogger(__name__)

FONT_NAME = "Helvetica"
FONT_SIZE = 14
MARGIN = 72  # 1 inch


def text_to_pdf(text: str) -> bytes:
    """Render plain text onto A4 pages, wrapping lines and breaking pages.

    Raises:
        ExportError: If reportlab fails to render the document.
    """
    try:
        buffer = io.BytesIO()
        width, height = A4
        pdf = canvas.Canvas(buffer, pagesize=A4)
        pdf.setFont(FONT_NAME, FONT_SIZE)
        leading = FONT_SIZE * 1.4
        y = height - MARGIN

        for paragraph in text.splitlines() or [""]:
            lines = simpleSplit(paragraph, FONT_NAME, FONT_SIZE, width - 2 * MARGIN) or [""]
            for line in lines:
                if y < MARGIN:
                    pdf.showPage()
                    pdf.setFont(FONT_NAME, FONT_SIZE)
                    y = height - MARGIN
                pdf.drawString(MARGIN, y, line)
                y -= leading

        pdf.save()
    except Exception as exc:
        logger.error("PDF export failed: %s", exc)
        raise ExportError(f"Could not generate PDF: {exc}") from exc
    return buffer.getvalue()
