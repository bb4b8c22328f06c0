"""
Report output: inline HTML for the viewer and a PDF download of the cleaned text.
"""
from __future__ import annotations

from io import BytesIO
from xml.sax.saxutils import escape

from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate

from services.sanitizer import strip_fence_markers

REPORT_PDF_FILENAME = "generated_report.pdf"
REPORT_PDF_TITLE = "Generated Report"
PAGE_MARGIN = 30  # points


def render_report_html(report: str) -> str:
    """Provider HTML with the code-fence markers removed. Trusted as-is."""
    return strip_fence_markers(report)


def _styles() -> tuple[ParagraphStyle, ParagraphStyle]:
    base = getSampleStyleSheet()
    heading = ParagraphStyle(
        "ReportHeading",
        parent=base["Normal"],
        fontSize=18,
        leading=22,
        spaceAfter=10,
    )
    text = ParagraphStyle(
        "ReportText",
        parent=base["Normal"],
        fontSize=12,
        leading=15,
        spaceAfter=5,
    )
    return heading, text


def _paragraphs(cleaned_report: str) -> list[str]:
    """Blank lines split paragraphs; single newlines become <br/>."""
    blocks = [b.strip() for b in cleaned_report.split("\n\n")]
    return ["<br/>".join(escape(line) for line in b.split("\n")) for b in blocks if b]


def render_report_pdf(cleaned_report: str) -> bytes:
    """A4 document with a heading and the sanitized report text."""
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=PAGE_MARGIN,
        rightMargin=PAGE_MARGIN,
        topMargin=PAGE_MARGIN,
        bottomMargin=PAGE_MARGIN,
        title=REPORT_PDF_TITLE,
    )
    heading_style, text_style = _styles()
    elements = [Paragraph(REPORT_PDF_TITLE, heading_style)]
    for para in _paragraphs(cleaned_report or ""):
        elements.append(Paragraph(para, text_style))
    doc.build(elements)
    return buffer.getvalue()
