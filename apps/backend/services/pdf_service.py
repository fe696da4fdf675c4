import io
import logging
import os
import unicodedata
from typing import List
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer, PageBreak
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont, TTFError
from reportlab.lib.fonts import addMapping
from xml.sax.saxutils import escape
from models.schemas import DAY_SLOTS, TimetableWeek
from settings import settings

logger = logging.getLogger(__name__)

# Registered from settings.PDF_FONT_PATH, covers non Latin-1 names
FONT_NAME = "TimetableSans"
FONT_NAME_BOLD = "TimetableSans-Bold"
FALLBACK_FONT = "Helvetica"
FALLBACK_FONT_BOLD = "Helvetica-Bold"

# Letters NFKD cannot reduce to Latin-1
TRANSLITERATIONS = {'ł': 'l', 'Ł': 'L', 'đ': 'd', 'Đ': 'D', 'ß': 'ss'}

DAY_HEADERS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

def _ensure_fonts(font_path=None, bold_path=None) -> bool:
    """Ensures that a Unicode font is available. Returns success bool."""
    if FONT_NAME in pdfmetrics.getRegisteredFontNames():
        return True
    font_path = font_path or settings.PDF_FONT_PATH
    bold_path = bold_path or settings.PDF_FONT_BOLD_PATH
    if not font_path or not os.path.exists(font_path):
        logger.warning("PDF font not found at %s, falling back to %s", font_path, FALLBACK_FONT)
        return False
    try:
        pdfmetrics.registerFont(TTFont(FONT_NAME, font_path))
        if bold_path and os.path.exists(bold_path):
            pdfmetrics.registerFont(TTFont(FONT_NAME_BOLD, bold_path))
            bold = FONT_NAME_BOLD
        else:
            # Fallback bold to regular
            bold = FONT_NAME
        # <b> markup inside paragraphs resolves through the family mapping
        addMapping(FONT_NAME, 0, 0, FONT_NAME)
        addMapping(FONT_NAME, 1, 0, bold)
        addMapping(FONT_NAME, 0, 1, FONT_NAME)
        addMapping(FONT_NAME, 1, 1, bold)
        return True
    except (OSError, TTFError) as e:
        logger.error("Could not register PDF font %s: %s", font_path, e)
        return False

def _sanitize_for_pdf(text, use_unicode):
    """If unicode font is not available, transliterate to Latin-1; unknown characters become '?'."""
    if not text: return ""
    if use_unicode: return text

    out = []
    for ch in text:
        if ord(ch) < 256:
            out.append(ch)
            continue
        ch = TRANSLITERATIONS.get(ch, ch)
        base = unicodedata.normalize('NFKD', ch).encode('latin-1', 'ignore').decode('latin-1')
        out.append(base or '?')
    return "".join(out)

def _cell_text(lessons, use_unicode=True) -> str:
    if not lessons:
        return "-"
    entries = []
    for lesson in lessons:
        subject = escape(_sanitize_for_pdf(lesson.subject_name or f"#{lesson.subject_id}", use_unicode))
        teacher = escape(_sanitize_for_pdf(lesson.teacher_name or f"#{lesson.user_id}", use_unicode))
        entries.append(f"<b>{subject}</b> ({teacher})")
    return "<br/>".join(entries)

def generate_timetable_pdf(weeks: List[TimetableWeek], title: str = "Lesson Timetable"):
    """
    Generates a PDF with one timetable grid per week.

    Layout: rows are catalog periods, columns are Mon..Sun; each cell lists
    "subject (teacher)" for the lessons in that slot.

    Returns:
        io.BytesIO: Buffer positioned at the start of the PDF.
    """
    has_unicode = _ensure_fonts()
    current_font = FONT_NAME if has_unicode else FALLBACK_FONT
    current_font_bold = (FONT_NAME_BOLD if FONT_NAME_BOLD in pdfmetrics.getRegisteredFontNames() else FONT_NAME) \
        if has_unicode else FALLBACK_FONT_BOLD

    buffer = io.BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=landscape(A4), rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20)

    elements = []

    # Styles
    styles = getSampleStyleSheet()
    style_title = ParagraphStyle('CustomTitle', parent=styles['Heading1'], fontName=current_font_bold, alignment=1, fontSize=16)
    style_week = ParagraphStyle('CustomWeek', parent=styles['Heading2'], fontName=current_font_bold, fontSize=12)
    style_header = ParagraphStyle('CustomHeader', parent=styles['Normal'], fontName=current_font_bold, fontSize=10, textColor=colors.white)
    style_cell = ParagraphStyle('CustomCell', parent=styles['Normal'], fontName=current_font, fontSize=8)

    elements.append(Paragraph(escape(_sanitize_for_pdf(title, has_unicode)), style_title))
    elements.append(Spacer(1, 15))

    if not weeks:
        elements.append(Paragraph("No lessons scheduled.", style_cell))

    for i, week in enumerate(weeks):
        if i > 0:
            elements.append(PageBreak())
        elements.append(Paragraph(f"Week {week.week} (from {week.monday.isoformat()})", style_week))
        elements.append(Spacer(1, 8))

        data = [[Paragraph(h, style_header) for h in ["Period"] + DAY_HEADERS]]
        for plan in week.plans:
            row = [Paragraph(f"<b>{escape(_sanitize_for_pdf(plan.period, has_unicode))}</b>", style_cell)]
            for slot in DAY_SLOTS:
                row.append(Paragraph(_cell_text(getattr(plan, slot), has_unicode), style_cell))
            data.append(row)

        t = Table(data, colWidths=[80] + [100] * len(DAY_HEADERS), repeatRows=1)
        t.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, 0), colors.darkblue), # Header bg
            ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
            ('ALIGN', (0, 0), (-1, -1), 'LEFT'),
            ('VALIGN', (0, 0), (-1, -1), 'TOP'),
            ('BOTTOMPADDING', (0, 0), (-1, 0), 8),
            ('GRID', (0, 0), (-1, -1), 1, colors.black),
            ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.whitesmoke, colors.lightgrey]),
        ]))
        elements.append(t)

    doc.build(elements)

    buffer.seek(0)
    return buffer
