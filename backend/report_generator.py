"""PDF export of a SecurityReport."""

import html
import io
import logging

from reportlab.graphics.shapes import Drawing, Rect, String
from reportlab.lib.colors import Color, HexColor, white
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from lookups import (
    format_check_name,
    format_header_name,
    grade_color,
    grade_description,
    header_description,
    headers_summary,
    NEXT_STEPS,
    priority_color,
    ssl_check_description,
    ssl_summary,
)
from models import SecurityReport

logger = logging.getLogger(__name__)

# Brand colors
PRIMARY = HexColor("#5a32ea")
TEXT_DARK = HexColor("#1e293b")
TEXT_GRAY = HexColor("#64748b")
ROW_ALT = HexColor("#f1f5f9")
GRID = HexColor("#cbd5e1")


def _build_styles():
    styles = getSampleStyleSheet()
    styles.add(ParagraphStyle("ReportTitle", fontSize=22, textColor=white, fontName="Helvetica-Bold",
                              alignment=1, leading=26))
    styles.add(ParagraphStyle("Meta", fontSize=10, textColor=TEXT_GRAY, fontName="Helvetica",
                              alignment=1, spaceAfter=2))
    styles.add(ParagraphStyle("SectionTitle", fontSize=15, textColor=PRIMARY, fontName="Helvetica-Bold",
                              spaceBefore=16, spaceAfter=8))
    styles.add(ParagraphStyle("BodyText2", fontSize=10, textColor=TEXT_DARK, fontName="Helvetica",
                              leading=14, spaceAfter=4))
    styles.add(ParagraphStyle("Cell", fontSize=9, textColor=TEXT_DARK, fontName="Helvetica", leading=12))
    return styles


def _esc(text) -> str:
    return html.escape(str(text), quote=False)


def _score_box(title: str, grade: str, score: float, width: float = 140, height: float = 70) -> Drawing:
    """Grade-colored card with the grade letter, percentage and a progress bar."""
    d = Drawing(width, height)
    d.add(Rect(0, 0, width, height, rx=6, ry=6, fillColor=HexColor(grade_color(grade)), strokeWidth=0))
    d.add(String(10, height - 18, title, fontSize=10, fillColor=white, fontName="Helvetica-Bold"))
    d.add(String(12, 14, grade, fontSize=26, fillColor=white, fontName="Helvetica-Bold"))
    d.add(String(width - 10, height - 18, f"{round(score)}%", fontSize=10, fillColor=white,
                 fontName="Helvetica", textAnchor="end"))
    bar_x, bar_w = 55, width - 65
    d.add(Rect(bar_x, 16, bar_w, 8, rx=4, ry=4, fillColor=Color(1, 1, 1, alpha=0.35), strokeWidth=0))
    fill = max(0.0, min(score / 100, 1.0)) * bar_w
    if fill:
        d.add(Rect(bar_x, 16, fill, 8, rx=4, ry=4, fillColor=white, strokeWidth=0))
    return d


def _table(rows, col_widths) -> Table:
    t = Table(rows, colWidths=col_widths, repeatRows=1)
    t.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), PRIMARY),
        ("TEXTCOLOR", (0, 0), (-1, 0), white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [white, ROW_ALT]),
        ("GRID", (0, 0), (-1, -1), 0.5, GRID),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("TOPPADDING", (0, 0), (-1, -1), 5),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 5),
    ]))
    return t


def _status_cell(ok: bool, styles, ok_label: str, bad_label: str) -> Paragraph:
    color = "#16a34a" if ok else "#dc2626"
    return Paragraph(f'<font color="{color}"><b>{ok_label if ok else bad_label}</b></font>', styles["Cell"])


def _draw_footer(canvas, doc):
    canvas.saveState()
    canvas.setFillColor(TEXT_GRAY)
    canvas.setFont("Helvetica", 7)
    canvas.drawCentredString(A4[0] / 2, 20, f"Security Scorecard Report - Page {canvas.getPageNumber()}")
    canvas.restoreState()


def generate_pdf(report: SecurityReport) -> bytes:
    """Render *report* as a PDF document and return its bytes."""
    buf = io.BytesIO()
    styles = _build_styles()
    doc = SimpleDocTemplate(buf, pagesize=A4, topMargin=0.6*inch, bottomMargin=0.6*inch,
                            leftMargin=0.75*inch, rightMargin=0.75*inch,
                            title=f"Security report for {report.hostname}")
    width = A4[0] - 1.5*inch
    story = []

    # ── Title ──
    banner = Table([[Paragraph("SECURITY SCORECARD REPORT", styles["ReportTitle"])]], colWidths=[width])
    banner.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, -1), PRIMARY),
        ("TOPPADDING", (0, 0), (-1, -1), 14),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 14),
    ]))
    story.append(banner)
    story.append(Spacer(1, 10))
    story.append(Paragraph(f"URL: {_esc(report.url)}", styles["Meta"]))
    story.append(Paragraph(f"Generated: {report.generated_at.strftime('%B %d, %Y at %H:%M UTC')}", styles["Meta"]))
    story.append(Spacer(1, 12))

    # ── Score boxes ──
    overall = report.overall_grade.value
    boxes = Table([[
        _score_box("Overall", overall, report.overall_score),
        _score_box("Security Headers", report.headers.grade.value, report.headers.score),
        _score_box("SSL/TLS", report.ssl.grade.value, report.ssl.score),
    ]], colWidths=[width / 3] * 3)
    story.append(boxes)
    story.append(Spacer(1, 8))
    story.append(Paragraph(_esc(grade_description(overall)), styles["BodyText2"]))

    # ── Headers ──
    story.append(Paragraph("Security Headers", styles["SectionTitle"]))
    story.append(Paragraph(headers_summary(report.headers), styles["BodyText2"]))
    rows = [["Header", "Status", "Description"]]
    for header, present in report.headers.observations.items():
        rows.append([
            Paragraph(_esc(format_header_name(header)), styles["Cell"]),
            _status_cell(present, styles, "Present", "Missing"),
            Paragraph(_esc(header_description(header)), styles["Cell"]),
        ])
    story.append(_table(rows, [width * 0.35, width * 0.15, width * 0.5]))

    # ── SSL ──
    story.append(Paragraph("SSL/TLS Configuration", styles["SectionTitle"]))
    story.append(Paragraph(ssl_summary(report.ssl), styles["BodyText2"]))
    rows = [["Check", "Status", "Description"]]
    for check, ok in report.ssl.observations.items():
        rows.append([
            Paragraph(_esc(format_check_name(check)), styles["Cell"]),
            _status_cell(ok, styles, "Pass", "Fail"),
            Paragraph(_esc(ssl_check_description(check)), styles["Cell"]),
        ])
    story.append(_table(rows, [width * 0.35, width * 0.15, width * 0.5]))

    # ── Recommendations ──
    story.append(Paragraph("Security Recommendations", styles["SectionTitle"]))
    if report.recommendations:
        rows = [["Recommendation", "Priority", "Description"]]
        for rec in report.recommendations:
            color = priority_color(rec.priority)
            rows.append([
                Paragraph(f"<b>{_esc(rec.title)}</b>", styles["Cell"]),
                Paragraph(f'<font color="{color}"><b>{rec.priority.value}</b></font>', styles["Cell"]),
                Paragraph(_esc(rec.description), styles["Cell"]),
            ])
        story.append(_table(rows, [width * 0.32, width * 0.13, width * 0.55]))
    else:
        story.append(Paragraph(
            "Great job! No critical security issues were found. Your website has a strong security configuration.",
            styles["BodyText2"],
        ))

    # ── Next steps ──
    story.append(Paragraph("Next Steps", styles["SectionTitle"]))
    for i, step in enumerate(NEXT_STEPS, 1):
        story.append(Paragraph(f"{i}. {_esc(step)}", styles["BodyText2"]))

    doc.build(story, onFirstPage=_draw_footer, onLaterPages=_draw_footer)
    pdf = buf.getvalue()
    logger.debug("generated PDF for %s (%d bytes)", report.hostname, len(pdf))
    return pdf
