"""PDF rendering of an attendance report with reportlab platypus."""

from __future__ import annotations

import io
from datetime import datetime
from typing import Optional

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.pdfgen import canvas
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from .model import REPORT_COLUMNS, ReportData

HEADER_FILL = colors.Color(71 / 255, 71 / 255, 71 / 255)
ALT_ROW_FILL = colors.Color(240 / 255, 240 / 255, 240 / 255)


def _numbered_canvas(generated_at: datetime):
    footer_prefix = f"Generated on {generated_at.strftime('%b %d, %Y %I:%M %p')}"

    class NumberedCanvas(canvas.Canvas):
        """Defers page output until the page count is known."""

        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            self._saved_page_states = []

        def showPage(self):
            self._saved_page_states.append(dict(self.__dict__))
            self._startPage()

        def save(self):
            page_count = len(self._saved_page_states)
            for state in self._saved_page_states:
                self.__dict__.update(state)
                self._draw_footer(page_count)
                super().showPage()
            super().save()

        def _draw_footer(self, page_count: int):
            width, _ = self._pagesize
            self.setFont("Helvetica", 8)
            self.setFillColor(colors.grey)
            self.drawCentredString(
                width / 2,
                20,
                f"{footer_prefix} - Page {self._pageNumber} of {page_count}",
            )

    return NumberedCanvas


def render_pdf(report: ReportData, *, company_name: str, generated_at: Optional[datetime] = None) -> bytes:
    generated_at = generated_at or datetime.now()
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=28, rightMargin=28, topMargin=36, bottomMargin=40,
        title=f"Attendance Report - {report.range.title}",
    )

    styles = getSampleStyleSheet()
    centered = ParagraphStyle("Centered", parent=styles["Normal"], alignment=TA_CENTER, fontSize=11)
    cell = ParagraphStyle("Cell", parent=styles["BodyText"], fontSize=8, leading=10)

    content = [
        Paragraph("Attendance Report", styles["Title"]),
        Paragraph(report.range.title, centered),
        Spacer(1, 4),
        Paragraph(company_name, centered),
        Spacer(1, 12),
    ]

    header = [label for _, label in REPORT_COLUMNS]
    body = [[Paragraph(str(row.get(key, "")), cell) for key, _ in REPORT_COLUMNS] for row in report.rows]
    if not body:
        body = [[Paragraph("No attendance records for this period", cell)] + [""] * (len(header) - 1)]

    total_width = A4[0] - 56
    weights = (1.1, 1.8, 1.5, 1.1, 1.0, 1.0, 0.7, 1.0)
    col_widths = [total_width * w / sum(weights) for w in weights]

    table = Table([header] + body, repeatRows=1, colWidths=col_widths, hAlign="CENTER")
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), HEADER_FILL),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 8),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("GRID", (0, 0), (-1, -1), 0.25, colors.lightgrey),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, ALT_ROW_FILL]),
    ]))
    content.append(table)

    doc.build(content, canvasmaker=_numbered_canvas(generated_at))
    return buffer.getvalue()
