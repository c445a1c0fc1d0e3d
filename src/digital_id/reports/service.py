from __future__ import annotations

import calendar
import csv
import io
from datetime import date, datetime, timedelta
from typing import Optional

from ..common.datetime_utils import format_clock
from ..core.enums import ReportPeriod
from ..attendance.repository import AttendanceRepository
from .model import REPORT_COLUMNS, ReportData, ReportRange
from .pdf import render_pdf


def date_range(period: ReportPeriod, day: date) -> ReportRange:
    """Inclusive date range covered by a report; weeks run Sunday to Saturday."""

    if period == ReportPeriod.DAILY:
        return ReportRange(period, day, day, day.strftime("%B %d, %Y"))

    if period == ReportPeriod.WEEKLY:
        start = day - timedelta(days=(day.weekday() + 1) % 7)
        end = start + timedelta(days=6)
        title = f"Week of {start.strftime('%B %d')} - {end.strftime('%B %d, %Y')}"
        return ReportRange(period, start, end, title)

    start = day.replace(day=1)
    end = day.replace(day=calendar.monthrange(day.year, day.month)[1])
    return ReportRange(period, start, end, day.strftime("%B %Y"))


class ReportService:
    def __init__(self, attendance: AttendanceRepository, *, company_name: str = "Digital ID"):
        self._attendance = attendance
        self._company_name = company_name

    def build(self, period: ReportPeriod, day: date) -> ReportData:
        rng = date_range(period, day)
        query_rows = self._attendance.get_report_rows(start_date=rng.start, end_date=rng.end)

        rows: list[dict] = []
        total_hours = 0.0
        late = 0
        employees = set()
        for r in query_rows:
            rows.append(
                {
                    "employee_id": r.employee_id,
                    "name": r.full_name,
                    "department": r.department or "-",
                    "work_date": r.work_date.strftime("%Y-%m-%d"),
                    "check_in": format_clock(r.check_in),
                    "check_out": format_clock(r.check_out) if r.check_out else "-",
                    "total_hours": f"{r.total_hours:.2f}" if r.total_hours is not None else "-",
                    "status": r.status.value,
                }
            )
            total_hours += r.total_hours or 0.0
            late += 1 if r.is_late else 0
            employees.add(r.employee_id)

        summary = {
            "records": len(rows),
            "employees": len(employees),
            "late": late,
            "total_hours": round(total_hours, 2),
        }
        return ReportData(range=rng, rows=rows, summary=summary)

    def to_pdf(self, report: ReportData, *, generated_at: Optional[datetime] = None) -> bytes:
        return render_pdf(report, company_name=self._company_name, generated_at=generated_at)

    @staticmethod
    def to_csv(report: ReportData) -> bytes:
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=[key for key, _ in REPORT_COLUMNS])
        writer.writerow({key: label for key, label in REPORT_COLUMNS})
        for row in report.rows:
            writer.writerow(row)
        return out.getvalue().encode("utf-8-sig")
