from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.enums import ReportPeriod

REPORT_COLUMNS = (
    ("employee_id", "Employee ID"),
    ("name", "Name"),
    ("department", "Department"),
    ("work_date", "Date"),
    ("check_in", "Check In"),
    ("check_out", "Check Out"),
    ("total_hours", "Hours"),
    ("status", "Status"),
)


@dataclass(frozen=True)
class ReportRange:
    period: ReportPeriod
    start: date
    end: date
    title: str

    @property
    def file_stem(self) -> str:
        return f"attendance-report-{self.start:%Y-%m-%d}-{self.end:%Y-%m-%d}"


@dataclass(frozen=True)
class ReportData:
    range: ReportRange
    rows: list[dict]
    summary: dict

    def to_dict(self) -> dict:
        return {
            "period": self.range.period.value,
            "start": self.range.start.strftime("%Y-%m-%d"),
            "end": self.range.end.strftime("%Y-%m-%d"),
            "title": self.range.title,
            "rows": self.rows,
            "summary": self.summary,
        }
