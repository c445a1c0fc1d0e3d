from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus
from ..employees.model import Employee


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's working hours for one day."""

    id: int
    employee_id: str
    work_date: date
    check_in: datetime
    check_out: Optional[datetime]
    total_hours: Optional[float]
    is_late: bool
    status: AttendanceStatus
    note: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.check_out is None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "employee_id": self.employee_id,
            "work_date": self.work_date.strftime("%Y-%m-%d"),
            "check_in": _iso(self.check_in),
            "check_out": _iso(self.check_out),
            "total_hours": self.total_hours,
            "is_late": self.is_late,
            "status": self.status.value,
            "note": self.note,
        }


@dataclass(frozen=True)
class AttendanceReportRow:
    """Read-model joining a record with its employee, used by reports and summaries."""

    employee_id: str
    first_name: str
    last_name: str
    department: Optional[str]
    work_date: date
    check_in: datetime
    check_out: Optional[datetime]
    total_hours: Optional[float]
    is_late: bool
    status: AttendanceStatus

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class Scan:
    id: int
    employee_id: str
    scanned_by: Optional[int]
    created_at: datetime


@dataclass(frozen=True)
class MarkResult:
    action: str
    employee: Employee
    record: AttendanceRecord
    message: str

    def to_dict(self) -> dict:
        return {
            "action": self.action,
            "message": self.message,
            "employee": {
                "employee_id": self.employee.employee_id,
                "name": self.employee.full_name,
                "department": self.employee.department,
            },
            "record": self.record.to_dict(),
        }
