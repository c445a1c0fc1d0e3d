from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.enums import AutomationStatus


@dataclass
class DepartmentStats:
    total: int = 0
    present: int = 0
    absent: int = 0
    late: int = 0
    early_leave: int = 0


@dataclass(frozen=True)
class SummaryEntry:
    name: str
    department: str
    time: Optional[str] = None


@dataclass
class AttendanceSummary:
    """Daily attendance counts, overall and per department."""

    total_employees: int = 0
    present: int = 0
    absent: int = 0
    late: int = 0
    early_leave: int = 0
    departments: dict[str, DepartmentStats] = field(default_factory=dict)
    late_employees: list[SummaryEntry] = field(default_factory=list)
    absent_employees: list[SummaryEntry] = field(default_factory=list)
    early_leave_employees: list[SummaryEntry] = field(default_factory=list)

    def totals(self) -> dict:
        return {
            "total": self.total_employees,
            "present": self.present,
            "absent": self.absent,
            "late": self.late,
            "earlyLeave": self.early_leave,
        }


@dataclass(frozen=True)
class AutomationLog:
    id: int
    type: str
    status: AutomationStatus
    details: Optional[dict]
    created_at: datetime
