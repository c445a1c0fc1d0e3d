from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, AttendanceReportRow


class AttendanceRepository(Protocol):
    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(
        self,
        *,
        employee_id: str,
        work_date: date,
        check_in: datetime,
        is_late: bool,
        status: AttendanceStatus,
        note: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def update_checkout(
        self,
        *,
        record_id: int,
        check_out: datetime,
        total_hours: float,
        status: AttendanceStatus,
        note: Optional[str] = None,
    ) -> bool:
        raise NotImplementedError

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_report_rows(self, *, start_date: date, end_date: date) -> Sequence[AttendanceReportRow]:
        """Records in ``[start_date, end_date]`` joined with their employee."""

        raise NotImplementedError


class ScanRepository(Protocol):
    def record_scan(self, *, employee_id: str, scanned_by: Optional[int], at: datetime) -> int:
        raise NotImplementedError

    def count_scans_since(self, since: datetime) -> int:
        raise NotImplementedError
