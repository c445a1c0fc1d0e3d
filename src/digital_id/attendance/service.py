from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta
from typing import Optional

from ..common.datetime_utils import format_clock, now_local
from ..core.constants import DEFAULT_STANDARD_WORK_HOURS
from ..core.enums import AttendanceStatus, EmployeeStatus
from ..core.exceptions import ValidationError
from ..employees.model import Employee
from ..employees.service import EmployeeService
from ..notifications.service import NotificationService
from ..notifications.templates import NotificationParams
from ..qr.service import parse_payload
from ..roster.model import RosterShift
from ..roster.service import RosterService
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, MarkResult
from .repository import AttendanceRepository, ScanRepository

logger = logging.getLogger(__name__)

CHECK_IN = "check_in"
CHECK_OUT = "check_out"


def worked_hours(check_in: datetime, check_out: datetime) -> float:
    return round((check_out - check_in).total_seconds() / 3600, 2)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        scans: ScanRepository,
        employees: EmployeeService,
        roster: Optional[RosterService] = None,
        notifications: Optional[NotificationService] = None,
        *,
        strategy_factory: Optional[AttendanceStrategyFactory] = None,
        standard_work_hours: float = DEFAULT_STANDARD_WORK_HOURS,
    ):
        self._attendance = attendance
        self._scans = scans
        self._employees = employees
        self._roster = roster
        self._notifications = notifications
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._standard_work_hours = float(standard_work_hours)

    def _shift_for(self, employee_id: str, work_date: date) -> Optional[RosterShift]:
        if not self._roster:
            return None
        return self._roster.for_employee_and_date(employee_id, work_date)

    def scan(self, payload: str, *, scanned_by: Optional[int] = None, now: Optional[datetime] = None) -> MarkResult:
        """Verify a badge payload, log the scan and check the employee in or out."""

        now = now or now_local()
        employee = self._employees.get(parse_payload(payload))
        if employee.status != EmployeeStatus.ACTIVE:
            raise ValidationError("Employee is not active")

        self._scans.record_scan(employee_id=employee.employee_id, scanned_by=scanned_by, at=now)
        return self.mark(employee, now=now)

    def mark(self, employee: Employee, *, now: Optional[datetime] = None) -> MarkResult:
        now = now or now_local()
        today = now.date()

        record = self._attendance.get_for_employee_and_date(employee.employee_id, today)
        if record is None:
            return self._check_in(employee, now)
        if record.is_open:
            return self._check_out(employee, record, now)
        raise ValidationError("Already checked out for today")

    def _check_in(self, employee: Employee, now: datetime) -> MarkResult:
        today = now.date()
        shift = self._shift_for(employee.employee_id, today)
        strategy = self._factory.for_checkin(now=now, shift=shift)
        decision = strategy.decide_checkin(now=now, shift=shift)

        record_id = self._attendance.create_checkin(
            employee_id=employee.employee_id,
            work_date=today,
            check_in=now,
            is_late=decision.is_late,
            status=decision.status,
            note=decision.note,
        )
        record = AttendanceRecord(
            id=record_id,
            employee_id=employee.employee_id,
            work_date=today,
            check_in=now,
            check_out=None,
            total_hours=None,
            is_late=decision.is_late,
            status=decision.status,
            note=decision.note,
        )

        message = f"Check-in recorded at {format_clock(now)}{' (Late)' if decision.is_late else ''}"
        self._notify(
            NotificationParams(
                employee_name=employee.full_name,
                department=employee.department,
                phone_number=employee.phone_number,
                check_in_time=format_clock(now),
                is_late=decision.is_late,
                custom_message=message,
            )
        )
        if decision.is_late and self._notifications:
            self._send_late_alerts(employee, now, self.minutes_late(now, shift))

        logger.info("Check-in %s at %s (status=%s)", employee.employee_id, now, decision.status.value)
        return MarkResult(action=CHECK_IN, employee=employee, record=record, message=message)

    def _check_out(self, employee: Employee, record: AttendanceRecord, now: datetime) -> MarkResult:
        shift = self._shift_for(employee.employee_id, record.work_date)
        strategy = self._factory.for_checkout(now=now, shift=shift, current_status=record.status)
        decision = strategy.decide_checkout(now=now, shift=shift, current=record.status)

        total_hours = worked_hours(record.check_in, now)
        note = decision.note or record.note
        if not self._attendance.update_checkout(
            record_id=record.id,
            check_out=now,
            total_hours=total_hours,
            status=decision.status,
            note=note,
        ):
            raise ValidationError("Already checked out for today")

        updated = AttendanceRecord(
            id=record.id,
            employee_id=record.employee_id,
            work_date=record.work_date,
            check_in=record.check_in,
            check_out=now,
            total_hours=total_hours,
            is_late=record.is_late,
            status=decision.status,
            note=note,
        )

        message = f"Check-out recorded at {format_clock(now)}. Total hours: {total_hours:.2f}"
        self._notify(
            NotificationParams(
                employee_name=employee.full_name,
                department=employee.department,
                phone_number=employee.phone_number,
                check_out_time=format_clock(now),
                is_early_leave=decision.status == AttendanceStatus.EARLY_LEAVE,
                custom_message=message,
            )
        )
        if total_hours > self._standard_work_hours:
            self._notify(
                NotificationParams(
                    employee_name=employee.full_name,
                    department=employee.department,
                    phone_number=employee.phone_number,
                    overtime_hours=round(total_hours - self._standard_work_hours, 2),
                )
            )

        logger.info("Check-out %s at %s (hours=%.2f)", employee.employee_id, now, total_hours)
        return MarkResult(action=CHECK_OUT, employee=employee, record=updated, message=message)

    def minutes_late(self, now: datetime, shift: Optional[RosterShift]) -> int:
        if shift:
            start, _ = shift.spans()
        else:
            start = datetime.combine(now.date(), time(hour=self._factory.late_hour))
        return max(0, int((now - start).total_seconds() // 60))

    def _notify(self, params: NotificationParams) -> None:
        if not self._notifications:
            return
        try:
            self._notifications.send_notification(params)
        except Exception:
            logger.exception("Attendance notification for %s failed", params.employee_name)

    def _send_late_alerts(self, employee: Employee, now: datetime, minutes_late: int) -> None:
        try:
            self._notifications.send_late_checkin_alerts(employee, now, minutes_late)
        except Exception:
            logger.exception("Late check-in alerts for %s failed", employee.employee_id)

    def today_record(self, employee_id: str, *, today: Optional[date] = None) -> Optional[AttendanceRecord]:
        employee = self._employees.get(employee_id)
        return self._attendance.get_for_employee_and_date(employee.employee_id, today or now_local().date())

    def records_for_date(self, work_date: date) -> list[AttendanceRecord]:
        return list(self._attendance.list_for_date(work_date))

    def dashboard_stats(self, *, now: Optional[datetime] = None) -> dict:
        now = now or now_local()
        records = self.records_for_date(now.date())
        return {
            "total_employees": len(self._employees.list_active()),
            "department_counts": self._employees.department_counts(active_only=True),
            "recent_scans": self._scans.count_scans_since(now - timedelta(hours=24)),
            "checked_in_today": len(records),
            "late_today": sum(1 for r in records if r.is_late),
        }
