from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import format_clock, now_local
from ..core.constants import DAILY_REPORT_LOG_TYPE
from ..core.enums import AttendanceStatus, AutomationStatus, MessageType
from ..core.exceptions import ConfigurationError
from ..employees.service import EmployeeService
from ..notifications.model import SendResult
from ..notifications.service import NotificationService
from ..notifications.templates import RULE, NotificationParams
from ..settings.model import ADMIN_WHATSAPP
from ..settings.service import SettingsService
from .model import AttendanceSummary, DepartmentStats, SummaryEntry
from .repository import AutomationLogRepository

logger = logging.getLogger(__name__)


def _ordinal(n: int) -> str:
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def long_date(day: date) -> str:
    """``October 19th, 2026``."""
    return f"{day.strftime('%B')} {_ordinal(day.day)}, {day.year}"


def format_summary(summary: AttendanceSummary, day: date) -> str:
    lines = [
        "📊 Daily Attendance Report",
        f"📅 {long_date(day)}",
        RULE,
        "",
        "📈 Overall Summary:",
        f"• Total Employees: {summary.total_employees}",
        f"• Present: {summary.present}",
        f"• Absent: {summary.absent}",
        f"• Late: {summary.late}",
        f"• Early Leave: {summary.early_leave}",
        "",
        "🏢 Department Summary:",
    ]
    for dept, stats in summary.departments.items():
        lines += [
            "",
            f"{dept}:",
            f"• Present: {stats.present}/{stats.total}",
            f"• Absent: {stats.absent}",
            f"• Late: {stats.late}",
            f"• Early Leave: {stats.early_leave}",
        ]

    if summary.late_employees:
        lines += ["", "⏰ Late Arrivals:"]
        lines += [f"• {e.name} ({e.department}) - {e.time}" for e in summary.late_employees]

    if summary.early_leave_employees:
        lines += ["", "🚶 Early Departures:"]
        lines += [f"• {e.name} ({e.department}) - {e.time}" for e in summary.early_leave_employees]

    if summary.absent_employees:
        lines += ["", "❌ Absent Employees:"]
        lines += [f"• {e.name} ({e.department})" for e in summary.absent_employees]

    lines += ["", RULE, "Generated by Digital ID System"]
    return "\n".join(lines)


class AutomationService:
    """Builds the end-of-day attendance summary and ships it to the admin."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeService,
        notifications: NotificationService,
        settings: SettingsService,
        logs: AutomationLogRepository,
    ):
        self._attendance = attendance
        self._employees = employees
        self._notifications = notifications
        self._settings = settings
        self._logs = logs

    def generate_summary(self, day: date) -> AttendanceSummary:
        employees = list(self._employees.list_active())
        by_code = {e.employee_id: e for e in employees}
        summary = AttendanceSummary(total_employees=len(employees))

        for emp in employees:
            summary.departments.setdefault(emp.department, DepartmentStats()).total += 1

        seen: set[str] = set()
        for record in self._attendance.list_for_date(day):
            seen.add(record.employee_id)
            emp = by_code.get(record.employee_id)
            if emp is None or not emp.department:
                continue
            dept = summary.departments[emp.department]

            if record.status == AttendanceStatus.PRESENT:
                summary.present += 1
                dept.present += 1
            elif record.status == AttendanceStatus.LATE:
                summary.late += 1
                dept.late += 1
                summary.late_employees.append(
                    SummaryEntry(emp.full_name, emp.department, format_clock(record.check_in))
                )
            elif record.status == AttendanceStatus.EARLY_LEAVE and record.check_out:
                summary.early_leave += 1
                dept.early_leave += 1
                summary.early_leave_employees.append(
                    SummaryEntry(emp.full_name, emp.department, format_clock(record.check_out))
                )

        for emp in employees:
            if emp.employee_id not in seen:
                summary.absent += 1
                summary.departments[emp.department].absent += 1
                summary.absent_employees.append(SummaryEntry(emp.full_name, emp.department))

        return summary

    def send_daily_report(self, day: Optional[date] = None) -> SendResult:
        day = day or now_local().date()
        try:
            summary = self.generate_summary(day)
            message = format_summary(summary, day)

            recipient = self._settings.get_value(ADMIN_WHATSAPP)
            if not recipient:
                raise ConfigurationError("Admin WhatsApp number not configured")

            result = self._notifications.send_notification(
                NotificationParams(
                    employee_name="System",
                    custom_message=message,
                    is_attendance_report=True,
                    phone_number=recipient,
                    message_type=MessageType.WHATSAPP,
                )
            )
        except Exception as e:
            logger.exception("Daily attendance report for %s failed", day)
            self._logs.add(
                type=DAILY_REPORT_LOG_TYPE,
                status=AutomationStatus.FAILED,
                details={"date": day.strftime("%Y-%m-%d"), "error": str(e) or "Unknown error"},
            )
            raise

        self._logs.add(
            type=DAILY_REPORT_LOG_TYPE,
            status=AutomationStatus.SUCCESS,
            details={"date": day.strftime("%Y-%m-%d"), "summary": summary.totals()},
        )
        logger.info("Daily attendance report for %s sent", day)
        return result
