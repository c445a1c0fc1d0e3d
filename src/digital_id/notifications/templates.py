"""Message bodies for attendance notifications and the rule that picks one."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import MessageType
from ..core.exceptions import ValidationError

RULE = "━━━━━━━━━━━━━━━"
SIGNATURE = "Digital ID Attendance System"


def late_check_in(employee_name: str, check_in_time: str, department: str) -> str:
    return (
        "🕒 Late Arrival Notice\n"
        f"{RULE}\n"
        f"👤 {employee_name}\n"
        f"🏢 {department}\n"
        f"⏰ Checked in at: {check_in_time}\n\n"
        "This employee has arrived later than the scheduled time.\n"
        f"{RULE}\n"
        f"{SIGNATURE}"
    )


def absent(employee_name: str, department: str) -> str:
    return (
        "❌ Absence Report\n"
        f"{RULE}\n"
        f"👤 {employee_name}\n"
        f"🏢 {department}\n"
        "📅 Status: Not Present\n\n"
        "This employee has not checked in today.\n"
        f"{RULE}\n"
        f"{SIGNATURE}"
    )


def early_leave(employee_name: str, check_out_time: str, department: str) -> str:
    return (
        "🚶 Early Departure Alert\n"
        f"{RULE}\n"
        f"👤 {employee_name}\n"
        f"🏢 {department}\n"
        f"⏰ Left at: {check_out_time}\n\n"
        "This employee has departed before their scheduled end time.\n"
        f"{RULE}\n"
        f"{SIGNATURE}"
    )


def overtime(employee_name: str, hours: float, department: str) -> str:
    return (
        "⏱️ Overtime Record\n"
        f"{RULE}\n"
        f"👤 {employee_name}\n"
        f"🏢 {department}\n"
        f"⌛ Extra Hours: {hours:g}\n\n"
        "This employee has worked beyond regular hours.\n"
        f"{RULE}\n"
        f"{SIGNATURE}"
    )


def attendance_report(message: str, *, generated_at: Optional[datetime] = None) -> str:
    generated_at = generated_at or datetime.now()
    return (
        "📊 Attendance Summary\n"
        f"{RULE}\n\n"
        f"{message}\n\n"
        f"{RULE}\n"
        "Generated by Digital ID System\n"
        f"{generated_at.strftime('%b %d, %Y, %I:%M:%S %p')}"
    )


def late_check_in_alert(
    *, employee_name: str, employee_id: str, department: str, minutes_late: int, scan_time: datetime
) -> str:
    """Short SMS sent to admins who asked to hear about late arrivals."""

    return (
        "Late Check-in Alert:\n"
        f"{employee_name} ({employee_id}) from {department} checked in {minutes_late} minutes late "
        f"at {scan_time.strftime('%I:%M:%S %p')}."
    )


@dataclass(frozen=True)
class NotificationParams:
    employee_name: str
    department: Optional[str] = None
    check_in_time: Optional[str] = None
    check_out_time: Optional[str] = None
    is_late: bool = False
    is_absent: bool = False
    is_early_leave: bool = False
    overtime_hours: Optional[float] = None
    phone_number: Optional[str] = None
    custom_message: Optional[str] = None
    is_attendance_report: bool = False
    message_type: MessageType = MessageType.SMS


def render(params: NotificationParams, *, now: Optional[datetime] = None) -> str:
    """Pick the first matching template, in priority order."""

    department = params.department or ""
    if params.is_attendance_report and params.custom_message:
        return attendance_report(params.custom_message, generated_at=now)
    if params.is_late and params.check_in_time:
        return late_check_in(params.employee_name, params.check_in_time, department)
    if params.is_absent:
        return absent(params.employee_name, department)
    if params.is_early_leave and params.check_out_time:
        return early_leave(params.employee_name, params.check_out_time, department)
    if params.overtime_hours is not None:
        return overtime(params.employee_name, params.overtime_hours, department)
    if params.custom_message:
        return params.custom_message
    raise ValidationError("Invalid notification type or missing required parameters")
