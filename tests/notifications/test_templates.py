from datetime import datetime

import pytest

from digital_id.core.exceptions import ValidationError
from digital_id.notifications import templates
from digital_id.notifications.templates import NotificationParams, render


def test_late_template_wins_over_custom_message():
    body = render(
        NotificationParams(
            employee_name="Ada Lovelace",
            department="IT",
            check_in_time="09:15 AM",
            is_late=True,
            custom_message="Check-in recorded",
        )
    )

    assert body.startswith("🕒 Late Arrival Notice\n")
    assert "👤 Ada Lovelace" in body
    assert "⏰ Checked in at: 09:15 AM" in body
    assert body.endswith(templates.SIGNATURE)


def test_attendance_report_has_highest_priority():
    body = render(
        NotificationParams(
            employee_name="Admin",
            is_attendance_report=True,
            is_late=True,
            check_in_time="09:15 AM",
            custom_message="Present: 3",
        ),
        now=datetime(2026, 3, 2, 18, 0, 5),
    )

    assert body.startswith("📊 Attendance Summary\n")
    assert "\n\nPresent: 3\n\n" in body
    assert body.endswith("Generated by Digital ID System\nMar 02, 2026, 06:00:05 PM")


def test_early_leave_needs_a_check_out_time():
    without_time = NotificationParams(employee_name="Ada", is_early_leave=True, custom_message="Bye")
    with_time = NotificationParams(employee_name="Ada", is_early_leave=True, check_out_time="03:00 PM")

    assert render(without_time) == "Bye"
    assert "🚶 Early Departure Alert" in render(with_time)


def test_absent_and_overtime():
    assert "❌ Absence Report" in render(NotificationParams(employee_name="Ada", is_absent=True))

    overtime = render(NotificationParams(employee_name="Ada", overtime_hours=1.25))
    assert "⌛ Extra Hours: 1.25" in overtime


def test_nothing_to_render():
    with pytest.raises(ValidationError, match="Invalid notification type"):
        render(NotificationParams(employee_name="Ada"))


def test_late_check_in_alert():
    body = templates.late_check_in_alert(
        employee_name="Ada Lovelace",
        employee_id="EMP000001",
        department="IT",
        minutes_late=12,
        scan_time=datetime(2026, 3, 2, 9, 12, 30),
    )

    assert body == (
        "Late Check-in Alert:\n"
        "Ada Lovelace (EMP000001) from IT checked in 12 minutes late at 09:12:30 AM."
    )
