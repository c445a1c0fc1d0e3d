"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from __future__ import annotations

from datetime import time

from .enums import ShiftType

DEPARTMENTS = (
    "Administration",
    "Human Resources",
    "Finance",
    "IT",
    "Operations",
    "Transport Section",
    "Marketing",
    "Sales",
)

DEPARTMENT_COLORS = {
    "Administration": "#1976d2",
    "Human Resources": "#388e3c",
    "Finance": "#d32f2f",
    "IT": "#7b1fa2",
    "Operations": "#f57c00",
    "Transport Section": "#0288d1",
    "Marketing": "#c2185b",
    "Sales": "#00796b",
}

DEPARTMENT_ICONS = {
    "Administration": "admin_panel_settings",
    "Human Resources": "people",
    "Finance": "attach_money",
    "IT": "computer",
    "Operations": "build",
    "Transport Section": "directions_bus",
    "Marketing": "campaign",
    "Sales": "store",
}

DEFAULT_DEPARTMENT_COLOR = "#757575"
DEFAULT_DEPARTMENT_ICON = "work"

SHIFT_DEFAULTS = {
    ShiftType.MORNING: ("Morning Shift", time(8, 0), time(16, 0)),
    ShiftType.AFTERNOON: ("Afternoon Shift", time(16, 0), time(0, 0)),
    ShiftType.NIGHT: ("Night Shift", time(0, 0), time(8, 0)),
}

DEFAULT_LATE_HOUR = 9
DEFAULT_STANDARD_WORK_HOURS = 8.0
IMPORT_BATCH_SIZE = 50
BATCH_MESSAGE_DELAY_SECONDS = 0.1
RATE_LIMIT_WINDOW_SECONDS = 60
DAILY_REPORT_LOG_TYPE = "daily_attendance_report"


def department_color(department: str) -> str:
    return DEPARTMENT_COLORS.get(department, DEFAULT_DEPARTMENT_COLOR)


def department_icon(department: str) -> str:
    return DEPARTMENT_ICONS.get(department, DEFAULT_DEPARTMENT_ICON)
