from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account role used by the auth guards."""

    ADMIN = "admin"
    STAFF = "staff"


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class AttendanceStatus(str, Enum):
    """Normalized attendance status stored in the database."""

    PRESENT = "present"
    LATE = "late"
    EARLY_LEAVE = "early_leave"
    ABSENT = "absent"


class ShiftType(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    NIGHT = "night"


class ReportPeriod(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class MessageType(str, Enum):
    SMS = "sms"
    WHATSAPP = "whatsapp"


class MessageStatus(str, Enum):
    PENDING = "pending"
    SENT = "sent"
    FAILED = "failed"
    DELIVERED = "delivered"


class AutomationStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"
