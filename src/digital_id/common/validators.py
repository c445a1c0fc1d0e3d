from __future__ import annotations

import re

from ..core.constants import DEPARTMENTS
from ..core.exceptions import ValidationError

EMAIL_RE = re.compile(r"^[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}$", re.IGNORECASE)
PHONE_RE = re.compile(r"^\+[1-9]\d{1,14}$")
EMPLOYEE_CODE_RE = re.compile(r"^[A-Z0-9]+$")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def is_valid_email(value: str) -> bool:
    return bool(value) and bool(EMAIL_RE.match(value.strip()))


def is_valid_phone(value: str) -> bool:
    return bool(value) and bool(PHONE_RE.match(value.strip()))


def is_valid_department(value: str) -> bool:
    return value in DEPARTMENTS


def is_valid_employee_code(value: str) -> bool:
    return bool(value) and bool(EMPLOYEE_CODE_RE.match(value))
