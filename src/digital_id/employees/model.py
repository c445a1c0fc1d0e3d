from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import EmployeeStatus


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee who carries a QR badge."""

    id: int
    employee_id: str
    first_name: str
    last_name: str
    email: str
    department: str
    position: str
    phone_number: Optional[str] = None
    lead_id: Optional[str] = None
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    created_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def to_dict(self) -> dict:
        out = asdict(self)
        out["status"] = self.status.value
        out["created_at"] = self.created_at.isoformat() if self.created_at else None
        return out


@dataclass(frozen=True)
class EmployeeData:
    """Editable fields, as submitted by the form or an import row."""

    first_name: str
    last_name: str
    email: str
    department: str
    position: str
    phone_number: Optional[str] = None
    lead_id: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: dict) -> "EmployeeData":
        def _get(*keys: str) -> str:
            for key in keys:
                value = data.get(key)
                if value is not None and str(value).strip():
                    return str(value).strip()
            return ""

        return cls(
            first_name=_get("first_name", "First Name"),
            last_name=_get("last_name", "Last Name"),
            email=_get("email", "Email"),
            department=_get("department", "Department"),
            position=_get("position", "Position"),
            phone_number=_get("phone_number", "Phone", "Phone Number") or None,
            lead_id=_get("lead_id", "Lead ID") or None,
        )

    def to_dict(self) -> dict:
        return asdict(self)
