from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..employees.model import EmployeeData


@dataclass(frozen=True)
class PreviewRow:
    row_number: int
    data: EmployeeData
    errors: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        out = self.data.to_dict()
        out.update({"row_number": self.row_number, "is_valid": self.is_valid, "errors": list(self.errors)})
        return out


@dataclass(frozen=True)
class ImportResult:
    success: bool
    data: EmployeeData
    employee_id: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "employee": self.data.to_dict(),
            "employee_id": self.employee_id,
            "error": self.error,
        }


@dataclass
class UploadSummary:
    total: int
    success: int = 0
    failed: int = 0
    skipped: int = 0
    departments: dict[str, int] = field(default_factory=dict)
    results: list[ImportResult] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "success": self.success,
            "failed": self.failed,
            "skipped": self.skipped,
            "departments": dict(self.departments),
            "results": [r.to_dict() for r in self.results],
        }
