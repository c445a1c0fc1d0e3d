from __future__ import annotations

import secrets
from collections import Counter
from typing import Callable, Optional, Sequence

from ..common.validators import is_valid_department, is_valid_email, is_valid_phone
from ..core.constants import DEPARTMENTS, department_color, department_icon
from ..core.exceptions import NotFoundError, ValidationError
from .model import Employee, EmployeeData
from .repository import EmployeeRepository

ID_PREFIX = "EMP"
MAX_ID_ATTEMPTS = 5


def validate_employee_data(data: EmployeeData) -> list[str]:
    """Return every problem with ``data``; an empty list means it can be saved."""

    errors: list[str] = []
    if not data.first_name:
        errors.append("First name is required")
    if not data.last_name:
        errors.append("Last name is required")
    if not data.position:
        errors.append("Position is required")

    if not data.email:
        errors.append("Email is required")
    elif not is_valid_email(data.email):
        errors.append("Invalid email format")

    if not data.department:
        errors.append("Department is required")
    elif not is_valid_department(data.department):
        errors.append(f"Invalid department. Must be one of: {', '.join(DEPARTMENTS)}")

    if data.phone_number and not is_valid_phone(data.phone_number):
        errors.append("Invalid phone number format. Please include country code (e.g., +1234567890)")

    return errors


def generate_employee_id() -> str:
    return ID_PREFIX + secrets.token_hex(3).upper()


class EmployeeService:
    """Use cases: employee CRUD, search and dashboard counts."""

    def __init__(self, employees: EmployeeRepository, *, id_factory: Callable[[], str] = generate_employee_id):
        self._employees = employees
        self._id_factory = id_factory

    def get(self, employee_id: str) -> Employee:
        employee = self._employees.get_by_employee_id((employee_id or "").strip())
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def find(self, employee_id: str) -> Optional[Employee]:
        return self._employees.get_by_employee_id(employee_id)

    def list_active(self) -> Sequence[Employee]:
        return self._employees.list_all(active_only=True)

    def create(self, data: EmployeeData) -> Employee:
        errors = validate_employee_data(data)
        if errors:
            raise ValidationError("; ".join(errors))

        for _ in range(MAX_ID_ATTEMPTS):
            employee_id = self._id_factory()
            if not self._employees.get_by_employee_id(employee_id):
                return self._employees.create(employee_id=employee_id, data=data)
        raise ValidationError("Could not allocate a unique employee ID")

    def update(self, employee_id: str, data: EmployeeData) -> Employee:
        self.get(employee_id)
        errors = validate_employee_data(data)
        if errors:
            raise ValidationError("; ".join(errors))

        self._employees.update(employee_id=employee_id, data=data)
        return self.get(employee_id)

    def delete(self, id: int) -> None:
        if not self._employees.delete_by_ids([int(id)]):
            raise NotFoundError("Employee not found")

    def bulk_delete(self, ids: Sequence[int]) -> int:
        if not ids:
            raise ValidationError("No employees selected")
        try:
            ids = [int(i) for i in ids]
        except (TypeError, ValueError):
            raise ValidationError("Invalid employee ids") from None
        return self._employees.delete_by_ids(ids)

    def search(self, term: str = "", department: str = "all") -> list[Employee]:
        term = (term or "").strip().lower()
        out = []
        for e in self._employees.list_all():
            if department and department != "all" and e.department != department:
                continue
            if term and not (
                term in e.first_name.lower()
                or term in e.last_name.lower()
                or term in e.email.lower()
                or term in e.employee_id.lower()
            ):
                continue
            out.append(e)
        return out

    def department_counts(self, *, active_only: bool = False) -> dict[str, int]:
        return dict(Counter(e.department for e in self._employees.list_all(active_only=active_only)))

    def departments(self) -> list[dict]:
        return [{"name": d, "color": department_color(d), "icon": department_icon(d)} for d in DEPARTMENTS]
