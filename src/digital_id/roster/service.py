from __future__ import annotations

from datetime import date, time
from typing import Optional

from ..core.constants import SHIFT_DEFAULTS
from ..core.enums import ShiftType
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.service import EmployeeService
from .model import RosterShift
from .repository import RosterRepository


class RosterService:
    def __init__(self, shifts: RosterRepository, employees: EmployeeService):
        self._shifts = shifts
        self._employees = employees

    def list_for_date(self, work_date: date) -> list[RosterShift]:
        return list(self._shifts.list_for_date(work_date))

    def grouped_for_date(self, work_date: date) -> dict[str, list[RosterShift]]:
        groups: dict[str, list[RosterShift]] = {t.value: [] for t in ShiftType}
        for shift in self.list_for_date(work_date):
            groups[shift.shift_type.value].append(shift)
        return groups

    def for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[RosterShift]:
        return self._shifts.get_for_employee_and_date(employee_id=employee_id, work_date=work_date)

    def add(
        self,
        *,
        employee_id: str,
        work_date: date,
        shift_type: ShiftType,
        start_time: Optional[time] = None,
        end_time: Optional[time] = None,
    ) -> int:
        if not employee_id:
            raise ValidationError("Please select an employee")
        # raises NotFoundError for unknown codes
        self._employees.get(employee_id)

        _, default_start, default_end = SHIFT_DEFAULTS[shift_type]
        start_time = start_time or default_start
        end_time = end_time or default_end
        if start_time == end_time:
            raise ValidationError("Shift start and end time must differ")

        return self._shifts.create(
            employee_id=employee_id,
            work_date=work_date,
            start_time=start_time,
            end_time=end_time,
            shift_type=shift_type,
        )

    def delete(self, shift_id: int) -> None:
        if not self._shifts.delete(int(shift_id)):
            raise NotFoundError("Shift not found")
