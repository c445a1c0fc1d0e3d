from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from ..core.enums import ShiftType
from .model import RosterShift


class RosterRepository(Protocol):
    def list_for_date(self, work_date: date) -> Sequence[RosterShift]:
        """Shifts on ``work_date`` ordered by start time."""

        raise NotImplementedError

    def get_for_employee_and_date(self, *, employee_id: str, work_date: date) -> Optional[RosterShift]:
        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: str,
        work_date: date,
        start_time: time,
        end_time: time,
        shift_type: ShiftType,
    ) -> int:
        raise NotImplementedError

    def delete(self, shift_id: int) -> bool:
        raise NotImplementedError
