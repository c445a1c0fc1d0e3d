from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional

from ..core.enums import ShiftType


@dataclass(frozen=True)
class RosterShift:
    """Domain entity: one employee assigned to one shift on one day."""

    id: int
    employee_id: str
    date: date
    start_time: time
    end_time: time
    shift_type: ShiftType
    created_at: Optional[datetime] = None

    def spans(self) -> tuple[datetime, datetime]:
        """Start and end as datetimes; an end at or before the start rolls to the next day."""

        start = datetime.combine(self.date, self.start_time)
        end = datetime.combine(self.date, self.end_time)
        if end <= start:
            end += timedelta(days=1)
        return start, end

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "employee_id": self.employee_id,
            "date": self.date.strftime("%Y-%m-%d"),
            "start_time": self.start_time.strftime("%H:%M"),
            "end_time": self.end_time.strftime("%H:%M"),
            "shift_type": self.shift_type.value,
        }
