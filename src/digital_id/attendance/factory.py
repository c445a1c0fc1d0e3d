from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from ..core.constants import DEFAULT_LATE_HOUR
from ..core.enums import AttendanceStatus
from ..roster.model import RosterShift
from .strategies.base import AttendanceStrategy
from .strategies.early_strategy import EarlyLeaveStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules.

    With a rostered shift the shift times decide; without one, anyone checking in
    at or after ``late_hour`` o'clock is late and early leave is never flagged.
    """

    late_hour: int = DEFAULT_LATE_HOUR
    grace_minutes: int = 0

    def shift_start_deadline(self, shift: RosterShift) -> datetime:
        start, _ = shift.spans()
        return start + timedelta(minutes=self.grace_minutes)

    def for_checkin(self, *, now: datetime, shift: Optional[RosterShift]) -> AttendanceStrategy:
        if shift:
            late = now > self.shift_start_deadline(shift)
        else:
            late = now.hour >= self.late_hour
        return LateStrategy() if late else NormalStrategy()

    def for_checkout(
        self, *, now: datetime, shift: Optional[RosterShift], current_status: AttendanceStatus
    ) -> AttendanceStrategy:
        if not shift:
            return NormalStrategy()

        _, shift_end = shift.spans()
        if now < shift_end and current_status == AttendanceStatus.PRESENT:
            return EarlyLeaveStrategy()
        if current_status == AttendanceStatus.LATE:
            return LateStrategy()
        return NormalStrategy()
