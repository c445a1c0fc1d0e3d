from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from ...roster.model import RosterShift
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Late check-in."""

    def decide_checkin(self, *, now: datetime, shift: Optional[RosterShift]) -> StatusDecision:
        note = f"Shift started {shift.start_time.strftime('%H:%M')}" if shift else None
        return StatusDecision(status=AttendanceStatus.LATE, is_late=True, note=note)

    def decide_checkout(
        self, *, now: datetime, shift: Optional[RosterShift], current: AttendanceStatus
    ) -> StatusDecision:
        return StatusDecision(status=current, is_late=True)
