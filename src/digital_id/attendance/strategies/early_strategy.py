from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from ...roster.model import RosterShift
from .base import AttendanceStrategy, StatusDecision


class EarlyLeaveStrategy(AttendanceStrategy):
    """Early leave on checkout (only when check-in was on time)."""

    def decide_checkin(self, *, now: datetime, shift: Optional[RosterShift]) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)

    def decide_checkout(
        self, *, now: datetime, shift: Optional[RosterShift], current: AttendanceStatus
    ) -> StatusDecision:
        note = f"Shift ends {shift.end_time.strftime('%H:%M')}" if shift else None
        return StatusDecision(status=AttendanceStatus.EARLY_LEAVE, note=note)
