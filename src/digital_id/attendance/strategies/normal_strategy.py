from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from ...roster.model import RosterShift
from .base import AttendanceStrategy, StatusDecision


class NormalStrategy(AttendanceStrategy):
    """On-time check-in, normal check-out."""

    def decide_checkin(self, *, now: datetime, shift: Optional[RosterShift]) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)

    def decide_checkout(
        self, *, now: datetime, shift: Optional[RosterShift], current: AttendanceStatus
    ) -> StatusDecision:
        return StatusDecision(status=current, is_late=current == AttendanceStatus.LATE)
