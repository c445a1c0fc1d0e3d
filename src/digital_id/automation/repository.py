from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AutomationStatus
from .model import AutomationLog


class AutomationLogRepository(Protocol):
    def add(self, *, type: str, status: AutomationStatus, details: Optional[dict] = None) -> int:
        raise NotImplementedError

    def has_status_since(self, *, type: str, status: AutomationStatus, since: datetime) -> bool:
        raise NotImplementedError

    def list_recent(self, *, type: str, limit: int = 20) -> Sequence[AutomationLog]:
        raise NotImplementedError
