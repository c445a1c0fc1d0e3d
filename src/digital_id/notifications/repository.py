from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import MessageStatus, MessageType
from .model import MessageLog


class MessageLogRepository(Protocol):
    def add(
        self,
        *,
        phone_number: str,
        message: str,
        type: MessageType,
        status: MessageStatus,
        attempts: int = 1,
        response: Optional[str] = None,
        error: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def list_recent(self, limit: int = 50) -> Sequence[MessageLog]:
        raise NotImplementedError
