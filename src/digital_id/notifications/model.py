from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.enums import MessageStatus, MessageType


@dataclass(frozen=True)
class MessageLog:
    """One delivery attempt, successful or not."""

    id: int
    phone_number: str
    message: str
    type: MessageType
    status: MessageStatus
    attempts: int = 1
    response: Optional[str] = None
    error: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class SendResult:
    message_id: Optional[str] = None
    # click-to-chat link when WhatsApp is not delivered through a provider
    url: Optional[str] = None
    response: Optional[dict] = None

    def to_dict(self) -> dict:
        return {"message_id": self.message_id, "url": self.url}


@dataclass
class BatchResult:
    success: int = 0
    failed: int = 0
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"success": self.success, "failed": self.failed, "errors": list(self.errors)}
