from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

ADMIN_WHATSAPP = "admin_whatsapp"
ADMIN_PHONE = "admin_phone"

PHONE_SETTING_KEYS = (ADMIN_WHATSAPP, ADMIN_PHONE)


@dataclass(frozen=True)
class CompanySetting:
    key: str
    value: Optional[str]
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "value": self.value,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


@dataclass(frozen=True)
class AdminNotificationSetting:
    """Where an admin wants late check-in alerts delivered."""

    id: int
    admin_id: int
    phone_number: str
    notify_on_late: bool = True

    def to_dict(self) -> dict:
        return {
            "admin_id": self.admin_id,
            "phone_number": self.phone_number,
            "notify_on_late": self.notify_on_late,
        }
