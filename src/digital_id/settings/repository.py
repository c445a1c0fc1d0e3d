from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AdminNotificationSetting, CompanySetting


class SettingsRepository(Protocol):
    def get(self, key: str) -> Optional[CompanySetting]:
        raise NotImplementedError

    def put(self, key: str, value: Optional[str]) -> None:
        raise NotImplementedError

    def list_all(self) -> Sequence[CompanySetting]:
        raise NotImplementedError


class AdminNotificationRepository(Protocol):
    def get_for_admin(self, admin_id: int) -> Optional[AdminNotificationSetting]:
        raise NotImplementedError

    def upsert(self, *, admin_id: int, phone_number: str, notify_on_late: bool) -> None:
        raise NotImplementedError

    def list_notify_on_late(self) -> Sequence[AdminNotificationSetting]:
        raise NotImplementedError
