from __future__ import annotations

from typing import Optional

from ..common.validators import is_valid_phone
from ..core.exceptions import ValidationError
from .model import PHONE_SETTING_KEYS, AdminNotificationSetting, CompanySetting
from .repository import AdminNotificationRepository, SettingsRepository


class SettingsService:
    def __init__(self, settings: SettingsRepository, admin_notifications: AdminNotificationRepository):
        self._settings = settings
        self._admin_notifications = admin_notifications

    def get_value(self, key: str) -> Optional[str]:
        setting = self._settings.get(key)
        if not setting or not setting.value:
            return None
        return setting.value.strip() or None

    def get(self, key: str) -> CompanySetting:
        return self._settings.get(key) or CompanySetting(key=key, value=None)

    def list_all(self) -> list[CompanySetting]:
        return list(self._settings.list_all())

    def set(self, key: str, value: Optional[str]) -> CompanySetting:
        key = (key or "").strip()
        if not key:
            raise ValidationError("Setting key is required")

        value = (value or "").strip() or None
        if value and key in PHONE_SETTING_KEYS and not is_valid_phone(value):
            raise ValidationError("Invalid phone number format. Please include country code (e.g., +1234567890)")

        self._settings.put(key, value)
        return self.get(key)

    def admin_notification(self, admin_id: int) -> Optional[AdminNotificationSetting]:
        return self._admin_notifications.get_for_admin(admin_id)

    def set_admin_notification(self, *, admin_id: int, phone_number: str, notify_on_late: bool = True) -> None:
        phone_number = (phone_number or "").strip()
        if not is_valid_phone(phone_number):
            raise ValidationError("Invalid phone number format. Please include country code (e.g., +1234567890)")
        self._admin_notifications.upsert(
            admin_id=admin_id,
            phone_number=phone_number,
            notify_on_late=bool(notify_on_late),
        )

    def late_alert_recipients(self) -> list[AdminNotificationSetting]:
        return list(self._admin_notifications.list_notify_on_late())
