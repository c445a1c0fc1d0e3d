from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import all_rows, db_cursor, first_row
from .model import AdminNotificationSetting, CompanySetting
from .repository import AdminNotificationRepository, SettingsRepository


def _to_setting(row: dict) -> CompanySetting:
    return CompanySetting(
        key=row["setting_key"],
        value=row.get("setting_value"),
        updated_at=row.get("updated_at"),
    )


def _to_admin_setting(row: dict) -> AdminNotificationSetting:
    return AdminNotificationSetting(
        id=int(row["id"]),
        admin_id=int(row["admin_id"]),
        phone_number=row["phone_number"],
        notify_on_late=bool(row["notify_on_late"]),
    )


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, key: str) -> Optional[CompanySetting]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT setting_key, setting_value, updated_at FROM company_settings WHERE setting_key=%s",
                (key,),
            )
            row = first_row(cur)
            return _to_setting(row) if row else None

    def put(self, key: str, value: Optional[str]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO company_settings(setting_key, setting_value)
                VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE setting_value=VALUES(setting_value)
                """,
                (key, value),
            )

    def list_all(self) -> Sequence[CompanySetting]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT setting_key, setting_value, updated_at FROM company_settings ORDER BY setting_key")
            return all_rows(cur, _to_setting)


class MySQLAdminNotificationRepository(AdminNotificationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_admin(self, admin_id: int) -> Optional[AdminNotificationSetting]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, admin_id, phone_number, notify_on_late FROM admin_notification_settings WHERE admin_id=%s",
                (int(admin_id),),
            )
            row = first_row(cur)
            return _to_admin_setting(row) if row else None

    def upsert(self, *, admin_id: int, phone_number: str, notify_on_late: bool) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO admin_notification_settings(admin_id, phone_number, notify_on_late)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    phone_number=VALUES(phone_number),
                    notify_on_late=VALUES(notify_on_late)
                """,
                (int(admin_id), phone_number, 1 if notify_on_late else 0),
            )

    def list_notify_on_late(self) -> Sequence[AdminNotificationSetting]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, admin_id, phone_number, notify_on_late
                FROM admin_notification_settings
                WHERE notify_on_late=1
                ORDER BY admin_id
                """
            )
            return all_rows(cur, _to_admin_setting)
