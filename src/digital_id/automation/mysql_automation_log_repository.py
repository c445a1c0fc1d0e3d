from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import AutomationStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import all_rows, db_cursor, first_row, json_param, json_value
from .model import AutomationLog
from .repository import AutomationLogRepository


def _to_log(row: dict) -> AutomationLog:
    return AutomationLog(
        id=int(row["id"]),
        type=row["type"],
        status=AutomationStatus(row["status"]),
        details=json_value(row.get("details")),
        created_at=row["created_at"],
    )

class MySQLAutomationLogRepository(AutomationLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def add(self, *, type: str, status: AutomationStatus, details: Optional[dict] = None) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO automation_logs(type, status, details) VALUES(%s,%s,%s)",
                (type, status.value, json_param(details)),
            )
            return int(cur.lastrowid)

    def has_status_since(self, *, type: str, status: AutomationStatus, since: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id FROM automation_logs
                WHERE type=%s AND status=%s AND created_at >= %s
                ORDER BY created_at DESC
                LIMIT 1
                """,
                (type, status.value, since),
            )
            return first_row(cur) is not None

    def list_recent(self, *, type: str, limit: int = 20) -> Sequence[AutomationLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, type, status, details, created_at
                FROM automation_logs
                WHERE type=%s
                ORDER BY created_at DESC, id DESC
                LIMIT %s
                """,
                (type, int(limit)),
            )
            return all_rows(cur, _to_log)
