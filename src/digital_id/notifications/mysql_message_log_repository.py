from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import MessageStatus, MessageType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import all_rows, db_cursor
from .model import MessageLog
from .repository import MessageLogRepository


class MySQLMessageLogRepository(MessageLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO message_logs(phone_number, message, type, status, attempts, response, error)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (phone_number, message, type.value, status.value, int(attempts), response, error),
            )
            return int(cur.lastrowid)

    def list_recent(self, limit: int = 50) -> Sequence[MessageLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, phone_number, message, type, status, attempts, response, error, created_at
                FROM message_logs
                ORDER BY created_at DESC, id DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [
                MessageLog(
                    id=int(r["id"]),
                    phone_number=r["phone_number"],
                    message=r["message"],
                    type=MessageType(r["type"]),
                    status=MessageStatus(r["status"]),
                    attempts=int(r["attempts"]),
                    response=r.get("response"),
                    error=r.get("error"),
                    created_at=r.get("created_at"),
                )
                for r in all_rows(cur)
            ]
