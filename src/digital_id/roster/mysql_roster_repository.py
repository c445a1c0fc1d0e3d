from __future__ import annotations

from datetime import date, time
from typing import Optional, Sequence

from ..core.enums import ShiftType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import all_rows, db_cursor, first_row, to_time
from .model import RosterShift
from .repository import RosterRepository

_COLUMNS = "id, employee_id, date, start_time, end_time, shift_type, created_at"


def _to_shift(row: dict) -> RosterShift:
    return RosterShift(
        id=int(row["id"]),
        employee_id=row["employee_id"],
        date=row["date"],
        start_time=to_time(row["start_time"]),
        end_time=to_time(row["end_time"]),
        shift_type=ShiftType(row["shift_type"]),
        created_at=row.get("created_at"),
    )


class MySQLRosterRepository(RosterRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_date(self, work_date: date) -> Sequence[RosterShift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM shifts WHERE date=%s ORDER BY start_time ASC",
                (work_date,),
            )
            return all_rows(cur, _to_shift)

    def get_for_employee_and_date(self, *, employee_id: str, work_date: date) -> Optional[RosterShift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM shifts
                WHERE employee_id=%s AND date=%s
                ORDER BY start_time ASC
                LIMIT 1
                """,
                (employee_id, work_date),
            )
            row = first_row(cur)
            return _to_shift(row) if row else None

    def create(
        self,
        *,
        employee_id: str,
        work_date: date,
        start_time: time,
        end_time: time,
        shift_type: ShiftType,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO shifts(employee_id, date, start_time, end_time, shift_type)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (employee_id, work_date, start_time, end_time, shift_type.value),
            )
            return int(cur.lastrowid)

    def delete(self, shift_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM shifts WHERE id=%s", (int(shift_id),))
            return cur.rowcount > 0
