from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import all_rows, db_cursor, first_row
from .model import AttendanceRecord, AttendanceReportRow
from .repository import AttendanceRepository, ScanRepository

_COLUMNS = "id, employee_id, work_date, check_in, check_out, total_hours, is_late, status, note"


def _hours(value) -> Optional[float]:
    return float(value) if value is not None else None


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        id=int(r["id"]),
        employee_id=r["employee_id"],
        work_date=r["work_date"],
        check_in=r["check_in"],
        check_out=r.get("check_out"),
        total_hours=_hours(r.get("total_hours")),
        is_late=bool(r["is_late"]),
        status=AttendanceStatus(r["status"]),
        note=r.get("note"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM working_hours WHERE employee_id=%s AND work_date=%s",
                (employee_id, work_date),
            )
            r = first_row(cur)
            return _to_record(r) if r else None

    def create_checkin(
        self,
        *,
        employee_id: str,
        work_date: date,
        check_in: datetime,
        is_late: bool,
        status: AttendanceStatus,
        note: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO working_hours(employee_id, work_date, check_in, is_late, status, note)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (employee_id, work_date, check_in, 1 if is_late else 0, status.value, note),
            )
            return int(cur.lastrowid)

    def update_checkout(
        self,
        *,
        record_id: int,
        check_out: datetime,
        total_hours: float,
        status: AttendanceStatus,
        note: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE working_hours
                SET check_out=%s, total_hours=%s, status=%s, note=%s
                WHERE id=%s AND check_out IS NULL
                """,
                (check_out, total_hours, status.value, note, int(record_id)),
            )
            return cur.rowcount > 0

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM working_hours WHERE work_date=%s ORDER BY check_in ASC",
                (work_date,),
            )
            return all_rows(cur, _to_record)

    def get_report_rows(self, *, start_date: date, end_date: date) -> Sequence[AttendanceReportRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT w.employee_id, e.first_name, e.last_name, e.department,
                       w.work_date, w.check_in, w.check_out, w.total_hours, w.is_late, w.status
                FROM working_hours w
                JOIN employees e ON e.employee_id = w.employee_id
                WHERE w.work_date BETWEEN %s AND %s
                ORDER BY w.work_date ASC, w.check_in ASC
                """,
                (start_date, end_date),
            )
            return [
                AttendanceReportRow(
                    employee_id=r["employee_id"],
                    first_name=r["first_name"],
                    last_name=r["last_name"],
                    department=r.get("department"),
                    work_date=r["work_date"],
                    check_in=r["check_in"],
                    check_out=r.get("check_out"),
                    total_hours=_hours(r.get("total_hours")),
                    is_late=bool(r["is_late"]),
                    status=AttendanceStatus(r["status"]),
                )
                for r in all_rows(cur)
            ]


class MySQLScanRepository(ScanRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def record_scan(self, *, employee_id: str, scanned_by: Optional[int], at: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO scans(employee_id, scanned_by, created_at) VALUES(%s,%s,%s)",
                (employee_id, scanned_by, at),
            )
            return int(cur.lastrowid)

    def count_scans_since(self, since: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM scans WHERE created_at >= %s", (since,))
            row = first_row(cur)
            return int(row["n"]) if row else 0
