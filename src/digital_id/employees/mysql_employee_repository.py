from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import EmployeeStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import all_rows, db_cursor, first_row
from .model import Employee, EmployeeData
from .repository import EmployeeRepository

_COLUMNS = (
    "id, employee_id, first_name, last_name, email, department, position, "
    "phone_number, lead_id, status, created_at"
)


def _to_employee(row: dict) -> Employee:
    return Employee(
        id=int(row["id"]),
        employee_id=row["employee_id"],
        first_name=row["first_name"],
        last_name=row["last_name"],
        email=row["email"],
        department=row["department"],
        position=row["position"],
        phone_number=row.get("phone_number"),
        lead_id=row.get("lead_id"),
        status=EmployeeStatus(row.get("status") or EmployeeStatus.ACTIVE.value),
        created_at=row.get("created_at"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_employee_id(self, employee_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (employee_id,))
            row = first_row(cur)
            return _to_employee(row) if row else None

    def list_all(self, *, active_only: bool = False) -> Sequence[Employee]:
        sql = f"SELECT {_COLUMNS} FROM employees"
        params: tuple = ()
        if active_only:
            sql += " WHERE status=%s"
            params = (EmployeeStatus.ACTIVE.value,)
        sql += " ORDER BY first_name ASC, last_name ASC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return all_rows(cur, _to_employee)

    def create(self, *, employee_id: str, data: EmployeeData) -> Employee:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(employee_id, first_name, last_name, email, department,
                                      position, phone_number, lead_id, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    employee_id,
                    data.first_name,
                    data.last_name,
                    data.email,
                    data.department,
                    data.position,
                    data.phone_number,
                    data.lead_id,
                    EmployeeStatus.ACTIVE.value,
                ),
            )
            new_id = int(cur.lastrowid)
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE id=%s", (new_id,))
            return _to_employee(first_row(cur))

    def update(self, *, employee_id: str, data: EmployeeData) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET first_name=%s, last_name=%s, email=%s, department=%s, position=%s,
                    phone_number=%s, lead_id=%s
                WHERE employee_id=%s
                """,
                (
                    data.first_name,
                    data.last_name,
                    data.email,
                    data.department,
                    data.position,
                    data.phone_number,
                    data.lead_id,
                    employee_id,
                ),
            )
            return cur.rowcount > 0

    def delete_by_ids(self, ids: Sequence[int]) -> int:
        ids = [int(i) for i in ids]
        if not ids:
            return 0
        placeholders = ",".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM employees WHERE id IN ({placeholders})", tuple(ids))
            return cur.rowcount
