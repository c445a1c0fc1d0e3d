from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee, EmployeeData


class EmployeeRepository(Protocol):
    """Storage interface for employees.

    Services depend on this protocol, never on the MySQL implementation directly.
    """

    def get_by_employee_id(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self, *, active_only: bool = False) -> Sequence[Employee]:
        raise NotImplementedError

    def create(self, *, employee_id: str, data: EmployeeData) -> Employee:
        raise NotImplementedError

    def update(self, *, employee_id: str, data: EmployeeData) -> bool:
        raise NotImplementedError

    def delete_by_ids(self, ids: Sequence[int]) -> int:
        """Delete by primary key; returns the number of rows removed."""

        raise NotImplementedError
