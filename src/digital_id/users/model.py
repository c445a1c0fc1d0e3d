from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Back-office account (admin or scanning staff).

    Employees scanned at the door are not users; they live in ``employees``.
    """

    user_id: int
    full_name: str
    email: str
    password_hash: str
    role: Role
    is_active: bool = True
