from __future__ import annotations

from dataclasses import dataclass

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import is_valid_email, require_min_length, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from .repository import UserRepository


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    full_name: str
    email: str
    role: Role


class AuthService:
    """Use case: authenticate a back-office user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> SessionUser:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user or not user.is_active:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # placeholder or corrupted hashes
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        return SessionUser(user_id=user.user_id, full_name=user.full_name, email=user.email, role=user.role)


class UserService:
    """Use case: manage back-office accounts (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def create_account(self, *, full_name: str, email: str, password: str, role: Role = Role.STAFF) -> int:
        full_name = require_non_empty(full_name, "Full name")
        email = require_non_empty(email, "Email").lower()
        if not is_valid_email(email):
            raise ValidationError("Invalid email format")
        require_min_length(password, "Password", 6)

        if self._users.get_by_email(email):
            raise ValidationError("Email is already registered")

        if role == Role.ADMIN:
            raise ValidationError("Admin accounts cannot be created here")

        return self._users.create_user(
            full_name=full_name,
            email=email,
            password_hash=generate_password_hash(password),
            role=role,
        )
