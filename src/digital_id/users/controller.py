from __future__ import annotations

import logging
from datetime import timedelta

from flask import Flask, request, session

from ..common.web import admin_required, fail, json_body, ok
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    app.permanent_session_lifetime = timedelta(days=7)

    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        payload = json_body() or request.form
        s_user = container.auth_service.authenticate(payload.get("email", ""), payload.get("password", ""))

        session.clear()
        session.permanent = bool(payload.get("remember_me"))
        session["user_id"] = s_user.user_id
        session["name"] = s_user.full_name
        session["email"] = s_user.email
        session["role"] = s_user.role.value

        logger.info("User %s logged in", s_user.email)
        return ok(
            {"user_id": s_user.user_id, "name": s_user.full_name, "email": s_user.email, "role": s_user.role.value},
            message="Signed in successfully",
        )

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return ok(message="Signed out")

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    def me():
        if "user_id" not in session:
            return fail("Not signed in", 401)
        return ok(
            {
                "user_id": session["user_id"],
                "name": session.get("name"),
                "email": session.get("email"),
                "role": session.get("role"),
            }
        )

    @app.route("/api/users", methods=["POST"], endpoint="users_create")
    @admin_required
    def users_create():
        payload = json_body()
        try:
            role = Role(payload.get("role") or Role.STAFF.value)
        except ValueError:
            raise ValidationError("Unknown role") from None
        user_id = container.user_service.create_account(
            full_name=payload.get("full_name", ""),
            email=payload.get("email", ""),
            password=payload.get("password", ""),
            role=role,
        )
        return ok({"user_id": user_id}, status=201, message="Account created")
