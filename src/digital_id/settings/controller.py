from __future__ import annotations

from flask import Flask

from ..common.web import admin_required, current_user_id, json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.settings_service

    @app.route("/api/settings", methods=["GET"], endpoint="settings_list")
    @admin_required
    def settings_list():
        return ok([s.to_dict() for s in service.list_all()])

    @app.route("/api/settings/<key>", methods=["GET"], endpoint="settings_get")
    @admin_required
    def settings_get(key: str):
        return ok(service.get(key).to_dict())

    @app.route("/api/settings/<key>", methods=["PUT"], endpoint="settings_put")
    @admin_required
    def settings_put(key: str):
        payload = json_body()
        setting = service.set(key, payload.get("value"))
        return ok(setting.to_dict(), message="Setting saved")

    @app.route("/api/admin/notification-settings", methods=["GET"], endpoint="admin_notification_get")
    @admin_required
    def admin_notification_get():
        setting = service.admin_notification(int(current_user_id()))
        return ok(setting.to_dict() if setting else None)

    @app.route("/api/admin/notification-settings", methods=["PUT"], endpoint="admin_notification_put")
    @admin_required
    def admin_notification_put():
        payload = json_body()
        service.set_admin_notification(
            admin_id=int(current_user_id()),
            phone_number=payload.get("phone_number") or "",
            notify_on_late=bool(payload.get("notify_on_late", True)),
        )
        return ok(message="Notification settings saved")
