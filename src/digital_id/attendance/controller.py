from __future__ import annotations

from datetime import date

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.web import current_user_id, json_body, login_required, ok
from ..container import Container
from ..core.exceptions import ValidationError
from ..qr.service import decode_image


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance/scan", methods=["POST"], endpoint="attendance_scan")
    @login_required
    def attendance_scan():
        payload = json_body()
        result = service.scan(payload.get("code") or "", scanned_by=current_user_id())
        return ok(result.to_dict(), message=result.message)

    @app.route("/api/attendance/scan/image", methods=["POST"], endpoint="attendance_scan_image")
    @login_required
    def attendance_scan_image():
        upload = request.files.get("image")
        if upload is None or not upload.filename:
            raise ValidationError("Please upload an image of the QR code")
        result = service.scan(decode_image(upload.stream), scanned_by=current_user_id())
        return ok(result.to_dict(), message=result.message)

    # Target of the universal QR code; the badge itself is the credential.
    @app.route("/mark-attendance/<employee_id>", methods=["POST"], endpoint="mark_attendance")
    def mark_attendance(employee_id: str):
        result = service.scan(employee_id)
        return ok(result.to_dict(), message=result.message)

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    @login_required
    def attendance_list():
        day_s = request.args.get("date")
        try:
            day = parse_iso_date(day_s) if day_s else date.today()
        except ValueError:
            raise ValidationError("Invalid date format") from None
        return ok([r.to_dict() for r in service.records_for_date(day)], date=day.strftime("%Y-%m-%d"))

    @app.route("/api/attendance/today/<employee_id>", methods=["GET"], endpoint="attendance_today")
    @login_required
    def attendance_today(employee_id: str):
        record = service.today_record(employee_id)
        return ok(record.to_dict() if record else None)

    @app.route("/api/dashboard/stats", methods=["GET"], endpoint="dashboard_stats")
    @login_required
    def dashboard_stats():
        return ok(service.dashboard_stats())
