from __future__ import annotations

from datetime import date

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.web import admin_required, json_body, ok
from ..container import Container
from ..core.exceptions import ValidationError
from .service import format_summary


def register(app: Flask, container: Container) -> None:
    service = container.automation_service

    def _day() -> date:
        day_s = request.args.get("date") or json_body().get("date")
        try:
            return parse_iso_date(day_s) if day_s else date.today()
        except ValueError:
            raise ValidationError("Invalid date format") from None

    @app.route("/api/automation/summary", methods=["GET"], endpoint="automation_summary")
    @admin_required
    def automation_summary():
        day = _day()
        summary = service.generate_summary(day)
        return ok(
            {
                "totals": summary.totals(),
                "message": format_summary(summary, day),
            },
            date=day.strftime("%Y-%m-%d"),
        )

    @app.route("/api/automation/daily-report", methods=["POST"], endpoint="automation_daily_report")
    @admin_required
    def automation_daily_report():
        result = service.send_daily_report(_day())
        return ok(result.to_dict(), message="Daily attendance report sent")
