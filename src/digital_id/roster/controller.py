from __future__ import annotations

from datetime import date

from flask import Flask, request

from ..common.datetime_utils import parse_hhmm, parse_iso_date
from ..common.web import admin_required, json_body, login_required, ok
from ..container import Container
from ..core.constants import SHIFT_DEFAULTS
from ..core.enums import ShiftType
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    service = container.roster_service

    def _parse_shift_type(value: str) -> ShiftType:
        try:
            return ShiftType(value or ShiftType.MORNING.value)
        except ValueError:
            raise ValidationError(f"Unknown shift type: {value}") from None

    @app.route("/api/roster", methods=["GET"], endpoint="roster_list")
    @login_required
    def roster_list():
        day_s = request.args.get("date")
        try:
            day = parse_iso_date(day_s) if day_s else date.today()
        except ValueError:
            raise ValidationError("Invalid date format") from None
        groups = service.grouped_for_date(day)
        return ok(
            {
                t: {
                    "label": SHIFT_DEFAULTS[ShiftType(t)][0],
                    "shifts": [s.to_dict() for s in shifts],
                }
                for t, shifts in groups.items()
            },
            date=day.strftime("%Y-%m-%d"),
        )

    @app.route("/api/roster", methods=["POST"], endpoint="roster_add")
    @admin_required
    def roster_add():
        payload = json_body()
        try:
            work_date = parse_iso_date(payload.get("date") or date.today().strftime("%Y-%m-%d"))
            start_time = parse_hhmm(payload["start_time"]) if payload.get("start_time") else None
            end_time = parse_hhmm(payload["end_time"]) if payload.get("end_time") else None
        except ValueError:
            raise ValidationError("Invalid date or time format") from None

        shift_id = service.add(
            employee_id=(payload.get("employee_id") or "").strip(),
            work_date=work_date,
            shift_type=_parse_shift_type(payload.get("shift_type")),
            start_time=start_time,
            end_time=end_time,
        )
        return ok({"id": shift_id}, status=201, message="Shift added")

    @app.route("/api/roster/<int:shift_id>", methods=["DELETE"], endpoint="roster_delete")
    @admin_required
    def roster_delete(shift_id: int):
        service.delete(shift_id)
        return ok(message="Shift deleted")
