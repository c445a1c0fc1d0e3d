from __future__ import annotations

from datetime import date

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.web import admin_required, ok
from ..container import Container
from ..core.enums import ReportPeriod
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    service = container.report_service

    def _build_from_args():
        try:
            period = ReportPeriod(request.args.get("period") or ReportPeriod.DAILY.value)
        except ValueError:
            raise ValidationError("Period must be daily, weekly or monthly") from None
        day_s = request.args.get("date")
        try:
            day = parse_iso_date(day_s) if day_s else date.today()
        except ValueError:
            raise ValidationError("Invalid date format") from None
        return service.build(period, day)

    def _download(data: bytes, *, mimetype: str, filename: str):
        return app.response_class(
            data,
            mimetype=mimetype,
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/reports/attendance", methods=["GET"], endpoint="report_attendance")
    @admin_required
    def report_attendance():
        return ok(_build_from_args().to_dict())

    @app.route("/api/reports/attendance.pdf", methods=["GET"], endpoint="report_attendance_pdf")
    @admin_required
    def report_attendance_pdf():
        report = _build_from_args()
        return _download(
            service.to_pdf(report),
            mimetype="application/pdf",
            filename=f"{report.range.file_stem}.pdf",
        )

    @app.route("/api/reports/attendance.csv", methods=["GET"], endpoint="report_attendance_csv")
    @admin_required
    def report_attendance_csv():
        report = _build_from_args()
        return _download(
            service.to_csv(report),
            mimetype="text/csv",
            filename=f"{report.range.file_stem}.csv",
        )
