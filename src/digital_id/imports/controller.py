from __future__ import annotations

import io

from flask import Flask, request, send_file

from ..common.web import admin_required, fail, json_body, ok
from ..container import Container

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def register(app: Flask, container: Container) -> None:
    service = container.import_service

    def _rows_from_json():
        payload = json_body()
        return service.preview_rows(payload.get("rows") or [])

    @app.route("/api/employees/import/preview", methods=["POST"], endpoint="import_preview")
    @admin_required
    def import_preview():
        if "file" not in request.files:
            return fail("Missing upload file", 400)

        upload = request.files["file"]
        rows = service.preview(upload.filename, upload.stream)
        return ok(
            [r.to_dict() for r in rows],
            valid=sum(1 for r in rows if r.is_valid),
            invalid=sum(1 for r in rows if not r.is_valid),
        )

    @app.route("/api/employees/import/confirm", methods=["POST"], endpoint="import_confirm")
    @admin_required
    def import_confirm():
        summary = service.confirm(_rows_from_json())
        return ok(summary.to_dict(), message=f"Successfully added {summary.success} employees")

    @app.route("/api/employees/import/template.xlsx", methods=["GET"], endpoint="import_template")
    @admin_required
    def import_template():
        return send_file(
            io.BytesIO(service.template_workbook()),
            mimetype=XLSX_MIMETYPE,
            as_attachment=True,
            download_name="employee_upload_template.xlsx",
        )

    @app.route("/api/employees/import/errors.xlsx", methods=["POST"], endpoint="import_errors")
    @admin_required
    def import_errors():
        return send_file(
            io.BytesIO(service.error_report(_rows_from_json())),
            mimetype=XLSX_MIMETYPE,
            as_attachment=True,
            download_name="employee_upload_errors.xlsx",
        )
