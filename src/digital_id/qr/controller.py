from __future__ import annotations

import io

from flask import Flask, request, send_file

from ..common.web import admin_required, fail, login_required
from ..container import Container
from ..imports.service import read_table


def _png(data: bytes, filename: str, *, download: bool):
    return send_file(io.BytesIO(data), mimetype="image/png", as_attachment=download, download_name=filename)


def register(app: Flask, container: Container) -> None:
    service = container.qr_service

    @app.route("/api/qr/<employee_id>.png", methods=["GET"], endpoint="qr_employee")
    @login_required
    def qr_employee(employee_id: str):
        download = request.args.get("download") == "1"
        return _png(service.employee_png(employee_id), f"qr-{employee_id}.png", download=download)

    @app.route("/api/qr/<employee_id>/universal.png", methods=["GET"], endpoint="qr_universal")
    @login_required
    def qr_universal(employee_id: str):
        download = request.args.get("download") == "1"
        return _png(service.universal_png(employee_id), f"qr-code-{employee_id}.png", download=download)

    @app.route("/api/qr/<employee_id>/id-card.png", methods=["GET"], endpoint="qr_id_card")
    @login_required
    def qr_id_card(employee_id: str):
        return _png(service.id_card_png(employee_id), f"{employee_id}-digital-id.png", download=True)

    @app.route("/api/qr/bulk", methods=["POST"], endpoint="qr_bulk")
    @admin_required
    def qr_bulk():
        if "file" not in request.files:
            return fail("Missing upload file", 400)

        upload = request.files["file"]
        archive, results = service.bulk_generate(read_table(upload.filename, upload.stream))
        response = send_file(
            io.BytesIO(archive),
            mimetype="application/zip",
            as_attachment=True,
            download_name="employee-qr-codes.zip",
        )
        # per-row outcomes travel inside the archive as results.json
        response.headers["X-Bulk-Generated"] = str(sum(1 for r in results if r.success))
        response.headers["X-Bulk-Failed"] = str(sum(1 for r in results if not r.success))
        return response
