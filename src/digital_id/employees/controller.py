from __future__ import annotations

from flask import Flask, request

from ..common.web import admin_required, json_body, login_required, ok
from ..container import Container
from .model import EmployeeData


def register(app: Flask, container: Container) -> None:
    service = container.employee_service

    @app.route("/api/departments", methods=["GET"], endpoint="departments")
    @login_required
    def departments():
        return ok(service.departments())

    @app.route("/api/employees", methods=["GET"], endpoint="employees_list")
    @login_required
    def employees_list():
        rows = service.search(request.args.get("q", ""), request.args.get("department", "all"))
        return ok([e.to_dict() for e in rows])

    @app.route("/api/employees", methods=["POST"], endpoint="employees_create")
    @admin_required
    def employees_create():
        data = EmployeeData.from_mapping(json_body())
        employee = service.create(data)
        return ok(employee.to_dict(), status=201, message="Employee created successfully!")

    @app.route("/api/employees/<employee_id>", methods=["GET"], endpoint="employees_get")
    @login_required
    def employees_get(employee_id: str):
        return ok(service.get(employee_id).to_dict())

    @app.route("/api/employees/<employee_id>", methods=["PUT"], endpoint="employees_update")
    @admin_required
    def employees_update(employee_id: str):
        data = EmployeeData.from_mapping(json_body())
        employee = service.update(employee_id, data)
        return ok(employee.to_dict(), message="Employee updated successfully!")

    @app.route("/api/employees/<employee_id>", methods=["DELETE"], endpoint="employees_delete")
    @admin_required
    def employees_delete(employee_id: str):
        employee = service.get(employee_id)
        service.delete(employee.id)
        return ok(message="Employee deleted")

    @app.route("/api/employees/bulk-delete", methods=["POST"], endpoint="employees_bulk_delete")
    @admin_required
    def employees_bulk_delete():
        ids = json_body().get("ids") or []
        deleted = service.bulk_delete(ids)
        return ok({"deleted": deleted}, message=f"Deleted {deleted} employees")
