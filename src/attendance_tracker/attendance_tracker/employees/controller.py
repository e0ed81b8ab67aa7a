from __future__ import annotations

from flask import Flask, jsonify

from ..common.responses import json_body, ok
from ..container import Container
from .model import Employee


def register(app: Flask, container: Container) -> None:
    repo = container.repository

    @app.route("/api/employees", methods=["GET"], endpoint="employees_list")
    def employees_list():
        return jsonify([e.to_dict() for e in repo.employees])

    @app.route("/api/employees", methods=["POST"], endpoint="employees_create")
    def employees_create():
        data = json_body()
        employee = repo.add_employee(
            name=data.get("name", ""),
            employee_id=data.get("employeeId", ""),
            department=data.get("department", ""),
            position=data.get("position", ""),
            join_date=data.get("joinDate", ""),
        )
        return ok({"employee": employee.to_dict()}, 201)

    @app.route("/api/employees/<employee_id>", methods=["PUT"], endpoint="employees_update")
    def employees_update(employee_id: str):
        data = json_body()
        employee = repo.update_employee(Employee.from_dict({**data, "id": employee_id}))
        return ok({"employee": employee.to_dict()})

    @app.route("/api/employees/<employee_id>", methods=["DELETE"], endpoint="employees_delete")
    def employees_delete(employee_id: str):
        removed = repo.delete_employee(employee_id)
        return ok({"removedAttendanceRecords": removed})
