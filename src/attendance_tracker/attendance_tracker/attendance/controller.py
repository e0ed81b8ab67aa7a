from __future__ import annotations

from dataclasses import replace

from flask import Flask, jsonify, request

from ..common.responses import json_body, ok
from ..container import Container
from ..core.exceptions import NotFoundError


def register(app: Flask, container: Container) -> None:
    repo = container.repository
    reports = container.report_service

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    def attendance_list():
        """Records screen: optional `q`, `employee` and `status` filters."""

        hits = reports.search_records(
            query=request.args.get("q", ""),
            employee_id=request.args.get("employee"),
            status=request.args.get("status"),
        )
        return jsonify(
            [
                {**item.record.to_dict(), "employeeName": item.employee_name}
                for item in hits
            ]
        )

    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_upsert")
    def attendance_upsert():
        data = json_body()
        result = repo.add_or_update_attendance(
            employee_id=data.get("employeeId", ""),
            date=data.get("date", ""),
            status=data.get("status", ""),
            notes=data.get("notes"),
        )
        return ok(
            {"outcome": result.outcome.value, "record": result.record.to_dict()},
            201 if result.created else 200,
        )

    @app.route("/api/attendance/<record_id>", methods=["PUT"], endpoint="attendance_update")
    def attendance_update(record_id: str):
        current = repo.get_attendance(record_id)
        if not current:
            raise NotFoundError(f"Attendance record {record_id!r} does not exist")

        data = json_body()
        record = repo.update_attendance(
            replace(
                current,
                employee_id=data.get("employeeId", current.employee_id),
                date=data.get("date", current.date),
                status=data.get("status", current.status),
                notes=data.get("notes", current.notes),
            )
        )
        return ok({"record": record.to_dict()})

    @app.route("/api/attendance/<record_id>", methods=["DELETE"], endpoint="attendance_delete")
    def attendance_delete(record_id: str):
        repo.delete_attendance(record_id)
        return ok()

    @app.route("/api/attendance/unmarked", methods=["GET"], endpoint="attendance_unmarked")
    def attendance_unmarked():
        coverage = reports.date_coverage(request.args.get("date"))
        return jsonify(
            {
                "date": coverage.date,
                "marked": coverage.marked,
                "totalEmployees": coverage.total_employees,
                "markedPercentage": coverage.marked_percentage,
                "unmarked": [e.to_dict() for e in coverage.unmarked],
            }
        )
