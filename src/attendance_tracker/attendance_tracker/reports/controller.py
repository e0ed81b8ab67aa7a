from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import ValidationError
from .aggregation import StatusCounts, WindowSummary
from .service import parse_view_mode


def _counts(c: StatusCounts) -> dict:
    return {"present": c.present, "absent": c.absent, "late": c.late, "leave": c.leave, "wfh": c.wfh}


def _summary(s: WindowSummary) -> dict:
    return {
        "id": s.employee_id,
        "name": s.name,
        "department": s.department,
        "position": s.position,
        **_counts(s.counts),
        "totalDays": s.total_days,
        "markedDays": s.marked_days,
        "unmarkedDays": s.unmarked_days,
        "rate": s.rate,
    }


def register(app: Flask, container: Container) -> None:
    reports = container.report_service

    @app.route("/api/reports/daily", methods=["GET"], endpoint="reports_daily")
    def reports_daily():
        stats = reports.daily_stats(request.args.get("date"))
        return jsonify(
            {
                "date": stats.date,
                **_counts(stats.counts),
                "totalEmployees": stats.total_employees,
                "attendanceRate": stats.attendance_rate,
            }
        )

    @app.route("/api/reports/summary", methods=["GET"], endpoint="reports_summary")
    def reports_summary():
        window = reports.resolve_window(request.args.get("reference"), parse_view_mode(request.args.get("view")))
        rows = reports.organization_summary_table(window.start, window.end)
        return jsonify(
            {
                "start": window.start,
                "end": window.end,
                "view": window.view_mode.value,
                "rows": [_summary(s) for s in rows],
            }
        )

    @app.route("/api/reports/employees/<employee_id>", methods=["GET"], endpoint="reports_employee")
    def reports_employee(employee_id: str):
        report = reports.employee_report(
            employee_id,
            reference=request.args.get("reference"),
            view_mode=parse_view_mode(request.args.get("view")),
        )
        return jsonify(
            {
                "start": report.window.start,
                "end": report.window.end,
                "view": report.window.view_mode.value,
                "summary": _summary(report.summary),
                "calendar": [
                    {
                        "date": d.date,
                        "dayIndex": d.day_index,
                        "status": d.status.value if d.status else None,
                        "notes": d.notes,
                    }
                    for d in report.calendar
                ],
            }
        )

    @app.route("/api/reports/recent", methods=["GET"], endpoint="reports_recent")
    def reports_recent():
        raw_limit = request.args.get("limit")
        try:
            limit = int(raw_limit) if raw_limit else None
        except ValueError:
            raise ValidationError("limit must be an integer") from None

        items = reports.recent_activity(limit)
        return jsonify(
            [
                {
                    **item.record.to_dict(),
                    "employeeName": item.employee_name,
                    "employeePosition": item.employee_position,
                }
                for item in items
            ]
        )

    @app.route("/api/reports/weekly-trend", methods=["GET"], endpoint="reports_weekly_trend")
    def reports_weekly_trend():
        trend = reports.weekly_trend(request.args.get("end"))
        return jsonify([{"date": t.date, "name": t.weekday, **_counts(t.counts)} for t in trend])
