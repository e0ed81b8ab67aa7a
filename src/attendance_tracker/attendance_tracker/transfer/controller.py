from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.responses import ok
from ..container import Container
from ..core.enums import ExportKind
from ..core.exceptions import ValidationError

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def register(app: Flask, container: Container) -> None:
    transfer = container.transfer_service

    def _parse_kind(value: str) -> ExportKind:
        try:
            return ExportKind(value)
        except ValueError:
            raise ValidationError("Export kind must be 'employees' or 'attendance'") from None

    def _include_organization() -> bool:
        return request.args.get("organization", "0").lower() in {"1", "true", "yes"}

    def _attachment(body, *, mimetype: str, filename: str):
        return app.response_class(
            body,
            mimetype=mimetype,
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/export/snapshot", methods=["GET"], endpoint="export_snapshot")
    def export_snapshot():
        return jsonify(transfer.export_snapshot())

    @app.route("/api/import/snapshot", methods=["POST"], endpoint="import_snapshot")
    def import_snapshot():
        if request.mimetype == "multipart/form-data" and "file" in request.files:
            document = request.files["file"].read()
        else:
            document = request.get_data()
        result = transfer.import_snapshot(document)
        return ok(
            {
                "employees": result.employees,
                "attendanceRecords": result.attendance_records,
                "settingsReplaced": result.settings_replaced,
            }
        )

    @app.route("/api/export/<kind>.csv", methods=["GET"], endpoint="export_csv")
    def export_csv(kind: str):
        export_kind = _parse_kind(kind)
        text = transfer.render_csv(export_kind, include_organization=_include_organization())
        filename = f"{export_kind.value}-{date.today().isoformat()}.csv"
        return _attachment(text.encode("utf-8-sig"), mimetype="text/csv", filename=filename)

    @app.route("/api/export/<kind>.xlsx", methods=["GET"], endpoint="export_xlsx")
    def export_xlsx(kind: str):
        export_kind = _parse_kind(kind)
        body = transfer.render_xlsx(export_kind, include_organization=_include_organization())
        filename = f"{export_kind.value}-{date.today().isoformat()}.xlsx"
        return _attachment(body, mimetype=XLSX_MIMETYPE, filename=filename)

    @app.route("/api/data/clear", methods=["POST"], endpoint="data_clear")
    def data_clear():
        transfer.clear_all_data()
        return ok()
