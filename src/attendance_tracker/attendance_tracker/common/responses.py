from __future__ import annotations

from flask import Flask, jsonify, request

from ..core.exceptions import (
    DomainError,
    DuplicateEntryError,
    EmptyDatasetError,
    NotFoundError,
    ReferentialConstraintError,
    ValidationError,
)

_STATUS_CODES = {
    ValidationError: 400,
    NotFoundError: 404,
    DuplicateEntryError: 409,
    ReferentialConstraintError: 409,
    EmptyDatasetError: 409,
}


def status_code_for(error: DomainError) -> int:
    for cls, code in _STATUS_CODES.items():
        if isinstance(error, cls):
            return code
    return 400


def ok(payload: dict | None = None, status: int = 200):
    body = {"success": True}
    body.update(payload or {})
    return jsonify(body), status


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        code = status_code_for(e)
        app.logger.info("%s on %s %s: %s", type(e).__name__, request.method, request.path, e)
        return jsonify({"success": False, "error": type(e).__name__, "message": str(e)}), code
