from __future__ import annotations

from flask import Flask, jsonify

from ..common.responses import json_body, ok
from ..common.validators import require_string_list
from ..container import Container
from .model import OrganizationSettings


def register(app: Flask, container: Container) -> None:
    repo = container.repository

    @app.route("/api/organization", methods=["GET"], endpoint="organization_get")
    def organization_get():
        return jsonify(repo.settings.to_dict())

    @app.route("/api/organization", methods=["PUT"], endpoint="organization_update")
    def organization_update():
        data = json_body()
        for key, label in (("departments", "Departments"), ("positions", "Positions")):
            if key in data:
                data[key] = list(require_string_list(data[key], label))
        merged = {**repo.settings.to_dict(), **data}
        settings = repo.update_settings(OrganizationSettings.from_dict(merged))
        return ok({"settings": settings.to_dict()})

    @app.route("/api/organization/departments", methods=["POST"], endpoint="departments_add")
    def departments_add():
        settings = repo.add_department(json_body().get("name", ""))
        return ok({"settings": settings.to_dict()}, 201)

    @app.route("/api/organization/departments/<name>", methods=["DELETE"], endpoint="departments_remove")
    def departments_remove(name: str):
        return ok({"settings": repo.remove_department(name).to_dict()})

    @app.route("/api/organization/positions", methods=["POST"], endpoint="positions_add")
    def positions_add():
        settings = repo.add_position(json_body().get("name", ""))
        return ok({"settings": settings.to_dict()}, 201)

    @app.route("/api/organization/positions/<name>", methods=["DELETE"], endpoint="positions_remove")
    def positions_remove(name: str):
        return ok({"settings": repo.remove_position(name).to_dict()})
