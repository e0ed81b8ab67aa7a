from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.responses import register_error_handlers
from .container import Container, build_container_from_settings
from .employees.controller import register as register_employees
from .organization.controller import register as register_organization
from .reports.controller import register as register_reports
from .transfer.controller import register as register_transfer


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        container = build_container_from_settings(settings)
    app.extensions["attendance_tracker"] = container

    if app.config["DEBUG"]:
        app.logger.info(
            "[attendance-tracker] settings=%s storage=%s employees=%d records=%d",
            settings_module,
            type(container.store).__name__,
            len(container.repository.employees),
            len(container.repository.attendance_records),
        )

    register_error_handlers(app)
    register_employees(app, container)
    register_attendance(app, container)
    register_organization(app, container)
    register_reports(app, container)
    register_transfer(app, container)

    return app
