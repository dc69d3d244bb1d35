from __future__ import annotations

import importlib
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.logger import get_logger
from .container import build_container
from .core.exceptions import ConfigurationError, DomainError, TransitionError
from .database.bootstrap import apply_schema
from .payroll.controller import register as register_payroll
from .shifts.controller import register as register_shifts

logger = get_logger(__name__)


def _status_for(error: DomainError) -> int:
    if isinstance(error, ConfigurationError):
        return 500
    if isinstance(error, TransitionError):
        return 409
    return 400


def create_app(settings=None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    if settings is None:
        settings_module = get_settings_module()
        settings = importlib.import_module(settings_module)
        logger.info("Using settings %s", settings_module)

    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    container = build_container(settings)
    app.extensions["attendance_payroll"] = container

    if container.conn is not None and bool(getattr(settings, "AUTO_INIT_DB", False)):
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(container.conn, schema_path=schema_path)

    @app.errorhandler(DomainError)
    def handle_domain_error(error: DomainError):
        status = _status_for(error)
        if status >= 500:
            logger.error("%s: %s", error.code, error)
        return jsonify({"error": str(error), "code": error.code}), status

    register_attendance(app, container)
    register_payroll(app, container)
    register_shifts(app, container)

    return app
