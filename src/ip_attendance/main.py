from __future__ import annotations

import importlib
import logging
import os
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .logging_config import setup_logging
from .registry.controller import register as register_registry
from .settings import get_settings_module

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"), colored=app.config["DEBUG"])

    if container is None:
        container = build_container(
            data_dir=getattr(settings, "DATA_DIR"),
            tabular_file=getattr(settings, "TABULAR_FILE"),
            document_file=getattr(settings, "DOCUMENT_FILE"),
            default_expected_address=getattr(settings, "DEFAULT_EXPECTED_ADDRESS", ""),
            admin_token=getattr(settings, "ADMIN_TOKEN", ""),
        )

    if not container.registry.default_address:
        logger.warning("ALLOWED_WIFI_IP not set - students will only be marked present with per-student IP rules")
    if not container.admin_token:
        logger.warning("ADMIN_TOKEN not set - admin endpoints will be inaccessible")
    logger.info(
        "settings=%s spreadsheet=%s database=%s allowed_ip=%s",
        settings_module, container.tabular_store.path, container.document_store.path,
        container.registry.default_address or "(not set)",
    )

    register_attendance(app, container)
    register_registry(app, container)
    _register_error_handlers(app)

    app.extensions["ip_attendance"] = container
    return app


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(404)
    def not_found(_e):
        logger.warning("%s %s not found", request.method, request.path)
        return jsonify({"success": False, "message": "Route not found", "path": request.path, "method": request.method}), 404

    @app.errorhandler(Exception)
    def unhandled(e):
        if isinstance(e, HTTPException):
            return e
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        body = {"success": False, "message": "Internal server error. Please try again later."}
        if app.debug:
            body["error"] = str(e)
        return jsonify(body), 500


def run() -> None:
    app = create_app()
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "3000")), debug=app.config["DEBUG"])


if __name__ == "__main__":
    run()
