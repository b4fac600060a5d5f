from __future__ import annotations

import logging

from flask import Flask, jsonify, request, send_file

from ..common.http import admin_required, client_address_sources, error_response
from ..core.exceptions import AddressUnresolvable, DocumentStoreFailure, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance/mark", methods=["POST"], endpoint="attendance_mark")
    def mark():
        data = request.get_json(silent=True) or {}
        forwarded_for, peer = client_address_sources()
        try:
            outcome = service.submit(
                data.get("student_id"),
                data.get("student_name"),
                forwarded_for=forwarded_for,
                peer_address=peer,
            )
        except ValidationError:
            return error_response("Student ID and name are required.", 400)
        except AddressUnresolvable:
            return error_response("Could not determine your IP address.", 400)
        except DocumentStoreFailure as e:
            logger.error("Database write error: %s", e)
            return error_response("Server error saving attendance to database.", 500, e)
        return jsonify(outcome.to_api())

    @app.route("/api/my-ip", methods=["GET"], endpoint="my_ip")
    def my_ip():
        forwarded_for, peer = client_address_sources()
        body = service.describe_address(forwarded_for=forwarded_for, peer_address=peer)
        return jsonify({"success": True, **body})

    @app.route("/api/attendance/records", methods=["GET"], endpoint="attendance_records")
    @admin_required(container.admin_token)
    def records():
        rows = service.report()
        logger.info("Returning %d attendance records", len(rows))
        return jsonify([r.to_api() for r in rows])

    @app.route("/api/attendance/download", methods=["GET"], endpoint="attendance_download")
    @admin_required(container.admin_token)
    def download():
        path = container.tabular_store.path
        if not path.exists():
            return error_response("No attendance records yet", 404)
        return send_file(
            path.resolve(),
            mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            as_attachment=True,
            download_name=path.name,
        )
