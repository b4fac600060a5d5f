from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import admin_required, error_response
from ..core.exceptions import DocumentStoreFailure, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    registry = container.registry

    @app.route("/api/expected-ip/<student_id>", methods=["GET"], endpoint="expected_ip")
    def expected_ip(student_id: str):
        entry = registry.get_entry(student_id)
        return jsonify({
            "success": True,
            "studentId": student_id,
            "expectedIp": entry.expected_address if entry else None,
        })

    @app.route("/api/set-expected-ip", methods=["POST"], endpoint="set_expected_ip")
    @admin_required(container.admin_token)
    def set_expected_ip():
        data = request.get_json(silent=True) or {}
        try:
            entry = registry.set(data.get("student_id"), data.get("expected_ip"))
        except ValidationError:
            return error_response("student_id and expected_ip are required", 400)
        except DocumentStoreFailure as e:
            return error_response("Server error saving expected IP", 500, e)

        return jsonify({
            "success": True,
            "message": "Expected IP saved successfully",
            "student_id": entry.identity,
            "expected_ip": entry.expected_address,
        })
