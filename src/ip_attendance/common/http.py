"""Helpers shared by the Flask controllers."""
from __future__ import annotations

import hmac
import logging
from functools import wraps
from typing import Optional

from flask import current_app, jsonify, request

from ..core.exceptions import AuthorizationError

logger = logging.getLogger(__name__)


def client_address_sources() -> tuple[Optional[str], Optional[str]]:
    """(X-Forwarded-For header, transport peer address) for the current request."""
    return request.headers.get("X-Forwarded-For"), request.remote_addr


def error_response(message: str, status_code: int, exc: Exception | None = None):
    body = {"success": False, "message": message}
    if exc is not None and current_app.debug:
        body["error"] = str(exc)
    return jsonify(body), status_code


def check_admin_token(expected: Optional[str]) -> None:
    token = request.headers.get("Authorization") or request.args.get("token") or ""
    if not expected or not hmac.compare_digest(token.encode(), expected.encode()):
        raise AuthorizationError("Unauthorized")


def admin_required(expected_token: Optional[str]):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                check_admin_token(expected_token)
            except AuthorizationError:
                logger.warning("Unauthorized attempt on %s", request.path)
                return jsonify({"success": False, "message": "Unauthorized"}), 401
            return view(*args, **kwargs)

        return wrapper

    return decorator
