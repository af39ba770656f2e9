"""Helpers shared by the JSON controllers.

Authentication is handled in front of this app; the caller's role and
lecturer id arrive as request headers.
"""

from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import jsonify, request

from ..core.enums import Role
from ..core.exceptions import (
    AuthorizationError,
    DomainError,
    InvalidTransitionError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from ..core.logging import get_logger

logger = get_logger(__name__)

ROLE_HEADER = "X-Role"
LECTURER_HEADER = "X-Lecturer-Id"

_STATUS_CODES = (
    (ValidationError, 400),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (InvalidTransitionError, 409),
    (PersistenceError, 503),
)


def current_role() -> Optional[Role]:
    value = (request.headers.get(ROLE_HEADER) or "").strip().lower()
    try:
        return Role(value)
    except ValueError:
        return None


def current_lecturer_id() -> Optional[int]:
    value = (request.headers.get(LECTURER_HEADER) or "").strip()
    try:
        return int(value)
    except ValueError:
        return None


def role_required(*roles: Role):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            role = current_role()
            if role is None:
                return jsonify({"success": False, "message": "Missing or unknown role"}), 401
            if role not in roles:
                return jsonify({"success": False, "message": "You do not have access to this action"}), 403
            return view(*args, **kwargs)

        return wrapper

    return decorator


def ok(data=None, message: str = "", status: int = 200):
    body = {"success": True, "message": message}
    if data is not None:
        body["data"] = data
    return jsonify(body), status


def error_response(e: DomainError):
    status = 400
    for exc_type, code in _STATUS_CODES:
        if isinstance(e, exc_type):
            status = code
            break
    return jsonify({"success": False, "message": str(e)}), status


def system_error(message: str):
    logger.exception("request_failed", path=request.path)
    return jsonify({"success": False, "message": message}), 500


def payload() -> dict:
    """JSON body, falling back to form fields."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()
