from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthorizationError,
    DomainError,
    InvalidPunchOrder,
    LocationUnavailable,
    NoActiveShift,
    ShiftEnded,
    StoreUnavailable,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = {
    LocationUnavailable: 422,
    NoActiveShift: 409,
    ShiftEnded: 409,
    InvalidPunchOrder: 409,
    ValidationError: 400,
    AuthorizationError: 403,
    StoreUnavailable: 503,
}


def status_for(error: DomainError) -> int:
    for error_type, status in _STATUS_BY_ERROR.items():
        if isinstance(error, error_type):
            return status
    return 400


def error_response(error: DomainError, **extra):
    body = {"success": False, "message": error.message}
    body.update(extra)
    return jsonify(body), status_for(error)


def unexpected_error_response(action: str):
    logger.exception("unexpected error while %s", action)
    return jsonify({"success": False, "message": f"System error while {action}"}), 500


def login_required(view):
    """Session is populated upstream; only ``user_id`` and ``role`` are trusted."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "Please log in to continue"}), 401
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "Please log in to continue"}), 401
        if session.get("role") != Role.ADMIN.value:
            return jsonify({"success": False, "message": "Administrator access required"}), 403
        return view(*args, **kwargs)

    return wrapper


def current_user_id() -> int:
    return int(session["user_id"])


def current_role() -> Role:
    try:
        return Role(session.get("role"))
    except ValueError:
        return Role.STAFF
