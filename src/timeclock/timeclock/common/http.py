from __future__ import annotations

from functools import wraps

from flask import jsonify, session

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    StorageError,
    ValidationError,
)
from ..users.service import SessionUser

SESSION_KEY = "user"

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (StorageError, 503),
)


def current_user() -> SessionUser | None:
    data = session.get(SESSION_KEY)
    if not data:
        return None
    return SessionUser.from_dict(data)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        user = current_user()
        if user is None:
            return error_response("Please log in to continue", 401)
        return view(user, *args, **kwargs)

    return wrapper


def error_response(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def domain_error_response(e: DomainError):
    for exc_type, status in _STATUS_BY_ERROR:
        if isinstance(e, exc_type):
            return error_response(str(e), status)
    return error_response(str(e), 400)
