from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, request, session

from ..common.http import SESSION_KEY, current_user, error_response
from ..common.logging_utils import get_logger
from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.exceptions import AuthenticationError
from ..container import Container

logger = get_logger("users.controller")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            return error_response("Request body must be a JSON object", 400)
        username = data.get("username", "")
        password = data.get("password", "")

        try:
            s_user = container.auth_service.authenticate(username, password)
        except AuthenticationError as e:
            return error_response(str(e), 401)
        except Exception:
            logger.exception("Unexpected error during login")
            return error_response("System error during login", 500)

        session.clear()
        session.permanent = bool(data.get("remember_me"))
        app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)
        session[SESSION_KEY] = s_user.to_dict()

        return jsonify({"success": True, "user": s_user.to_dict()}), 200

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True}), 200

    @app.route("/api/me", methods=["GET"], endpoint="me")
    def me():
        user = current_user()
        if user is None:
            return error_response("Please log in to continue", 401)
        return jsonify({"success": True, "user": user.to_dict()}), 200
