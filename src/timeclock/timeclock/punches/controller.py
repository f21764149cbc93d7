from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import domain_error_response, error_response, login_required
from ..common.logging_utils import get_logger
from ..core.enums import PunchKind
from ..core.exceptions import DomainError, InvalidRecordError
from ..container import Container
from .model import Punch

logger = get_logger("punches.controller")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/punch", methods=["GET"], endpoint="punch_screen")
    @login_required
    def punch_screen(user):
        try:
            screen = container.punch_service.get_punch_screen(user)
        except DomainError as e:
            return domain_error_response(e)
        return jsonify({"success": True, **screen.to_dict()}), 200

    @app.route("/api/punch", methods=["POST"], endpoint="punch")
    @login_required
    def punch(user):
        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            return error_response("Request body must be a JSON object", 400)
        try:
            kind = PunchKind(data.get("label"))
        except ValueError:
            return error_response("Unknown punch action", 400)

        try:
            p = container.punch_service.record_punch(user, kind)
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Unexpected error while punching")
            return error_response("System error while punching", 500)

        screen = container.punch_service.get_punch_screen(user)
        return jsonify({"success": True, "punch": p.to_dict(), **screen.to_dict()}), 201

    @app.route("/api/punches", methods=["DELETE"], endpoint="delete_punch")
    @login_required
    def delete_punch(user):
        data = request.get_json(silent=True) or {}
        try:
            target = Punch.from_dict(data)
        except InvalidRecordError as e:
            return error_response(str(e), 400)

        try:
            container.punch_service.delete_punch(user, target)
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Unexpected error while deleting a punch")
            return error_response("System error while deleting the punch", 500)

        return jsonify({"success": True}), 200
