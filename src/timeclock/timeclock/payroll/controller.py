from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import domain_error_response, error_response, login_required
from ..common.logging_utils import get_logger
from ..core.exceptions import DomainError
from ..container import Container

logger = get_logger("payroll.controller")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/hours", methods=["GET"], endpoint="hours")
    @login_required
    def hours(user):
        try:
            offset = int(request.args.get("offset", "0"))
        except ValueError:
            return error_response("offset must be an integer", 400)

        try:
            report = container.hours_report_service.build_period_report(user, offset=offset)
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Unexpected error while building the hours report")
            return error_response("System error while computing hours", 500)

        return jsonify({"success": True, **report.to_dict()}), 200
