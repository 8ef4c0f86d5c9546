from __future__ import annotations

import logging
from typing import Any, Dict

from flask import Flask, jsonify, request

from ..core.constants import (
    ERROR_CHECK_IN,
    ERROR_CHECK_OUT,
    ERROR_CHECKED_IN,
    ERROR_SEARCH,
    ERROR_STUDENTS,
)
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    """JSON API served by the relational store."""

    service = container.attendance_service

    def _json_body() -> Dict[str, Any]:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}

    def _error(message: str, status: int):
        return jsonify({"error": message}), status

    @app.route("/api/health", methods=["GET"], endpoint="api_health")
    def api_health():
        return jsonify({"status": "ok"})

    @app.route("/api/checkin", methods=["POST"], endpoint="api_checkin")
    def api_checkin():
        data = _json_body()
        try:
            result = service.check_in(data.get("name"))
            return jsonify(result.to_dict())
        except (ValidationError, ConflictError) as e:
            return _error(str(e), 400)
        except NotFoundError as e:
            return _error(str(e), 404)
        except Exception:
            logger.exception("Check-in error")
            return _error(ERROR_CHECK_IN, 500)

    @app.route("/api/checked-in", methods=["GET"], endpoint="api_checked_in")
    def api_checked_in():
        try:
            return jsonify(service.list_checked_in())
        except Exception:
            logger.exception("Get checked-in error")
            return _error(ERROR_CHECKED_IN, 500)

    @app.route("/api/checkout", methods=["POST"], endpoint="api_checkout")
    def api_checkout():
        data = _json_body()
        try:
            result = service.check_out(data.get("checkInId"), data.get("rating"))
            return jsonify(result.to_dict())
        except (ValidationError, ConflictError) as e:
            return _error(str(e), 400)
        except NotFoundError as e:
            return _error(str(e), 404)
        except Exception:
            logger.exception("Check-out error")
            return _error(ERROR_CHECK_OUT, 500)

    @app.route("/api/students/search", methods=["GET"], endpoint="api_students_search")
    def api_students_search():
        try:
            return jsonify(service.search_visitors(request.args.get("q", "")))
        except Exception:
            logger.exception("Search error")
            return _error(ERROR_SEARCH, 500)

    @app.route("/api/students", methods=["GET"], endpoint="api_students")
    def api_students():
        try:
            return jsonify(service.list_visitors())
        except Exception:
            logger.exception("Get students error")
            return _error(ERROR_STUDENTS, 500)
