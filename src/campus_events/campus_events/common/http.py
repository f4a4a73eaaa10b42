from __future__ import annotations

import logging
from typing import Any, Mapping

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import DomainError, ValidationError

logger = logging.getLogger(__name__)


def json_ok(status_code: int = 200, **payload: Any):
    body = {"success": True}
    body.update(payload)
    return jsonify(body), status_code


def json_error(status: int, error: str, *, details=None, payload: Mapping[str, Any] | None = None):
    body: dict[str, Any] = {"success": False, "error": error}
    if details:
        body["details"] = details
    if payload:
        body.update(payload)
    return jsonify(body), status


def json_body() -> dict:
    """Request body as a dict. Anything that is not a JSON object is a 400."""

    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        if e.status_code >= 409:
            logger.info("%s on %s %s: %s", type(e).__name__, request.method, request.path, e.message)
        return json_error(e.status_code, e.message, details=e.details, payload=e.payload)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        if e.code == 404 and request.path.startswith("/api/"):
            return json_error(404, "Endpoint not found")
        return json_error(e.code or 500, e.name)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        details = [str(e)] if app.config.get("DEBUG") else None
        return json_error(500, "Internal Server Error", details=details)
