from __future__ import annotations

import logging
from datetime import date, datetime
from enum import Enum
from typing import Any

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AccessDeniedError,
    AuthenticationError,
    ConflictError,
    DomainError,
    InvalidSessionError,
    InvalidStudentError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = {
    ValidationError: 400,
    InvalidSessionError: 400,
    InvalidStudentError: 400,
    AuthenticationError: 401,
    AccessDeniedError: 403,
    NotFoundError: 404,
    ConflictError: 409,
}


def json_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def to_jsonable(value: Any) -> Any:
    """Dates to ISO strings, enums to their values, recursively."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        status = 400
        for cls in type(e).__mro__:
            if cls in STATUS_BY_ERROR:
                status = STATUS_BY_ERROR[cls]
                break
        return json_error(str(e), status)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return json_error(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error")
        return json_error("Server error", 500)
