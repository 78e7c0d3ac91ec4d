"""
Common API utilities for consistent response formatting across all controllers.
"""

import logging
from datetime import datetime
from typing import Any, Optional

from flask import Flask, current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from dental_admin.core.exceptions import DentalAdminError, ValidationError
from dental_admin.domain.interfaces import IKeyValueStore
from dental_admin.domain.scheduling import parse_timestamp

logger = logging.getLogger(__name__)

STORE_EXTENSION = "dental_admin.store"


def api_response(
    success: bool,
    message: str,
    data: Optional[Any] = None,
    status_code: int = 200,
    error: Optional[str] = None,
    details: Optional[dict] = None,
) -> tuple:
    """
    Standardized API response format for all endpoints.

    Args:
        success: Whether the operation was successful
        message: Human-readable message about the operation
        data: Optional data payload
        status_code: HTTP status code
        error: Machine-readable error code (failures only)
        details: Extra error context (failures only)

    Returns:
        Tuple of (json_response, status_code)
    """
    response: dict = {"success": success, "message": message}

    if data is not None:
        response["data"] = data
    if error is not None:
        response["error"] = error
    if details:
        response["details"] = details

    return jsonify(response), status_code


def get_store() -> IKeyValueStore:
    """Return the key-value store bound to the current application."""
    return current_app.extensions[STORE_EXTENSION]


def get_json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def parse_query_datetime(name: str) -> Optional[datetime]:
    """Read an ISO timestamp from the query string; None when absent."""
    raw = request.args.get(name)
    if not raw:
        return None
    try:
        return parse_timestamp(raw)
    except ValueError:
        raise ValidationError(
            f"Query parameter '{name}' must be an ISO date or timestamp",
            details={"field": name},
        )


def register_error_handlers(app: Flask) -> None:
    """Map application errors to the standard JSON envelope."""

    @app.errorhandler(DentalAdminError)
    def handle_application_error(error: DentalAdminError):
        return api_response(
            False,
            error.message,
            status_code=error.status_code,
            error=error.error_code,
            details=error.details,
        )

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException):
        return api_response(
            False,
            error.description or error.name,
            status_code=error.code or 500,
            error=error.name.lower().replace(" ", "_"),
        )

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):
        logger.error(
            "Unhandled error",
            extra={
                "context": {
                    "path": request.path,
                    "method": request.method,
                    "error": str(error),
                }
            },
            exc_info=True,
        )
        return api_response(
            False, "Internal server error", status_code=500, error="server_error"
        )
