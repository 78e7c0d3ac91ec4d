"""
Health controller - health check and client configuration endpoints.

No authentication required.
"""

import logging

from flask import Blueprint

from dental_admin.core import config
from dental_admin.core.api_utils import api_response, get_store
from dental_admin.core.exceptions import StorageParseError
from dental_admin.repositories.json_collection import JsonCollection
from dental_admin.repositories.kv_store import (
    INCIDENTS_KEY,
    PATIENTS_KEY,
    USERS_KEY,
)

logger = logging.getLogger(__name__)

health_bp = Blueprint("health", __name__)


@health_bp.route("/health", methods=["GET"])
def health_check():
    """
    Report whether each collection is present and readable.

    Example response data:
        {"status": "healthy", "collections": {"users": "ok", "patients": "ok", "incidents": "missing"}}

    Status codes:
        200: Always; "degraded" means at least one collection is unreadable
    """
    store = get_store()
    collections = {}
    for key in (USERS_KEY, PATIENTS_KEY, INCIDENTS_KEY):
        try:
            records = JsonCollection(store, key).decode()
            collections[key] = "missing" if records is None else "ok"
        except StorageParseError as e:
            logger.warning(
                "Health check: collection unreadable",
                extra={"context": {"key": key, "reason": e.reason}},
            )
            collections[key] = "corrupted"

    status = "degraded" if "corrupted" in collections.values() else "healthy"
    return api_response(
        True,
        f"Service is {status}",
        data={"status": status, "collections": collections},
    )


@health_bp.route("/api/config", methods=["GET"])
def client_config():
    """Settings the browser client needs (search debounce, slot length)."""
    return api_response(
        True,
        "Client configuration",
        data={
            "appointmentWindowMinutes": config.APPOINTMENT_WINDOW_MINUTES,
            "searchDebounceMs": config.SEARCH_DEBOUNCE_MS,
        },
    )
