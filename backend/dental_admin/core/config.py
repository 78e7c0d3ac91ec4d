"""
Centralized configuration module for application-wide settings.

Values are read from environment variables (loaded from .env by main.py)
once at import time and exposed as module-level constants. Each section has a
log_* helper that main.create_app() calls during startup.
"""

import logging
import os
from zoneinfo import ZoneInfo

logger = logging.getLogger(__name__)

_TRUTHY = ("true", "1", "yes")


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in _TRUTHY


def _env_int(name: str, default: int, minimum: int = 0) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(
            f"Invalid integer '{raw}' for {name}. Falling back to {default}.",
        )
        return default
    if value < minimum:
        logger.warning(
            f"{name}={value} is below the minimum of {minimum}. "
            f"Falling back to {default}.",
        )
        return default
    return value


# ===========================
# Timezone Configuration
# ===========================


def get_app_timezone() -> ZoneInfo:
    """
    Get the application timezone from environment variable.

    Returns:
        ZoneInfo: Application timezone (defaults to UTC if not configured)

    Environment Variables:
        TZ: Timezone identifier (e.g., 'Asia/Kolkata', 'UTC')
            Default: 'UTC'
    """
    tz_name = os.getenv("TZ", "UTC")

    try:
        return ZoneInfo(tz_name)
    except Exception as e:
        logger.warning(
            f"Invalid timezone '{tz_name}' specified in TZ environment variable. "
            f"Falling back to UTC. Error: {e}"
        )
        return ZoneInfo("UTC")


APP_TZ = get_app_timezone()


def log_timezone_config():
    """Log the active timezone configuration."""
    logger.info(
        "Timezone configuration initialized",
        extra={
            "context": {
                "timezone": str(APP_TZ),
                "tz_env_var": os.getenv("TZ", "UTC"),
            }
        },
    )


# ===========================
# Storage Configuration
# ===========================


def get_database_url() -> str:
    """
    Get the SQLAlchemy URL of the database holding the key-value table.

    Environment Variables:
        DATABASE_URL: SQLAlchemy URL
            Default: 'sqlite:///./dental_admin.db'
            Tests: 'sqlite:///:memory:'
    """
    return os.getenv("DATABASE_URL", "sqlite:///./dental_admin.db")


def get_seed_on_startup() -> bool:
    """
    Get whether the mock users, patients and appointments are seeded at startup.

    Seeding only writes keys that are absent, so leaving this on is harmless
    for an existing dataset.

    Environment Variables:
        SEED_ON_STARTUP: Default 'true'
    """
    return _env_flag("SEED_ON_STARTUP", "true")


SEED_ON_STARTUP = get_seed_on_startup()


# ===========================
# Scheduling Configuration
# ===========================


def get_appointment_window_minutes() -> int:
    """
    Get the length of the window an appointment occupies on the schedule.

    Environment Variables:
        APPOINTMENT_WINDOW_MINUTES: Positive integer, default 30
    """
    return _env_int("APPOINTMENT_WINDOW_MINUTES", 30, minimum=1)


APPOINTMENT_WINDOW_MINUTES = get_appointment_window_minutes()


def get_search_debounce_ms() -> int:
    """
    Get the search debounce delay published to browser clients.

    Environment Variables:
        SEARCH_DEBOUNCE_MS: Non-negative integer, default 300
    """
    return _env_int("SEARCH_DEBOUNCE_MS", 300, minimum=0)


SEARCH_DEBOUNCE_MS = get_search_debounce_ms()


def log_scheduling_config():
    """Log the active scheduling and search configuration."""
    logger.info(
        "Scheduling configuration initialized",
        extra={
            "context": {
                "appointment_window_minutes": APPOINTMENT_WINDOW_MINUTES,
                "search_debounce_ms": SEARCH_DEBOUNCE_MS,
                "seed_on_startup": SEED_ON_STARTUP,
            }
        },
    )


# ===========================
# Security Configuration
# ===========================

WEAK_SECRETS = ("dev-secret-change-me", "secret123")


def get_secret_key() -> str:
    """
    Get the Flask session secret key.

    Environment Variables:
        FLASK_SECRET_KEY: Default 'dev-secret-change-me' (rejected in production)
    """
    return os.getenv("FLASK_SECRET_KEY", "dev-secret-change-me")


def is_production() -> bool:
    return os.getenv("FLASK_ENV", "development") == "production"
