import logging
import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv

# Load environment variables conditionally
# Only load from .env when DATABASE_URL is not already defined by the environment
# Must run before core.config is imported, which reads the environment once
if not os.getenv("DATABASE_URL"):
    load_dotenv()

from flask import Flask  # noqa: E402
from flask_login import LoginManager  # noqa: E402

from dental_admin.core.api_utils import (  # noqa: E402
    STORE_EXTENSION,
    api_response,
    register_error_handlers,
)
from dental_admin.core.config import (  # noqa: E402
    WEAK_SECRETS,
    get_secret_key,
    get_seed_on_startup,
    is_production,
    log_scheduling_config,
    log_timezone_config,
)
from dental_admin.core.limiter_config import limiter  # noqa: E402
from dental_admin.core.logging_config import setup_logging  # noqa: E402

logger = logging.getLogger(__name__)


def _build_store(app: Flask):
    """Return the store passed in config (tests) or the SQL-backed store."""
    store = app.config.pop("STORE", None)
    if store is not None:
        return store

    from dental_admin.db.session import create_tables
    from dental_admin.repositories.kv_store import SqlKeyValueStore

    create_tables()
    return SqlKeyValueStore()


def create_app(config_overrides: Optional[Dict[str, Any]] = None) -> Flask:
    """
    Application factory.

    Args:
        config_overrides: Flask config values applied last. "STORE" may hold
            an IKeyValueStore to use instead of the SQL-backed store.
    """
    app = Flask(__name__)
    production = is_production()

    setup_logging(
        app=app,
        log_level=logging.INFO if production else logging.DEBUG,
        # log_to_file controlled by LOG_TO_FILE env var (1=files, 0=stdout only)
        use_json_format=production,  # JSON logs in production, colored in dev
    )
    log_timezone_config()
    log_scheduling_config()

    # Configuration
    app.config["SECRET_KEY"] = get_secret_key()
    app.config["SESSION_COOKIE_HTTPONLY"] = True
    app.config["SESSION_COOKIE_SAMESITE"] = "Lax"
    app.config["SESSION_COOKIE_SECURE"] = production
    app.config["MAX_CONTENT_LENGTH"] = (
        int(os.getenv("MAX_UPLOAD_MB", "16")) * 1024 * 1024
    )
    app.config["RATELIMIT_ENABLED"] = os.getenv("RATE_LIMIT_ENABLED", "1") != "0"
    app.config["SEED_ON_STARTUP"] = get_seed_on_startup()
    if config_overrides:
        app.config.update(config_overrides)

    # Production validation: fail fast if weak secrets are used
    if production:
        secret_key = app.config["SECRET_KEY"]
        if secret_key in WEAK_SECRETS or len(secret_key) < 32:
            raise ValueError(
                "Production deployment requires strong SECRET_KEY (min 32 chars). "
                "Set FLASK_SECRET_KEY environment variable."
            )

    store = _build_store(app)
    app.extensions[STORE_EXTENSION] = store

    limiter.init_app(app)
    limiter.enabled = app.config["RATELIMIT_ENABLED"]
    if not limiter.enabled:
        logger.info("Rate limiting disabled", extra={"context": {"production": production}})

    login_manager = LoginManager()
    login_manager.init_app(app)

    from dental_admin.repositories.user_repo import UserRepository
    from dental_admin.services.auth_service import AuthService

    @login_manager.user_loader
    def load_user(user_id):
        return AuthService(UserRepository(store)).load_user(user_id)

    @login_manager.unauthorized_handler
    def unauthorized():
        return api_response(
            False, "Authentication required", status_code=401, error="unauthorized"
        )

    register_error_handlers(app)

    from dental_admin.controllers import (
        account_bp,
        appointment_bp,
        auth_bp,
        calendar_bp,
        dashboard_bp,
        health_bp,
        patient_bp,
        profile_bp,
    )

    app.register_blueprint(auth_bp)
    app.register_blueprint(account_bp)
    app.register_blueprint(patient_bp)
    app.register_blueprint(appointment_bp)
    app.register_blueprint(calendar_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(profile_bp)
    app.register_blueprint(health_bp)

    if app.config["SEED_ON_STARTUP"]:
        from dental_admin.db.seed import seed_mock_data

        seed_mock_data(store)

    logger.info(
        "Application created",
        extra={
            "context": {
                "production": production,
                "store": type(store).__name__,
                "blueprints": sorted(app.blueprints),
            }
        },
    )
    return app
