"""
Central pytest configuration for the dental clinic admin tests.

Environment variables are set before the application package is imported so
that module-level configuration (config.py) and the lazy engine see them.
"""

import os

# Test configuration (set early so import-time settings use it)
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["TESTING"] = "true"
os.environ["SEED_ON_STARTUP"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "0"  # Disable rate limiting in tests
os.environ["LOG_TO_FILE"] = "0"
os.environ["APPOINTMENT_WINDOW_MINUTES"] = "30"

from datetime import datetime  # noqa: E402

import pytest  # noqa: E402

from dental_admin.db.seed import seed_mock_data  # noqa: E402
from dental_admin.main import create_app  # noqa: E402
from dental_admin.repositories.appointment_repo import AppointmentRepository  # noqa: E402
from dental_admin.repositories.kv_store import InMemoryKeyValueStore  # noqa: E402
from dental_admin.repositories.patient_repo import PatientRepository  # noqa: E402
from dental_admin.repositories.user_repo import UserRepository  # noqa: E402

from tests.config.markers import pytest_configure  # noqa: E402,F401

# A Monday; seeded appointments fall on Tuesday 2025-06-03 from 09:00.
FIXED_NOW = datetime(2025, 6, 2, 8, 0, 0)

ADMIN_CREDENTIALS = {"email": "admin@entnt.in", "password": "admin123"}
PATIENT_CREDENTIALS = {"email": "john@entnt.in", "password": "patient123"}


@pytest.fixture
def store():
    """Empty in-memory key-value store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def seeded_store(store):
    """In-memory store holding the demo users, patients and appointments."""
    seed_mock_data(store, now=FIXED_NOW)
    return store


@pytest.fixture
def patient_repo(store):
    return PatientRepository(store)


@pytest.fixture
def appointment_repo(store):
    return AppointmentRepository(store, window_minutes=30)


@pytest.fixture
def user_repo(store):
    return UserRepository(store)


@pytest.fixture
def app(seeded_store):
    """Flask app bound to the seeded in-memory store."""
    app = create_app(
        {"TESTING": True, "STORE": seeded_store, "SEED_ON_STARTUP": False}
    )
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


def _login(app, credentials):
    test_client = app.test_client()
    response = test_client.post("/auth/login", json=credentials)
    assert response.status_code == 200, response.get_json()
    return test_client


@pytest.fixture
def admin_client(app):
    """Test client with the seeded Admin logged in."""
    return _login(app, ADMIN_CREDENTIALS)


@pytest.fixture
def patient_client(app):
    """Test client with the seeded Patient (linked to p1) logged in."""
    return _login(app, PATIENT_CREDENTIALS)
