"""
Integration tests for login, logout, account settings and role gating.
"""

import json

import pytest

from dental_admin.repositories.kv_store import AUTH_USER_KEY


@pytest.mark.integration
@pytest.mark.auth
class TestLogin:
    def test_admin_login(self, client, seeded_store):
        response = client.post(
            "/auth/login", json={"email": "admin@entnt.in", "password": "admin123"}
        )

        body = response.get_json()
        assert response.status_code == 200
        assert body["success"] is True
        assert body["data"] == {"id": "1", "role": "Admin", "email": "admin@entnt.in"}
        assert json.loads(seeded_store.get(AUTH_USER_KEY))["id"] == "1"

    def test_invalid_credentials(self, client):
        response = client.post(
            "/auth/login", json={"email": "admin@entnt.in", "password": "nope"}
        )

        body = response.get_json()
        assert response.status_code == 401
        assert body["success"] is False
        assert body["message"] == "Invalid email or password"

    def test_missing_fields(self, client):
        response = client.post("/auth/login", json={})

        assert response.status_code == 400
        assert response.get_json()["error"] == "validation_error"

    def test_me_requires_login(self, client):
        response = client.get("/auth/me")

        assert response.status_code == 401
        assert response.get_json()["error"] == "unauthorized"

    def test_me_returns_current_user(self, patient_client):
        body = patient_client.get("/auth/me").get_json()

        assert body["data"]["patientId"] == "p1"
        assert "password" not in body["data"]

    def test_logout(self, admin_client, seeded_store):
        response = admin_client.post("/auth/logout")

        assert response.status_code == 200
        assert seeded_store.get(AUTH_USER_KEY) is None
        assert admin_client.get("/auth/me").status_code == 401


@pytest.mark.integration
@pytest.mark.auth
class TestAccountSettings:
    def test_update_account(self, admin_client, client):
        response = admin_client.put(
            "/account", json={"email": "boss@entnt.in", "password": "s3cret"}
        )

        assert response.status_code == 200
        assert response.get_json()["data"]["email"] == "boss@entnt.in"
        relogin = client.post(
            "/auth/login", json={"email": "boss@entnt.in", "password": "s3cret"}
        )
        assert relogin.status_code == 200

    def test_email_taken_by_other_user(self, admin_client):
        response = admin_client.put(
            "/account", json={"email": "john@entnt.in", "password": "x"}
        )

        assert response.status_code == 409
        assert response.get_json()["error"] == "duplicate_email"


@pytest.mark.integration
@pytest.mark.auth
class TestRoleGating:
    @pytest.mark.parametrize(
        "path",
        ["/api/patients", "/api/appointments", "/api/calendar/events", "/api/dashboard"],
    )
    def test_admin_endpoints_reject_anonymous(self, client, path):
        assert client.get(path).status_code == 401

    @pytest.mark.parametrize(
        "path",
        ["/api/patients", "/api/appointments", "/api/calendar/events", "/api/dashboard"],
    )
    def test_admin_endpoints_reject_patients(self, patient_client, path):
        response = patient_client.get(path)

        assert response.status_code == 403
        assert response.get_json()["error"] == "forbidden"

    def test_profile_rejects_admin(self, admin_client):
        assert admin_client.get("/api/profile").status_code == 403

    def test_profile_for_patient(self, patient_client):
        body = patient_client.get("/api/profile").get_json()

        assert body["data"]["patient"]["id"] == "p1"
        assert [a["id"] for a in body["data"]["appointments"]] == ["i1"]
