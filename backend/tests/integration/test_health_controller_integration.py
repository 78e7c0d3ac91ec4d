"""Integration tests for health, client config and error envelopes."""

import pytest

from dental_admin.repositories.kv_store import PATIENTS_KEY


@pytest.mark.integration
@pytest.mark.api
class TestHealth:
    def test_healthy(self, client):
        body = client.get("/health").get_json()

        assert body["data"] == {
            "status": "healthy",
            "collections": {"users": "ok", "patients": "ok", "incidents": "ok"},
        }

    def test_corrupted_collection_is_degraded(self, client, seeded_store):
        seeded_store.set(PATIENTS_KEY, "{{{")

        body = client.get("/health").get_json()

        assert body["data"]["status"] == "degraded"
        assert body["data"]["collections"]["patients"] == "corrupted"

    def test_corrupted_patients_list_reads_empty(self, admin_client, seeded_store):
        seeded_store.set(PATIENTS_KEY, "not json")

        body = admin_client.get("/api/patients").get_json()

        assert body["success"] is True
        assert body["data"] == []

    def test_client_config(self, client):
        body = client.get("/api/config").get_json()

        assert body["data"]["appointmentWindowMinutes"] == 30
        assert body["data"]["searchDebounceMs"] >= 0

    def test_unknown_route_uses_json_envelope(self, client):
        response = client.get("/nope")

        assert response.status_code == 404
        assert response.get_json()["success"] is False
