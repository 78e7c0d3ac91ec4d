"""
Integration tests for the appointment, calendar and dashboard endpoints.
"""

import io

import pytest

from dental_admin.repositories.kv_store import INCIDENTS_KEY


def _payload(date, **overrides):
    payload = {
        "patientId": "p2",
        "title": "Root canal",
        "description": "Lower molar",
        "appointmentDate": date,
        "treatment": "Endodontics",
        "cost": 300,
        "status": "Pending",
    }
    payload.update(overrides)
    return payload


@pytest.mark.integration
@pytest.mark.api
@pytest.mark.appointment
class TestAppointmentEndpoints:
    def test_list_includes_patient_name(self, admin_client):
        body = admin_client.get("/api/appointments").get_json()

        assert len(body["data"]) == 10
        assert body["data"][0]["patientName"] == "Patient 1"

    def test_search(self, admin_client):
        body = admin_client.get("/api/appointments?q=rescheduled").get_json()

        assert {a["id"] for a in body["data"]} == {"i3", "i6", "i9"}

    def test_create(self, admin_client):
        response = admin_client.post(
            "/api/appointments", json=_payload("2025-06-05T10:00")
        )

        assert response.status_code == 201
        assert response.get_json()["data"]["cost"] == 300.0

    def test_conflict_returns_409_and_stores_nothing(self, admin_client, seeded_store):
        before = seeded_store.get(INCIDENTS_KEY)

        response = admin_client.post(
            "/api/appointments", json=_payload("2025-06-03T09:20")
        )

        body = response.get_json()
        assert response.status_code == 409
        assert body["error"] == "scheduling_conflict"
        assert body["details"] == {"conflicting_id": "i1"}
        assert seeded_store.get(INCIDENTS_KEY) == before

    def test_edit_in_place_does_not_conflict_with_itself(self, admin_client):
        response = admin_client.put(
            "/api/appointments/i1",
            json=_payload("2025-06-03T09:10", patientId="p1", status="Completed"),
        )

        assert response.status_code == 200
        assert response.get_json()["data"]["status"] == "Completed"

    def test_update_unknown(self, admin_client):
        response = admin_client.put(
            "/api/appointments/missing", json=_payload("2025-06-07T09:00")
        )

        assert response.status_code == 404

    def test_delete(self, admin_client):
        assert admin_client.delete("/api/appointments/i2").status_code == 200
        assert admin_client.get("/api/appointments/i2").status_code == 404

    def test_file_upload_download_and_delete(self, admin_client):
        upload = admin_client.post(
            "/api/appointments/i1/files",
            data={"files": (io.BytesIO(b"x-ray bytes"), "xray.png", "image/png")},
            content_type="multipart/form-data",
        )
        assert upload.status_code == 201
        attached = upload.get_json()["data"]["files"][0]
        assert attached["name"] == "xray.png"
        assert attached["size"] == len(b"x-ray bytes")

        download = admin_client.get(f"/api/appointments/i1/files/{attached['id']}")
        assert download.status_code == 200
        assert download.data == b"x-ray bytes"
        assert download.mimetype == "image/png"

        removed = admin_client.delete(f"/api/appointments/i1/files/{attached['id']}")
        assert removed.get_json()["data"]["files"] == []

    def test_upload_without_files(self, admin_client):
        response = admin_client.post(
            "/api/appointments/i1/files", data={}, content_type="multipart/form-data"
        )

        assert response.status_code == 400


@pytest.mark.integration
@pytest.mark.api
class TestCalendarAndDashboard:
    def test_calendar_events_in_range(self, admin_client):
        body = admin_client.get(
            "/api/calendar/events?start=2025-06-03T09:00&end=2025-06-03T11:00"
        ).get_json()

        assert [e["id"] for e in body["data"]] == ["i1", "i2"]
        assert body["data"][0]["end"] == "2025-06-03T09:30:00"

    def test_calendar_rejects_bad_range(self, admin_client):
        response = admin_client.get(
            "/api/calendar/events?start=2025-06-04&end=2025-06-03"
        )

        assert response.status_code == 400

    def test_calendar_rejects_bad_timestamp(self, admin_client):
        response = admin_client.get("/api/calendar/events?start=yesterday")

        assert response.status_code == 400
        assert response.get_json()["details"] == {"field": "start"}

    def test_dashboard_shape(self, admin_client):
        body = admin_client.get("/api/dashboard").get_json()

        assert set(body["data"]) == {"kpis", "upcomingAppointments", "topPatients", "charts"}
        assert body["data"]["kpis"]["totalPatients"] == 15
