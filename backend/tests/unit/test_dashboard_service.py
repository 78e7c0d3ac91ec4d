"""Unit tests for the dashboard KPIs and chart series."""

from datetime import datetime

import pytest

from dental_admin.repositories.appointment_repo import AppointmentRepository
from dental_admin.repositories.patient_repo import PatientRepository
from dental_admin.services.dashboard_service import DashboardService

BEFORE_SEEDED_DAY = datetime(2025, 6, 2, 8, 0)
AFTER_SEEDED_DAY = datetime(2025, 6, 4, 0, 0)


@pytest.fixture
def service(seeded_store):
    return DashboardService(
        AppointmentRepository(seeded_store, window_minutes=30),
        PatientRepository(seeded_store),
    )


@pytest.mark.unit
@pytest.mark.dashboard
class TestDashboardKpis:
    def test_kpis_before_appointments(self, service):
        summary = service.summary(now=BEFORE_SEEDED_DAY)

        assert summary["kpis"] == {
            "upcomingAppointments": 10,
            "totalPatients": 15,
            "pendingTreatments": 2,
            "revenue": 430.0,
        }
        assert [a["id"] for a in summary["upcomingAppointments"]][:2] == ["i1", "i2"]
        assert summary["upcomingAppointments"][0]["patientName"] == "Patient 1"

    def test_no_upcoming_after_the_seeded_day(self, service):
        summary = service.summary(now=AFTER_SEEDED_DAY)

        assert summary["kpis"]["upcomingAppointments"] == 0
        assert summary["upcomingAppointments"] == []

    def test_top_patients(self, service):
        top = service.summary(now=BEFORE_SEEDED_DAY)["topPatients"]

        assert [p["id"] for p in top] == ["p1", "p2", "p3"]
        assert all(p["appointmentCount"] == 1 for p in top)


@pytest.mark.unit
@pytest.mark.dashboard
class TestDashboardCharts:
    def test_status_counts_cover_recent_past(self, service):
        charts = service.summary(now=AFTER_SEEDED_DAY)["charts"]

        assert charts["appointmentsByStatus"] == [
            {"status": "Pending", "count": 2},
            {"status": "Completed", "count": 3},
            {"status": "Cancelled", "count": 2},
            {"status": "Rescheduled", "count": 3},
        ]

    def test_revenue_by_treatment_sorted_descending(self, service):
        charts = service.summary(now=AFTER_SEEDED_DAY)["charts"]

        assert charts["revenueByTreatment"] == [
            {"treatment": "Procedure 7", "revenue": 170.0},
            {"treatment": "Procedure 5", "revenue": 150.0},
            {"treatment": "Procedure 1", "revenue": 110.0},
        ]

    def test_treatments_per_month_excludes_cancelled(self, service):
        months = service.summary(now=AFTER_SEEDED_DAY)["charts"]["treatmentsPerMonth"]

        assert [m["month"] for m in months] == ["Jan", "Feb", "Mar", "Apr", "May", "Jun"]
        assert months[-1] == {"month": "Jun", "year": 2025, "treatments": 8}
        assert sum(m["treatments"] for m in months[:-1]) == 0

    def test_daily_visits_by_weekday(self, service):
        visits = service.summary(now=AFTER_SEEDED_DAY)["charts"]["dailyVisits"]

        assert [v["day"] for v in visits] == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
        assert visits[1]["visits"] == 8
        assert sum(v["visits"] for v in visits) == 8

    def test_empty_store(self, store):
        service = DashboardService(
            AppointmentRepository(store, window_minutes=30), PatientRepository(store)
        )

        summary = service.summary(now=AFTER_SEEDED_DAY)

        assert summary["kpis"]["totalPatients"] == 0
        assert summary["topPatients"] == []
        assert summary["charts"]["revenueByTreatment"] == []
