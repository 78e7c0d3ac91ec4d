"""Dashboard KPIs and chart series computed from the stored collections."""

import calendar
from collections import Counter, defaultdict
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from dental_admin.domain.entities import AppointmentStatus
from dental_admin.domain.scheduling import local_now
from dental_admin.repositories.appointment_repo import AppointmentRepository
from dental_admin.repositories.patient_repo import PatientRepository

UPCOMING_LIMIT = 10
TOP_PATIENTS_LIMIT = 3
STATUS_WINDOW_DAYS = 30
TREATMENT_MONTHS = 6
UNSPECIFIED_TREATMENT = "Unspecified"


class DashboardService:
    """Builds the admin dashboard payload."""

    def __init__(
        self,
        appointment_repo: AppointmentRepository,
        patient_repo: PatientRepository,
    ) -> None:
        self.appointment_repo = appointment_repo
        self.patient_repo = patient_repo

    def summary(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        now = now or local_now()
        appointments = self.appointment_repo.get_all()
        patients = self.patient_repo.get_all()
        names = {p.id: p.name for p in patients}

        future = sorted(
            (a for a in appointments if a.start is not None and a.start > now),
            key=lambda a: a.start,
        )
        pending = [a for a in appointments if a.status == AppointmentStatus.PENDING.value]
        completed = [
            a for a in appointments if a.status == AppointmentStatus.COMPLETED.value
        ]

        per_patient = Counter(a.patient_id for a in appointments if a.patient_id)
        # sorted() is stable, so ties keep the stored patient order
        top_patients = sorted(
            patients, key=lambda p: per_patient.get(p.id, 0), reverse=True
        )[:TOP_PATIENTS_LIMIT]

        return {
            "kpis": {
                "upcomingAppointments": len(future),
                "totalPatients": len(patients),
                "pendingTreatments": len(pending),
                "revenue": round(sum(a.cost for a in completed), 2),
            },
            "upcomingAppointments": [
                {
                    "id": a.id,
                    "patientId": a.patient_id,
                    "patientName": names.get(a.patient_id, "Unknown"),
                    "title": a.title,
                    "appointmentDate": a.appointment_date,
                    "status": a.status,
                }
                for a in future[:UPCOMING_LIMIT]
            ],
            "topPatients": [
                {
                    "id": p.id,
                    "name": p.name,
                    "email": p.email,
                    "appointmentCount": per_patient.get(p.id, 0),
                }
                for p in top_patients
            ],
            "charts": {
                "appointmentsByStatus": self._status_counts(appointments, now),
                "revenueByTreatment": self._revenue_by_treatment(completed, now),
                "treatmentsPerMonth": self._treatments_per_month(appointments, now),
                "dailyVisits": self._daily_visits(appointments),
            },
        }

    @staticmethod
    def _status_counts(appointments, now: datetime) -> List[Dict[str, Any]]:
        since = now - timedelta(days=STATUS_WINDOW_DAYS)
        counts = Counter(
            a.status for a in appointments if a.start is not None and since <= a.start <= now
        )
        return [
            {"status": status, "count": counts.get(status, 0)}
            for status in AppointmentStatus.values()
        ]

    @staticmethod
    def _revenue_by_treatment(completed, now: datetime) -> List[Dict[str, Any]]:
        """Year-to-date revenue of completed appointments grouped by treatment."""
        totals: Dict[str, float] = defaultdict(float)
        for a in completed:
            if a.start is None or a.start.year != now.year:
                continue
            totals[a.treatment or UNSPECIFIED_TREATMENT] += a.cost
        return [
            {"treatment": treatment, "revenue": round(value, 2)}
            for treatment, value in sorted(
                totals.items(), key=lambda item: item[1], reverse=True
            )
        ]

    @staticmethod
    def _treatments_per_month(appointments, now: datetime) -> List[Dict[str, Any]]:
        """Non-cancelled appointments per month for the last six months, oldest first."""
        months = []
        year, month = now.year, now.month
        for _ in range(TREATMENT_MONTHS):
            months.append((year, month))
            month -= 1
            if month == 0:
                year, month = year - 1, 12
        months.reverse()

        counts = Counter(
            (a.start.year, a.start.month)
            for a in appointments
            if a.start is not None and a.status != AppointmentStatus.CANCELLED.value
        )
        return [
            {
                "month": calendar.month_abbr[m],
                "year": y,
                "treatments": counts.get((y, m), 0),
            }
            for y, m in months
        ]

    @staticmethod
    def _daily_visits(appointments) -> List[Dict[str, Any]]:
        counts = Counter(
            a.start.weekday()
            for a in appointments
            if a.start is not None and a.status != AppointmentStatus.CANCELLED.value
        )
        return [
            {"day": calendar.day_abbr[day], "visits": counts.get(day, 0)}
            for day in range(7)
        ]
