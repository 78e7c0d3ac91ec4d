from typing import Any, Dict

from dental_admin.domain.entities import User
from dental_admin.repositories.appointment_repo import AppointmentRepository
from dental_admin.repositories.patient_repo import PatientRepository


class ProfileService:
    """Personal details and appointment history for a Patient login."""

    def __init__(
        self,
        patient_repo: PatientRepository,
        appointment_repo: AppointmentRepository,
    ) -> None:
        self.patient_repo = patient_repo
        self.appointment_repo = appointment_repo

    def get_profile(self, user: User) -> Dict[str, Any]:
        """The linked patient (None if missing) and its appointments."""
        if not user.patient_id:
            return {"patient": None, "appointments": []}

        patient = self.patient_repo.get_by_id(user.patient_id)
        appointments = self.appointment_repo.get_by_patient_id(user.patient_id)
        return {
            "patient": patient.to_dict() if patient else None,
            "appointments": [a.to_dict() for a in appointments],
        }
