import logging
from typing import List, Optional

from dental_admin.core.exceptions import NotFoundError
from dental_admin.domain.entities import Patient
from dental_admin.repositories.patient_repo import PatientRepository
from dental_admin.schemas.dtos import PatientRequest

from .search import matches_query

logger = logging.getLogger(__name__)


class PatientService:
    """Application service for patient-related use-cases."""

    def __init__(self, patient_repo: PatientRepository) -> None:
        self.patient_repo = patient_repo

    def create_patient(self, request: PatientRequest) -> Patient:
        request.validate()
        patient = self.patient_repo.upsert(request.to_domain())
        logger.info("Patient created", extra={"context": {"patient_id": patient.id}})
        return patient

    def update_patient(self, patient_id: str, request: PatientRequest) -> Patient:
        request.validate()
        patient = self.patient_repo.upsert(request.to_domain(), existing_id=patient_id)
        logger.info("Patient updated", extra={"context": {"patient_id": patient.id}})
        return patient

    def delete_patient(self, patient_id: str) -> None:
        """Delete a patient; their appointments keep the dangling patientId."""
        if not self.patient_repo.delete(patient_id):
            raise NotFoundError("Patient", patient_id)
        logger.info("Patient deleted", extra={"context": {"patient_id": patient_id}})

    def get_patient(self, patient_id: str) -> Patient:
        patient = self.patient_repo.get_by_id(patient_id)
        if patient is None:
            raise NotFoundError("Patient", patient_id)
        return patient

    def list_patients(self, query: Optional[str] = None) -> List[Patient]:
        """All patients whose name, email, contact or health info contains query."""
        patients = self.patient_repo.get_all()
        return [
            p
            for p in patients
            if matches_query(query, p.name, p.email, p.contact, p.health_info)
        ]
