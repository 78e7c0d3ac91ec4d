"""Unit tests for PatientService."""

import pytest

from dental_admin.core.exceptions import DuplicateEmailError, NotFoundError
from dental_admin.repositories.patient_repo import PatientRepository
from dental_admin.schemas.dtos import PatientRequest
from dental_admin.services.patient_service import PatientService


@pytest.fixture
def service(seeded_store):
    return PatientService(PatientRepository(seeded_store))


def _request(**overrides):
    data = {
        "name": "Maria Lopez",
        "dob": "1985-02-14",
        "contact": "5550199",
        "email": "maria@example.com",
        "healthInfo": "Latex allergy",
    }
    data.update(overrides)
    return PatientRequest.from_json(data)


@pytest.mark.unit
@pytest.mark.services
@pytest.mark.patient
class TestPatientService:
    def test_create_and_get(self, service):
        patient = service.create_patient(_request())

        assert service.get_patient(patient.id).email == "maria@example.com"

    def test_create_with_seeded_email_is_rejected(self, service):
        with pytest.raises(DuplicateEmailError):
            service.create_patient(_request(email="patient1@entnt.in"))

    def test_update_unknown_patient(self, service):
        with pytest.raises(NotFoundError):
            service.update_patient("missing", _request())

    def test_delete_unknown_patient(self, service):
        with pytest.raises(NotFoundError):
            service.delete_patient("missing")

    @pytest.mark.search
    def test_search_is_case_insensitive_substring(self, service):
        service.create_patient(_request())

        assert [p.name for p in service.list_patients("LOPEZ")] == ["Maria Lopez"]
        assert [p.name for p in service.list_patients("latex")] == ["Maria Lopez"]
        assert len(service.list_patients("patient1")) == 7  # patient1, 10..15
        assert len(service.list_patients(None)) == 16
