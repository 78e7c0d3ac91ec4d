"""Unit tests for PatientRepository email uniqueness and CRUD."""

import json

import pytest

from dental_admin.core.exceptions import DuplicateEmailError, NotFoundError
from dental_admin.domain.entities import Patient
from dental_admin.repositories.kv_store import PATIENTS_KEY


def _patient(email, name="Jane Doe"):
    return Patient(
        name=name,
        dob="1990-05-01",
        contact="5550100",
        email=email,
        health_info="",
    )


@pytest.mark.unit
@pytest.mark.repositories
@pytest.mark.patient
class TestPatientRepository:
    def test_create_assigns_id_and_persists(self, patient_repo, store):
        saved = patient_repo.upsert(_patient("jane@example.com"))

        assert saved.id
        stored = json.loads(store.get(PATIENTS_KEY))
        assert stored[0]["email"] == "jane@example.com"
        assert stored[0]["healthInfo"] == ""

    def test_duplicate_email_on_create_is_rejected(self, patient_repo, store):
        patient_repo.upsert(_patient("jane@example.com"))
        before = store.get(PATIENTS_KEY)

        with pytest.raises(DuplicateEmailError) as exc_info:
            patient_repo.upsert(_patient("jane@example.com", name="Other Jane"))

        assert exc_info.value.message == "A patient with this email already exists"
        assert store.get(PATIENTS_KEY) == before

    def test_email_match_is_case_sensitive(self, patient_repo):
        patient_repo.upsert(_patient("jane@example.com"))
        patient_repo.upsert(_patient("Jane@example.com"))

        assert len(patient_repo.get_all()) == 2

    def test_edit_may_keep_own_email(self, patient_repo):
        saved = patient_repo.upsert(_patient("jane@example.com"))

        updated = patient_repo.upsert(
            _patient("jane@example.com", name="Jane Smith"), existing_id=saved.id
        )

        assert updated.id == saved.id
        assert patient_repo.get_by_id(saved.id).name == "Jane Smith"

    def test_edit_to_another_patients_email_is_rejected(self, patient_repo):
        patient_repo.upsert(_patient("jane@example.com"))
        other = patient_repo.upsert(_patient("john@example.com", name="John"))

        with pytest.raises(DuplicateEmailError):
            patient_repo.upsert(_patient("jane@example.com"), existing_id=other.id)

    def test_edit_unknown_patient_raises_not_found(self, patient_repo):
        with pytest.raises(NotFoundError):
            patient_repo.upsert(_patient("x@example.com"), existing_id="missing")

    def test_get_by_email(self, patient_repo):
        saved = patient_repo.upsert(_patient("jane@example.com"))

        assert patient_repo.get_by_email("jane@example.com").id == saved.id
        assert patient_repo.get_by_email("nobody@example.com") is None

    def test_delete(self, patient_repo):
        saved = patient_repo.upsert(_patient("jane@example.com"))

        assert patient_repo.delete(saved.id) is True
        assert patient_repo.delete(saved.id) is False
        assert patient_repo.get_all() == []


@pytest.mark.unit
@pytest.mark.repositories
@pytest.mark.patient
class TestPatientEntriesPreserved:
    def test_upsert_and_delete_leave_other_entries_untouched(self, store, patient_repo):
        legacy = {"id": "p1", "name": "Old", "email": "old@example.com", "insurer": "ACME"}
        store.set(PATIENTS_KEY, json.dumps([legacy, 7]))

        saved = patient_repo.upsert(_patient("jane@example.com"))
        assert json.loads(store.get(PATIENTS_KEY))[:2] == [legacy, 7]

        patient_repo.delete(saved.id)
        assert json.loads(store.get(PATIENTS_KEY)) == [legacy, 7]
