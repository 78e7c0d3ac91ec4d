"""Patient repository implementation following SOLID principles.

Patients are stored as one JSON array under the "patients" key. Every write
replaces the whole array, after checking that no other patient uses the
candidate's email address.
"""

import logging
import uuid
from dataclasses import replace
from typing import List, Optional

from dental_admin.core.exceptions import DuplicateEmailError, NotFoundError
from dental_admin.domain.entities import Patient
from dental_admin.domain.interfaces import IKeyValueStore, IPatientRepository

from .json_collection import JsonCollection, entry_has_id, find_entry_index
from .kv_store import PATIENTS_KEY

logger = logging.getLogger(__name__)


class PatientRepository(IPatientRepository):
    """Repository for Patient persistence operations."""

    def __init__(self, store: IKeyValueStore) -> None:
        self.collection = JsonCollection(store, PATIENTS_KEY)

    def get_all(self) -> List[Patient]:
        return [Patient.from_dict(record) for record in self.collection.load()]

    def get_by_id(self, patient_id: str) -> Optional[Patient]:
        return next((p for p in self.get_all() if p.id == patient_id), None)

    def get_by_email(self, email: str) -> Optional[Patient]:
        return next((p for p in self.get_all() if p.email == email), None)

    def upsert(self, candidate: Patient, existing_id: Optional[str] = None) -> Patient:
        """Create or replace a patient.

        Business Rules:
        - No other patient may have the same email (case-sensitive)
        - Editing keeps the record's identifier; creating assigns a new one
        """
        entries = self.collection.load_entries()
        patients = [Patient.from_dict(e) for e in entries if isinstance(e, dict)]

        duplicate = next(
            (
                p
                for p in patients
                if p.email == candidate.email
                and (existing_id is None or p.id != existing_id)
            ),
            None,
        )
        if duplicate is not None:
            logger.info(
                "Rejected patient with duplicate email",
                extra={
                    "context": {"email": candidate.email, "existing_id": duplicate.id}
                },
            )
            raise DuplicateEmailError(candidate.email)

        if existing_id is not None:
            index = find_entry_index(entries, existing_id)
            if index is None:
                raise NotFoundError("Patient", existing_id)
            saved = replace(candidate, id=existing_id)
            entries[index] = saved.to_dict()
        else:
            saved = replace(candidate, id=str(uuid.uuid4()))
            entries.append(saved.to_dict())

        self.collection.save(entries)
        logger.debug(
            "Patient saved",
            extra={"context": {"patient_id": saved.id, "updated": existing_id is not None}},
        )
        return saved

    def delete(self, patient_id: str) -> bool:
        """Remove a patient. Appointments referencing it are left untouched."""
        entries = self.collection.load_entries()
        remaining = [e for e in entries if not entry_has_id(e, patient_id)]
        if len(remaining) == len(entries):
            return False
        self.collection.save(remaining)
        logger.debug("Patient deleted", extra={"context": {"patient_id": patient_id}})
        return True
