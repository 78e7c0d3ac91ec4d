"""Appointment repository implementation following SOLID principles.

Appointments are stored as one JSON array under the "incidents" key. Each
appointment occupies a fixed window starting at its appointmentDate; a write
is rejected when the candidate's window overlaps any other stored
appointment. Overlaps already present in the stored data are not repaired.
Records a write does not target are written back exactly as stored.
"""

import logging
import uuid
from dataclasses import replace
from datetime import datetime
from typing import List, Optional

from dental_admin.core import config
from dental_admin.core.exceptions import (
    NotFoundError,
    SchedulingConflictError,
    ValidationError,
)
from dental_admin.domain.entities import Appointment
from dental_admin.domain.interfaces import IAppointmentRepository, IKeyValueStore
from dental_admin.domain.scheduling import find_conflict, parse_timestamp

from .json_collection import JsonCollection, entry_has_id, find_entry_index
from .kv_store import INCIDENTS_KEY

logger = logging.getLogger(__name__)


class AppointmentRepository(IAppointmentRepository):
    """Repository for Appointment persistence and the no-overlap rule."""

    def __init__(
        self, store: IKeyValueStore, window_minutes: Optional[int] = None
    ) -> None:
        self.collection = JsonCollection(store, INCIDENTS_KEY)
        self.window_minutes = window_minutes or config.APPOINTMENT_WINDOW_MINUTES

    def get_all(self) -> List[Appointment]:
        return [Appointment.from_dict(record) for record in self.collection.load()]

    def get_by_id(self, appointment_id: str) -> Optional[Appointment]:
        return next((a for a in self.get_all() if a.id == appointment_id), None)

    def get_by_patient_id(self, patient_id: str) -> List[Appointment]:
        return [a for a in self.get_all() if a.patient_id == patient_id]

    def get_by_date_range(self, start: datetime, end: datetime) -> List[Appointment]:
        """Appointments starting in [start, end), ordered by start."""
        in_range = [
            a for a in self.get_all() if a.start is not None and start <= a.start < end
        ]
        return sorted(in_range, key=lambda a: a.start)

    def find_conflicts(
        self, start: datetime, exclude_id: Optional[str] = None
    ) -> Optional[Appointment]:
        """Return the first stored appointment whose window overlaps start's."""
        return find_conflict(
            start, self.get_all(), exclude_id=exclude_id, window_minutes=self.window_minutes
        )

    def upsert(
        self, candidate: Appointment, existing_id: Optional[str] = None
    ) -> Appointment:
        """Create or replace an appointment.

        Business Rules:
        - appointmentDate must be a parseable timestamp
        - The candidate's window may not overlap any other appointment's window
        - An appointment being edited never conflicts with itself
        - One full-collection write on success, none on conflict
        """
        try:
            new_start = parse_timestamp(candidate.appointment_date)
        except ValueError as e:
            raise ValidationError(
                "Appointment date is required and must be a valid timestamp",
                details={"appointmentDate": candidate.appointment_date},
            ) from e

        entries = self.collection.load_entries()
        appointments = [Appointment.from_dict(e) for e in entries if isinstance(e, dict)]

        clash = find_conflict(
            new_start,
            appointments,
            exclude_id=existing_id,
            window_minutes=self.window_minutes,
        )
        if clash is not None:
            logger.info(
                "Appointment conflict detected",
                extra={
                    "context": {
                        "appointment_date": candidate.appointment_date,
                        "conflicting_id": clash.id,
                        "existing_id": existing_id,
                    }
                },
            )
            raise SchedulingConflictError(clash.id)

        if existing_id is not None:
            index = find_entry_index(entries, existing_id)
            if index is None:
                raise NotFoundError("Appointment", existing_id)
            saved = replace(candidate, id=existing_id)
            entries[index] = saved.to_dict()
        else:
            saved = replace(candidate, id=str(uuid.uuid4()))
            entries.append(saved.to_dict())

        self.collection.save(entries)
        logger.debug(
            "Appointment saved",
            extra={
                "context": {
                    "appointment_id": saved.id,
                    "updated": existing_id is not None,
                }
            },
        )
        return saved

    def replace_files(self, appointment_id: str, files) -> Appointment:
        """Swap an appointment's attachment list without re-running the overlap check."""
        entries = self.collection.load_entries()
        index = find_entry_index(entries, appointment_id)
        if index is None:
            raise NotFoundError("Appointment", appointment_id)
        entries[index] = {**entries[index], "files": [f.to_dict() for f in files]}
        self.collection.save(entries)
        return Appointment.from_dict(entries[index])

    def delete(self, appointment_id: str) -> bool:
        entries = self.collection.load_entries()
        remaining = [e for e in entries if not entry_has_id(e, appointment_id)]
        if len(remaining) == len(entries):
            return False
        self.collection.save(remaining)
        logger.debug(
            "Appointment deleted", extra={"context": {"appointment_id": appointment_id}}
        )
        return True
