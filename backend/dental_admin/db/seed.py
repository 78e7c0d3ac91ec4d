"""
Database seeding and initialization functions.

Writes the demo users, patients and appointments into the key-value store.
Seeding is idempotent: a key that already holds a value (even an empty
array) is left alone unless force=True.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from dental_admin.domain.interfaces import IKeyValueStore
from dental_admin.domain.scheduling import local_now
from dental_admin.repositories.json_collection import JsonCollection
from dental_admin.repositories.kv_store import (
    INCIDENTS_KEY,
    PATIENTS_KEY,
    USERS_KEY,
)

logger = logging.getLogger(__name__)


def mock_users() -> List[Dict[str, Any]]:
    return [
        {
            "id": "1",
            "role": "Admin",
            "email": "admin@entnt.in",
            "password": "admin123",
        },
        {
            "id": "2",
            "role": "Patient",
            "email": "john@entnt.in",
            "password": "patient123",
            "patientId": "p1",
        },
    ]


def mock_patients(count: int = 15) -> List[Dict[str, Any]]:
    patients = []
    for index in range(1, count + 1):
        patients.append(
            {
                "id": f"p{index}",
                "name": f"Patient {index}",
                "dob": f"1990-01-{index % 28 + 1:02d}",
                "contact": f"99999999{index:02d}",
                "email": f"patient{index}@entnt.in",
                "healthInfo": (
                    "No known issues" if index % 2 == 0 else "Allergic to penicillin"
                ),
            }
        )
    return patients


def _mock_status(index: int) -> str:
    if index % 4 == 0:
        return "Cancelled"
    if index % 3 == 0:
        return "Rescheduled"
    if index % 2 == 0:
        return "Pending"
    return "Completed"


def mock_incidents(
    now: Optional[datetime] = None, count: int = 10
) -> List[Dict[str, Any]]:
    """Appointments tomorrow, one per hour from 09:00, each with a follow-up a week later.

    "Tomorrow" and the clock times are taken in the application timezone (TZ,
    UTC by default), so the seeded schedule reads as 09:00 to 18:00 locally.
    """
    now = now or local_now()
    tomorrow = (now + timedelta(days=1)).replace(
        hour=0, minute=0, second=0, microsecond=0
    )

    incidents = []
    for i in range(count):
        index = i + 1
        appointment_date = tomorrow + timedelta(hours=9 + i)
        next_appointment_date = appointment_date + timedelta(days=7)
        incidents.append(
            {
                "id": f"i{index}",
                "patientId": f"p{index}",
                "title": f"Dental Appointment {index}",
                "description": f"Routine follow-up for issue {index}",
                "comments": f"Observation {index}",
                "appointmentDate": appointment_date.isoformat(timespec="seconds"),
                "nextAppointmentDate": next_appointment_date.isoformat(
                    timespec="seconds"
                ),
                "cost": 100 + index * 10,
                "status": _mock_status(index),
                "treatment": f"Procedure {index}",
                "files": [],
            }
        )
    return incidents


def seed_mock_data(
    store: IKeyValueStore, now: Optional[datetime] = None, force: bool = False
) -> List[str]:
    """Write the demo collections that are missing from the store.

    Returns:
        The keys that were written.
    """
    seeds = {
        USERS_KEY: mock_users(),
        PATIENTS_KEY: mock_patients(),
        INCIDENTS_KEY: mock_incidents(now),
    }

    written = []
    for key, records in seeds.items():
        collection = JsonCollection(store, key)
        if collection.exists() and not force:
            continue
        collection.save(records)
        written.append(key)

    if written:
        logger.info(
            "Mock data seeded",
            extra={"context": {"keys": written, "force": force}},
        )
    else:
        logger.debug("Mock data already present; nothing seeded")
    return written
