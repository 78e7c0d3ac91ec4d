# Repositories package initialization

from .appointment_repo import AppointmentRepository
from .kv_store import InMemoryKeyValueStore, SqlKeyValueStore
from .patient_repo import PatientRepository
from .user_repo import UserRepository

__all__ = [
    "AppointmentRepository",
    "InMemoryKeyValueStore",
    "PatientRepository",
    "SqlKeyValueStore",
    "UserRepository",
]
