"""
Domain package - Pure business logic layer.

This package contains:
- entities.py: Domain entities and their JSON document mapping
- scheduling.py: Appointment window arithmetic
- interfaces.py: Store and repository contracts
"""

from .entities import (
    Appointment,
    AppointmentStatus,
    Patient,
    UploadedFile,
    User,
    UserRole,
)
from .interfaces import (
    IAppointmentReader,
    IAppointmentRepository,
    IAppointmentWriter,
    IKeyValueStore,
    IPatientReader,
    IPatientRepository,
    IPatientWriter,
    IUserRepository,
)

__all__ = [
    # Domain entities
    "User",
    "UserRole",
    "Patient",
    "Appointment",
    "AppointmentStatus",
    "UploadedFile",
    # Store and repository interfaces
    "IKeyValueStore",
    "IPatientRepository",
    "IAppointmentRepository",
    "IUserRepository",
    # Segregated interfaces
    "IPatientReader",
    "IPatientWriter",
    "IAppointmentReader",
    "IAppointmentWriter",
]
