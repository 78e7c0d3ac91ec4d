# Schemas package initialization

from .dtos import (
    AccountUpdateRequest,
    AppointmentRequest,
    LoginRequest,
    PatientRequest,
)

__all__ = [
    "AccountUpdateRequest",
    "AppointmentRequest",
    "LoginRequest",
    "PatientRequest",
]
