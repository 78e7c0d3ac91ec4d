# Services package initialization
# This file makes the services directory a Python package
# and allows importing service modules

from . import (
    appointment_service,
    auth_service,
    dashboard_service,
    patient_service,
    profile_service,
)

__all__ = [
    "appointment_service",
    "auth_service",
    "dashboard_service",
    "patient_service",
    "profile_service",
]
