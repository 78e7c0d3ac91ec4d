"""
Custom exceptions for the application.
Following SOLID principles - centralized error handling.

Every error the repositories and services raise derives from
DentalAdminError, so controllers can map them to HTTP responses in one place.
"""

from typing import Optional


class DentalAdminError(Exception):
    """Base class for expected, user-facing application errors."""

    error_code = "application_error"
    status_code = 400

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(DentalAdminError):
    """A required field is missing or a value is malformed."""

    error_code = "validation_error"
    status_code = 400


class SchedulingConflictError(DentalAdminError):
    """
    Exception raised when an appointment window overlaps another appointment.

    The write is rejected as a whole; nothing is persisted.
    """

    error_code = "scheduling_conflict"
    status_code = 409

    def __init__(self, conflicting_id: str, message: Optional[str] = None):
        super().__init__(
            message
            or "A patient already has an appointment at this time. "
            "Please choose a different time.",
            details={"conflicting_id": conflicting_id},
        )
        self.conflicting_id = conflicting_id


class DuplicateEmailError(DentalAdminError):
    """Exception raised when an email address is already taken by another record."""

    error_code = "duplicate_email"
    status_code = 409

    def __init__(self, email: str, message: Optional[str] = None):
        super().__init__(
            message or "A patient with this email already exists",
            details={"email": email},
        )
        self.email = email


class StorageParseError(DentalAdminError):
    """
    Exception raised when a persisted value is not valid JSON of the expected shape.

    Collection readers catch it and degrade to an empty collection.
    """

    error_code = "storage_parse_error"
    status_code = 500

    def __init__(self, key: str, reason: str):
        super().__init__(
            f"Stored value for '{key}' could not be parsed: {reason}",
            details={"key": key},
        )
        self.key = key
        self.reason = reason


class NotFoundError(DentalAdminError):
    """The requested record does not exist."""

    error_code = "not_found"
    status_code = 404

    def __init__(self, resource: str, record_id: Optional[str] = None):
        super().__init__(
            f"{resource} not found",
            details={"id": record_id} if record_id is not None else None,
        )
        self.resource = resource
        self.record_id = record_id


class AuthenticationError(DentalAdminError):
    """Email and password did not match any user."""

    error_code = "invalid_credentials"
    status_code = 401

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)
