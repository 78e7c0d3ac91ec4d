"""
Abstract interfaces for the store and repositories following Interface Segregation Principle.

These interfaces define contracts without implementation details,
enabling dependency injection and easier testing.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from .entities import Appointment, Patient, User


class IKeyValueStore(ABC):
    """Durable string-to-string mapping. No atomicity across keys."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None when the key is absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete key. Removing an absent key is a no-op."""
        pass


class IPatientReader(ABC):
    """Interface for patient read operations."""

    @abstractmethod
    def get_all(self) -> List[Patient]:
        pass

    @abstractmethod
    def get_by_id(self, patient_id: str) -> Optional[Patient]:
        pass

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[Patient]:
        pass


class IPatientWriter(ABC):
    """Interface for patient write operations."""

    @abstractmethod
    def upsert(self, candidate: Patient, existing_id: Optional[str] = None) -> Patient:
        """Create (no existing_id) or replace a patient; enforces email uniqueness."""
        pass

    @abstractmethod
    def delete(self, patient_id: str) -> bool:
        pass


class IPatientRepository(IPatientReader, IPatientWriter):
    """Complete patient repository interface."""

    pass


class IAppointmentReader(ABC):
    """Interface for appointment read operations."""

    @abstractmethod
    def get_all(self) -> List[Appointment]:
        pass

    @abstractmethod
    def get_by_id(self, appointment_id: str) -> Optional[Appointment]:
        pass

    @abstractmethod
    def get_by_patient_id(self, patient_id: str) -> List[Appointment]:
        pass

    @abstractmethod
    def get_by_date_range(self, start: datetime, end: datetime) -> List[Appointment]:
        pass


class IAppointmentWriter(ABC):
    """Interface for appointment write operations."""

    @abstractmethod
    def upsert(
        self, candidate: Appointment, existing_id: Optional[str] = None
    ) -> Appointment:
        """Create or replace an appointment; enforces the no-overlap rule."""
        pass

    @abstractmethod
    def delete(self, appointment_id: str) -> bool:
        pass


class IAppointmentRepository(IAppointmentReader, IAppointmentWriter):
    """Complete appointment repository interface."""

    pass


class IUserRepository(ABC):
    """Interface for users and the logged-in session user."""

    @abstractmethod
    def get_all(self) -> List[User]:
        pass

    @abstractmethod
    def get_by_id(self, user_id: str) -> Optional[User]:
        pass

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        pass

    @abstractmethod
    def update(self, user: User) -> User:
        pass

    @abstractmethod
    def get_auth_user(self) -> Optional[User]:
        pass

    @abstractmethod
    def set_auth_user(self, user: User) -> None:
        pass

    @abstractmethod
    def clear_auth_user(self) -> None:
        pass
