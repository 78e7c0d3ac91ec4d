"""
Domain entities - Pure business logic, no framework dependencies.

Entities round-trip to the camelCase JSON documents kept in the key-value
store (to_dict / from_dict). Reading is lenient: a stored record with missing
fields still loads, so one odd record never hides the rest of a collection.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from .scheduling import parse_timestamp


class UserRole(str, Enum):
    ADMIN = "Admin"
    PATIENT = "Patient"


class AppointmentStatus(str, Enum):
    PENDING = "Pending"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    RESCHEDULED = "Rescheduled"

    @classmethod
    def values(cls) -> List[str]:
        return [status.value for status in cls]


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _optional_text(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def _number(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


@dataclass
class User:
    """Domain entity representing a dashboard login.

    Passwords are stored and compared in plaintext; this dashboard does not
    provide security-grade authentication.
    """

    id: str = ""
    role: str = UserRole.PATIENT.value
    email: str = ""
    password: str = ""
    patient_id: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    # Flask-Login interface
    @property
    def is_authenticated(self) -> bool:
        return True

    @property
    def is_active(self) -> bool:
        return True

    @property
    def is_anonymous(self) -> bool:
        return False

    def get_id(self) -> str:
        return str(self.id)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "role": self.role,
            "email": self.email,
            "password": self.password,
        }
        if self.patient_id:
            data["patientId"] = self.patient_id
        return data

    def to_public_dict(self) -> Dict[str, Any]:
        """Same as to_dict() without the password, for API responses."""
        data = self.to_dict()
        data.pop("password", None)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        return cls(
            id=_text(data.get("id")),
            role=_text(data.get("role")) or UserRole.PATIENT.value,
            email=_text(data.get("email")),
            password=_text(data.get("password")),
            patient_id=_optional_text(data.get("patientId")),
        )


@dataclass
class Patient:
    """Domain entity representing a clinic patient."""

    id: str = ""
    name: str = ""
    dob: str = ""
    contact: str = ""
    email: str = ""
    health_info: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "dob": self.dob,
            "contact": self.contact,
            "email": self.email,
            "healthInfo": self.health_info,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Patient":
        return cls(
            id=_text(data.get("id")),
            name=_text(data.get("name")),
            dob=_text(data.get("dob")),
            contact=_text(data.get("contact")),
            email=_text(data.get("email")),
            health_info=_text(data.get("healthInfo")),
        )


@dataclass
class UploadedFile:
    """Metadata and inline content of a file attached to an appointment."""

    id: str = ""
    name: str = ""
    type: str = ""
    size: int = 0
    url: str = ""  # data:<mime>;base64,<payload>
    uploaded_at: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "size": self.size,
            "url": self.url,
            "uploadedAt": self.uploaded_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UploadedFile":
        try:
            size = int(data.get("size") or 0)
        except (TypeError, ValueError):
            size = 0
        return cls(
            id=_text(data.get("id")),
            name=_text(data.get("name")),
            type=_text(data.get("type")),
            size=size,
            url=_text(data.get("url")),
            uploaded_at=_text(data.get("uploadedAt")),
        )


@dataclass
class Appointment:
    """Domain entity for an appointment (stored under the "incidents" key)."""

    id: str = ""
    patient_id: str = ""
    title: str = ""
    description: str = ""
    comments: str = ""
    appointment_date: str = ""
    next_appointment_date: Optional[str] = None
    treatment: str = ""
    cost: float = 0.0
    status: str = AppointmentStatus.PENDING.value
    files: List[UploadedFile] = field(default_factory=list)

    @property
    def start(self) -> Optional[datetime]:
        """Parsed appointment start, or None when the stored date is unusable."""
        try:
            return parse_timestamp(self.appointment_date)
        except ValueError:
            return None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "patientId": self.patient_id,
            "title": self.title,
            "description": self.description,
            "comments": self.comments,
            "appointmentDate": self.appointment_date,
            "treatment": self.treatment,
            "cost": self.cost,
            "status": self.status,
            "files": [f.to_dict() for f in self.files],
        }
        if self.next_appointment_date:
            data["nextAppointmentDate"] = self.next_appointment_date
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Appointment":
        raw_files = data.get("files") or []
        files = [
            UploadedFile.from_dict(f) for f in raw_files if isinstance(f, dict)
        ]
        return cls(
            id=_text(data.get("id")),
            patient_id=_text(data.get("patientId")),
            title=_text(data.get("title")),
            description=_text(data.get("description")),
            comments=_text(data.get("comments")),
            appointment_date=_text(data.get("appointmentDate")),
            next_appointment_date=_optional_text(data.get("nextAppointmentDate")),
            treatment=_text(data.get("treatment")),
            cost=_number(data.get("cost")),
            status=_text(data.get("status")) or AppointmentStatus.PENDING.value,
            files=files,
        )
