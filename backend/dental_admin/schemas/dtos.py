"""
Data Transfer Objects (DTOs) and validation schemas.

Requests are built from the camelCase JSON the browser sends (from_json) and
validated before they reach a service. validate() raises ValidationError
with the first problem found.
"""

import math
import re
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

from dental_admin.core.exceptions import ValidationError
from dental_admin.domain.entities import (
    Appointment,
    AppointmentStatus,
    Patient,
    UploadedFile,
)
from dental_admin.domain.scheduling import parse_timestamp

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _clean(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _required(value: str, message: str, field_name: str) -> None:
    if not value:
        raise ValidationError(message, details={"field": field_name})


@dataclass
class LoginRequest:
    """DTO for login requests."""

    email: str
    password: str

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "LoginRequest":
        return cls(email=_clean(data.get("email")), password=str(data.get("password") or ""))

    def validate(self) -> None:
        _required(self.email, "Email is required", "email")
        _required(self.password, "Password is required", "password")


@dataclass
class AccountUpdateRequest:
    """DTO for account settings updates."""

    email: str
    password: str

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "AccountUpdateRequest":
        return cls(email=_clean(data.get("email")), password=str(data.get("password") or ""))

    def validate(self) -> None:
        _required(self.email, "Email is required", "email")
        if not EMAIL_PATTERN.match(self.email):
            raise ValidationError("Invalid email address", details={"field": "email"})
        _required(self.password, "Password is required", "password")


@dataclass
class PatientRequest:
    """DTO for patient create/edit requests."""

    name: str
    dob: str
    contact: str
    email: str
    health_info: str = ""

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "PatientRequest":
        return cls(
            name=_clean(data.get("name")),
            dob=_clean(data.get("dob")),
            contact=_clean(data.get("contact")),
            email=_clean(data.get("email")),
            health_info=_clean(data.get("healthInfo")),
        )

    def validate(self) -> None:
        """Validate the request data."""
        _required(self.name, "Name is required", "name")
        _required(self.dob, "Date of birth is required", "dob")
        try:
            date.fromisoformat(self.dob)
        except ValueError:
            raise ValidationError(
                "Date of birth must be a valid date (YYYY-MM-DD)",
                details={"field": "dob"},
            )
        _required(self.contact, "Contact is required", "contact")
        if not EMAIL_PATTERN.match(self.email):
            raise ValidationError("Invalid email address", details={"field": "email"})

    def to_domain(self) -> Patient:
        return Patient(
            name=self.name,
            dob=self.dob,
            contact=self.contact,
            email=self.email,
            health_info=self.health_info,
        )


@dataclass
class AppointmentRequest:
    """DTO for appointment create/edit requests.

    files is None when the request does not mention attachments, in which
    case an edit keeps the attachments already stored.
    """

    patient_id: str
    title: str
    appointment_date: str
    description: str = ""
    comments: str = ""
    next_appointment_date: Optional[str] = None
    treatment: str = ""
    cost: Any = 0
    status: str = AppointmentStatus.PENDING.value
    files: Optional[List[UploadedFile]] = field(default=None)

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "AppointmentRequest":
        raw_files = data.get("files")
        files = None
        if isinstance(raw_files, list):
            files = [UploadedFile.from_dict(f) for f in raw_files if isinstance(f, dict)]
        return cls(
            patient_id=_clean(data.get("patientId")),
            title=_clean(data.get("title")),
            appointment_date=_clean(data.get("appointmentDate")),
            description=_clean(data.get("description")),
            comments=_clean(data.get("comments")),
            next_appointment_date=_clean(data.get("nextAppointmentDate")) or None,
            treatment=_clean(data.get("treatment")),
            cost=data.get("cost", 0),
            status=_clean(data.get("status")) or AppointmentStatus.PENDING.value,
            files=files,
        )

    def validate(self) -> None:
        """Validate the request data, coercing cost to a number."""
        _required(self.patient_id, "Patient is required", "patientId")
        _required(self.title, "Title is required", "title")
        _required(
            self.appointment_date, "Appointment date is required", "appointmentDate"
        )
        for field_name, value in (
            ("appointmentDate", self.appointment_date),
            ("nextAppointmentDate", self.next_appointment_date),
        ):
            if value is None:
                continue
            try:
                parse_timestamp(value)
            except ValueError:
                raise ValidationError(
                    f"{field_name} must be a valid date and time",
                    details={"field": field_name},
                )

        if self.cost is None or self.cost == "":
            self.cost = 0
        if isinstance(self.cost, bool):
            raise ValidationError("Cost must be a number", details={"field": "cost"})
        try:
            self.cost = float(self.cost)
        except (TypeError, ValueError):
            raise ValidationError("Cost must be a number", details={"field": "cost"})
        if not math.isfinite(self.cost):
            raise ValidationError("Cost must be a number", details={"field": "cost"})
        if self.cost < 0:
            raise ValidationError("Cost cannot be negative", details={"field": "cost"})

        if self.status not in AppointmentStatus.values():
            raise ValidationError(
                f"Status must be one of {', '.join(AppointmentStatus.values())}",
                details={"field": "status"},
            )

    def to_domain(self, files: Optional[List[UploadedFile]] = None) -> Appointment:
        return Appointment(
            patient_id=self.patient_id,
            title=self.title,
            description=self.description,
            comments=self.comments,
            appointment_date=self.appointment_date,
            next_appointment_date=self.next_appointment_date,
            treatment=self.treatment,
            cost=float(self.cost),
            status=self.status,
            files=list(files if files is not None else (self.files or [])),
        )
