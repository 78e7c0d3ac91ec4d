"""
Appointment service following SOLID principles.
"""

import base64
import binascii
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Tuple

from dental_admin.core.exceptions import NotFoundError, ValidationError
from dental_admin.domain.entities import Appointment, UploadedFile
from dental_admin.domain.scheduling import local_now
from dental_admin.repositories.appointment_repo import AppointmentRepository
from dental_admin.repositories.patient_repo import PatientRepository
from dental_admin.schemas.dtos import AppointmentRequest

from .search import matches_query

logger = logging.getLogger(__name__)

UNKNOWN_PATIENT = "Unknown"


@dataclass
class FileUpload:
    """Raw file content received from the browser."""

    name: str
    content_type: str
    data: bytes


@dataclass
class AppointmentListItem:
    appointment: Appointment
    patient_name: str

    def to_dict(self) -> Dict[str, Any]:
        data = self.appointment.to_dict()
        data["patientName"] = self.patient_name
        return data


class AppointmentService:
    """Application service for appointment-related use-cases.

    Business rules enforced here on top of the repository:
    - Requests are validated before any read or write
    - Edits keep the stored attachments unless the request sends a file list
    """

    def __init__(
        self,
        appointment_repo: AppointmentRepository,
        patient_repo: PatientRepository,
    ) -> None:
        self.appointment_repo = appointment_repo
        self.patient_repo = patient_repo

    def create_appointment(self, request: AppointmentRequest) -> Appointment:
        request.validate()
        appointment = self.appointment_repo.upsert(request.to_domain())
        logger.info(
            "Appointment created",
            extra={
                "context": {
                    "appointment_id": appointment.id,
                    "patient_id": appointment.patient_id,
                }
            },
        )
        return appointment

    def update_appointment(
        self, appointment_id: str, request: AppointmentRequest
    ) -> Appointment:
        request.validate()

        existing = self.appointment_repo.get_by_id(appointment_id)
        if existing is None:
            raise NotFoundError("Appointment", appointment_id)

        files = request.files if request.files is not None else existing.files
        appointment = self.appointment_repo.upsert(
            request.to_domain(files=files), existing_id=appointment_id
        )
        logger.info(
            "Appointment updated",
            extra={"context": {"appointment_id": appointment.id}},
        )
        return appointment

    def delete_appointment(self, appointment_id: str) -> None:
        if not self.appointment_repo.delete(appointment_id):
            raise NotFoundError("Appointment", appointment_id)
        logger.info(
            "Appointment deleted", extra={"context": {"appointment_id": appointment_id}}
        )

    def get_appointment(self, appointment_id: str) -> Appointment:
        appointment = self.appointment_repo.get_by_id(appointment_id)
        if appointment is None:
            raise NotFoundError("Appointment", appointment_id)
        return appointment

    def list_appointments(self, query: Optional[str] = None) -> List[AppointmentListItem]:
        """Appointments whose title, description, status or patient name contains query."""
        names = {p.id: p.name for p in self.patient_repo.get_all()}
        items = []
        for appointment in self.appointment_repo.get_all():
            patient_name = names.get(appointment.patient_id) or UNKNOWN_PATIENT
            if matches_query(
                query,
                appointment.title,
                appointment.description,
                appointment.status,
                patient_name,
            ):
                items.append(AppointmentListItem(appointment, patient_name))
        return items

    # ---- attachments ----

    def attach_files(
        self,
        appointment_id: str,
        uploads: Iterable[FileUpload],
        now: Optional[datetime] = None,
    ) -> Appointment:
        """Append uploaded files, encoded as data URLs, in the order given."""
        appointment = self.get_appointment(appointment_id)
        new_files = [self._encode_upload(upload, now) for upload in uploads]
        if not new_files:
            raise ValidationError("No files were uploaded", details={"field": "files"})

        saved = self.appointment_repo.replace_files(
            appointment_id, appointment.files + new_files
        )
        logger.info(
            "Files attached",
            extra={
                "context": {
                    "appointment_id": appointment_id,
                    "file_count": len(new_files),
                }
            },
        )
        return saved

    def remove_file(self, appointment_id: str, file_id: str) -> Appointment:
        appointment = self.get_appointment(appointment_id)
        remaining = [f for f in appointment.files if f.id != file_id]
        if len(remaining) == len(appointment.files):
            raise NotFoundError("File", file_id)
        return self.appointment_repo.replace_files(appointment_id, remaining)

    def get_file(self, appointment_id: str, file_id: str) -> Tuple[UploadedFile, bytes]:
        """Return the attachment metadata and its decoded content."""
        appointment = self.get_appointment(appointment_id)
        attached = next((f for f in appointment.files if f.id == file_id), None)
        if attached is None:
            raise NotFoundError("File", file_id)
        return attached, decode_data_url(attached.url)

    @staticmethod
    def _encode_upload(upload: FileUpload, now: Optional[datetime]) -> UploadedFile:
        content_type = upload.content_type or "application/octet-stream"
        payload = base64.b64encode(upload.data).decode("ascii")
        return UploadedFile(
            id=str(uuid.uuid4()),
            name=upload.name,
            type=content_type,
            size=len(upload.data),
            url=f"data:{content_type};base64,{payload}",
            uploaded_at=(now or local_now()).isoformat(timespec="seconds"),
        )

    # ---- calendar ----

    def calendar_events(
        self, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> List[Dict[str, Any]]:
        """Calendar events for appointments starting in [start, end).

        Each event spans the appointment window. Appointments with an
        unusable date are left off the calendar.
        """
        window = timedelta(minutes=self.appointment_repo.window_minutes)
        if start is not None and end is not None:
            appointments = self.appointment_repo.get_by_date_range(start, end)
        else:
            appointments = [
                a
                for a in self.appointment_repo.get_all()
                if a.start is not None
                and (start is None or a.start >= start)
                and (end is None or a.start < end)
            ]
            appointments.sort(key=lambda a: a.start)

        return [
            {
                "id": a.id,
                "title": a.title,
                "start": a.start.isoformat(timespec="seconds"),
                "end": (a.start + window).isoformat(timespec="seconds"),
                "extendedProps": a.to_dict(),
            }
            for a in appointments
        ]


def decode_data_url(url: str) -> bytes:
    """Decode a base64 data URL into bytes."""
    header, sep, payload = url.partition(",")
    if not sep or not header.startswith("data:") or ";base64" not in header:
        raise ValidationError("Attachment is not a base64 data URL")
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationError("Attachment content is corrupted") from e
