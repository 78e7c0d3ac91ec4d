"""
Appointment controller following SOLID principles.

Creating or editing an appointment whose 30-minute window overlaps another
appointment returns 409 with the conflicting appointment id; nothing is
saved in that case.
"""

from io import BytesIO

from flask import Blueprint, request, send_file

from dental_admin.core.api_utils import api_response, get_json_body, get_store
from dental_admin.core.auth_decorators import admin_required
from dental_admin.repositories.appointment_repo import AppointmentRepository
from dental_admin.repositories.patient_repo import PatientRepository
from dental_admin.schemas.dtos import AppointmentRequest
from dental_admin.services.appointment_service import AppointmentService, FileUpload

appointment_bp = Blueprint("appointments", __name__, url_prefix="/api/appointments")


def _appointment_service() -> AppointmentService:
    store = get_store()
    return AppointmentService(AppointmentRepository(store), PatientRepository(store))


@appointment_bp.route("", methods=["GET"])
@admin_required
def list_appointments():
    """Query parameters: q (matches title, description, status or patient name)."""
    items = _appointment_service().list_appointments(request.args.get("q"))
    return api_response(
        True, f"{len(items)} appointments", data=[item.to_dict() for item in items]
    )


@appointment_bp.route("", methods=["POST"])
@admin_required
def create_appointment():
    appointment = _appointment_service().create_appointment(
        AppointmentRequest.from_json(get_json_body())
    )
    return api_response(
        True,
        "Appointment created successfully",
        data=appointment.to_dict(),
        status_code=201,
    )


@appointment_bp.route("/<appointment_id>", methods=["GET"])
@admin_required
def get_appointment(appointment_id: str):
    appointment = _appointment_service().get_appointment(appointment_id)
    return api_response(True, "Appointment found", data=appointment.to_dict())


@appointment_bp.route("/<appointment_id>", methods=["PUT"])
@admin_required
def update_appointment(appointment_id: str):
    appointment = _appointment_service().update_appointment(
        appointment_id, AppointmentRequest.from_json(get_json_body())
    )
    return api_response(
        True, "Appointment updated successfully", data=appointment.to_dict()
    )


@appointment_bp.route("/<appointment_id>", methods=["DELETE"])
@admin_required
def delete_appointment(appointment_id: str):
    _appointment_service().delete_appointment(appointment_id)
    return api_response(True, "Appointment deleted")


@appointment_bp.route("/<appointment_id>/files", methods=["POST"])
@admin_required
def upload_files(appointment_id: str):
    """Multipart upload; every part named "files" is attached in order."""
    uploads = [
        FileUpload(
            name=storage.filename or "upload",
            content_type=storage.mimetype or "application/octet-stream",
            data=storage.read(),
        )
        for storage in request.files.getlist("files")
    ]
    appointment = _appointment_service().attach_files(appointment_id, uploads)
    return api_response(
        True,
        f"{len(uploads)} file(s) uploaded",
        data=appointment.to_dict(),
        status_code=201,
    )


@appointment_bp.route("/<appointment_id>/files/<file_id>", methods=["GET"])
@admin_required
def download_file(appointment_id: str, file_id: str):
    attached, content = _appointment_service().get_file(appointment_id, file_id)
    return send_file(
        BytesIO(content),
        mimetype=attached.type or "application/octet-stream",
        as_attachment=True,
        download_name=attached.name or file_id,
    )


@appointment_bp.route("/<appointment_id>/files/<file_id>", methods=["DELETE"])
@admin_required
def delete_file(appointment_id: str, file_id: str):
    appointment = _appointment_service().remove_file(appointment_id, file_id)
    return api_response(True, "File removed", data=appointment.to_dict())
