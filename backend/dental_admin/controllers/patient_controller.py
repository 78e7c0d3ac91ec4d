"""
Patient controller for handling HTTP requests following SOLID principles.

This controller:
- Handles HTTP concerns only; validation and uniqueness live in the service
  and repository
- Is restricted to Admin users
"""

from flask import Blueprint, request

from dental_admin.core.api_utils import api_response, get_json_body, get_store
from dental_admin.core.auth_decorators import admin_required
from dental_admin.repositories.patient_repo import PatientRepository
from dental_admin.schemas.dtos import PatientRequest
from dental_admin.services.patient_service import PatientService

patient_bp = Blueprint("patients", __name__, url_prefix="/api/patients")


def _patient_service() -> PatientService:
    return PatientService(PatientRepository(get_store()))


@patient_bp.route("", methods=["GET"])
@admin_required
def list_patients():
    """Query parameters: q (optional case-insensitive search)."""
    patients = _patient_service().list_patients(request.args.get("q"))
    return api_response(
        True, f"{len(patients)} patients", data=[p.to_dict() for p in patients]
    )


@patient_bp.route("", methods=["POST"])
@admin_required
def create_patient():
    patient = _patient_service().create_patient(PatientRequest.from_json(get_json_body()))
    return api_response(
        True,
        f"{patient.name} has been added to the system",
        data=patient.to_dict(),
        status_code=201,
    )


@patient_bp.route("/<patient_id>", methods=["GET"])
@admin_required
def get_patient(patient_id: str):
    patient = _patient_service().get_patient(patient_id)
    return api_response(True, "Patient found", data=patient.to_dict())


@patient_bp.route("/<patient_id>", methods=["PUT"])
@admin_required
def update_patient(patient_id: str):
    patient = _patient_service().update_patient(
        patient_id, PatientRequest.from_json(get_json_body())
    )
    return api_response(
        True, f"{patient.name}'s record has been updated", data=patient.to_dict()
    )


@patient_bp.route("/<patient_id>", methods=["DELETE"])
@admin_required
def delete_patient(patient_id: str):
    _patient_service().delete_patient(patient_id)
    return api_response(True, "Patient deleted")
