from flask import Blueprint
from flask_login import current_user

from dental_admin.core.api_utils import api_response, get_store
from dental_admin.core.auth_decorators import patient_required
from dental_admin.repositories.appointment_repo import AppointmentRepository
from dental_admin.repositories.patient_repo import PatientRepository
from dental_admin.services.profile_service import ProfileService

profile_bp = Blueprint("profile", __name__, url_prefix="/api/profile")


@profile_bp.route("", methods=["GET"])
@patient_required
def my_profile():
    """The logged-in patient's details and appointment history."""
    store = get_store()
    service = ProfileService(PatientRepository(store), AppointmentRepository(store))
    return api_response(True, "Profile", data=service.get_profile(current_user))
