from flask import Blueprint

from dental_admin.core.api_utils import api_response, get_store
from dental_admin.core.auth_decorators import admin_required
from dental_admin.repositories.appointment_repo import AppointmentRepository
from dental_admin.repositories.patient_repo import PatientRepository
from dental_admin.services.dashboard_service import DashboardService

dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/api/dashboard")


@dashboard_bp.route("", methods=["GET"])
@admin_required
def summary():
    """KPIs, the next appointments, top patients and chart series."""
    store = get_store()
    service = DashboardService(AppointmentRepository(store), PatientRepository(store))
    return api_response(True, "Dashboard summary", data=service.summary())
