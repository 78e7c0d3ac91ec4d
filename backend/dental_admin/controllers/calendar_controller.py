"""
Calendar controller: appointments as calendar events.

Query parameters:
    start, end: optional ISO timestamps bounding the event start times
"""

from flask import Blueprint

from dental_admin.core.api_utils import api_response, get_store, parse_query_datetime
from dental_admin.core.auth_decorators import admin_required
from dental_admin.core.exceptions import ValidationError
from dental_admin.repositories.appointment_repo import AppointmentRepository
from dental_admin.repositories.patient_repo import PatientRepository
from dental_admin.services.appointment_service import AppointmentService

calendar_bp = Blueprint("calendar", __name__, url_prefix="/api/calendar")


@calendar_bp.route("/events", methods=["GET"])
@admin_required
def list_events():
    start = parse_query_datetime("start")
    end = parse_query_datetime("end")
    if start is not None and end is not None and end <= start:
        raise ValidationError(
            "'end' must be after 'start'", details={"field": "end"}
        )

    store = get_store()
    service = AppointmentService(AppointmentRepository(store), PatientRepository(store))
    events = service.calendar_events(start, end)
    return api_response(True, f"{len(events)} events", data=events)
