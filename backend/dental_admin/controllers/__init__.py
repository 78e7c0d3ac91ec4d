# Controllers package initialization
# Each module exposes a Flask blueprint registered by main.create_app()

from .appointment_controller import appointment_bp
from .auth_controller import account_bp, auth_bp
from .calendar_controller import calendar_bp
from .dashboard_controller import dashboard_bp
from .health_controller import health_bp
from .patient_controller import patient_bp
from .profile_controller import profile_bp

__all__ = [
    "account_bp",
    "appointment_bp",
    "auth_bp",
    "calendar_bp",
    "dashboard_bp",
    "health_bp",
    "patient_bp",
    "profile_bp",
]
