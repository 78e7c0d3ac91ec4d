"""
Authentication and role-gating helpers.

Human users log in with email and password (POST /auth/login) and keep a
Flask-Login session. Each endpoint declares the roles allowed to call it:

    @patient_bp.route("", methods=["GET"])
    @role_required(UserRole.ADMIN)
    def list_patients():
        ...

Returns:
    - 401 when there is no logged-in user
    - 403 when the user's role is not in the allowed set
"""

from functools import wraps

from flask_login import current_user

from dental_admin.core.api_utils import api_response
from dental_admin.domain.entities import UserRole


def role_required(*roles: UserRole):
    """Decorator restricting an endpoint to logged-in users with one of roles."""
    allowed = {role.value for role in roles}

    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not current_user or not current_user.is_authenticated:
                return api_response(
                    False,
                    "Authentication required",
                    status_code=401,
                    error="unauthorized",
                )
            if allowed and getattr(current_user, "role", None) not in allowed:
                return api_response(
                    False,
                    "You are not allowed to access this resource",
                    status_code=403,
                    error="forbidden",
                )
            return f(*args, **kwargs)

        return decorated_function

    return decorator


admin_required = role_required(UserRole.ADMIN)
patient_required = role_required(UserRole.PATIENT)
