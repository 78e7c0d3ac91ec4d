"""
Auth controller: login, logout and account settings.

Login is a plaintext email/password match against the stored users. On
success the user is mirrored under "authUser" and a Flask-Login session is
started for the browser.
"""

from flask import Blueprint
from flask_login import current_user, login_user, logout_user

from dental_admin.core.api_utils import api_response, get_json_body, get_store
from dental_admin.core.auth_decorators import role_required
from dental_admin.core.limiter_config import limiter
from dental_admin.repositories.user_repo import UserRepository
from dental_admin.schemas.dtos import AccountUpdateRequest, LoginRequest
from dental_admin.services.auth_service import AuthService

auth_bp = Blueprint("auth", __name__, url_prefix="/auth")
account_bp = Blueprint("account", __name__, url_prefix="/account")


def _auth_service() -> AuthService:
    return AuthService(UserRepository(get_store()))


@auth_bp.route("/login", methods=["POST"])
@limiter.limit("5 per minute;20 per hour")
def login():
    """Expected JSON: {"email": str, "password": str}"""
    service = _auth_service()
    user = service.login(LoginRequest.from_json(get_json_body()))
    login_user(user)
    return api_response(True, "Logged in", data=user.to_public_dict())


@auth_bp.route("/logout", methods=["POST"])
@role_required()
def logout():
    _auth_service().logout()
    logout_user()
    return api_response(True, "Logged out")


@auth_bp.route("/me", methods=["GET"])
@role_required()
def me():
    return api_response(True, "Current user", data=current_user.to_public_dict())


@account_bp.route("", methods=["PUT"])
@role_required()
def update_account():
    """Expected JSON: {"email": str, "password": str}"""
    service = _auth_service()
    updated = service.update_account(
        current_user.id, AccountUpdateRequest.from_json(get_json_body())
    )
    return api_response(True, "Account updated", data=updated.to_public_dict())
