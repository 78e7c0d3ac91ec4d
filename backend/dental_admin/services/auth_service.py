import logging
from dataclasses import replace
from typing import Optional

from dental_admin.core.exceptions import (
    AuthenticationError,
    DuplicateEmailError,
    NotFoundError,
)
from dental_admin.domain.entities import User
from dental_admin.repositories.user_repo import UserRepository
from dental_admin.schemas.dtos import AccountUpdateRequest, LoginRequest

logger = logging.getLogger(__name__)


class AuthService:
    """Application service for login, logout and account settings.

    Credentials are matched in plaintext against the stored user list. The
    logged-in user is mirrored under the "authUser" key.
    """

    def __init__(self, user_repo: UserRepository) -> None:
        self.user_repo = user_repo

    def login(self, request: LoginRequest) -> User:
        request.validate()

        user = self.user_repo.authenticate(request.email, request.password)
        if user is None:
            logger.info(
                "Login failed", extra={"context": {"email": request.email}}
            )
            raise AuthenticationError()

        self.user_repo.set_auth_user(user)
        logger.info(
            "User logged in",
            extra={"context": {"user_id": user.id, "role": user.role}},
        )
        return user

    def logout(self) -> None:
        self.user_repo.clear_auth_user()

    def current_user(self) -> Optional[User]:
        return self.user_repo.get_auth_user()

    def load_user(self, user_id: str) -> Optional[User]:
        """Look a user up for the web session (Flask-Login user_loader)."""
        return self.user_repo.get_by_id(user_id)

    def update_account(self, user_id: str, request: AccountUpdateRequest) -> User:
        """Change the email and password of a user.

        Business Rules:
        - Email and password are required
        - The email may not belong to another user
        """
        request.validate()

        user = self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id)

        other = self.user_repo.get_by_email(request.email)
        if other is not None and other.id != user.id:
            raise DuplicateEmailError(
                request.email, "This email is already used by another account"
            )

        updated = replace(user, email=request.email, password=request.password)
        self.user_repo.update(updated)
        self.user_repo.set_auth_user(updated)
        logger.info("Account updated", extra={"context": {"user_id": user.id}})
        return updated
