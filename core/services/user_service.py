# =============================================================================
# core/services/user_service.py - User Accounts
# =============================================================================
# Handles user CRUD and credential checks for login.
# Passwords are hashed before they reach storage.
# =============================================================================

import logging
from typing import Any
from uuid import uuid4

from app.exceptions import DuplicateValueError, InvalidCredentialsError, UserNotFoundError
from core.models.user import User, UserCreate, UserUpdate
from core.repositories import Repositories
from lib.security import hash_password, verify_password

logger = logging.getLogger(__name__)


class UserService:
    """Service for user management and authentication."""

    def __init__(self, repositories: Repositories):
        self.users = repositories.users

    def _get_row(self, user_id: str) -> dict[str, Any]:
        row = self.users.find_by_id(user_id)
        if row is None:
            raise UserNotFoundError(user_id)
        return row

    def _ensure_email_free(self, email: str, user_id: str | None = None) -> None:
        for row in self.users.find_by("email", email):
            if row["id"] != user_id:
                raise DuplicateValueError("user", "email", email)

    def create_user(self, payload: UserCreate) -> User:
        """
        Register a new user.

        Raises:
            DuplicateValueError: If the email is already registered
        """
        self._ensure_email_free(payload.email)

        data = payload.model_dump(exclude={"password"})
        data["id"] = str(uuid4())
        data["password_hash"] = hash_password(payload.password)

        row = self.users.insert(data)
        logger.info(f"Created user: {row['id']}")
        return User.model_validate(row)

    def get_user(self, user_id: str) -> User:
        return User.model_validate(self._get_row(user_id))

    def list_users(self) -> list[User]:
        return [User.model_validate(row) for row in self.users.find_all()]

    def update_user(self, user_id: str, payload: UserUpdate) -> User:
        """
        Update a user's name, email or password.

        Raises:
            UserNotFoundError: If the user doesn't exist
            DuplicateValueError: If the new email belongs to someone else
        """
        current = self._get_row(user_id)
        changes = payload.changes()
        if not changes:
            return User.model_validate(current)

        if "email" in changes:
            self._ensure_email_free(changes["email"], user_id)
        if "password" in changes:
            changes["password_hash"] = hash_password(changes.pop("password"))

        row = self.users.update(user_id, changes)
        if row is None:
            raise UserNotFoundError(user_id)

        logger.info(f"Updated user: {user_id}")
        return User.model_validate(row)

    def delete_user(self, user_id: str) -> None:
        if not self.users.delete(user_id):
            raise UserNotFoundError(user_id)
        logger.info(f"Deleted user: {user_id}")

    def authenticate(self, email: str, password: str) -> User:
        """
        Check login credentials.

        The same error is raised for an unknown email and a wrong password
        so callers can't probe which emails exist.

        Raises:
            InvalidCredentialsError: If the credentials don't match a user
        """
        rows = self.users.find_by("email", email.strip().lower())
        if not rows or not verify_password(password, rows[0]["password_hash"]):
            logger.warning("Failed login attempt")
            raise InvalidCredentialsError()
        return User.model_validate(rows[0])
