# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# Users are the operators who log in to the API. Passwords are accepted on
# input only; responses never carry them (or their hashes).
# =============================================================================

from pydantic import EmailStr, Field, field_validator

from .common import ApiModel, PartialUpdateModel, RequestModel

PASSWORD_MIN_LENGTH = 8


class UserCreate(RequestModel):
    """
    Schema for registering a user.

    Example:
        {
            "fullName": "Ana Lima",
            "email": "ana@example.com",
            "password": "s3cret-pass"
        }
    """

    full_name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH, max_length=128)

    @field_validator("email")
    @classmethod
    def check_email(cls, value):
        return value.lower()


class UserUpdate(PartialUpdateModel):
    """Schema for updating a user. Sending a password re-hashes it."""

    full_name: str | None = Field(default=None, min_length=1, max_length=255)
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=PASSWORD_MIN_LENGTH, max_length=128)

    @field_validator("email")
    @classmethod
    def check_email(cls, value):
        return value.lower() if value is not None else value


class User(ApiModel):
    """Schema for returning a user to clients."""

    id: str
    full_name: str
    email: str
