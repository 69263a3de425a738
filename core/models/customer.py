# =============================================================================
# core/models/customer.py - Customer Schemas
# =============================================================================
# A customer is the person an order is booked for. Orders only ever read
# customers (existence checks); customers are managed through /customers.
# =============================================================================

import re
from datetime import date

from pydantic import EmailStr, Field, field_validator

from .common import ApiModel, PartialUpdateModel, RequestModel

PHONE_PATTERN = re.compile(r"^\+?[\d\s().-]{8,20}$")


def normalize_cpf(value: str) -> str:
    """
    Strip a CPF down to its 11 digits and check the two verifier digits.

    "529.982.247-25" -> "52998224725"
    """
    digits = re.sub(r"\D", "", value)
    if len(digits) != 11 or digits == digits[0] * 11:
        raise ValueError("cpf must have 11 digits")

    for position in (9, 10):
        total = sum(int(digits[i]) * (position + 1 - i) for i in range(position))
        check = (total * 10) % 11 % 10
        if check != int(digits[position]):
            raise ValueError("cpf check digits don't match")
    return digits


def _validate_birth_date(value: date) -> date:
    if value >= date.today():
        raise ValueError("birthDate must be in the past")
    return value


def _validate_phone(value: str) -> str:
    value = value.strip()
    if not PHONE_PATTERN.match(value):
        raise ValueError("Invalid phone number")
    return value


class CustomerCreate(RequestModel):
    """
    Schema for creating a customer.

    Example:
        {
            "fullName": "Maria Souza",
            "birthDate": "1990-05-17",
            "cpf": "529.982.247-25",
            "email": "maria@example.com",
            "phone": "+55 61 99999-0000"
        }
    """

    full_name: str = Field(..., min_length=1, max_length=255)
    birth_date: date
    cpf: str
    email: EmailStr
    phone: str

    @field_validator("full_name")
    @classmethod
    def strip_name(cls, value):
        return value.strip()

    @field_validator("birth_date")
    @classmethod
    def check_birth_date(cls, value):
        return _validate_birth_date(value)

    @field_validator("cpf")
    @classmethod
    def check_cpf(cls, value):
        return normalize_cpf(value)

    @field_validator("email")
    @classmethod
    def check_email(cls, value):
        return value.lower()

    @field_validator("phone")
    @classmethod
    def check_phone(cls, value):
        return _validate_phone(value)


class CustomerUpdate(PartialUpdateModel):
    """Schema for updating a customer. Only supplied fields change."""

    full_name: str | None = Field(default=None, min_length=1, max_length=255)
    birth_date: date | None = None
    cpf: str | None = None
    email: EmailStr | None = None
    phone: str | None = None

    @field_validator("birth_date")
    @classmethod
    def check_birth_date(cls, value):
        return _validate_birth_date(value) if value is not None else value

    @field_validator("cpf")
    @classmethod
    def check_cpf(cls, value):
        return normalize_cpf(value) if value is not None else value

    @field_validator("email")
    @classmethod
    def check_email(cls, value):
        return value.lower() if value is not None else value

    @field_validator("phone")
    @classmethod
    def check_phone(cls, value):
        return _validate_phone(value) if value is not None else value


class Customer(ApiModel):
    """Schema for returning a customer to clients."""

    id: str
    full_name: str
    birth_date: date
    cpf: str
    email: str
    phone: str
