# =============================================================================
# core/models/order.py - Order Schemas
# =============================================================================
# These models define the API contract for rental orders:
# - OrderStatus: Enum for order states
# - OrderCreate: Input for POST /orders
# - OrderUpdate: Partial input for PATCH /orders/{id}
# - Order: Output returned to clients
#
# An order books one car for one customer over a time window, delivered
# to the area identified by a CEP (Brazilian postal code).
# =============================================================================

import re
from datetime import datetime
from enum import Enum

from pydantic import Field, field_validator, model_validator

from .common import ApiModel, PartialUpdateModel, RequestModel, ensure_aware

CEP_PATTERN = re.compile(r"^\d{5}-?\d{3}$")


class OrderStatus(str, Enum):
    """
    Possible states for an order.

    - Open: freshly created, waiting for approval
    - Approved: rental confirmed
    - Cancelled: rental won't happen
    - Closed: car returned, rental finished

    Any of the four may be written by PATCH; moves between them are not
    restricted.
    """
    OPEN = "Open"
    APPROVED = "Approved"
    CANCELLED = "Cancelled"
    CLOSED = "Closed"

    @classmethod
    def parse(cls, value: "str | OrderStatus") -> "OrderStatus":
        """
        Resolve a status label, case-insensitively.

        Also accepts the Portuguese labels the first version of the API
        used (Aberto, Aprovado, Cancelado, Fechado).
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValueError("status must be a string")

        key = value.strip().lower()
        for member in cls:
            if member.value.lower() == key:
                return member
        if key in LEGACY_STATUS_LABELS:
            return LEGACY_STATUS_LABELS[key]

        allowed = ", ".join(member.value for member in cls)
        raise ValueError(f"status must be one of: {allowed}")


LEGACY_STATUS_LABELS = {
    "aberto": OrderStatus.OPEN,
    "aprovado": OrderStatus.APPROVED,
    "cancelado": OrderStatus.CANCELLED,
    "fechado": OrderStatus.CLOSED,
}


def _validate_cep(value: str) -> str:
    value = value.strip()
    if not CEP_PATTERN.match(value):
        raise ValueError("cep must look like 70040-010 or 70040010")
    return value


class OrderCreate(RequestModel):
    """
    Schema for creating an order.

    Example:
        {
            "customerId": "7ecc589b-df0e-4ae0-ba2c-84285faaf837",
            "carId": "25184f84-b970-4cd1-9e4f-0fc54e0c91b9",
            "startDateTime": "2024-01-01T00:00:00Z",
            "endDateTime": "2024-01-02T00:00:00Z",
            "cep": "70040-010"
        }
    """

    customer_id: str = Field(..., min_length=1, description="Customer renting the car")
    car_id: str = Field(..., min_length=1, description="Car being rented")
    start_date_time: datetime = Field(..., description="Rental start (ISO 8601)")
    end_date_time: datetime = Field(..., description="Rental end (ISO 8601), after start")
    cep: str = Field(..., description="Postal code of the delivery area")
    status: OrderStatus = Field(default=OrderStatus.OPEN, description="Initial status")

    model_config = {
        "json_schema_extra": {
            "example": {
                "customerId": "7ecc589b-df0e-4ae0-ba2c-84285faaf837",
                "carId": "25184f84-b970-4cd1-9e4f-0fc54e0c91b9",
                "startDateTime": "2024-01-01T00:00:00Z",
                "endDateTime": "2024-01-02T00:00:00Z",
                "cep": "70040-010",
            }
        }
    }

    @field_validator("start_date_time", "end_date_time")
    @classmethod
    def aware_dates(cls, value):
        return ensure_aware(value)

    @field_validator("cep")
    @classmethod
    def check_cep(cls, value):
        return _validate_cep(value)

    @field_validator("status", mode="before")
    @classmethod
    def parse_status(cls, value):
        return OrderStatus.parse(value)

    @model_validator(mode="after")
    def end_after_start(self):
        if self.end_date_time <= self.start_date_time:
            raise ValueError("endDateTime must be after startDateTime")
        return self


class OrderUpdate(PartialUpdateModel):
    """
    Schema for updating an order.

    Only these fields can change; customerId is fixed at creation.
    When only one of the dates is sent, the range is checked against
    the stored value by the service.

    Example:
        {
            "status": "Approved"
        }
    """

    car_id: str | None = Field(default=None, min_length=1)
    start_date_time: datetime | None = None
    end_date_time: datetime | None = None
    cep: str | None = None
    status: OrderStatus | None = None

    @field_validator("start_date_time", "end_date_time")
    @classmethod
    def aware_dates(cls, value):
        return ensure_aware(value) if value is not None else value

    @field_validator("cep")
    @classmethod
    def check_cep(cls, value):
        return _validate_cep(value) if value is not None else value

    @field_validator("status", mode="before")
    @classmethod
    def parse_status(cls, value):
        return OrderStatus.parse(value) if value is not None else value

    @model_validator(mode="after")
    def end_after_start(self):
        if (
            self.start_date_time is not None
            and self.end_date_time is not None
            and self.end_date_time <= self.start_date_time
        ):
            raise ValueError("endDateTime must be after startDateTime")
        return self


class Order(ApiModel):
    """
    Schema for returning an order to clients.

    Example:
        {
            "id": "ac2da947-f8d8-49a5-a42b-70527cb67b22",
            "customerId": "1a488514-de11-4222-b994-c0e3b663636c",
            "carId": "d01d9650-3b98-45f6-8b83-0d99b285e5a9",
            "startDateTime": "2024-01-01T00:00:00Z",
            "endDateTime": "2024-01-02T00:00:00Z",
            "cep": "70040-010",
            "status": "Open"
        }
    """

    id: str
    customer_id: str
    car_id: str
    start_date_time: datetime
    end_date_time: datetime
    cep: str
    status: OrderStatus

    @field_validator("start_date_time", "end_date_time")
    @classmethod
    def aware_dates(cls, value):
        return ensure_aware(value)

    @field_validator("status", mode="before")
    @classmethod
    def parse_status(cls, value):
        return OrderStatus.parse(value)
