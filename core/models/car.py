# =============================================================================
# core/models/car.py - Car Schemas
# =============================================================================
# A car is the vehicle an order rents out. Plates are unique and stored
# upper-cased; accessories ("items") are kept as a de-duplicated list.
# =============================================================================

import re
from datetime import date

from pydantic import Field, field_validator

from .common import ApiModel, PartialUpdateModel, RequestModel

# Old format (ABC-1234) and Mercosul format (ABC1D23)
PLATE_PATTERN = re.compile(r"^[A-Z]{3}-?\d[A-Z0-9]\d{2}$")

MIN_YEAR = 1900
MAX_ITEMS = 20


def normalize_plate(value: str) -> str:
    value = value.strip().upper()
    if not PLATE_PATTERN.match(value):
        raise ValueError("plate must look like ABC-1234 or ABC1D23")
    return value


def _validate_year(value: int) -> int:
    latest = date.today().year + 1
    if not MIN_YEAR <= value <= latest:
        raise ValueError(f"year must be between {MIN_YEAR} and {latest}")
    return value


def dedupe_items(items: list[str]) -> list[str]:
    """Trim accessories and drop repeats (case-insensitive), keeping order."""
    seen = set()
    result = []
    for item in items:
        item = item.strip()
        if not item:
            raise ValueError("items cannot contain empty strings")
        key = item.lower()
        if key not in seen:
            seen.add(key)
            result.append(item)
    return result


class CarCreate(RequestModel):
    """
    Schema for registering a car.

    Example:
        {
            "brand": "Fiat",
            "model": "Argo",
            "year": 2022,
            "plate": "ABC1D23",
            "km": 15000,
            "dailyPrice": 120.0,
            "items": ["air conditioning", "gps"]
        }
    """

    brand: str = Field(..., min_length=1, max_length=100)
    model: str = Field(..., min_length=1, max_length=100)
    year: int
    plate: str
    km: float = Field(default=0, ge=0)
    daily_price: float = Field(..., gt=0)
    items: list[str] = Field(default_factory=list, max_length=MAX_ITEMS)

    @field_validator("year")
    @classmethod
    def check_year(cls, value):
        return _validate_year(value)

    @field_validator("plate")
    @classmethod
    def check_plate(cls, value):
        return normalize_plate(value)

    @field_validator("items")
    @classmethod
    def check_items(cls, value):
        return dedupe_items(value)


class CarUpdate(PartialUpdateModel):
    """Schema for updating a car. Only supplied fields change."""

    brand: str | None = Field(default=None, min_length=1, max_length=100)
    model: str | None = Field(default=None, min_length=1, max_length=100)
    year: int | None = None
    plate: str | None = None
    km: float | None = Field(default=None, ge=0)
    daily_price: float | None = Field(default=None, gt=0)
    items: list[str] | None = Field(default=None, max_length=MAX_ITEMS)

    @field_validator("year")
    @classmethod
    def check_year(cls, value):
        return _validate_year(value) if value is not None else value

    @field_validator("plate")
    @classmethod
    def check_plate(cls, value):
        return normalize_plate(value) if value is not None else value

    @field_validator("items")
    @classmethod
    def check_items(cls, value):
        return dedupe_items(value) if value is not None else value


class Car(ApiModel):
    """Schema for returning a car to clients."""

    id: str
    brand: str
    model: str
    year: int
    plate: str
    km: float
    daily_price: float
    items: list[str] = Field(default_factory=list)
