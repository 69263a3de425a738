# =============================================================================
# core/repositories/base.py - Repository Contract
# =============================================================================
# Services never talk to storage directly. They depend on one Repository per
# table and on the Repositories bundle below, so any storage engine that
# implements this contract can back the API.
#
# Rows are plain dicts keyed by snake_case column names, with JSON-friendly
# values (ISO strings for dates).
# =============================================================================

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

# Table names, shared by every backend
USERS = "users"
CUSTOMERS = "customers"
CARS = "cars"
ORDERS = "orders"

TABLES = (USERS, CUSTOMERS, CARS, ORDERS)


class Repository(ABC):
    """Row-level access to one table."""

    def __init__(self, table: str):
        self.table = table

    @abstractmethod
    def find_by_id(self, record_id: str) -> dict[str, Any] | None:
        """Return the row with this id, or None."""

    @abstractmethod
    def find_all(self) -> list[dict[str, Any]]:
        """Return every row, oldest first."""

    @abstractmethod
    def find_by(self, field: str, value: Any) -> list[dict[str, Any]]:
        """Return rows whose `field` equals `value`, oldest first."""

    @abstractmethod
    def insert(self, data: dict[str, Any]) -> dict[str, Any]:
        """Store a new row and return it as persisted."""

    @abstractmethod
    def update(self, record_id: str, changes: dict[str, Any]) -> dict[str, Any] | None:
        """Apply `changes` to a row; None when the id doesn't exist."""

    @abstractmethod
    def delete(self, record_id: str) -> bool:
        """Remove a row; False when the id doesn't exist."""

    def exists(self, record_id: str) -> bool:
        return self.find_by_id(record_id) is not None


@dataclass
class Repositories:
    """One repository per table, plus a startup hook for the schema."""

    users: Repository
    customers: Repository
    cars: Repository
    orders: Repository

    def sync_schema(self) -> None:
        """Make sure every table is usable. Backends override as needed."""
