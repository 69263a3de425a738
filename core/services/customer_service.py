# =============================================================================
# core/services/customer_service.py - Customer CRUD
# =============================================================================
# Customers are unique by cpf and by email. A customer that still has
# orders can't be deleted.
# =============================================================================

import logging
from typing import Any
from uuid import uuid4

from app.exceptions import CustomerNotFoundError, DuplicateValueError, ResourceInUseError
from core.models.customer import Customer, CustomerCreate, CustomerUpdate
from core.repositories import Repositories

logger = logging.getLogger(__name__)

UNIQUE_FIELDS = ("cpf", "email")


class CustomerService:
    """Service for customer management."""

    def __init__(self, repositories: Repositories):
        self.customers = repositories.customers
        self.orders = repositories.orders

    def _get_row(self, customer_id: str) -> dict[str, Any]:
        row = self.customers.find_by_id(customer_id)
        if row is None:
            raise CustomerNotFoundError(customer_id)
        return row

    def _ensure_unique(self, values: dict[str, Any], customer_id: str | None = None) -> None:
        for field in UNIQUE_FIELDS:
            if field not in values:
                continue
            for row in self.customers.find_by(field, values[field]):
                if row["id"] != customer_id:
                    raise DuplicateValueError("customer", field, values[field])

    def create_customer(self, payload: CustomerCreate) -> Customer:
        """
        Create a customer.

        Raises:
            DuplicateValueError: cpf or email already registered
        """
        data = payload.model_dump(mode="json")
        self._ensure_unique(data)
        data["id"] = str(uuid4())

        row = self.customers.insert(data)
        logger.info(f"Created customer: {row['id']}")
        return Customer.model_validate(row)

    def get_customer(self, customer_id: str) -> Customer:
        return Customer.model_validate(self._get_row(customer_id))

    def list_customers(self) -> list[Customer]:
        return [Customer.model_validate(row) for row in self.customers.find_all()]

    def update_customer(self, customer_id: str, payload: CustomerUpdate) -> Customer:
        current = self._get_row(customer_id)
        changes = payload.model_dump(mode="json", exclude_unset=True)
        if not changes:
            return Customer.model_validate(current)

        self._ensure_unique(changes, customer_id)

        row = self.customers.update(customer_id, changes)
        if row is None:
            raise CustomerNotFoundError(customer_id)

        logger.info(f"Updated customer: {customer_id}")
        return Customer.model_validate(row)

    def delete_customer(self, customer_id: str) -> None:
        """
        Delete a customer with no orders.

        Raises:
            CustomerNotFoundError: If the customer doesn't exist
            ResourceInUseError: If orders still reference the customer
        """
        self._get_row(customer_id)

        order_count = len(self.orders.find_by("customer_id", customer_id))
        if order_count:
            raise ResourceInUseError("customer", customer_id, order_count)

        if not self.customers.delete(customer_id):
            raise CustomerNotFoundError(customer_id)
        logger.info(f"Deleted customer: {customer_id}")
