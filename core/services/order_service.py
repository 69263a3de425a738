# =============================================================================
# core/services/order_service.py - Order Lifecycle
# =============================================================================
# Creating, reading, updating and deleting rental orders.
#
# Rules enforced here (payload shape is already checked by the schemas):
# - an order must point at an existing customer and car
# - the rental window must end after it starts, also after a partial update
# - customerId never changes after creation
# - delete is permanent
#
# Status moves are not restricted: any of the four values may follow any
# other.
# =============================================================================

import logging
from typing import Any
from uuid import uuid4

from app.exceptions import InvalidDateRangeError, OrderNotFoundError, ReferenceNotFoundError
from core.models.order import Order, OrderCreate, OrderStatus, OrderUpdate
from core.repositories import Repositories

logger = logging.getLogger(__name__)


class OrderService:
    """
    Service for order lifecycle operations.

    Customers and cars are only read here, never written.
    """

    def __init__(self, repositories: Repositories):
        self.orders = repositories.orders
        self.customers = repositories.customers
        self.cars = repositories.cars

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _require_customer(self, customer_id: str) -> None:
        if not self.customers.exists(customer_id):
            raise ReferenceNotFoundError("customer", customer_id)

    def _require_car(self, car_id: str) -> None:
        if not self.cars.exists(car_id):
            raise ReferenceNotFoundError("car", car_id)

    def _get_row(self, order_id: str) -> dict[str, Any]:
        row = self.orders.find_by_id(order_id)
        if row is None:
            raise OrderNotFoundError(order_id)
        return row

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def create_order(self, payload: OrderCreate) -> Order:
        """
        Create a new order.

        Args:
            payload: Validated create body

        Returns:
            The stored order, with a fresh id and status Open unless
            the payload set one

        Raises:
            ReferenceNotFoundError: customerId or carId doesn't exist
            PersistenceError: storage failed
        """
        self._require_customer(payload.customer_id)
        self._require_car(payload.car_id)

        data = payload.model_dump(mode="json")
        data["id"] = str(uuid4())
        data["status"] = (payload.status or OrderStatus.OPEN).value

        row = self.orders.insert(data)
        logger.info(
            f"Created order: {row['id']} (customer={payload.customer_id}, car={payload.car_id})"
        )
        return Order.model_validate(row)

    def get_order(self, order_id: str) -> Order:
        """
        Get an order by ID.

        Raises:
            OrderNotFoundError: If the order doesn't exist
        """
        return Order.model_validate(self._get_row(order_id))

    def list_orders(self) -> list[Order]:
        """All orders in the order they were created. May be empty."""
        return [Order.model_validate(row) for row in self.orders.find_all()]

    def update_order(self, order_id: str, payload: OrderUpdate) -> Order:
        """
        Apply a partial update to an order.

        Only fields present in the payload change. Sending the same payload
        twice leaves the order in the same state.

        Args:
            order_id: The order to change
            payload: Validated partial body

        Returns:
            The order after the update

        Raises:
            OrderNotFoundError: If the order doesn't exist
            ReferenceNotFoundError: If a new carId doesn't exist
            InvalidDateRangeError: If the resulting window ends before it starts
        """
        current = Order.model_validate(self._get_row(order_id))
        changes = payload.changes()

        if not changes:
            return current

        if "car_id" in changes and changes["car_id"] != current.car_id:
            self._require_car(changes["car_id"])

        start = changes.get("start_date_time", current.start_date_time)
        end = changes.get("end_date_time", current.end_date_time)
        if end <= start:
            raise InvalidDateRangeError(start.isoformat(), end.isoformat())

        row = self.orders.update(order_id, payload.model_dump(mode="json", exclude_unset=True))
        if row is None:
            # Deleted between the read and the write
            raise OrderNotFoundError(order_id)

        logger.info(f"Updated order: {order_id} ({', '.join(sorted(changes))})")
        return Order.model_validate(row)

    def delete_order(self, order_id: str) -> None:
        """
        Permanently delete an order.

        Raises:
            OrderNotFoundError: If the order doesn't exist
        """
        if not self.orders.delete(order_id):
            raise OrderNotFoundError(order_id)
        logger.info(f"Deleted order: {order_id}")
