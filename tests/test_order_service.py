# =============================================================================
# tests/test_order_service.py - Order Lifecycle Tests
# =============================================================================
# Exercises OrderService directly against in-memory storage:
# - referential checks on customer/car
# - defaults and id assignment on create
# - partial updates and the merged date-window check
# - hard delete and list ordering
# =============================================================================

from datetime import datetime, timezone

import pytest

from app.exceptions import (
    InvalidDateRangeError,
    NotFoundError,
    OrderNotFoundError,
    ReferenceNotFoundError,
)
from core.models import OrderCreate, OrderStatus, OrderUpdate


def make_create(customer_id, car_id, **overrides):
    body = {
        "customerId": customer_id,
        "carId": car_id,
        "startDateTime": "2024-01-01T00:00:00Z",
        "endDateTime": "2024-01-02T00:00:00Z",
        "cep": "70040-010",
    }
    body.update(overrides)
    return OrderCreate.model_validate(body)


# =============================================================================
# Create
# =============================================================================

class TestCreateOrder:
    """Tests for OrderService.create_order."""

    def test_assigns_id_and_defaults_status(self, order_service, customer, car):
        order = order_service.create_order(make_create(customer.id, car.id))

        assert order.id
        assert order.status == OrderStatus.OPEN
        assert order.customer_id == customer.id
        assert order.car_id == car.id
        assert order.start_date_time == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_ids_are_unique(self, order_service, customer, car):
        ids = {order_service.create_order(make_create(customer.id, car.id)).id for _ in range(5)}
        assert len(ids) == 5

    def test_keeps_supplied_status(self, order_service, customer, car):
        order = order_service.create_order(make_create(customer.id, car.id, status="Approved"))
        assert order.status == OrderStatus.APPROVED

    def test_accepts_arbitrary_existing_ids(self, order_service, repositories):
        repositories.customers.insert({"id": "c1", "full_name": "C One"})
        repositories.cars.insert({"id": "v1", "plate": "AAA1A11"})

        order = order_service.create_order(make_create("c1", "v1"))

        assert order.customer_id == "c1"
        assert order.status == OrderStatus.OPEN

    def test_missing_customer(self, order_service, car, repositories):
        with pytest.raises(ReferenceNotFoundError) as exc_info:
            order_service.create_order(make_create("missing", car.id))

        assert exc_info.value.code == "CUSTOMER_NOT_FOUND"
        assert exc_info.value.status_code == 400
        assert isinstance(exc_info.value, NotFoundError)
        assert repositories.orders.find_all() == []

    def test_missing_car(self, order_service, customer, repositories):
        with pytest.raises(ReferenceNotFoundError) as exc_info:
            order_service.create_order(make_create(customer.id, "missing"))

        assert exc_info.value.code == "CAR_NOT_FOUND"
        assert repositories.orders.find_all() == []


# =============================================================================
# Read
# =============================================================================

class TestReadOrders:
    """Tests for get_order / list_orders."""

    def test_get_returns_created_order(self, order_service, customer, car):
        created = order_service.create_order(make_create(customer.id, car.id))
        assert order_service.get_order(created.id) == created

    def test_get_missing(self, order_service):
        with pytest.raises(OrderNotFoundError) as exc_info:
            order_service.get_order("does-not-exist")
        assert exc_info.value.status_code == 404

    def test_list_empty(self, order_service):
        assert order_service.list_orders() == []

    def test_list_keeps_insertion_order_and_skips_deleted(self, order_service, customer, car):
        created = [order_service.create_order(make_create(customer.id, car.id)) for _ in range(4)]
        order_service.delete_order(created[1].id)

        listed = [order.id for order in order_service.list_orders()]

        assert listed == [created[0].id, created[2].id, created[3].id]


# =============================================================================
# Update
# =============================================================================

class TestUpdateOrder:
    """Tests for OrderService.update_order."""

    @pytest.fixture
    def order(self, order_service, customer, car):
        return order_service.create_order(make_create(customer.id, car.id))

    def test_status_only_changes_status(self, order_service, order):
        updated = order_service.update_order(order.id, OrderUpdate.model_validate({"status": "Aprovado"}))

        assert updated.status == OrderStatus.APPROVED
        assert updated.model_dump(exclude={"status"}) == order.model_dump(exclude={"status"})

    def test_replay_is_idempotent(self, order_service, order):
        payload = OrderUpdate.model_validate({"status": "Closed", "cep": "01001-000"})

        first = order_service.update_order(order.id, payload)
        second = order_service.update_order(order.id, payload)

        assert first == second
        assert order_service.get_order(order.id) == second

    def test_any_status_move_is_allowed(self, order_service, order):
        order_service.update_order(order.id, OrderUpdate(status=OrderStatus.CLOSED))
        reopened = order_service.update_order(order.id, OrderUpdate(status=OrderStatus.OPEN))
        assert reopened.status == OrderStatus.OPEN

    def test_empty_update_returns_order_unchanged(self, order_service, order):
        assert order_service.update_order(order.id, OrderUpdate()) == order

    def test_reassign_car(self, order_service, order, other_car):
        updated = order_service.update_order(order.id, OrderUpdate(car_id=other_car.id))
        assert updated.car_id == other_car.id

    def test_reassign_to_missing_car(self, order_service, order):
        with pytest.raises(ReferenceNotFoundError):
            order_service.update_order(order.id, OrderUpdate(car_id="missing"))
        assert order_service.get_order(order.id).car_id == order.car_id

    def test_end_before_stored_start_rejected(self, order_service, order):
        payload = OrderUpdate.model_validate({"endDateTime": "2023-12-31T00:00:00Z"})

        with pytest.raises(InvalidDateRangeError):
            order_service.update_order(order.id, payload)

        assert order_service.get_order(order.id).end_date_time == order.end_date_time

    def test_move_window_forward(self, order_service, order):
        payload = OrderUpdate.model_validate({
            "startDateTime": "2024-03-01T10:00:00Z",
            "endDateTime": "2024-03-05T10:00:00Z",
        })
        updated = order_service.update_order(order.id, payload)

        assert updated.start_date_time == datetime(2024, 3, 1, 10, tzinfo=timezone.utc)
        assert updated.end_date_time == datetime(2024, 3, 5, 10, tzinfo=timezone.utc)

    def test_update_missing(self, order_service):
        with pytest.raises(OrderNotFoundError):
            order_service.update_order("nope", OrderUpdate(status=OrderStatus.CLOSED))


# =============================================================================
# Delete
# =============================================================================

class TestDeleteOrder:
    """Tests for OrderService.delete_order."""

    def test_delete_then_get(self, order_service, customer, car):
        order = order_service.create_order(make_create(customer.id, car.id))

        order_service.delete_order(order.id)

        with pytest.raises(OrderNotFoundError):
            order_service.get_order(order.id)

    def test_delete_missing(self, order_service):
        with pytest.raises(OrderNotFoundError):
            order_service.delete_order("nope")

    def test_delete_leaves_customer_and_car(self, order_service, repositories, customer, car):
        order = order_service.create_order(make_create(customer.id, car.id))
        order_service.delete_order(order.id)

        assert repositories.customers.exists(customer.id)
        assert repositories.cars.exists(car.id)
