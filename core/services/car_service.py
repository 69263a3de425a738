# =============================================================================
# core/services/car_service.py - Car CRUD
# =============================================================================
# Cars are unique by plate. A car that still has orders can't be deleted.
# =============================================================================

import logging
from typing import Any
from uuid import uuid4

from app.exceptions import CarNotFoundError, DuplicateValueError, ResourceInUseError
from core.models.car import Car, CarCreate, CarUpdate
from core.repositories import Repositories

logger = logging.getLogger(__name__)


class CarService:
    """Service for the car fleet."""

    def __init__(self, repositories: Repositories):
        self.cars = repositories.cars
        self.orders = repositories.orders

    def _get_row(self, car_id: str) -> dict[str, Any]:
        row = self.cars.find_by_id(car_id)
        if row is None:
            raise CarNotFoundError(car_id)
        return row

    def _ensure_plate_free(self, plate: str, car_id: str | None = None) -> None:
        for row in self.cars.find_by("plate", plate):
            if row["id"] != car_id:
                raise DuplicateValueError("car", "plate", plate)

    def create_car(self, payload: CarCreate) -> Car:
        """
        Register a car.

        Raises:
            DuplicateValueError: plate already registered
        """
        self._ensure_plate_free(payload.plate)

        data = payload.model_dump(mode="json")
        data["id"] = str(uuid4())

        row = self.cars.insert(data)
        logger.info(f"Created car: {row['id']} ({payload.plate})")
        return Car.model_validate(row)

    def get_car(self, car_id: str) -> Car:
        return Car.model_validate(self._get_row(car_id))

    def list_cars(self) -> list[Car]:
        return [Car.model_validate(row) for row in self.cars.find_all()]

    def update_car(self, car_id: str, payload: CarUpdate) -> Car:
        current = self._get_row(car_id)
        changes = payload.model_dump(mode="json", exclude_unset=True)
        if not changes:
            return Car.model_validate(current)

        if "plate" in changes:
            self._ensure_plate_free(changes["plate"], car_id)

        row = self.cars.update(car_id, changes)
        if row is None:
            raise CarNotFoundError(car_id)

        logger.info(f"Updated car: {car_id}")
        return Car.model_validate(row)

    def delete_car(self, car_id: str) -> None:
        """
        Delete a car with no orders.

        Raises:
            CarNotFoundError: If the car doesn't exist
            ResourceInUseError: If orders still reference the car
        """
        self._get_row(car_id)

        order_count = len(self.orders.find_by("car_id", car_id))
        if order_count:
            raise ResourceInUseError("car", car_id, order_count)

        if not self.cars.delete(car_id):
            raise CarNotFoundError(car_id)
        logger.info(f"Deleted car: {car_id}")
