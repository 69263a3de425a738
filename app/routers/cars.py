# =============================================================================
# app/routers/cars.py - Car CRUD Endpoints
# =============================================================================
# All endpoints require authentication.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, Response, status

from app.dependencies import PROTECTED, CarServiceDep
from core.models.car import Car, CarCreate, CarUpdate

router = APIRouter(dependencies=PROTECTED)

CarId = Annotated[str, Path(min_length=1, max_length=64, description="Car ID")]


@router.post("", response_model=Car, status_code=status.HTTP_201_CREATED)
async def create_car(request: CarCreate, cars: CarServiceDep):
    """Register a car. Plates must be unique."""
    return cars.create_car(request)


@router.get("", response_model=list[Car])
async def list_cars(cars: CarServiceDep):
    return cars.list_cars()


@router.get("/{car_id}", response_model=Car)
async def get_car(car_id: CarId, cars: CarServiceDep):
    return cars.get_car(car_id)


@router.patch("/{car_id}", response_model=Car)
async def update_car(car_id: CarId, request: CarUpdate, cars: CarServiceDep):
    return cars.update_car(car_id, request)


@router.delete("/{car_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_car(car_id: CarId, cars: CarServiceDep):
    """Delete a car. Fails with 409 while orders reference it."""
    cars.delete_car(car_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
