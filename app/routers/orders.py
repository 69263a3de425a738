# =============================================================================
# app/routers/orders.py - Order Endpoints
# =============================================================================
# Create, read, update and delete rental orders.
# All endpoints require authentication (PROTECTED guards).
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, Response, status

from app.dependencies import PROTECTED, OrderServiceDep
from core.models.order import Order, OrderCreate, OrderUpdate

router = APIRouter(dependencies=PROTECTED)

OrderId = Annotated[str, Path(min_length=1, max_length=64, description="Order ID")]

ERROR_RESPONSES = {
    400: {"description": "Bad request"},
    401: {"description": "Missing or invalid token"},
    500: {"description": "Internal server error"},
}
NOT_FOUND = {404: {"description": "Order not found"}}


@router.post(
    "",
    response_model=Order,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
async def create_order(request: OrderCreate, orders: OrderServiceDep):
    """
    Create an order.

    customerId and carId must reference existing records (400 otherwise).
    Status defaults to Open.
    """
    return orders.create_order(request)


@router.get("/{order_id}", response_model=Order, responses={**ERROR_RESPONSES, **NOT_FOUND})
async def get_order(order_id: OrderId, orders: OrderServiceDep):
    """Retrieve an order."""
    return orders.get_order(order_id)


@router.delete(
    "/{order_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**ERROR_RESPONSES, **NOT_FOUND},
)
async def delete_order(order_id: OrderId, orders: OrderServiceDep):
    """Delete an order permanently."""
    orders.delete_order(order_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{order_id}", response_model=Order, responses={**ERROR_RESPONSES, **NOT_FOUND})
async def update_order(order_id: OrderId, request: OrderUpdate, orders: OrderServiceDep):
    """
    Update an order.

    Only the fields sent are changed. customerId can't be changed.
    """
    return orders.update_order(order_id, request)


@router.get("", response_model=list[Order], responses={401: ERROR_RESPONSES[401], 500: ERROR_RESPONSES[500]})
async def list_orders(orders: OrderServiceDep):
    """Retrieve all orders, oldest first."""
    return orders.list_orders()
