# =============================================================================
# app/routers/customers.py - Customer CRUD Endpoints
# =============================================================================
# All endpoints require authentication.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, Response, status

from app.dependencies import PROTECTED, CustomerServiceDep
from core.models.customer import Customer, CustomerCreate, CustomerUpdate

router = APIRouter(dependencies=PROTECTED)

CustomerId = Annotated[str, Path(min_length=1, max_length=64, description="Customer ID")]


@router.post("", response_model=Customer, status_code=status.HTTP_201_CREATED)
async def create_customer(request: CustomerCreate, customers: CustomerServiceDep):
    """Create a customer. cpf and email must be unique."""
    return customers.create_customer(request)


@router.get("", response_model=list[Customer])
async def list_customers(customers: CustomerServiceDep):
    return customers.list_customers()


@router.get("/{customer_id}", response_model=Customer)
async def get_customer(customer_id: CustomerId, customers: CustomerServiceDep):
    return customers.get_customer(customer_id)


@router.patch("/{customer_id}", response_model=Customer)
async def update_customer(
    customer_id: CustomerId,
    request: CustomerUpdate,
    customers: CustomerServiceDep,
):
    """Update a customer. Only the fields sent are changed."""
    return customers.update_customer(customer_id, request)


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_customer(customer_id: CustomerId, customers: CustomerServiceDep):
    """Delete a customer. Fails with 409 while orders reference it."""
    customers.delete_customer(customer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
