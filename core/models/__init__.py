# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - common.py: camelCase base models and shared field helpers
# - order.py: Order schemas and the OrderStatus enum
# - customer.py, car.py, user.py: sibling resource schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

from .car import Car, CarCreate, CarUpdate
from .customer import Customer, CustomerCreate, CustomerUpdate
from .order import Order, OrderCreate, OrderStatus, OrderUpdate
from .user import User, UserCreate, UserUpdate

# -----------------------------------------------------------------------------
# __all__ - Explicit public API
# -----------------------------------------------------------------------------
__all__ = [
    # Order
    "Order",
    "OrderCreate",
    "OrderStatus",
    "OrderUpdate",
    # Customer
    "Customer",
    "CustomerCreate",
    "CustomerUpdate",
    # Car
    "Car",
    "CarCreate",
    "CarUpdate",
    # User
    "User",
    "UserCreate",
    "UserUpdate",
]
