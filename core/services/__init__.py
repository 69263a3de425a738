# =============================================================================
# core/services/ - Business Logic Services
# =============================================================================
# One service per resource. Each takes the Repositories bundle in its
# constructor and raises the typed errors from app.exceptions.
# - order_service.py: order lifecycle and its checks against customers/cars
# - customer_service.py, car_service.py, user_service.py: sibling CRUD
# =============================================================================

from core.services.car_service import CarService
from core.services.customer_service import CustomerService
from core.services.order_service import OrderService
from core.services.user_service import UserService

__all__ = [
    "CarService",
    "CustomerService",
    "OrderService",
    "UserService",
]
