# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - users.py: User registration and management
# - customers.py: Customer CRUD
# - cars.py: Car CRUD
# - orders.py: Rental order lifecycle
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import users
from . import customers
from . import cars
from . import orders

__all__ = [
    "health",
    "users",
    "customers",
    "cars",
    "orders",
]
