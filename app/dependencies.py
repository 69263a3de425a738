# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
#
# The repository bundle is built once at startup (see app/main.py lifespan)
# and kept on app.state; services are cheap and built per request.
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request

from app.auth.dependencies import get_current_user
from core.repositories import Repositories
from core.services import CarService, CustomerService, OrderService, UserService


def get_repositories(request: Request) -> Repositories:
    """Return the repository bundle created at startup."""
    return request.app.state.repositories


RepositoriesDep = Annotated[Repositories, Depends(get_repositories)]


def get_order_service(repositories: RepositoriesDep) -> OrderService:
    return OrderService(repositories)


def get_customer_service(repositories: RepositoriesDep) -> CustomerService:
    return CustomerService(repositories)


def get_car_service(repositories: RepositoriesDep) -> CarService:
    return CarService(repositories)


def get_user_service(repositories: RepositoriesDep) -> UserService:
    return UserService(repositories)


# Type aliases for dependency injection
OrderServiceDep = Annotated[OrderService, Depends(get_order_service)]
CustomerServiceDep = Annotated[CustomerService, Depends(get_customer_service)]
CarServiceDep = Annotated[CarService, Depends(get_car_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]


# =============================================================================
# Route Guards
# =============================================================================
# Ordered list of checks run before every handler of a protected router.
# Each guard may short-circuit the request by raising a RentalException.
#
#   router = APIRouter(dependencies=PROTECTED)

PROTECTED = [Depends(get_current_user)]
