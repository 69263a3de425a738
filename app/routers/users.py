# =============================================================================
# app/routers/users.py - User Endpoints
# =============================================================================
# Registration is public; everything else requires authentication.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, Response, status

from app.dependencies import PROTECTED, UserServiceDep
from core.models.user import User, UserCreate, UserUpdate

router = APIRouter()

UserId = Annotated[str, Path(min_length=1, max_length=64, description="User ID")]


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
async def create_user(request: UserCreate, users: UserServiceDep):
    """
    Register a user.

    Public on purpose: it's how the first account gets created.
    Log in afterwards with POST /api/v1/auth.
    """
    return users.create_user(request)


@router.get("", response_model=list[User], dependencies=PROTECTED)
async def list_users(users: UserServiceDep):
    return users.list_users()


@router.get("/{user_id}", response_model=User, dependencies=PROTECTED)
async def get_user(user_id: UserId, users: UserServiceDep):
    return users.get_user(user_id)


@router.patch("/{user_id}", response_model=User, dependencies=PROTECTED)
async def update_user(user_id: UserId, request: UserUpdate, users: UserServiceDep):
    """Update a user. Sending a password replaces it."""
    return users.update_user(user_id, request)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    dependencies=PROTECTED,
)
async def delete_user(user_id: UserId, users: UserServiceDep):
    users.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
