# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# API endpoints for logging in and inspecting the current principal.
# =============================================================================

import logging

from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_user
from app.auth.models import AuthUser, LoginRequest, TokenResponse
from app.config import settings
from app.dependencies import UserServiceDep
from core.models.user import User
from lib.security import create_access_token

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=TokenResponse)
async def login(request: LoginRequest, users: UserServiceDep) -> TokenResponse:
    """
    Exchange email and password for an access token.

    Send the token back as `Authorization: Bearer <token>`.

    Raises:
        401: If the credentials don't match a user
    """
    user = users.authenticate(request.email, request.password)
    token = create_access_token(subject=user.id, email=user.email)

    logger.info(f"Issued access token for user: {user.id}")
    return TokenResponse(token=token, expires_in=settings.access_token_expire_seconds)


@router.get("/me", response_model=User)
async def get_current_user_info(
    users: UserServiceDep,
    user: AuthUser = Depends(get_current_user),
) -> User:
    """
    Get the current authenticated user's profile.

    Raises:
        401: If not authenticated
        404: If the account was deleted after the token was issued
    """
    return users.get_user(user.id)
