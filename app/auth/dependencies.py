# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication.
#
# Tokens are HMAC-signed JWTs issued by POST /api/v1/auth (see
# lib/security.py). Verification is stateless: signature, audience and
# expiry only.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError
from pydantic import ValidationError as PydanticValidationError

from app.auth.models import AuthUser, TokenPayload
from app.exceptions import AuthError
from lib.security import decode_access_token

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor. auto_error is off so a missing header
# goes through our own AuthError (401 + JSON body) instead of a bare 403.
security = HTTPBearer(auto_error=False, description="Token from POST /api/v1/auth")


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> AuthUser:
    """
    Extract and validate the principal from the bearer token.

    This dependency:
    1. Extracts the Bearer token from the Authorization header
    2. Verifies the JWT signature, audience and expiry
    3. Returns an AuthUser with the user's ID and email

    Raises:
        AuthError: 401 if the token is missing, invalid or expired
    """
    if credentials is None:
        raise AuthError()

    try:
        claims = TokenPayload(**decode_access_token(credentials.credentials))

    except ExpiredSignatureError:
        logger.warning("Access token has expired")
        raise AuthError("Token has expired", code="TOKEN_EXPIRED")

    except (JWTError, PydanticValidationError) as e:
        logger.warning(f"Access token validation failed: {e}")
        raise AuthError("Invalid token", code="INVALID_TOKEN")

    logger.debug(f"Authenticated user: {claims.sub}")
    return AuthUser(id=claims.sub, email=claims.email)
