# =============================================================================
# lib/security.py - Passwords and Access Tokens
# =============================================================================
# - hash_password / verify_password: passlib, pbkdf2_sha256
# - create_access_token / decode_access_token: HMAC-signed JWTs via python-jose
#
# Usage:
#   from lib.security import create_access_token
#   token = create_access_token(subject=user_id, email=email)
# =============================================================================

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import jwt
from passlib.context import CryptContext

from app.config import settings

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

TOKEN_AUDIENCE = "rental-api"


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    subject: str,
    email: str | None = None,
    expires_in: int | None = None,
) -> str:
    """
    Sign an access token for a user.

    Args:
        subject: User ID, stored in the `sub` claim
        email: Optional email claim
        expires_in: Lifetime in seconds (defaults to ACCESS_TOKEN_EXPIRE_MINUTES)

    Returns:
        Encoded JWT string
    """
    now = datetime.now(timezone.utc)
    lifetime = expires_in if expires_in is not None else settings.access_token_expire_seconds

    payload: dict[str, Any] = {
        "sub": str(subject),
        "aud": TOKEN_AUDIENCE,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(seconds=lifetime)).timestamp()),
    }
    if email:
        payload["email"] = email

    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Verify signature, audience and expiry, and return the claims.

    Raises:
        jose.ExpiredSignatureError: token expired
        jose.JWTError: anything else wrong with the token
    """
    return jwt.decode(
        token,
        settings.SECRET_KEY,
        algorithms=[settings.JWT_ALGORITHM],
        audience=TOKEN_AUDIENCE,
    )
