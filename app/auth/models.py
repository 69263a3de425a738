# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from core.models.common import ApiModel, RequestModel


class AuthUser(BaseModel):
    """
    Authenticated principal extracted from an access token.

    This is the minimal user info available from the token itself,
    without querying the database.
    """
    id: str
    email: str | None = None

    model_config = ConfigDict(frozen=True)


class LoginRequest(RequestModel):
    """Credentials for POST /auth."""
    email: EmailStr = Field(..., examples=["ana@example.com"])
    password: str = Field(..., min_length=1, examples=["s3cret-pass"])


class TokenResponse(ApiModel):
    """
    Issued access token.

    Example:
        {"token": "eyJhbGciOi...", "tokenType": "Bearer", "expiresIn": 3600}
    """
    token: str
    token_type: str = "Bearer"
    expires_in: int = Field(..., description="Lifetime in seconds")


class TokenPayload(BaseModel):
    """Decoded claims of an access token."""
    sub: str  # User ID
    email: str | None = None
    aud: str
    exp: int  # Expiration timestamp
    iat: int  # Issued at timestamp
