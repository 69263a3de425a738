# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.STORAGE_BACKEND)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# The Settings class validates all values at startup, catching configuration
# errors early rather than at runtime.
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses pydantic-settings to:
    - Automatically load from .env file
    - Validate types and constraints
    - Provide sensible defaults for development

    All settings are accessed via the global `settings` instance.
    """

    # -------------------------------------------------------------------------
    # Storage Configuration
    # -------------------------------------------------------------------------
    # "supabase" talks to the hosted Postgres through PostgREST.
    # "memory" keeps everything in process (tests and local hacking).

    STORAGE_BACKEND: Literal["supabase", "memory"] = Field(
        default="supabase",
        description="Which repository implementation backs the API"
    )

    SUPABASE_URL: str | None = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_SERVICE_KEY: str | None = Field(
        default=None,
        description="Supabase service_role key (bypasses RLS)"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, auto-reload)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=8080,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # -------------------------------------------------------------------------
    # Security
    # -------------------------------------------------------------------------

    SECRET_KEY: str = Field(
        default="dev-secret-key-change-in-production",
        min_length=16,
        description="Secret key for signing access tokens"
    )

    JWT_ALGORITHM: Literal["HS256", "HS384", "HS512"] = Field(
        default="HS256",
        description="HMAC algorithm used to sign access tokens"
    )

    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(
        default=60,
        ge=1,
        le=60 * 24 * 30,
        description="Lifetime of an issued access token"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        # Don't fail if .env doesn't exist (production sets env vars directly)
        env_ignore_empty=True,
        case_sensitive=True,
    )

    @model_validator(mode="after")
    def require_supabase_credentials(self) -> "Settings":
        """The Supabase backend can't start without its URL and key."""
        if self.STORAGE_BACKEND == "supabase":
            missing = [
                name for name in ("SUPABASE_URL", "SUPABASE_SERVICE_KEY")
                if not getattr(self, name)
            ]
            if missing:
                raise ValueError(
                    f"{', '.join(missing)} required when STORAGE_BACKEND=supabase "
                    "(set STORAGE_BACKEND=memory to run without a database)"
                )
        return self

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://myapp.com" -> ["http://localhost:3000", "https://myapp.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def access_token_expire_seconds(self) -> int:
        return self.ACCESS_TOKEN_EXPIRE_MINUTES * 60

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.

    Returns:
        Settings: The application settings instance
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
