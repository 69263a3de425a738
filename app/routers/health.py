# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings
from app.dependencies import RepositoriesDep
from app.exceptions import RentalException

logger = logging.getLogger(__name__)

router = APIRouter()

API_VERSION = "1.0.0"


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


class ChecksResponse(BaseModel):
    """Individual service checks."""
    database: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Returns basic health status for load balancers and monitoring.
    """
    return HealthResponse(
        status="healthy",
        timestamp=_now(),
        environment=settings.ENVIRONMENT,
        version=API_VERSION,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check(repositories: RepositoriesDep):
    """
    Readiness check endpoint.

    Returns whether the service is ready to accept requests.
    Checks that every table is reachable.
    """
    checks = ChecksResponse(database="unknown")

    try:
        repositories.sync_schema()
        checks.database = "healthy"
    except RentalException as e:
        logger.warning(f"Readiness check failed: {e.message}")
        checks.database = f"unhealthy: {e.message[:50]}"

    return ReadinessResponse(
        status="ready" if checks.database == "healthy" else "degraded",
        checks=checks,
        timestamp=_now(),
    )
