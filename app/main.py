# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Car Rental API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import (
    RentalException,
    rental_exception_handler,
    validation_exception_handler,
)
from app.routers import health, users, customers, cars, orders
from app.auth import routes as auth_routes
from core.repositories import build_repositories

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs on startup and shutdown:
    - Startup: Build the storage backend and check its schema
    - Shutdown: Log and exit
    """
    logger.info(f"Starting Car Rental API in {settings.ENVIRONMENT} mode")
    logger.info(f"Storage backend: {settings.STORAGE_BACKEND}")

    app.state.repositories = build_repositories(settings.STORAGE_BACKEND)
    app.state.repositories.sync_schema()

    yield

    logger.info("Shutting down Car Rental API")


# Create FastAPI application
app = FastAPI(
    title="Car Rental API",
    description="""
## Car Rental Backend

API to create, read, update and delete users, customers, cars and orders.

### Quick Start

```bash
# 1. Register and log in
curl -X POST http://localhost:8080/api/v1/users \\
  -H "Content-Type: application/json" \\
  -d '{"fullName": "Ana Lima", "email": "ana@example.com", "password": "s3cret-pass"}'
curl -X POST http://localhost:8080/api/v1/auth \\
  -H "Content-Type: application/json" \\
  -d '{"email": "ana@example.com", "password": "s3cret-pass"}'

# 2. Book a car (customer and car must exist)
curl -X POST http://localhost:8080/api/v1/orders \\
  -H "Authorization: Bearer <token>" \\
  -H "Content-Type: application/json" \\
  -d '{"customerId": "...", "carId": "...", "startDateTime": "2024-01-01T00:00:00Z",
       "endDateTime": "2024-01-02T00:00:00Z", "cep": "70040-010"}'
```

Every endpoint except registration, login and health requires
`Authorization: Bearer <token>`.
""",
    version="1.0.0",
    docs_url=f"{API_PREFIX}/docs",
    redoc_url=f"{API_PREFIX}/redoc",
    openapi_url=f"{API_PREFIX}/openapi.json",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Log in and inspect the current user",
        },
        {
            "name": "Users",
            "description": "Register and manage API users",
        },
        {
            "name": "Customers",
            "description": "People who rent cars",
        },
        {
            "name": "Cars",
            "description": "The rental fleet",
        },
        {
            "name": "Orders",
            "description": "Rental orders linking a customer and a car over a time window",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(RentalException)
async def handle_rental_exception(request: Request, exc: RentalException):
    """Handle typed rental exceptions."""
    return await rental_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """Handle request body/path validation failures as 400."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Authentication endpoints
app.include_router(
    auth_routes.router,
    prefix=f"{API_PREFIX}/auth",
    tags=["Auth"]
)

# User endpoints
app.include_router(
    users.router,
    prefix=f"{API_PREFIX}/users",
    tags=["Users"]
)

# Customer endpoints
app.include_router(
    customers.router,
    prefix=f"{API_PREFIX}/customers",
    tags=["Customers"]
)

# Car endpoints
app.include_router(
    cars.router,
    prefix=f"{API_PREFIX}/cars",
    tags=["Cars"]
)

# Order endpoints
app.include_router(
    orders.router,
    prefix=f"{API_PREFIX}/orders",
    tags=["Orders"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix=API_PREFIX,
    tags=["Health"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Car Rental API",
        "version": "1.0.0",
        "docs": f"{API_PREFIX}/docs",
        "health": f"{API_PREFIX}/health",
    }
