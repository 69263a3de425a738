# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up test environment variables before any imports
# - Runs the API on the in-memory storage backend
# - Provides an authenticated client and seeded customer/car records
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ["STORAGE_BACKEND"] = "memory"
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-pytest-only")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient

from app.dependencies import get_repositories
from app.main import app
from core.models import CarCreate, CustomerCreate
from core.repositories import InMemoryRepositories
from core.services import CarService, CustomerService, OrderService
from lib.security import create_access_token


# =============================================================================
# Storage / Services
# =============================================================================

@pytest.fixture
def repositories():
    """Fresh, empty in-memory storage for each test."""
    return InMemoryRepositories()


@pytest.fixture
def order_service(repositories):
    return OrderService(repositories)


@pytest.fixture
def customer(repositories):
    """A stored customer."""
    return CustomerService(repositories).create_customer(
        CustomerCreate(
            full_name="Maria Souza",
            birth_date="1990-05-17",
            cpf="529.982.247-25",
            email="maria@example.com",
            phone="+55 61 99999-0000",
        )
    )


@pytest.fixture
def car(repositories):
    """A stored car."""
    return CarService(repositories).create_car(
        CarCreate(
            brand="Fiat",
            model="Argo",
            year=2022,
            plate="ABC1D23",
            km=15000,
            daily_price=120.0,
            items=["air conditioning", "gps"],
        )
    )


@pytest.fixture
def other_car(repositories):
    """A second stored car, for reassigning orders."""
    return CarService(repositories).create_car(
        CarCreate(
            brand="Chevrolet",
            model="Onix",
            year=2023,
            plate="XYZ-9876",
            daily_price=150.0,
        )
    )


@pytest.fixture
def order_payload(customer, car):
    """Valid order body (camelCase, as sent over HTTP)."""
    return {
        "customerId": customer.id,
        "carId": car.id,
        "startDateTime": "2024-01-01T00:00:00Z",
        "endDateTime": "2024-01-02T00:00:00Z",
        "cep": "70040-010",
    }


# =============================================================================
# HTTP
# =============================================================================

@pytest.fixture
def client(repositories):
    """Unauthenticated client backed by the test's repositories."""
    app.dependency_overrides[get_repositories] = lambda: repositories
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    token = create_access_token(subject="test-user-id", email="tester@example.com")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_client(client, auth_headers):
    """Client that sends a valid bearer token on every request."""
    client.headers.update(auth_headers)
    return client
