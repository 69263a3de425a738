# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized error taxonomy for the API.
# Services raise these typed errors; the handlers at the bottom of this module
# turn them into JSON responses. Errors should tell HOW to fix, not just WHAT
# failed.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class RentalException(Exception):
    """
    Base exception for the rental API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "RENTAL_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Validation Errors
# =============================================================================

class ValidationError(RentalException):
    """Raised when input is malformed or breaks a field rule."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=400,
            suggestion=suggestion,
            details=details,
        )


class InvalidDateRangeError(ValidationError):
    """Raised when an order's end is not strictly after its start."""

    def __init__(self, start: str, end: str):
        super().__init__(
            message="endDateTime must be after startDateTime",
            code="INVALID_DATE_RANGE",
            suggestion="Send an endDateTime later than the order's startDateTime",
            details={"startDateTime": start, "endDateTime": end},
        )


# =============================================================================
# Not Found Errors
# =============================================================================

class NotFoundError(RentalException):
    """
    Raised when a target or referenced record doesn't exist.

    Defaults to 404. Subclasses describing a dangling reference inside a
    request body use 400 instead, since the URL itself was fine.
    """

    def __init__(
        self,
        entity: str,
        entity_id: str,
        status_code: int = 404,
        suggestion: str | None = None,
    ):
        super().__init__(
            message=f"{entity.capitalize()} not found: {entity_id}",
            code=f"{entity.upper()}_NOT_FOUND",
            status_code=status_code,
            suggestion=suggestion or f"Check that the {entity} id is correct",
            details={f"{entity}_id": entity_id},
        )
        self.entity = entity
        self.entity_id = entity_id


class OrderNotFoundError(NotFoundError):
    """Raised when an order ID doesn't exist."""

    def __init__(self, order_id: str):
        super().__init__("order", order_id)


class CustomerNotFoundError(NotFoundError):
    """Raised when a customer ID doesn't exist."""

    def __init__(self, customer_id: str):
        super().__init__("customer", customer_id)


class CarNotFoundError(NotFoundError):
    """Raised when a car ID doesn't exist."""

    def __init__(self, car_id: str):
        super().__init__("car", car_id)


class UserNotFoundError(NotFoundError):
    """Raised when a user ID doesn't exist."""

    def __init__(self, user_id: str):
        super().__init__("user", user_id)


class ReferenceNotFoundError(NotFoundError):
    """Raised when a request body points at a customer or car that doesn't exist."""

    def __init__(self, entity: str, entity_id: str):
        super().__init__(
            entity,
            entity_id,
            status_code=400,
            suggestion=f"Create the {entity} first or reference an existing {entity} id",
        )


# =============================================================================
# Conflict Errors
# =============================================================================

class ConflictError(RentalException):
    """Raised when a write would break a uniqueness or reference rule."""

    def __init__(self, message: str, code: str, suggestion: str | None = None, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code=code,
            status_code=409,
            suggestion=suggestion,
            details=details,
        )


class DuplicateValueError(ConflictError):
    """Raised when a unique field value is already taken."""

    def __init__(self, entity: str, field: str, value: str):
        super().__init__(
            message=f"A {entity} with this {field} already exists",
            code=f"{entity.upper()}_{field.upper()}_TAKEN",
            suggestion=f"Use a different {field}",
            details={"field": field, "value": value},
        )


class ResourceInUseError(ConflictError):
    """Raised when deleting a record that orders still reference."""

    def __init__(self, entity: str, entity_id: str, order_count: int):
        super().__init__(
            message=f"{entity.capitalize()} {entity_id} is referenced by {order_count} order(s)",
            code="RESOURCE_IN_USE",
            suggestion="Delete or reassign the orders first",
            details={f"{entity}_id": entity_id, "order_count": order_count},
        )


# =============================================================================
# Auth Errors
# =============================================================================

class AuthError(RentalException):
    """Raised when a request carries no valid bearer token."""

    def __init__(self, message: str = "Not authenticated", code: str = "NOT_AUTHENTICATED"):
        super().__init__(
            message=message,
            code=code,
            status_code=401,
            suggestion="Send 'Authorization: Bearer <token>' with a token from POST /api/v1/auth",
        )


class InvalidCredentialsError(AuthError):
    """Raised when login email/password don't match."""

    def __init__(self):
        super().__init__(message="Invalid email or password", code="INVALID_CREDENTIALS")


# =============================================================================
# Persistence Errors
# =============================================================================

class PersistenceError(RentalException):
    """Raised when the storage layer fails."""

    def __init__(self, operation: str, table: str, error: str):
        super().__init__(
            message=f"Failed to {operation} {table}: {error}",
            code="PERSISTENCE_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details={"operation": operation, "table": table},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def rental_exception_handler(
    request: Request,
    exc: RentalException
) -> JSONResponse:
    """
    Convert RentalException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=headers,
    )


def _field_path(loc: tuple | list) -> str:
    # Drop the "body"/"path"/"query" prefix FastAPI puts in front
    parts = [str(part) for part in loc]
    if parts and parts[0] in ("body", "path", "query", "header"):
        parts = parts[1:]
    return ".".join(parts) or "body"


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request validation errors.

    Bad payloads and malformed ids are client errors, so they map to 400
    with one entry per failing field.
    """
    errors = [
        {"field": _field_path(err.get("loc", ())), "message": err.get("msg", "")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        }
    )
