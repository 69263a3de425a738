# =============================================================================
# core/models/common.py - Shared Schema Building Blocks
# =============================================================================
# Base classes every rental schema inherits from:
# - ApiModel: camelCase on the wire, snake_case in Python
# - RequestModel: ApiModel that rejects unknown fields
#
# Plus small field helpers reused by several entities.
# =============================================================================

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """
    Base for all API schemas.

    Field names are snake_case in Python and camelCase in JSON.
    Rows coming back from storage use the snake_case names, so
    populate_by_name lets the same model load both.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class RequestModel(ApiModel):
    """Base for request bodies. Unknown fields are a client error."""

    model_config = ConfigDict(extra="forbid")


class PartialUpdateModel(RequestModel):
    """
    Base for PATCH bodies.

    Every field is optional, but a field that IS sent must not be null.
    Use `changes()` to get only what the client supplied.
    """

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        nulls = [
            name for name in self.model_fields_set
            if getattr(self, name) is None
        ]
        if nulls:
            raise ValueError(f"Fields cannot be null: {', '.join(sorted(nulls))}")
        return self

    def changes(self) -> dict[str, Any]:
        """Supplied fields only, keyed by snake_case name."""
        return self.model_dump(exclude_unset=True)


def ensure_aware(value: datetime) -> datetime:
    """Treat naive timestamps as UTC so comparisons never mix kinds."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
