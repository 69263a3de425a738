# =============================================================================
# core/repositories/supabase.py - Supabase (Postgres) Repository
# =============================================================================
# Production storage. Each call is one PostgREST request, so a single
# create/update/delete is atomic on the database side.
#
# Client errors are re-raised as PersistenceError so the API answers 500
# with a structured body instead of leaking driver exceptions. A unique
# constraint violation becomes DuplicateValueError (409).
# =============================================================================

import logging
from typing import Any

from app.exceptions import DuplicateValueError, PersistenceError, RentalException
from core.repositories.base import CARS, CUSTOMERS, ORDERS, TABLES, USERS, Repositories, Repository
from lib.supabase_client import DUPLICATE_KEY, SupabaseClient, SupabaseClientError

logger = logging.getLogger(__name__)

ENTITY_NAMES = {USERS: "user", CUSTOMERS: "customer", CARS: "car", ORDERS: "order"}


class SupabaseRepository(Repository):
    """Repository for one Supabase table."""

    def _fail(self, operation: str, error: SupabaseClientError) -> RentalException:
        if error.code == DUPLICATE_KEY:
            # Lost a race with a concurrent write of the same unique value
            logger.warning(f"Supabase {operation} on {self.table} hit a unique constraint: {error}")
            return DuplicateValueError(
                ENTITY_NAMES.get(self.table, self.table),
                error.details.get("field", "value"),
                error.details.get("value", ""),
            )
        logger.error(f"Supabase {operation} on {self.table} failed: {error}")
        return PersistenceError(operation, self.table, error.message)

    def find_by_id(self, record_id: str) -> dict[str, Any] | None:
        try:
            return SupabaseClient.fetch_row(self.table, record_id)
        except SupabaseClientError as e:
            raise self._fail("fetch", e)

    def find_all(self) -> list[dict[str, Any]]:
        try:
            return SupabaseClient.fetch_rows(self.table)
        except SupabaseClientError as e:
            raise self._fail("list", e)

    def find_by(self, field: str, value: Any) -> list[dict[str, Any]]:
        try:
            return SupabaseClient.fetch_rows(self.table, column=field, value=value)
        except SupabaseClientError as e:
            raise self._fail("query", e)

    def insert(self, data: dict[str, Any]) -> dict[str, Any]:
        try:
            return SupabaseClient.insert_row(self.table, data)
        except SupabaseClientError as e:
            raise self._fail("insert", e)

    def update(self, record_id: str, changes: dict[str, Any]) -> dict[str, Any] | None:
        try:
            return SupabaseClient.update_row(self.table, record_id, changes)
        except SupabaseClientError as e:
            raise self._fail("update", e)

    def delete(self, record_id: str) -> bool:
        try:
            return SupabaseClient.delete_row(self.table, record_id)
        except SupabaseClientError as e:
            raise self._fail("delete", e)


class SupabaseRepositories(Repositories):
    """Bundle of Supabase repositories, one per table."""

    def __init__(self):
        super().__init__(
            users=SupabaseRepository(USERS),
            customers=SupabaseRepository(CUSTOMERS),
            cars=SupabaseRepository(CARS),
            orders=SupabaseRepository(ORDERS),
        )

    def sync_schema(self) -> None:
        """
        Check every table is reachable.

        The schema itself lives in supabase/migrations; this fails startup
        early when a migration hasn't been applied.
        """
        for table in TABLES:
            try:
                SupabaseClient.probe_table(table)
            except SupabaseClientError as e:
                raise PersistenceError("probe", table, str(e))
        logger.info(f"Supabase schema verified: {', '.join(TABLES)}")
