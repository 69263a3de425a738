# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase (PostgREST) table
# operations. It implements the singleton pattern to reuse a single client
# connection and exposes the handful of row-level calls the repositories
# need:
# - fetch a row by id
# - fetch rows, optionally filtered by one column
# - insert / update / delete a row by id
# - probe a table (used at startup to check the schema is in place)
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   order = SupabaseClient.fetch_row("orders", order_id)
# =============================================================================

from __future__ import annotations

import logging
import re
from typing import Any
from uuid import UUID

from supabase import create_client, Client

from app.config import settings

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgREST / Postgres codes meaning "the id can't match anything"
INVALID_TEXT_REPRESENTATION = "22P02"  # e.g. "abc" compared to a uuid column

# Postgres unique_violation, matched with its quotes so an id that happens
# to contain the digits in a message is not mistaken for it
UNIQUE_VIOLATION = re.compile(r"""['"]23505['"]""")

# SupabaseClientError code for a unique-constraint hit
DUPLICATE_KEY = "DUPLICATE_KEY"

# Postgres detail text: Key (plate)=(ABC1D23) already exists.
DUPLICATE_KEY_DETAIL = re.compile(r"Key \((?P<field>[^)]+)\)=\((?P<value>[^)]*)\)")


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Provides actionable error messages:
    "Errors should tell HOW to fix, not just WHAT failed."
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Typed wrapper for Supabase table operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        car = SupabaseClient.fetch_row("cars", car_id)
        orders = SupabaseClient.fetch_rows("orders", column="car_id", value=car_id)
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        This is appropriate for server-side operations.

        Returns:
            Client: Supabase client instance

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    @classmethod
    def _normalize_uuid(cls, uuid_value: str | UUID) -> str:
        """Convert UUID to string for queries."""
        return str(uuid_value) if isinstance(uuid_value, UUID) else uuid_value

    @staticmethod
    def _is_invalid_id(error: Exception) -> bool:
        return INVALID_TEXT_REPRESENTATION in str(error)

    @staticmethod
    def _duplicate_key_error(table: str, error: Exception) -> SupabaseClientError | None:
        """Translate a unique-constraint violation, or return None."""
        if not UNIQUE_VIOLATION.search(str(error)):
            return None
        details = {"table": table}
        match = DUPLICATE_KEY_DETAIL.search(str(error))
        if match:
            details.update(match.groupdict())
        return SupabaseClientError(
            message=f"Duplicate value in {table}: {error}",
            code=DUPLICATE_KEY,
            suggestion="Use a different value for the unique field",
            details=details
        )

    # -------------------------------------------------------------------------
    # Read Operations
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_row(cls, table: str, row_id: str | UUID) -> dict[str, Any] | None:
        """
        Fetch a single row by primary key.

        Args:
            table: Table name
            row_id: The row id

        Returns:
            Row dict, or None if not found (a malformed id counts as not found)

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        row_id_str = cls._normalize_uuid(row_id)

        try:
            response = (
                client.table(table)
                .select("*")
                .eq("id", row_id_str)
                .limit(1)
                .execute()
            )
            rows = response.data or []
            return rows[0] if rows else None

        except Exception as e:
            if cls._is_invalid_id(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch row from {table}: {e}",
                code="FETCH_ROW_FAILED",
                suggestion=f"Check that the {table} table exists and is accessible",
                details={"table": table, "id": row_id_str}
            )

    @classmethod
    def fetch_rows(
        cls,
        table: str,
        column: str | None = None,
        value: Any = None,
    ) -> list[dict[str, Any]]:
        """
        Fetch rows in insertion order, optionally filtered by one column.

        Args:
            table: Table name
            column: Column to filter on (all rows when None)
            value: Value the column must equal

        Returns:
            List of row dicts, oldest first

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            query = client.table(table).select("*")
            if column is not None:
                query = query.eq(column, cls._normalize_uuid(value))
            response = query.order("created_at").order("id").execute()

            rows = response.data or []
            logger.debug(f"Fetched {len(rows)} rows from {table}")
            return rows

        except Exception as e:
            if column is not None and cls._is_invalid_id(e):
                return []
            raise SupabaseClientError(
                message=f"Failed to fetch rows from {table}: {e}",
                code="FETCH_ROWS_FAILED",
                suggestion=f"Check that the {table} table exists and is accessible",
                details={"table": table, "column": column}
            )

    @classmethod
    def probe_table(cls, table: str) -> None:
        """
        Check that a table exists and is readable.

        Raises:
            SupabaseClientError: If the table can't be queried
        """
        client = cls.get_client()

        try:
            client.table(table).select("id").limit(1).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Table {table} is not reachable: {e}",
                code="TABLE_MISSING",
                suggestion="Apply supabase/migrations/0001_rental_schema.sql to the project",
                details={"table": table}
            )

    # -------------------------------------------------------------------------
    # Write Operations
    # -------------------------------------------------------------------------

    @classmethod
    def insert_row(cls, table: str, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a row.

        Returns:
            Inserted row dict with database defaults (created_at) filled in

        Raises:
            SupabaseClientError: If insert fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table(table)
                .insert(data)
                .execute()
            )

            if response.data:
                return response.data[0]
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_NO_DATA",
                details={"table": table}
            )

        except SupabaseClientError:
            raise
        except Exception as e:
            duplicate = cls._duplicate_key_error(table, e)
            if duplicate:
                raise duplicate
            raise SupabaseClientError(
                message=f"Failed to insert into {table}: {e}",
                code="INSERT_FAILED",
                details={"table": table}
            )

    @classmethod
    def update_row(
        cls,
        table: str,
        row_id: str | UUID,
        changes: dict[str, Any],
    ) -> dict[str, Any] | None:
        """
        Update a row by id.

        Returns:
            Updated row dict, or None if no row has that id

        Raises:
            SupabaseClientError: If update fails
        """
        client = cls.get_client()
        row_id_str = cls._normalize_uuid(row_id)

        try:
            response = (
                client.table(table)
                .update(changes)
                .eq("id", row_id_str)
                .execute()
            )
            rows = response.data or []
            return rows[0] if rows else None

        except Exception as e:
            if cls._is_invalid_id(e):
                return None
            duplicate = cls._duplicate_key_error(table, e)
            if duplicate:
                raise duplicate
            raise SupabaseClientError(
                message=f"Failed to update {table}: {e}",
                code="UPDATE_FAILED",
                details={"table": table, "id": row_id_str}
            )

    @classmethod
    def delete_row(cls, table: str, row_id: str | UUID) -> bool:
        """
        Delete a row by id.

        Returns:
            True if a row was deleted, False if none matched

        Raises:
            SupabaseClientError: If delete fails
        """
        client = cls.get_client()
        row_id_str = cls._normalize_uuid(row_id)

        try:
            response = (
                client.table(table)
                .delete()
                .eq("id", row_id_str)
                .execute()
            )
            return bool(response.data)

        except Exception as e:
            if cls._is_invalid_id(e):
                return False
            raise SupabaseClientError(
                message=f"Failed to delete from {table}: {e}",
                code="DELETE_FAILED",
                details={"table": table, "id": row_id_str}
            )
