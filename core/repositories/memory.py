# =============================================================================
# core/repositories/memory.py - In-Process Repository
# =============================================================================
# Keeps rows in insertion-ordered dicts. Used by the test suite and by
# STORAGE_BACKEND=memory for running the API without a database.
# Data is lost when the process exits.
# =============================================================================

import copy
import logging
import threading
from typing import Any

from core.models.common import utc_now_iso
from core.repositories.base import CARS, CUSTOMERS, ORDERS, USERS, Repositories, Repository

logger = logging.getLogger(__name__)


class InMemoryRepository(Repository):
    """
    Dict-backed repository for one table.

    Rows are copied on the way in and out so callers can't mutate
    stored state by accident.
    """

    def __init__(self, table: str):
        super().__init__(table)
        self._rows: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()

    def find_by_id(self, record_id: str) -> dict[str, Any] | None:
        with self._lock:
            row = self._rows.get(str(record_id))
            return copy.deepcopy(row) if row is not None else None

    def find_all(self) -> list[dict[str, Any]]:
        with self._lock:
            return [copy.deepcopy(row) for row in self._rows.values()]

    def find_by(self, field: str, value: Any) -> list[dict[str, Any]]:
        with self._lock:
            return [
                copy.deepcopy(row)
                for row in self._rows.values()
                if row.get(field) == value
            ]

    def insert(self, data: dict[str, Any]) -> dict[str, Any]:
        row = copy.deepcopy(data)
        row.setdefault("created_at", utc_now_iso())
        record_id = str(row["id"])

        with self._lock:
            if record_id in self._rows:
                raise KeyError(f"Duplicate id in {self.table}: {record_id}")
            self._rows[record_id] = row

        logger.debug(f"Inserted {self.table} row {record_id}")
        return copy.deepcopy(row)

    def update(self, record_id: str, changes: dict[str, Any]) -> dict[str, Any] | None:
        with self._lock:
            row = self._rows.get(str(record_id))
            if row is None:
                return None
            row.update(copy.deepcopy(changes))
            return copy.deepcopy(row)

    def delete(self, record_id: str) -> bool:
        with self._lock:
            return self._rows.pop(str(record_id), None) is not None

    def clear(self) -> None:
        with self._lock:
            self._rows.clear()


class InMemoryRepositories(Repositories):
    """Bundle of in-memory repositories, one per table."""

    def __init__(self):
        super().__init__(
            users=InMemoryRepository(USERS),
            customers=InMemoryRepository(CUSTOMERS),
            cars=InMemoryRepository(CARS),
            orders=InMemoryRepository(ORDERS),
        )

    def sync_schema(self) -> None:
        logger.info("Using in-memory storage; nothing to synchronize")
