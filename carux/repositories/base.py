"""
Base Repository - Car UX Review Platform
carux/repositories/base.py

Persistence contract (by id / by parent / list) and the in-process
table store that backs it.
"""

import copy
import threading
from collections import defaultdict
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Generator, Hashable, List, Optional

from carux.core.exceptions import RepositoryException


class InMemoryDatabase:
    """
    Named tables of rows keyed by a hashable primary key.

    Each table has its own re-entrant lock; `transaction(table)` holds it
    for a multi-row read-modify-write.
    """

    def __init__(self):
        self._tables: Dict[str, Dict[Hashable, Dict[str, Any]]] = defaultdict(dict)
        self._locks: Dict[str, threading.RLock] = defaultdict(threading.RLock)
        self._registry_lock = threading.Lock()

    def lock_for(self, table: str) -> threading.RLock:
        with self._registry_lock:
            return self._locks[table]

    def table(self, name: str) -> Dict[Hashable, Dict[str, Any]]:
        with self._registry_lock:
            return self._tables[name]

    @contextmanager
    def transaction(self, table: str) -> Generator[Dict[Hashable, Dict[str, Any]], None, None]:
        """Hold the table lock and expose the raw table."""
        with self.lock_for(table):
            yield self.table(table)


class BaseRepository:
    """Base repository with row copy-in/copy-out semantics."""

    TABLE_NAME: str = ""

    def __init__(self, db: InMemoryDatabase):
        self.db = db

    @contextmanager
    def transaction(self) -> Generator[Dict[Hashable, Dict[str, Any]], None, None]:
        with self.db.transaction(self.TABLE_NAME) as table:
            yield table

    def get_row(self, key: Hashable) -> Optional[Dict[str, Any]]:
        """Fetch one row by primary key (copy), or None."""
        with self.transaction() as table:
            row = table.get(key)
            return copy.deepcopy(row) if row is not None else None

    def find_rows(self, **filters: Any) -> List[Dict[str, Any]]:
        """Fetch every row whose columns equal the given values (by-parent lookup)."""
        return self.list_rows(
            lambda row: all(row.get(col) == val for col, val in filters.items())
        )

    def list_rows(
        self, predicate: Optional[Callable[[Dict[str, Any]], bool]] = None
    ) -> List[Dict[str, Any]]:
        with self.transaction() as table:
            return [
                copy.deepcopy(row)
                for row in table.values()
                if predicate is None or predicate(row)
            ]

    def put_row(self, key: Hashable, row: Dict[str, Any]) -> Dict[str, Any]:
        """Insert or fully replace the row stored under `key`."""
        if not isinstance(row, dict):
            raise RepositoryException(f"{self.TABLE_NAME}: row must be a dict")
        with self.transaction() as table:
            table[key] = copy.deepcopy(row)
        return copy.deepcopy(row)

    @staticmethod
    def now() -> datetime:
        return datetime.now(timezone.utc)
