"""Thread-safe, identity-keyed collection of resolved repositories."""

from __future__ import annotations

import threading
from typing import Dict, List

from .models import RepositoryRecord


class DeduplicatingResultSet:
    """Keeps the first record inserted for each identity.

    ``identity in result_set`` is a cheap pre-check to avoid resolving a
    repository we already have; only :meth:`try_insert` is authoritative.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: Dict[str, RepositoryRecord] = {}

    def try_insert(self, record: RepositoryRecord) -> bool:
        with self._lock:
            if record.identity in self._records:
                return False
            self._records[record.identity] = record
            return True

    def snapshot(self) -> List[RepositoryRecord]:
        with self._lock:
            return list(self._records.values())

    def __contains__(self, identity: object) -> bool:
        with self._lock:
            return identity in self._records

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


__all__ = ["DeduplicatingResultSet"]
