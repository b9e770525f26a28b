"""Lock-guarded facade for sharing one connection cache between threads.

``ConnectionCache`` assumes a single owner. Owners that hand the same cache
to several worker threads wrap it here so every operation runs under one
re-entrant lock; ``dropping`` hooks on the wrapped cache run while the lock
is held.
"""

from __future__ import annotations

from threading import RLock
from typing import Any, Hashable

from alt_conncache.cache import UNSET, ConnectionCache


class SynchronizedConnectionCache:
    """Serializes access to a wrapped :class:`ConnectionCache`."""

    def __init__(self, cache: ConnectionCache | None = None) -> None:
        self._cache = cache if cache is not None else ConnectionCache()
        self._lock = RLock()

    def __repr__(self) -> str:
        with self._lock:
            return f"<SynchronizedConnectionCache {self._cache!r}>"

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    @property
    def cache(self) -> ConnectionCache:
        """The wrapped cache. Calling it directly bypasses the lock."""
        return self._cache

    def deposit(self, conn_type: str, key: Hashable, connection: Any) -> None:
        with self._lock:
            self._cache.deposit(conn_type, key, connection)

    def withdraw(self, conn_type: str, key: Hashable) -> Any:
        with self._lock:
            return self._cache.withdraw(conn_type, key)

    def total_capacity(self, value: int | None = UNSET) -> int | None:
        with self._lock:
            return self._cache.total_capacity(value)

    def capacity(self, conn_type: str, value: int | None = UNSET) -> int | None:
        with self._lock:
            return self._cache.capacity(conn_type, value)

    def drop(self, criterion: Any = None, reason: str | None = None) -> None:
        with self._lock:
            self._cache.drop(criterion, reason)

    def prune(self) -> None:
        with self._lock:
            self._cache.prune()

    def get_types(self) -> set[str]:
        with self._lock:
            return self._cache.get_types()

    def get_connections(self, conn_type: str | None = None) -> list[Any]:
        with self._lock:
            return self._cache.get_connections(conn_type)

    def count(self, conn_type: str | None = None) -> int:
        with self._lock:
            return self._cache.count(conn_type)
