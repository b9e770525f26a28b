"""Connection cache: idle reusable connections keyed by (type, key).

Protocol handlers deposit a connection after a request completes and try to
withdraw one before opening a new socket:

    cache = ConnectionCache(total_capacity=4)
    cache.capacity("https", 2)
    cache.deposit("https", "example.com:443", conn)
    conn = cache.withdraw("https", "example.com:443")  # None on a miss

Insertion order is the only ordering signal. Re-depositing a connection
appends a new record instead of refreshing an old one.

Subclasses can change the policy by overriding ``deposit``,
``enforce_limits`` and ``dropping``. The cache performs no locking; see
``alt_conncache.synchronized`` for shared use across threads.
"""

from __future__ import annotations

import time
import warnings
from typing import Any, Callable, Hashable, Mapping

import structlog

from alt_conncache.config import CacheSettings, get_settings, validate_capacity
from alt_conncache.domain.criteria import CheckResult, Matching, evaluate, resolve_criterion
from alt_conncache.domain.models import ConnectionRecord
from alt_conncache.exceptions import LivenessProbeUnavailable
from alt_conncache.port.connection_port import ReusableConnection


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


# Distinguishes "read the limit" from "set the limit to None (unlimited)".
UNSET: Any = _Unset()


def _is_dead(connection: Any, conn_type: str, key: Hashable, deposit_time: float) -> bool:
    if not isinstance(connection, ReusableConnection):
        raise LivenessProbeUnavailable(connection)
    return not connection.ping()


class ConnectionCache:
    """Bounded, insertion-ordered store of idle connections.

    Two limits apply: ``total_capacity`` bounds the whole cache and
    ``capacity(conn_type)`` bounds a single type. When either is exceeded the
    newest connections survive.
    """

    def __init__(
        self,
        total_capacity: int | None = 1,
        *,
        capacities: Mapping[str, int | None] | None = None,
        debug: bool = False,
        clock: Callable[[], float] = time.time,
        logger: Any = None,
        **options: Any,
    ) -> None:
        """
        Args:
            total_capacity: Initial global limit. ``None`` means unlimited.
            capacities: Initial per-type limits.
            debug: Log each dropped connection and each failed drop check.
            clock: Source of deposit timestamps, in seconds.
            logger: structlog logger to use instead of the module logger.
            **options: Unrecognised options; reported and ignored.
        """
        self.debug = debug
        self._clock = clock
        if logger is None:
            logger = structlog.get_logger(__name__)
        self._log = logger.bind(component="conn_cache")
        self._records: list[ConnectionRecord] = []
        self._limits: dict[str, int | None] = {}
        self._limit_total: int | None = None

        if options:
            names = ", ".join(sorted(options))
            warnings.warn(f"Unrecognised options: {names}", UserWarning, stacklevel=2)
            self._log.warning("unrecognised options", options=sorted(options))

        for conn_type, limit in (capacities or {}).items():
            self.capacity(conn_type, limit)
        self.total_capacity(total_capacity)

    @classmethod
    def from_settings(cls, settings: CacheSettings | None = None, **kwargs: Any) -> ConnectionCache:
        """Build a cache from environment-derived settings."""
        settings = settings or get_settings()
        return cls(
            settings.total_capacity,
            capacities=settings.capacities,
            debug=settings.debug,
            **kwargs,
        )

    def __repr__(self) -> str:
        return (
            f"<ConnectionCache records={len(self._records)} "
            f"total_capacity={self._limit_total} capacities={self._limits}>"
        )

    def __len__(self) -> int:
        return len(self._records)

    # ------------------------------------------------------------------
    # Capacity

    def total_capacity(self, value: int | None = UNSET) -> int | None:
        """Get or set the limit on cached connections across all types.

        Setting ``0`` drops every connection; ``None`` removes the global
        limit (per-type limits still apply). Setting re-runs enforcement.

        Returns:
            The limit in effect before the call.
        """
        previous = self._limit_total
        if value is not UNSET:
            self._limit_total = validate_capacity("total_capacity", value)
            self.enforce_limits()
        return previous

    def capacity(self, conn_type: str, value: int | None = UNSET) -> int | None:
        """Get or set the limit for one connection type (e.g. ``"http"``).

        Returns:
            The limit in effect before the call, ``None`` when unlimited.
        """
        previous = self._limits.get(conn_type)
        if value is not UNSET:
            self._limits[conn_type] = validate_capacity(f"capacity[{conn_type}]", value)
            self.enforce_limits(conn_type)
        return previous

    # ------------------------------------------------------------------
    # Protocol methods, called by handlers

    def deposit(self, conn_type: str, key: Hashable, connection: Any) -> None:
        """Add a connection to the cache.

        Other connections, or this one, may be dropped as a side effect.
        Several connections may share the same ``(conn_type, key)``.
        """
        self._records.append(ConnectionRecord(connection, conn_type, key, self._clock()))
        self.enforce_limits(conn_type)

    def withdraw(self, conn_type: str, key: Hashable) -> Any:
        """Remove and return the oldest cached connection for ``(conn_type, key)``.

        Returns ``None`` when nothing matches. A deposited connection is never
        guaranteed to come back: the cache may drop it at any time.
        """
        for index, record in enumerate(self._records):
            if record.matches(conn_type, key):
                del self._records[index]
                return record.connection
        return None

    # ------------------------------------------------------------------
    # Eviction

    def enforce_limits(self, conn_type: str | None = None) -> None:
        """Drop connections until no capacity limit is exceeded.

        Called after every deposit and capacity change. Only ``conn_type``'s
        limit is checked when given, otherwise the limits of every cached
        type. For each type the newest connections up to its limit survive;
        then the oldest connections overall go until the total limit holds.
        """
        types = [conn_type] if conn_type is not None else sorted(self.get_types())
        for current in types:
            limit = self._limits.get(current)
            if limit is None:
                continue
            excess = self.count(current) - limit
            if excess <= 0:
                continue

            evicted: list[ConnectionRecord] = []
            kept: list[ConnectionRecord] = []
            for record in self._records:
                if excess > 0 and record.conn_type == current:
                    evicted.append(record)
                    excess -= 1
                else:
                    kept.append(record)
            self._records = kept
            for record in evicted:
                self.dropping(record, f"{current} capacity exceeded")

        total = self._limit_total
        if total is not None:
            while len(self._records) > total:
                self.dropping(self._records.pop(0), "Total capacity exceeded")

    def drop(self, criterion: Any = None, reason: str | None = None) -> None:
        """Drop connections by some criterion.

        Args:
            criterion: ``None`` drops everything. A number (``int`` or
                ``float``) drops connections cached for at least that many
                seconds. A string always names a connection type, even a
                numeric-looking one: ``drop("30")`` drops type ``"30"``, not
                connections older than 30 seconds. A callable is called as
                ``(connection, conn_type, key, deposit_time)`` and a truthy
                result drops the connection. A resolved criterion from
                ``alt_conncache.domain.criteria`` is used as is.
            reason: Passed to ``dropping``; defaults to a description of the
                criterion.

        A check that raises keeps its connection, and so does a ``dropping``
        hook that raises for it; the error is logged when ``debug`` is on and
        never propagated, and the sweep goes on with the next connection.
        """
        resolved = resolve_criterion(criterion)
        reason = reason or resolved.default_reason()
        now = self._clock()

        kept: list[ConnectionRecord] = []
        for record in self._records:
            result = evaluate(resolved, record, now)
            if result.should_drop:
                try:
                    self.dropping(record, reason)
                    continue
                except Exception as e:
                    result = CheckResult.failed(e)
            if result.is_failure:
                self._log_failed_check(record, reason, result.error)
            kept.append(record)

        self._records = kept

    def _log_failed_check(self, record: ConnectionRecord, reason: str, error: Exception) -> None:
        if self.debug:
            self._log.debug(
                "drop check failed",
                record=str(record),
                reason=reason,
                error=str(error),
                error_type=type(error).__name__,
            )

    def prune(self) -> None:
        """Drop connections whose ``ping()`` reports them dead.

        Connections without ``ping()``, or whose ``ping()`` raises, are kept.
        """
        self.drop(Matching(_is_dead), "ping")

    def dropping(self, record: ConnectionRecord, reason: str) -> None:
        """Called once for every connection evicted from the cache.

        During ``enforce_limits`` the record has already been removed when
        this runs. During ``drop``/``prune`` it runs mid-sweep, and raising
        from it keeps the record cached. The default only logs, and only when
        ``debug`` is on.
        """
        if self.debug:
            self._log.info("dropping connection", record=str(record), reason=reason)

    # ------------------------------------------------------------------
    # Introspection

    def get_types(self) -> set[str]:
        """Return the connection types currently cached."""
        return {record.conn_type for record in self._records}

    def get_connections(self, conn_type: str | None = None) -> list[Any]:
        """Return cached connections, oldest first, optionally of one type.

        The connections stay cached and may be dropped later without notice.
        """
        return [
            record.connection
            for record in self._records
            if conn_type is None or record.conn_type == conn_type
        ]

    def count(self, conn_type: str | None = None) -> int:
        """Return the number of cached connections, optionally of one type."""
        if conn_type is None:
            return len(self._records)
        return sum(1 for record in self._records if record.conn_type == conn_type)
