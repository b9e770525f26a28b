"""Custom exceptions for the connection cache.

Eviction and lookup never raise: a missed withdraw is ``None`` and a failing
drop check keeps its record. These exceptions cover caller misuse and the
liveness probe contract.
"""

from __future__ import annotations


class ConnCacheError(Exception):
    """Base class for connection cache errors."""


class ConfigurationError(ConnCacheError, ValueError):
    """Invalid capacity or settings value.

    Raised for negative capacities and for values that are neither ``None``
    nor an integer.
    """

    def __init__(self, field: str, value: object, message: str) -> None:
        self.field = field
        self.value = value
        super().__init__(f"[{field}] {message}: {value!r}")


class LivenessProbeUnavailable(ConnCacheError):
    """The cached connection exposes no ``ping()`` liveness probe."""

    def __init__(self, connection: object) -> None:
        self.connection = connection
        super().__init__(f"connection has no liveness probe: {connection}")
