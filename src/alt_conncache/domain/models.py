"""Domain models for cached connections."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Hashable


@dataclass(eq=False, slots=True)
class ConnectionRecord:
    """One cached connection plus the metadata eviction decisions need.

    Records compare by identity: two deposits of the same ``(type, key)``
    are separate records and may both be cached.
    """

    connection: Any
    conn_type: str
    key: Hashable
    deposit_time: float

    def matches(self, conn_type: str, key: Hashable) -> bool:
        return self.conn_type == conn_type and self.key == key

    def age(self, now: float) -> float:
        """Seconds elapsed between deposit and ``now``."""
        return now - self.deposit_time

    def __str__(self) -> str:
        return f"{self.connection} {self.conn_type} {self.key} {self.deposit_time}"
