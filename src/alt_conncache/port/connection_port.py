"""Connection port: what the cache needs from a cached connection."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ReusableConnection(Protocol):
    """A connection that can report whether it is still usable.

    The cache treats connections as opaque. ``ping()`` is only consulted by
    ``prune()``, and ``str()`` only by debug diagnostics. Connections without
    ``ping()`` may still be cached; prune leaves them alone.
    """

    def ping(self) -> bool:
        """Return True while the connection can carry another request."""
        ...
