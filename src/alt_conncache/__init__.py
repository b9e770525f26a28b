"""Alt connection cache.

Keeps idle client connections keyed by (type, key) so protocol handlers can
reuse them instead of paying for a new TCP/TLS handshake.

Usage:
    from alt_conncache import ConnectionCache

    cache = ConnectionCache(total_capacity=4)
    cache.deposit("https", "example.com:443", conn)
    conn = cache.withdraw("https", "example.com:443")
"""

from alt_conncache.cache import UNSET, ConnectionCache
from alt_conncache.config import CacheSettings, get_settings
from alt_conncache.domain import (
    CheckResult,
    ConnectionRecord,
    DropAll,
    DropCriterion,
    Matching,
    OfType,
    OlderThan,
)
from alt_conncache.exceptions import (
    ConfigurationError,
    ConnCacheError,
    LivenessProbeUnavailable,
)
from alt_conncache.port import ReusableConnection
from alt_conncache.synchronized import SynchronizedConnectionCache

__all__ = [
    "UNSET",
    "CacheSettings",
    "CheckResult",
    "ConfigurationError",
    "ConnCacheError",
    "ConnectionCache",
    "ConnectionRecord",
    "DropAll",
    "DropCriterion",
    "LivenessProbeUnavailable",
    "Matching",
    "OfType",
    "OlderThan",
    "ReusableConnection",
    "SynchronizedConnectionCache",
    "get_settings",
]
__version__ = "0.1.0"
