"""Domain types for the connection cache."""

from alt_conncache.domain.criteria import (
    CheckResult,
    DropAll,
    DropCriterion,
    Matching,
    OfType,
    OlderThan,
    evaluate,
    resolve_criterion,
)
from alt_conncache.domain.models import ConnectionRecord

__all__ = [
    "CheckResult",
    "ConnectionRecord",
    "DropAll",
    "DropCriterion",
    "Matching",
    "OfType",
    "OlderThan",
    "evaluate",
    "resolve_criterion",
]
