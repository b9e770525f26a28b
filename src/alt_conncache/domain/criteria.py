"""Drop criteria: which cached connections an explicit drop removes.

``ConnectionCache.drop`` accepts a loose argument (nothing, a number of
seconds, a type name or a callable). It is resolved once into one of the
tagged variants below before the sweep runs, so every record is judged by
the same ``matches(record, now)`` shape.

Evaluating a criterion never raises. :func:`evaluate` wraps the outcome in a
:class:`CheckResult`, and a failed check means the record is kept.
"""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Real
from typing import Any, Callable, Hashable, Union

from alt_conncache.domain.models import ConnectionRecord

# (connection, conn_type, key, deposit_time) -> should drop
DropPredicate = Callable[[Any, str, Hashable, float], Any]


@dataclass(frozen=True)
class DropAll:
    """Matches every cached record."""

    def matches(self, record: ConnectionRecord, now: float) -> bool:
        return True

    def default_reason(self) -> str:
        return "drop"


@dataclass(frozen=True)
class OlderThan:
    """Matches records that have been cached for at least ``seconds``."""

    seconds: float

    def matches(self, record: ConnectionRecord, now: float) -> bool:
        return record.age(now) >= self.seconds

    def default_reason(self) -> str:
        return f"older than {self.seconds}"


@dataclass(frozen=True)
class OfType:
    """Matches records of one connection type."""

    conn_type: str

    def matches(self, record: ConnectionRecord, now: float) -> bool:
        return record.conn_type == self.conn_type

    def default_reason(self) -> str:
        return f"drop {self.conn_type}"


@dataclass(frozen=True)
class Matching:
    """Matches records for which ``predicate`` returns a truthy value.

    The predicate is called as ``predicate(connection, conn_type, key,
    deposit_time)`` and may call into the connection, so it is allowed to
    raise.
    """

    predicate: DropPredicate

    def matches(self, record: ConnectionRecord, now: float) -> bool:
        return bool(
            self.predicate(
                record.connection, record.conn_type, record.key, record.deposit_time
            )
        )

    def default_reason(self) -> str:
        return "drop"


DropCriterion = Union[DropAll, OlderThan, OfType, Matching]

_VARIANTS = (DropAll, OlderThan, OfType, Matching)


def resolve_criterion(criterion: Any = None) -> DropCriterion:
    """Turn a ``drop()`` argument into a tagged criterion.

    Args:
        criterion: ``None``, a number of seconds, a connection type, a
            callable predicate, or an already-resolved criterion.

    Returns:
        The matching :data:`DropCriterion` variant.

    Raises:
        TypeError: If the argument has none of the accepted shapes.
    """
    if criterion is None:
        return DropAll()
    if isinstance(criterion, _VARIANTS):
        return criterion
    # bool is a Real, but drop(True) is almost certainly a mistake
    if isinstance(criterion, Real) and not isinstance(criterion, bool):
        return OlderThan(criterion)
    if isinstance(criterion, str):
        return OfType(criterion)
    if callable(criterion):
        return Matching(criterion)
    raise TypeError(
        f"drop criterion must be None, a number, a str or a callable, "
        f"got {type(criterion).__name__}"
    )


@dataclass(frozen=True)
class CheckResult:
    """Outcome of judging one record: a decision, or the error that prevented one."""

    should_drop: bool
    error: Exception | None = None

    @classmethod
    def ok(cls, should_drop: bool) -> CheckResult:
        return cls(should_drop=should_drop)

    @classmethod
    def failed(cls, error: Exception) -> CheckResult:
        return cls(should_drop=False, error=error)

    @property
    def is_failure(self) -> bool:
        return self.error is not None


def evaluate(criterion: DropCriterion, record: ConnectionRecord, now: float) -> CheckResult:
    """Judge ``record`` against ``criterion``, capturing any exception raised."""
    try:
        return CheckResult.ok(criterion.matches(record, now))
    except Exception as e:
        return CheckResult.failed(e)
