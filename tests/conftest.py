"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable

import pytest
import structlog

from alt_conncache.cache import ConnectionCache
from alt_conncache.config import get_settings
from fakes.fake_connection import FakeClock, FakeConnection


@pytest.fixture(autouse=True)
def reset_structlog():
    """Keep structlog configuration from leaking between tests."""
    structlog.reset_defaults()
    get_settings.cache_clear()
    yield
    structlog.reset_defaults()
    get_settings.cache_clear()


@pytest.fixture
def clock() -> FakeClock:
    """Manually advanced clock."""
    return FakeClock()


@pytest.fixture
def make_cache(clock: FakeClock) -> Callable[..., ConnectionCache]:
    """Factory for caches that stamp deposits with the fake clock."""

    def _make(*args, **kwargs) -> ConnectionCache:
        kwargs.setdefault("clock", clock)
        return ConnectionCache(*args, **kwargs)

    return _make


@pytest.fixture
def connections() -> dict[str, FakeConnection]:
    """Named fake connections c1..c6."""
    return {name: FakeConnection(name) for name in ("c1", "c2", "c3", "c4", "c5", "c6")}
