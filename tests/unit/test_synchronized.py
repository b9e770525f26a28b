"""Tests for the lock-guarded cache facade."""

from __future__ import annotations

import threading

from alt_conncache.cache import ConnectionCache
from alt_conncache.synchronized import SynchronizedConnectionCache
from fakes.fake_connection import FakeConnection


class TestDelegation:
    """Every operation reaches the wrapped cache."""

    def test_default_wraps_new_cache(self) -> None:
        shared = SynchronizedConnectionCache()
        assert isinstance(shared.cache, ConnectionCache)
        assert shared.total_capacity() == 1

    def test_protocol_and_queries(self, make_cache) -> None:
        shared = SynchronizedConnectionCache(make_cache(None))
        c1, c2 = FakeConnection("c1"), FakeConnection("c2", alive=False)

        assert shared.capacity("http", 2) is None
        shared.deposit("http", "a", c1)
        shared.deposit("ftp", "b", c2)

        assert shared.get_types() == {"http", "ftp"}
        assert shared.get_connections("http") == [c1]
        assert shared.count() == 2
        assert len(shared) == 2

        shared.prune()
        assert shared.get_connections() == [c1]

        assert shared.withdraw("http", "a") is c1
        assert shared.withdraw("http", "a") is None

    def test_capacity_and_drop(self, make_cache) -> None:
        shared = SynchronizedConnectionCache(make_cache(None))
        for i in range(4):
            shared.deposit("http", f"k{i}", FakeConnection(f"c{i}"))

        assert shared.total_capacity(3) is None
        assert shared.count() == 3

        shared.drop("http")
        assert shared.count() == 0
        assert "SynchronizedConnectionCache" in repr(shared)


def test_concurrent_deposits_respect_limits():
    shared = SynchronizedConnectionCache(ConnectionCache(50))
    shared.capacity("http", 20)

    def worker(n: int) -> None:
        for i in range(200):
            conn_type = "http" if i % 2 else "ftp"
            shared.deposit(conn_type, f"{n}:{i}", FakeConnection(f"{n}-{i}"))
            shared.withdraw(conn_type, f"{n}:{i - 1}")

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert shared.count() <= 50
    assert shared.count("http") <= 20
