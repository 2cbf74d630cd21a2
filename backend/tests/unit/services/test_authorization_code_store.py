# tests/unit/services/test_authorization_code_store.py
from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
from authgate.services._shared.ports import InMemoryAuthorizationCodeStore

CONSUMERS = 16


# ------------------------------ Fixtures ---------------------------------- #
@pytest.fixture()
def store(clock) -> InMemoryAuthorizationCodeStore:
    return InMemoryAuthorizationCodeStore(clock=clock)


# -------------------------------- Tests ----------------------------------- #
def test_issue_and_consume_once(store):
    code = store.issue(42, ttl=60)

    assert store.consume(code) == 42
    assert store.consume(code) is None


def test_code_expires_at_ttl(store, clock):
    code = store.issue(42, ttl=60)
    clock.advance(60)

    assert store.consume(code) is None


def test_issue_prunes_expired_codes(store, clock):
    for _ in range(5):
        store.issue(42, ttl=60)
    clock.advance(60)

    fresh = store.issue(7, ttl=60)

    assert list(store._codes) == [fresh]


def test_issue_keeps_live_codes(store, clock):
    first = store.issue(42, ttl=60)
    clock.advance(30)
    store.issue(7, ttl=60)

    assert store.consume(first) == 42


def test_concurrent_consumers_only_one_wins(store):
    code = store.issue(42, ttl=60)
    barrier = threading.Barrier(CONSUMERS)

    def redeem(_: int) -> int | None:
        barrier.wait()
        return store.consume(code)

    with ThreadPoolExecutor(max_workers=CONSUMERS) as pool:
        results = list(pool.map(redeem, range(CONSUMERS)))

    assert [r for r in results if r is not None] == [42]
