from __future__ import annotations

import pytest

from balitour.infrastructure.auth.login_attempts import (
    AttemptEntry,
    InMemoryAttemptStore,
    LoginRateLimiter,
)

LOCKOUT = 15 * 60


class FakeClock:
    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store() -> InMemoryAttemptStore:
    return InMemoryAttemptStore()


@pytest.fixture()
def limiter(store: InMemoryAttemptStore, clock: FakeClock) -> LoginRateLimiter:
    return LoginRateLimiter(store, max_attempts=5, lockout_seconds=LOCKOUT, clock=clock)


def test_first_attempt_records_count_of_one(
    limiter: LoginRateLimiter, store: InMemoryAttemptStore, clock: FakeClock
) -> None:
    assert limiter.check_and_record_attempt("10.0.0.1") is True

    entry = store.get("10.0.0.1")
    assert entry == AttemptEntry("10.0.0.1", 1, clock.now)


def test_sixth_attempt_is_denied(limiter: LoginRateLimiter) -> None:
    results = [limiter.check_and_record_attempt("10.0.0.1") for _ in range(6)]

    assert results == [True] * 5 + [False]
    assert limiter.attempts("10.0.0.1") == 5


def test_keys_are_tracked_independently(limiter: LoginRateLimiter) -> None:
    for _ in range(5):
        limiter.check_and_record_attempt("10.0.0.1")

    assert limiter.check_and_record_attempt("10.0.0.1") is False
    assert limiter.check_and_record_attempt("10.0.0.2") is True


def test_denied_attempts_do_not_extend_the_window(
    limiter: LoginRateLimiter, clock: FakeClock
) -> None:
    for _ in range(5):
        limiter.check_and_record_attempt("10.0.0.1")

    clock.advance(10 * 60)
    assert limiter.check_and_record_attempt("10.0.0.1") is False

    clock.advance(5 * 60 + 1)
    assert limiter.check_and_record_attempt("10.0.0.1") is True
    assert limiter.attempts("10.0.0.1") == 1


def test_window_boundary_is_exclusive(limiter: LoginRateLimiter, clock: FakeClock) -> None:
    for _ in range(5):
        limiter.check_and_record_attempt("10.0.0.1")

    clock.advance(LOCKOUT)
    assert limiter.check_and_record_attempt("10.0.0.1") is False


def test_reset_clears_entry(limiter: LoginRateLimiter, store: InMemoryAttemptStore) -> None:
    for _ in range(5):
        limiter.check_and_record_attempt("10.0.0.1")

    limiter.reset("10.0.0.1")

    assert store.get("10.0.0.1") is None
    assert limiter.check_and_record_attempt("10.0.0.1") is True
    assert limiter.attempts("10.0.0.1") == 1


def test_retry_after_counts_down_from_last_attempt(
    limiter: LoginRateLimiter, clock: FakeClock
) -> None:
    assert limiter.retry_after("10.0.0.1") == 0
    for _ in range(5):
        limiter.check_and_record_attempt("10.0.0.1")

    assert limiter.retry_after("10.0.0.1") == LOCKOUT
    clock.advance(60.5)
    assert limiter.retry_after("10.0.0.1") == LOCKOUT - 60


def test_injected_store_receives_state(store: InMemoryAttemptStore, clock: FakeClock) -> None:
    limiter = LoginRateLimiter(store, max_attempts=2, lockout_seconds=60, clock=clock)

    limiter.check_and_record_attempt("a")
    limiter.check_and_record_attempt("b")

    assert len(store) == 2
    assert limiter.check_and_record_attempt("a") is True
    assert limiter.check_and_record_attempt("a") is False


def test_expired_entries_are_pruned(
    limiter: LoginRateLimiter, store: InMemoryAttemptStore, clock: FakeClock
) -> None:
    for index in range(20):
        limiter.check_and_record_attempt(f"10.0.1.{index}")
    assert len(store) == 20

    clock.advance(LOCKOUT + 1)
    limiter.check_and_record_attempt("10.0.2.1")

    assert len(store) == 1
    assert store.get("10.0.1.0") is None


def test_entries_inside_the_window_survive_pruning(
    limiter: LoginRateLimiter, store: InMemoryAttemptStore, clock: FakeClock
) -> None:
    limiter.check_and_record_attempt("10.0.1.1")
    clock.advance(LOCKOUT)
    limiter.check_and_record_attempt("10.0.1.2")

    assert store.get("10.0.1.1") is not None
    assert len(store) == 2
