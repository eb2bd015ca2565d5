"""Unit tests for the in-memory server-driven rate limiter."""

import threading
from unittest.mock import Mock

from wynnapi.adapters.rate_limit import InMemoryRateLimiter, RateLimitState


def test_not_limited_before_first_report() -> None:
    limiter = InMemoryRateLimiter(clock=Mock(return_value=1000.0))

    assert limiter.is_rate_limited() is False
    assert limiter.snapshot() is None
    assert limiter.rate_limit_reset_timestamp() == -1


def test_limited_when_exhausted_and_reset_ahead() -> None:
    limiter = InMemoryRateLimiter(clock=Mock(return_value=1000.0))

    limiter.update_rate_limit(1_005_000, 0, 60)

    assert limiter.is_rate_limited() is True
    assert limiter.rate_limit_reset_timestamp() == 1_005_000


def test_not_limited_with_budget_left() -> None:
    limiter = InMemoryRateLimiter(clock=Mock(return_value=1000.0))

    limiter.update_rate_limit(1_005_000, 1, 60)

    assert limiter.is_rate_limited() is False


def test_gate_opens_once_reset_has_passed() -> None:
    clock = Mock(return_value=1000.0)
    limiter = InMemoryRateLimiter(clock=clock)
    limiter.update_rate_limit(1_005_000, 0, 60)

    clock.return_value = 1005.0
    assert limiter.is_rate_limited() is False


def test_update_overwrites_and_clamps_negative_remaining() -> None:
    limiter = InMemoryRateLimiter(clock=Mock(return_value=1000.0))

    limiter.update_rate_limit(1_010_000, 30, 60)
    limiter.update_rate_limit(1_020_000, -4, 120)

    assert limiter.snapshot() == RateLimitState(reset_at_ms=1_020_000, remaining=0, limit=120)


def test_reset_forgets_state() -> None:
    limiter = InMemoryRateLimiter(clock=Mock(return_value=1000.0))
    limiter.update_rate_limit(1_005_000, 0, 60)

    limiter.reset()

    assert limiter.snapshot() is None
    assert limiter.is_rate_limited() is False


def test_thread_safety_under_concurrent_updates() -> None:
    limiter = InMemoryRateLimiter(clock=Mock(return_value=1000.0))
    written = {RateLimitState(reset_at_ms=1_000_000 + i, remaining=i, limit=60) for i in range(50)}

    def _writer(state: RateLimitState) -> None:
        limiter.update_rate_limit(state.reset_at_ms, state.remaining, state.limit)
        limiter.is_rate_limited()

    threads = [threading.Thread(target=_writer, args=(s,)) for s in written]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    # Last write wins: the final state is exactly one of the written ones
    assert limiter.snapshot() in written
