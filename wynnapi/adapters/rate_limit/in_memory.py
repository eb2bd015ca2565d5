"""In-memory rate limiter driven by server-reported headers.

Notes:
- Per-process only: clients in separate processes share the server budget
  but not this state. The server re-reports on every response, so drift
  corrects itself after one exchange.
- Thread-safe: uses a lock around shared state.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable

from wynnapi.adapters.rate_limit.base import AbstractRateLimiter, RateLimitState

logger = logging.getLogger(__name__)


class InMemoryRateLimiter(AbstractRateLimiter):
    """Rate limiter holding the budget last reported by the server.

    Unlike a local token bucket this limiter never counts requests itself:
    the server is the source of truth and every response overwrites the
    state. Share one instance between all requests that draw from the same
    server budget.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the limiter with no known state.

        Args:
            clock: Time source function returning UNIX time in seconds.
        """
        self._clock = clock
        self._lock = threading.RLock()
        self._state: RateLimitState | None = None

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def is_rate_limited(self) -> bool:
        with self._lock:
            state = self._state
        if state is None:
            return False
        return state.remaining <= 0 and self._now_ms() < state.reset_at_ms

    def rate_limit_reset_timestamp(self) -> int:
        with self._lock:
            return self._state.reset_at_ms if self._state is not None else -1

    def update_rate_limit(self, reset_at_ms: int, remaining: int, limit: int) -> None:
        """Overwrite the state with the latest server-reported values.

        Args:
            reset_at_ms: Absolute reset time in epoch milliseconds.
            remaining: Requests left in the window; negatives are clamped to 0.
            limit: Maximum requests per window.
        """
        state = RateLimitState(
            reset_at_ms=int(reset_at_ms),
            remaining=max(0, int(remaining)),
            limit=int(limit),
        )
        with self._lock:
            self._state = state

        logger.debug(
            "rate_limit.updated",
            extra={
                "reset_at_ms": state.reset_at_ms,
                "remaining": state.remaining,
                "limit": state.limit,
            },
        )

    def snapshot(self) -> RateLimitState | None:
        with self._lock:
            return self._state

    def reset(self) -> None:
        """Forget any server-reported state."""
        with self._lock:
            self._state = None
