"""Rate limiter interfaces.

Typed requests depend on this abstraction (not the concrete implementation)
so the state holder can be shared between requests, swapped for a store
shared across processes, or replaced with a fake in tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitState:
    """Latest rate-limit budget reported by the server.

    Attributes:
        reset_at_ms: Epoch milliseconds when the budget window resets.
        remaining: Requests left in the current window (never negative).
        limit: Maximum requests per window.
    """

    reset_at_ms: int
    remaining: int
    limit: int


class AbstractRateLimiter(ABC):
    """Interface for server-driven rate limiters.

    Implementations must be safe for concurrent use: the pre-flight gate
    and the post-exchange update may run from several threads at once.
    """

    @abstractmethod
    def is_rate_limited(self) -> bool:
        """Return True when the budget is exhausted and the reset is still ahead.

        This is a non-blocking gate, never a wait.
        """
        raise NotImplementedError

    @abstractmethod
    def rate_limit_reset_timestamp(self) -> int:
        """Return epoch milliseconds after which a retry is expected to succeed."""
        raise NotImplementedError

    @abstractmethod
    def update_rate_limit(self, reset_at_ms: int, remaining: int, limit: int) -> None:
        """Overwrite the state with the latest server-reported values.

        Last write wins; concurrent exchanges may race.

        Args:
            reset_at_ms: Absolute reset time in epoch milliseconds.
            remaining: Requests left in the window.
            limit: Maximum requests per window.
        """
        raise NotImplementedError

    @abstractmethod
    def snapshot(self) -> RateLimitState | None:
        """Return the current state, or None before the first server report."""
        raise NotImplementedError
