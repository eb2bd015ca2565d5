"""Rate limiting adapters.

This package keeps the typed request layer independent of where the
server-reported budget is stored, so the in-memory holder can later be
replaced by a shared store without changing callers.
"""

from wynnapi.adapters.rate_limit.base import AbstractRateLimiter, RateLimitState
from wynnapi.adapters.rate_limit.in_memory import InMemoryRateLimiter

__all__ = [
    "AbstractRateLimiter",
    "InMemoryRateLimiter",
    "RateLimitState",
]
