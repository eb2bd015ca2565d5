"""Pytest configuration and fixtures shared across all test modules.

This file is automatically loaded by pytest before running any tests.
It pins the environment before anything imports the settings module.
"""

import os
from typing import Callable
from unittest.mock import Mock

import httpx
import pytest

# CRITICAL: Set this before any imports that might load settings
os.environ["APP_ENV"] = "testing"
os.environ.setdefault("API_BASE_URL", "https://api.example.test/v3")
os.environ.setdefault("API_CLIENT_VERSION", "1.2.3")

from wynnapi.adapters.http import HttpxTransport  # noqa: E402
from wynnapi.adapters.rate_limit import InMemoryRateLimiter  # noqa: E402
from wynnapi.context import ApiContext  # noqa: E402

# Fixed "now" for every test clock: 1000 s after the epoch
NOW_S = 1000.0
NOW_MS = 1_000_000


@pytest.fixture
def clock() -> Mock:
    return Mock(return_value=NOW_S)


@pytest.fixture
def limiter(clock: Mock) -> InMemoryRateLimiter:
    return InMemoryRateLimiter(clock=clock)


@pytest.fixture
def make_context(clock: Mock, limiter: InMemoryRateLimiter) -> Callable[..., ApiContext]:
    """Build an ApiContext whose transport answers through ``handler``."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> ApiContext:
        return ApiContext(
            version="1.2.3",
            timeout_ms=2000,
            base_url="https://api.example.test/v3",
            rate_limiter=limiter,
            transport=HttpxTransport(transport=httpx.MockTransport(handler)),
            clock=clock,
        )

    return _make
