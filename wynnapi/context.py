"""Shared collaborators for typed requests and the factory that wires them."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable

from wynnapi.adapters.http import AbstractTransport, HttpxTransport
from wynnapi.adapters.marshal import AbstractMarshaller, PydanticJsonMarshaller
from wynnapi.adapters.rate_limit import AbstractRateLimiter, InMemoryRateLimiter
from wynnapi.core.config import ApiSettings, settings
from wynnapi.core.errors import ValidationAppError
from wynnapi.services.api_request import ApiRequest


@dataclass
class ApiContext:
    """Collaborators shared by every request drawing on one server budget.

    Attributes:
        version: Client version tag used in the User-Agent.
        timeout_ms: Per-request timeout in milliseconds.
        product: Product token used in the User-Agent.
        base_url: Prefix for relative paths passed to ``request``.
        rate_limiter: Shared server-driven limiter; defaults to an
            InMemoryRateLimiter driven by ``clock``.
        marshaller: JSON encode/decode service.
        transport: HTTP executor.
        clock: Time source in UNIX seconds, used for reset headers.
    """

    version: str
    timeout_ms: int
    product: str = "WynnWrapper"
    base_url: str = ""
    # Filled in __post_init__ so the default limiter shares `clock`
    rate_limiter: AbstractRateLimiter = None  # type: ignore[assignment]
    marshaller: AbstractMarshaller = field(default_factory=PydanticJsonMarshaller)
    transport: AbstractTransport = field(default_factory=HttpxTransport)
    clock: Callable[[], float] = time.time

    def __post_init__(self) -> None:
        if self.rate_limiter is None:
            self.rate_limiter = InMemoryRateLimiter(clock=self.clock)
        if self.timeout_ms < 1:
            raise ValidationAppError(
                code="invalid_timeout",
                message="timeout_ms must be >= 1",
                details={"context": {"timeout_ms": self.timeout_ms}},
            )

    def url_for(self, path: str) -> str:
        """Join ``path`` onto ``base_url``; absolute URLs pass through."""
        if path.startswith(("http://", "https://")) or not self.base_url:
            return path
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    def request(self, path: str) -> ApiRequest:
        """Create a typed request for ``path`` sharing this context."""
        return ApiRequest(self, self.url_for(path))


def create_api_context(
    api_settings: ApiSettings | None = None,
    *,
    rate_limiter: AbstractRateLimiter | None = None,
    transport: AbstractTransport | None = None,
    marshaller: AbstractMarshaller | None = None,
    clock: Callable[[], float] = time.time,
) -> ApiContext:
    """Build an ApiContext from settings.

    Collaborators not supplied are created with defaults; the limiter and
    the classifier share ``clock`` so reset times are computed consistently.

    Args:
        api_settings: Remote API settings; defaults to the global settings.
        rate_limiter: Limiter to share, e.g. with another context.
        transport: HTTP executor; defaults to HttpxTransport.
        marshaller: JSON service; defaults to PydanticJsonMarshaller.
        clock: Time source returning UNIX time in seconds.

    Returns:
        ApiContext: Ready-to-use context.
    """
    cfg = api_settings or settings.api

    return ApiContext(
        version=cfg.client_version,
        timeout_ms=cfg.timeout_ms,
        product=cfg.user_agent_product,
        base_url=cfg.base_url,
        rate_limiter=rate_limiter or InMemoryRateLimiter(clock=clock),
        marshaller=marshaller or PydanticJsonMarshaller(),
        transport=transport or HttpxTransport(),
        clock=clock,
    )
