"""Request descriptor for a single HTTP exchange."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from wynnapi.core.errors import ValidationAppError


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"


@dataclass(frozen=True)
class RequestDescriptor:
    """Everything the transport needs to perform one exchange.

    The descriptor is immutable once built except for its header list,
    which may still be appended to before dispatch. Duplicate header names
    are kept here in insertion order; the transport applies them later-wins.

    Attributes:
        url: Absolute target URL.
        method: HTTP method.
        timeout_ms: Bound for connection acquisition and response wait.
        version: Client version tag used in the User-Agent.
        product: Product token used in the User-Agent.
        headers: Caller-supplied (name, value) pairs.
        body: Serialized JSON payload (POST only).
    """

    url: str
    method: HttpMethod
    timeout_ms: int
    version: str
    product: str = "WynnWrapper"
    headers: list[tuple[str, str]] = field(default_factory=list)
    body: str | None = None

    def __post_init__(self) -> None:
        if not self.url:
            raise ValidationAppError(code="invalid_url", message="Request URL must not be empty")
        if self.timeout_ms < 1:
            raise ValidationAppError(
                code="invalid_timeout",
                message="Request timeout must be a positive number of milliseconds",
                details={"context": {"timeout_ms": self.timeout_ms}},
            )
        if self.method is HttpMethod.GET and self.body is not None:
            raise ValidationAppError(
                code="unexpected_body",
                message="GET requests cannot carry a body",
                details={"url": self.url, "method": self.method.value},
            )

    @property
    def user_agent(self) -> str:
        return f"{self.product}/{self.version}"

    def add_header(self, name: str, value: str) -> None:
        self.headers.append((name, value))

    def transport_headers(self) -> list[tuple[str, str]]:
        """Return caller headers followed by the headers the client always sets.

        Fixed headers come last so they win over caller-supplied duplicates.
        """
        headers = list(self.headers)
        headers.append(("User-Agent", self.user_agent))
        if self.method is HttpMethod.POST:
            headers.append(("Content-Type", "application/json"))
        return headers
