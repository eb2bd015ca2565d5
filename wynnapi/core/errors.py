"""Client-level exception types.

This module defines the error taxonomy raised to callers of typed requests,
enabling consistent handling of network, API and decoding failures.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, NotRequired, TypedDict


class ErrorKind(str, Enum):
    """Machine-readable classification of a failed exchange."""

    RATE_LIMITED_PREFLIGHT = "rate_limited_preflight"
    RATE_LIMITED_BY_SERVER = "rate_limited_by_server"
    BAD_REQUEST = "bad_request"
    NOT_FOUND = "not_found"
    SERVICE_UNAVAILABLE = "service_unavailable"
    API_MESSAGE = "api_message"
    NO_BODY = "no_body"
    UNEXPECTED_CONTENT_TYPE = "unexpected_content_type"
    UNEXPECTED_STATUS = "unexpected_status"
    TRANSPORT = "transport"


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability and callers.

    Fields are optional; only those relevant to the failure are set.
    """

    url: str
    method: str
    http_status: int
    content_type: str
    api_message: str
    reset_at_ms: int
    shape: str
    error_type: str
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for client failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when request arguments or configuration are invalid."""


class TransportAppError(AppError):
    """Raised by transport adapters when the HTTP exchange itself fails."""


class DecodeAppError(AppError):
    """Raised when a successful response body cannot be decoded into the requested shape."""


@dataclass
class ApiRequestError(AppError):
    """Raised when an exchange is classified as a failure.

    Attributes:
        kind: Taxonomy member describing the failure.
        status: HTTP status code, or -1 when no status applies.
        retryable: True when waiting and resubmitting is expected to succeed.
        url: URL of the originating request.
    """

    kind: ErrorKind = ErrorKind.UNEXPECTED_STATUS
    status: int = -1
    retryable: bool = False
    url: str | None = None


@dataclass
class RateLimitAppError(ApiRequestError):
    """Raised when a request is rejected by the client gate or by the server (429).

    Attributes:
        reset_at_ms: Epoch milliseconds after which a retry should succeed,
            or -1 when the server did not say.
    """

    reset_at_ms: int = -1
