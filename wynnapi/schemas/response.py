"""Value types produced by one HTTP exchange.

RawResponse is what the transport hands back; Success and Failure are the
classified outcome; RequestResult is what a typed request returns after
decoding.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

import httpx
from pydantic import BaseModel, ConfigDict, model_validator

from wynnapi.core.errors import ApiRequestError, ErrorDetails, ErrorKind, RateLimitAppError

T = TypeVar("T")

_RATE_LIMIT_KINDS = {ErrorKind.RATE_LIMITED_PREFLIGHT, ErrorKind.RATE_LIMITED_BY_SERVER}


@dataclass
class RawResponse:
    """Status, headers and body of a completed exchange.

    Headers are normalized to httpx.Headers for case-insensitive lookup.
    """

    status: int
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    body: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.headers, httpx.Headers):
            self.headers = httpx.Headers(self.headers)

    @property
    def content_type(self) -> str:
        return self.headers.get("content-type", "")


class MessageEnvelope(BaseModel):
    """Error body the API sends with HTTP 200: exactly one string field.

    Matches ``{"message": "..."}`` or ``{"error": "..."}`` and nothing else.
    """

    model_config = ConfigDict(extra="forbid", strict=True)

    message: str | None = None
    error: str | None = None

    @model_validator(mode="after")
    def _exactly_one_field(self) -> "MessageEnvelope":
        # Keys actually present in the body; an explicit null still counts
        if len(self.model_fields_set) != 1 or self.text is None:
            raise ValueError("envelope must carry exactly one of 'message' or 'error'")
        return self

    @property
    def text(self) -> str:
        return self.message if self.message is not None else self.error  # type: ignore[return-value]


@dataclass(frozen=True)
class Success:
    """Exchange succeeded; body is JSON text ready for decoding."""

    body: str


@dataclass(frozen=True)
class Failure:
    """Exchange failed.

    Attributes:
        kind: Taxonomy member.
        message: Human-readable description.
        status: HTTP status, or -1 when none applies.
        retryable: True only for rate-limit failures.
        reset_at_ms: Reset timestamp for rate-limit failures (-1 if unknown).
        api_message: Text extracted from an error-shaped 200 body.
        url: URL of the originating request.
    """

    kind: ErrorKind
    message: str
    status: int = -1
    retryable: bool = False
    reset_at_ms: int | None = None
    api_message: str | None = None
    url: str | None = None

    def to_error(self) -> ApiRequestError:
        """Build the exception matching this failure."""
        details: ErrorDetails = {"http_status": self.status}
        if self.url is not None:
            details["url"] = self.url
        if self.api_message is not None:
            details["api_message"] = self.api_message

        if self.kind in _RATE_LIMIT_KINDS:
            reset_at_ms = self.reset_at_ms if self.reset_at_ms is not None else -1
            details["reset_at_ms"] = reset_at_ms
            return RateLimitAppError(
                code=self.kind.value,
                message=self.message,
                details=details,
                kind=self.kind,
                status=self.status,
                retryable=self.retryable,
                url=self.url,
                reset_at_ms=reset_at_ms,
            )

        return ApiRequestError(
            code=self.kind.value,
            message=self.message,
            details=details,
            kind=self.kind,
            status=self.status,
            retryable=self.retryable,
            url=self.url,
        )


ClassifiedOutcome = Success | Failure


@dataclass(frozen=True)
class RequestResult(Generic[T]):
    """Decoded value or failure of one typed request.

    Mirrors an explicit result type: check ``ok`` (or ``failure.kind``)
    before touching ``value``, or call ``unwrap()`` to raise on failure.
    """

    value: T | None = None
    failure: Failure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    def unwrap(self) -> T:
        """Return the decoded value.

        Raises:
            ApiRequestError: The typed error for the failure (RateLimitAppError
                for rate-limit kinds).
        """
        if self.failure is not None:
            raise self.failure.to_error()
        return self.value  # type: ignore[return-value]

