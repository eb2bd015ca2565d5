"""Response classification for completed HTTP exchanges.

Turns a RawResponse into exactly one classified outcome (Success or
Failure) and, as a side effect, feeds the server-reported rate-limit
headers into the shared rate limiter. Header parsing is best-effort and
independent of classification: a response without usable headers is
still classified, it just leaves the limiter untouched.

The API sometimes answers domain-level errors with HTTP 200 and a body of
the form {"message": "..."} or {"error": "..."}, so a nominal success
still has its body inspected before it is accepted.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from pydantic import ValidationError

from wynnapi.adapters.rate_limit.base import AbstractRateLimiter
from wynnapi.core.errors import ErrorKind
from wynnapi.schemas.response import ClassifiedOutcome, Failure, MessageEnvelope, RawResponse, Success

logger = logging.getLogger(__name__)

RESET_HEADER = "RateLimit-Reset"
LIMIT_HEADER = "RateLimit-Limit"
REMAINING_HEADER = "RateLimit-Remaining"

JSON_CONTENT_TYPE = "application/json"


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def _parse_envelope(body: str) -> MessageEnvelope | None:
    """Return the error envelope if the body is exactly that shape."""
    try:
        return MessageEnvelope.model_validate_json(body)
    except ValidationError:
        return None


class ResponseClassifier:
    """Classify raw responses and keep the rate limiter current.

    Attributes:
        rate_limiter: Shared limiter updated from every response.
    """

    def __init__(
        self,
        rate_limiter: AbstractRateLimiter,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the classifier.

        Args:
            rate_limiter: Limiter to update after each exchange.
            clock: Time source returning UNIX time in seconds; reset headers
                are relative to it.
        """
        self.rate_limiter = rate_limiter
        self._clock = clock

    def _reset_at_ms(self, seconds_header: str | None) -> int | None:
        """Convert a seconds-from-now header value into epoch milliseconds."""
        seconds = _parse_int(seconds_header)
        if seconds is None:
            return None
        return int(self._clock() * 1000) + seconds * 1000

    def update_rate_limit(self, raw: RawResponse) -> bool:
        """Update the limiter from the rate-limit headers of ``raw``.

        Args:
            raw: Completed response.

        Returns:
            True when all three headers parsed and the limiter was updated,
            False when the update was skipped.
        """
        reset_at_ms = self._reset_at_ms(raw.headers.get(RESET_HEADER))
        limit = _parse_int(raw.headers.get(LIMIT_HEADER))
        remaining = _parse_int(raw.headers.get(REMAINING_HEADER))

        if reset_at_ms is None or limit is None or remaining is None:
            logger.debug(
                "rate_limit.headers_unusable",
                extra={
                    "status": raw.status,
                    "has_reset": reset_at_ms is not None,
                    "has_limit": limit is not None,
                    "has_remaining": remaining is not None,
                },
            )
            return False

        self.rate_limiter.update_rate_limit(reset_at_ms, remaining, limit)
        return True

    def classify(self, raw: RawResponse, url: str) -> ClassifiedOutcome:
        """Classify a completed exchange.

        Args:
            raw: Response returned by the transport.
            url: URL of the originating request, used in messages.

        Returns:
            Success carrying the JSON body, or Failure describing why not.
        """
        headers_applied = self.update_rate_limit(raw)
        status = raw.status

        if status == 200:
            return self._classify_ok(raw, url)
        if status == 400:
            return Failure(ErrorKind.BAD_REQUEST, f"400: Bad Request for {url}", status=400, url=url)
        if status == 429:
            return self._classify_too_many_requests(raw, url, headers_applied)
        if status == 404:
            return Failure(ErrorKind.NOT_FOUND, f"404: Not Found for {url}", status=404, url=url)
        if status == 503:
            return Failure(
                ErrorKind.SERVICE_UNAVAILABLE,
                f"503: Service Unavailable {url}",
                status=503,
                url=url,
            )

        return Failure(
            ErrorKind.UNEXPECTED_STATUS,
            f"Unexpected status code {status} returned by API for request {url}",
            status=status,
            url=url,
        )

    def _classify_ok(self, raw: RawResponse, url: str) -> ClassifiedOutcome:
        body = raw.body
        if not body:
            return Failure(ErrorKind.NO_BODY, f"No body in request response for {url}", url=url)

        envelope = _parse_envelope(body)
        if envelope is not None:
            return Failure(
                ErrorKind.API_MESSAGE,
                f"API error when requesting {url}: {envelope.text}",
                api_message=envelope.text,
                url=url,
            )

        content_type = raw.content_type
        if JSON_CONTENT_TYPE not in content_type.lower():
            return Failure(
                ErrorKind.UNEXPECTED_CONTENT_TYPE,
                f"Unexpected content type (not application/json): {content_type}",
                url=url,
            )

        return Success(body)

    def _classify_too_many_requests(self, raw: RawResponse, url: str, headers_applied: bool) -> Failure:
        reset_at_ms = self._reset_at_ms(raw.headers.get("ratelimit-reset"))

        # Close the pre-flight gate until the reset even without the full header set
        if reset_at_ms is not None and not headers_applied:
            state = self.rate_limiter.snapshot()
            self.rate_limiter.update_rate_limit(reset_at_ms, 0, state.limit if state is not None else 1)

        return Failure(
            ErrorKind.RATE_LIMITED_BY_SERVER,
            f"429: Too Many Requests for {url}",
            status=429,
            retryable=True,
            reset_at_ms=reset_at_ms if reset_at_ms is not None else -1,
            url=url,
        )
