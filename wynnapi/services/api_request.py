"""Typed requests against the remote JSON API.

This service is the core pipeline for one logical call. It handles:
- The pre-flight rate-limit gate (no network when the budget is spent)
- Payload serialization and request construction
- Dispatch through the transport adapter
- Classification of the response and the rate-limit state update
- Decoding of the body into the caller's requested shape
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any, Callable, TypeVar

from wynnapi.core.errors import ErrorKind, TransportAppError
from wynnapi.core.logging import request_context
from wynnapi.schemas.request import HttpMethod, RequestDescriptor
from wynnapi.schemas.response import ClassifiedOutcome, Failure, RequestResult
from wynnapi.services.response_classifier import ResponseClassifier

if TYPE_CHECKING:
    from wynnapi.context import ApiContext

logger = logging.getLogger(__name__)

T = TypeVar("T")

Shape = type[T] | Callable[[str], T]

PREFLIGHT_MESSAGE = "Cannot make request, rate limit would be exceeded. Please try again later."


class ApiRequest:
    """A typed GET or POST call against one endpoint URL.

    Each call builds a fresh RequestDescriptor, so one ApiRequest can be
    reused; every call dispatches at most once and is never retried here.

    Attributes:
        context: Shared collaborators (rate limiter, transport, marshaller).
        url: Absolute endpoint URL.
        headers: Extra headers sent with every call, in insertion order.
    """

    def __init__(self, context: "ApiContext", url: str) -> None:
        """Initialize the request.

        Args:
            context: Shared collaborators and per-request configuration.
            url: Absolute endpoint URL.
        """
        self.context = context
        self.url = url
        self.headers: list[tuple[str, str]] = []
        self._classifier = ResponseClassifier(context.rate_limiter, clock=context.clock)

    def add_header(self, name: str, value: str) -> "ApiRequest":
        """Append a header sent with every call of this request."""
        self.headers.append((name, value))
        return self

    def _build_descriptor(self, method: HttpMethod, body: str | None = None) -> RequestDescriptor:
        return RequestDescriptor(
            url=self.url,
            method=method,
            timeout_ms=self.context.timeout_ms,
            version=self.context.version,
            product=self.context.product,
            headers=list(self.headers),
            body=body,
        )

    def _preflight_failure(self) -> Failure | None:
        """Return a failure when the local budget says the server would refuse."""
        limiter = self.context.rate_limiter
        if not limiter.is_rate_limited():
            return None

        reset_at_ms = limiter.rate_limit_reset_timestamp()
        logger.warning(
            "rate_limit.preflight_blocked",
            extra={"url": self.url, "reset_at_ms": reset_at_ms},
        )
        return Failure(
            ErrorKind.RATE_LIMITED_PREFLIGHT,
            PREFLIGHT_MESSAGE,
            retryable=True,
            reset_at_ms=reset_at_ms,
            url=self.url,
        )

    def _exchange(self, descriptor: RequestDescriptor) -> ClassifiedOutcome:
        """Dispatch the descriptor and classify what comes back."""
        logger.info(
            "api_request.dispatch",
            extra={"method": descriptor.method.value, "url": descriptor.url},
        )
        start = time.perf_counter()
        try:
            raw = self.context.transport.execute(descriptor)
        except TransportAppError as exc:
            return Failure(ErrorKind.TRANSPORT, exc.message, url=descriptor.url)

        outcome = self._classifier.classify(raw, descriptor.url)
        logger.info(
            "api_request.completed",
            extra={
                "method": descriptor.method.value,
                "url": descriptor.url,
                "status": raw.status,
                "duration_ms": round((time.perf_counter() - start) * 1000, 2),
            },
        )
        return outcome

    def _execute(self, method: HttpMethod, shape: Any, payload: Any = None) -> RequestResult[Any]:
        with request_context():
            # Step 1: Pre-flight gate, before anything touches the network
            failure = self._preflight_failure()
            if failure is not None:
                return RequestResult(failure=failure)

            # Step 2: Build the descriptor (serializing the payload for POST)
            body = self.context.marshaller.dumps(payload) if method is HttpMethod.POST else None
            descriptor = self._build_descriptor(method, body)

            # Step 3: Dispatch and classify
            outcome = self._exchange(descriptor)
            if isinstance(outcome, Failure):
                logger.warning(
                    "api_request.failed",
                    extra={
                        "method": method.value,
                        "url": self.url,
                        "kind": outcome.kind.value,
                        "status": outcome.status,
                        "retryable": outcome.retryable,
                    },
                )
                return RequestResult(failure=outcome)

            # Step 4: Decode into the caller's shape
            return RequestResult(value=self.context.marshaller.loads(outcome.body, shape))

    def get(self, shape: Shape[T]) -> RequestResult[T]:
        """Perform a GET and decode the body into ``shape``.

        Args:
            shape: Class, generic alias (``list[Model]``) or decoding function.

        Returns:
            RequestResult holding the decoded value or the classified failure.

        Raises:
            DecodeAppError: If a successful body does not fit ``shape``.
        """
        return self._execute(HttpMethod.GET, shape)

    def post(self, payload: Any, shape: Shape[T]) -> RequestResult[T]:
        """Perform a POST with ``payload`` as JSON and decode the body into ``shape``.

        Raises:
            ValidationAppError: If the payload cannot be serialized.
            DecodeAppError: If a successful body does not fit ``shape``.
        """
        return self._execute(HttpMethod.POST, shape, payload)

    def get_response(self, shape: Shape[T]) -> T:
        """Perform a GET and return the decoded value.

        Raises:
            RateLimitAppError: When blocked pre-flight or rejected with 429.
            ApiRequestError: For every other classified failure.
            DecodeAppError: If a successful body does not fit ``shape``.
        """
        return self.get(shape).unwrap()

    def post_response(self, payload: Any, shape: Shape[T]) -> T:
        """Perform a POST and return the decoded value; raises like get_response."""
        return self.post(payload, shape).unwrap()
