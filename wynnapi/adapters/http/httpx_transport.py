"""HTTP transport adapter built on httpx."""

import logging

import httpx

from wynnapi.adapters.http.base import AbstractTransport
from wynnapi.core.errors import TransportAppError
from wynnapi.schemas.request import RequestDescriptor
from wynnapi.schemas.response import RawResponse

logger = logging.getLogger(__name__)


class HttpxTransport(AbstractTransport):
    """Blocking transport that opens a fresh httpx.Client per exchange.

    No connection is kept between calls.
    """

    def __init__(self, transport: httpx.BaseTransport | None = None) -> None:
        """Initialize the transport.

        Args:
            transport: Optional low-level httpx transport (e.g. httpx.MockTransport
                in tests); httpx builds its default one when omitted.
        """
        self._transport = transport

    @staticmethod
    def _build_headers(descriptor: RequestDescriptor) -> httpx.Headers:
        headers = httpx.Headers()
        for name, value in descriptor.transport_headers():
            # Assignment replaces any earlier value for the same name
            headers[name] = value
        return headers

    def execute(self, descriptor: RequestDescriptor) -> RawResponse:
        timeout = httpx.Timeout(descriptor.timeout_ms / 1000)
        content = descriptor.body.encode("utf-8") if descriptor.body is not None else None

        try:
            with httpx.Client(timeout=timeout, transport=self._transport) as client:
                response = client.request(
                    descriptor.method.value,
                    descriptor.url,
                    headers=self._build_headers(descriptor),
                    content=content,
                )
                body = response.text if response.content else None
                return RawResponse(status=response.status_code, headers=response.headers, body=body)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning(
                "transport.error",
                extra={
                    "method": descriptor.method.value,
                    "url": descriptor.url,
                    "error_type": type(exc).__name__,
                    "error_msg": str(exc),
                },
            )
            raise TransportAppError(
                code="transport_error",
                message=f"{descriptor.method.value} request to {descriptor.url} failed: {exc}",
                details={
                    "url": descriptor.url,
                    "method": descriptor.method.value,
                    "error_type": type(exc).__name__,
                },
            ) from exc
