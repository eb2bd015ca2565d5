"""Unit tests for the httpx transport adapter."""

import json

import httpx
import pytest

from wynnapi.adapters.http import HttpxTransport
from wynnapi.core.errors import TransportAppError
from wynnapi.schemas.request import HttpMethod, RequestDescriptor


def _descriptor(method: HttpMethod = HttpMethod.GET, body: str | None = None) -> RequestDescriptor:
    return RequestDescriptor(
        url="https://api.example.test/v3/guild/list",
        method=method,
        timeout_ms=1500,
        version="9.9",
        body=body,
    )


def test_returns_raw_response() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"ok": True}, headers={"RateLimit-Limit": "60"})

    raw = HttpxTransport(transport=httpx.MockTransport(handler)).execute(_descriptor())

    assert raw.status == 200
    assert json.loads(raw.body) == {"ok": True}
    assert raw.headers["ratelimit-limit"] == "60"
    assert "application/json" in raw.content_type


def test_empty_body_is_absent() -> None:
    transport = HttpxTransport(transport=httpx.MockTransport(lambda request: httpx.Response(204)))

    assert transport.execute(_descriptor()).body is None


def test_timeout_applies_to_every_phase() -> None:
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(request.extensions["timeout"])
        return httpx.Response(200)

    HttpxTransport(transport=httpx.MockTransport(handler)).execute(_descriptor())

    assert seen == {"connect": 1.5, "read": 1.5, "write": 1.5, "pool": 1.5}


def test_post_sends_body_with_fixed_headers() -> None:
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200)

    HttpxTransport(transport=httpx.MockTransport(handler)).execute(
        _descriptor(HttpMethod.POST, body='{"name": "Idiots"}')
    )

    request = captured[0]
    assert request.method == "POST"
    assert request.content == b'{"name": "Idiots"}'
    assert request.headers["Content-Type"] == "application/json"
    assert request.headers["User-Agent"] == "WynnWrapper/9.9"


@pytest.mark.parametrize(
    "exc",
    [
        httpx.ConnectError("dns failure"),
        httpx.ConnectTimeout("connect timed out"),
        httpx.ReadError("connection reset"),
    ],
)
def test_transport_errors_are_wrapped(exc: Exception) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise exc

    with pytest.raises(TransportAppError) as exc_info:
        HttpxTransport(transport=httpx.MockTransport(handler)).execute(_descriptor())

    error = exc_info.value
    assert error.code == "transport_error"
    assert error.details is not None
    assert error.details["error_type"] == type(exc).__name__
    assert error.__cause__ is exc
