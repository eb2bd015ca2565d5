"""Tests for sensitive data filtering and request correlation in logs."""

from __future__ import annotations

import json
import logging
from io import StringIO

from wynnapi.core.config import LogSettings
from wynnapi.core.logging import (
    configure_logging,
    JsonFormatter,
    RequestIdFilter,
    SensitiveDataFilter,
    get_request_id,
    request_context,
    set_request_id,
    clear_request_id,
)


def _capture(name: str) -> tuple[logging.Logger, StringIO]:
    logger = logging.getLogger(name)
    logger.setLevel(logging.INFO)
    logger.handlers.clear()
    logger.propagate = False

    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.addFilter(RequestIdFilter())
    handler.addFilter(SensitiveDataFilter())
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    return logger, stream


def test_sensitive_filter_redacts_credentials():
    """Ensure authorization and API key fields are redacted."""

    logger, stream = _capture("test_redaction")

    logger.info(
        "api_request.dispatch",
        extra={
            "authorization": "Bearer sk-secret-123",
            "x-api-key": "another-secret",
            "url": "https://api.example.test/v3/player/Salted",
        },
    )

    output = stream.getvalue()

    assert "sk-secret-123" not in output
    assert "another-secret" not in output
    assert "[REDACTED]" in output
    assert "player/Salted" in output


def test_sensitive_filter_redacts_nested_headers():
    """Ensure sensitive header values are redacted in dicts and (name, value) pairs."""

    logger, stream = _capture("test_nested")

    logger.info(
        "api_request.headers",
        extra={
            "headers": {"Authorization": "secret-key", "User-Agent": "WynnWrapper/1.0.0"},
            "header_pairs": [("Cookie", "session=abc"), ("Accept", "application/json")],
        },
    )

    output = stream.getvalue()

    assert "secret-key" not in output
    assert "session=abc" not in output
    assert "WynnWrapper/1.0.0" in output
    assert "application/json" in output


def test_sensitive_filter_allows_safe_fields():
    """Verify safe fields pass through unmodified."""

    logger, stream = _capture("test_safe_fields")

    logger.info(
        "api_request.completed",
        extra={"status": 200, "duration_ms": 150.5, "method": "GET"},
    )

    record = json.loads(stream.getvalue())

    assert record["message"] == "api_request.completed"
    assert record["status"] == 200
    assert record["duration_ms"] == 150.5
    assert "[REDACTED]" not in stream.getvalue()


def test_request_context_binds_and_clears_id():
    logger, stream = _capture("test_request_context")
    clear_request_id()

    with request_context("req-123") as request_id:
        assert request_id == "req-123"
        logger.info("inside")

    assert get_request_id() is None
    assert json.loads(stream.getvalue())["request_id"] == "req-123"


def test_request_context_reuses_active_id():
    set_request_id("outer-id")
    try:
        with request_context() as request_id:
            assert request_id == "outer-id"
        assert get_request_id() == "outer-id"
    finally:
        clear_request_id()


def test_request_context_generates_id():
    clear_request_id()

    with request_context() as request_id:
        assert request_id
        assert get_request_id() == request_id


def test_configure_logging_plain_stdout():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        configure_logging(LogSettings(level="DEBUG", format="plain"))

        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert not isinstance(root.handlers[0].formatter, JsonFormatter)
        assert logging.getLogger("httpx").level == logging.WARNING
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_configure_logging_to_rotating_file(tmp_path):
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    log_file = tmp_path / "logs" / "client.log"
    try:
        configure_logging(LogSettings(output="file", file_path=str(log_file), max_bytes=1024))
        logging.getLogger("wynnapi.test").info("rate_limit.updated", extra={"remaining": 3})
        root.handlers[0].flush()

        record = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
        assert record["message"] == "rate_limit.updated"
        assert record["remaining"] == 3
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_configure_logging_is_exported_for_client_setup():
    import wynnapi

    assert wynnapi.configure_logging is configure_logging
    assert "configure_logging" in wynnapi.__all__
