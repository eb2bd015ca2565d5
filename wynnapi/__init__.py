"""Typed, rate-limit-aware client for a remote JSON API.

Typical setup:

    >>> from wynnapi import configure_logging, create_api_context
    >>> configure_logging()  # JSON logs on stdout, per LOG_* settings
    >>> context = create_api_context()
    >>> player = context.request("player/Salted").get_response(dict)

Logging is left untouched unless configure_logging() is called, so an
embedding application can keep its own handlers.
"""

from wynnapi.adapters.rate_limit import AbstractRateLimiter, InMemoryRateLimiter, RateLimitState
from wynnapi.context import ApiContext, create_api_context
from wynnapi.core.errors import (
    ApiRequestError,
    AppError,
    DecodeAppError,
    ErrorKind,
    RateLimitAppError,
    TransportAppError,
    ValidationAppError,
)
from wynnapi.core.logging import configure_logging
from wynnapi.schemas.response import Failure, RequestResult, Success
from wynnapi.services.api_request import ApiRequest

__all__ = [
    "AbstractRateLimiter",
    "ApiContext",
    "ApiRequest",
    "ApiRequestError",
    "AppError",
    "DecodeAppError",
    "ErrorKind",
    "Failure",
    "InMemoryRateLimiter",
    "RateLimitAppError",
    "RateLimitState",
    "RequestResult",
    "Success",
    "TransportAppError",
    "ValidationAppError",
    "configure_logging",
    "create_api_context",
]
