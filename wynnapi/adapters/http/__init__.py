"""HTTP transport adapters - perform one exchange and return the raw response."""

from wynnapi.adapters.http.base import AbstractTransport
from wynnapi.adapters.http.httpx_transport import HttpxTransport

__all__ = [
    "AbstractTransport",
    "HttpxTransport",
]
