"""JSON marshal adapters - encode request payloads and decode responses."""

from wynnapi.adapters.marshal.base import AbstractMarshaller
from wynnapi.adapters.marshal.pydantic_marshaller import PydanticJsonMarshaller

__all__ = [
    "AbstractMarshaller",
    "PydanticJsonMarshaller",
]
