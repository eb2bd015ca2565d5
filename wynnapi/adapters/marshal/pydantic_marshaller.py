"""JSON marshal service backed by pydantic TypeAdapter."""

from functools import lru_cache
from typing import Any, get_origin

from pydantic import TypeAdapter
from pydantic_core import PydanticSerializationError

from wynnapi.adapters.marshal.base import AbstractMarshaller
from wynnapi.core.errors import DecodeAppError, ValidationAppError


@lru_cache(maxsize=256)
def _type_adapter(shape: Any) -> TypeAdapter[Any]:
    # Building a TypeAdapter compiles a validator; reuse it per shape.
    return TypeAdapter(shape)


def _is_decoder_function(shape: Any) -> bool:
    return callable(shape) and not isinstance(shape, type) and get_origin(shape) is None


def _shape_name(shape: Any) -> str:
    return getattr(shape, "__name__", None) or repr(shape)


class PydanticJsonMarshaller(AbstractMarshaller):
    """Encode payloads and decode responses with pydantic.

    Any shape pydantic can validate is accepted: BaseModel subclasses,
    dataclasses, TypedDicts, builtins and their generic aliases
    (``list[Item]``, ``dict[str, int]``). A plain function is called with
    the raw text instead.
    """

    def dumps(self, payload: Any) -> str:
        try:
            return _type_adapter(Any).dump_json(payload).decode("utf-8")
        except PydanticSerializationError as exc:
            raise ValidationAppError(
                code="payload_not_serializable",
                message=f"Payload cannot be serialized to JSON: {exc}",
                details={"error_type": type(payload).__name__},
            ) from exc

    def loads(self, text: str, shape: Any) -> Any:
        if _is_decoder_function(shape):
            try:
                return shape(text)
            except Exception as exc:
                # Caller decoders fail in arbitrary ways on a body of the wrong shape
                raise self._decode_error(shape, exc) from exc

        try:
            return _type_adapter(shape).validate_json(text)
        except ValueError as exc:
            # json.JSONDecodeError and pydantic.ValidationError are both ValueErrors
            raise self._decode_error(shape, exc) from exc

    @staticmethod
    def _decode_error(shape: Any, exc: Exception) -> DecodeAppError:
        return DecodeAppError(
            code="decode_failed",
            message=f"Response body could not be decoded into {_shape_name(shape)}: {exc}",
            details={"shape": _shape_name(shape), "error_type": type(exc).__name__},
        )
