from abc import ABC, abstractmethod
from typing import Any


class AbstractMarshaller(ABC):
	"""Interface for the JSON encode/decode service used by typed requests."""

	@abstractmethod
	def dumps(self, payload: Any) -> str:
		"""Serialize a payload object to JSON text.

		Raises:
			ValidationAppError: If the payload cannot be serialized.
		"""
		...

	@abstractmethod
	def loads(self, text: str, shape: Any) -> Any:
		"""Decode JSON text into the requested shape.

		Args:
			text: JSON document.
			shape: A class, a generic alias (e.g. ``list[Model]``), or a
				callable taking the text and returning the decoded value.

		Raises:
			DecodeAppError: If the text is not valid JSON or does not fit the shape.
		"""
		...
