from abc import ABC, abstractmethod

from wynnapi.schemas.request import RequestDescriptor
from wynnapi.schemas.response import RawResponse


class AbstractTransport(ABC):
	"""Interface for executors that perform exactly one blocking HTTP exchange."""

	@abstractmethod
	def execute(self, descriptor: RequestDescriptor) -> RawResponse:
		"""Send the request described by ``descriptor`` and return the raw response.

		Implementations must acquire and release any connection within the call.

		Raises:
			TransportAppError: On DNS, connect, timeout or I/O failures.
		"""
		...
