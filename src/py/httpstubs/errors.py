# -----------------------------------------------------------------------------
#
# ERRORS
#
# -----------------------------------------------------------------------------


class StubError(Exception):
	"""Base class for all the errors raised by stubbed responses."""


class ValidationError(StubError, ValueError):
	"""A stub response (or one of its parameters) is invalid."""


class ResourceNotFound(StubError, LookupError):
	"""The file backing a stub response can't be found or read."""

	def __init__(self, message: str, path: str | None = None):
		super().__init__(message)
		self.path: str | None = path


class EncodingError(StubError, ValueError):
	"""A value can't be encoded as a response body."""


class MalformedMessage(StubError, ValueError):
	"""An HTTP message dump can't be split into a head and a body."""


class SizeMismatch(StubError):
	"""A streamed body doesn't yield its declared number of bytes."""

	def __init__(self, expected: int, actual: int):
		super().__init__(
			f"Body declared {expected} bytes but yielded {'more than ' if actual > expected else ''}{actual}"
		)
		self.expected: int = expected
		self.actual: int = actual


class SimulatedTransportError(StubError, ConnectionError):
	"""A connection-level failure injected in place of a response."""

	def __init__(self, message: str, code: str | int | None = None):
		super().__init__(message)
		self.message: str = message
		self.code: str | int | None = code

	@staticmethod
	def NotConnected() -> "SimulatedTransportError":
		return SimulatedTransportError("Not connected to the network", "not-connected")

	@staticmethod
	def TimedOut() -> "SimulatedTransportError":
		return SimulatedTransportError("The request timed out", "timed-out")

	@staticmethod
	def ConnectionLost() -> "SimulatedTransportError":
		return SimulatedTransportError("The network connection was lost", "connection-lost")

	def __str__(self) -> str:
		return self.message if self.code is None else f"{self.message} [{self.code}]"


# EOF
