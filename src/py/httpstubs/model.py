import dataclasses
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Any, Callable, Iterable, Mapping, NamedTuple, TypeAlias

from .errors import ResourceNotFound, ValidationError
from .headers import Headers
from .parser import parseMessage
from .status import statusMessage
from .timing import INSTANT, FixedDuration, Rate, TTiming, asNumber, asTiming
from .utils.files import isReadable, responsePath
from .utils.io import HEAD_ENCODING, asBytes
from .utils.json import json

# -----------------------------------------------------------------------------
#
# BODY
#
# -----------------------------------------------------------------------------

# A stream source returns either chunks of bytes or a binary file-like object.
TStreamSource: TypeAlias = Callable[[], Iterable[bytes] | IO[bytes]]

THeaders: TypeAlias = Mapping[str, str] | Iterable[tuple[str, str]] | None


class StubBodyBlob(NamedTuple):
	"""A body held in memory."""

	payload: bytes = b""

	@property
	def length(self) -> int:
		return len(self.payload)


class StubBodyFile(NamedTuple):
	"""A body read from a file, `length` being its size when the response
	was created."""

	path: Path
	length: int

	def open(self) -> IO[bytes]:
		try:
			return open(self.path, "rb")
		except (FileNotFoundError, PermissionError, IsADirectoryError) as e:
			raise ResourceNotFound(
				f"Could not open stub file: {self.path}", str(self.path)
			) from e


class StubBodyStream(NamedTuple):
	"""A body produced by a stream, `source` is called for each delivery
	and must produce exactly `length` bytes."""

	source: TStreamSource
	length: int

	def open(self) -> Iterable[bytes] | IO[bytes]:
		return self.source()


TStubBody: TypeAlias = StubBodyBlob | StubBodyFile | StubBodyStream

EMPTY_BODY: StubBodyBlob = StubBodyBlob()

# -----------------------------------------------------------------------------
#
# RESPONSE
#
# -----------------------------------------------------------------------------


@dataclass(slots=True, frozen=True)
class StubResponse:
	"""Describes a stubbed HTTP response: status, headers and body, or
	a simulated transport error, along with the timing of its delivery.

	The delay before the first byte (`timeToFirstByte`) and the duration
	of the body transfer (`timing`) are independent, the last byte being
	delivered after `timeToFirstByte + timing.duration(size)` seconds.

	Responses are immutable and can be delivered any number of times, see
	`Schedule` for the delivery itself."""

	status: int = 200
	headers: Headers = field(default_factory=Headers)
	body: TStubBody | None = None
	error: BaseException | None = None
	timeToFirstByte: float = 0.0
	timing: TTiming = INSTANT

	def __post_init__(self) -> None:
		object.__setattr__(
			self, "timeToFirstByte", asNumber(self.timeToFirstByte, "Time to first byte")
		)
		if not isinstance(self.timing, (FixedDuration, Rate)):
			raise ValidationError(
				f"Timing must be a FixedDuration or a Rate, got: {self.timing!r}"
			)
		if not isinstance(self.headers, Headers):
			object.__setattr__(self, "headers", Headers(self.headers))
		if self.error is not None:
			if not isinstance(self.error, BaseException):
				raise ValidationError(f"Error must be an exception, got: {self.error!r}")
		elif self.body is None:
			object.__setattr__(self, "body", EMPTY_BODY)
		if self.body is not None:
			if not isinstance(self.body, (StubBodyBlob, StubBodyFile, StubBodyStream)):
				raise ValidationError(f"Unsupported body: {self.body!r}")
			if isinstance(self.body.length, bool) or not isinstance(self.body.length, int):
				raise ValidationError(f"Body length must be an integer: {self.body!r}")
			if self.body.length < 0:
				raise ValidationError(f"Body length must be >= 0: {self.body.length}")
		if isinstance(self.status, bool) or not isinstance(self.status, int):
			raise ValidationError(f"Status must be an integer, got: {self.status!r}")
		if self.error is None and not (100 <= self.status <= 999):
			raise ValidationError(f"Status must be within 100 and 999, got: {self.status}")

	# =========================================================================
	# FACTORIES
	# =========================================================================

	@staticmethod
	def FromBytes(
		data: bytes | str,
		status: int = 200,
		timeToFirstByte: float = 0.0,
		timing: TTiming | float | None = None,
		headers: THeaders = None,
	) -> "StubResponse":
		"""Creates a response with the given in-memory body."""
		if not isinstance(data, (bytes, bytearray, memoryview, str)):
			raise ValidationError(f"Body must be bytes or str, got: {data!r}")
		return StubResponse(
			status=status,
			headers=Headers(headers),
			body=StubBodyBlob(asBytes(data)),
			timeToFirstByte=timeToFirstByte,
			timing=asTiming(timing),
		)

	@staticmethod
	def FromJSON(
		value: Any,
		status: int = 200,
		timeToFirstByte: float = 0.0,
		timing: TTiming | float | None = None,
		headers: THeaders = None,
	) -> "StubResponse":
		"""Creates a response with the JSON encoding of `value` as body, adding
		a JSON `Content-Type` unless one is given."""
		h = Headers(headers)
		if "Content-Type" not in h:
			h = h.merged({"Content-Type": "application/json"})
		return StubResponse.FromBytes(json(value), status, timeToFirstByte, timing, h)

	@staticmethod
	def FromFile(
		path: Path | str,
		status: int = 200,
		timeToFirstByte: float = 0.0,
		timing: TTiming | float | None = None,
		headers: THeaders = None,
	) -> "StubResponse":
		"""Creates a response streaming the file at the given path, which
		must be readable now."""
		p = Path(path).absolute()
		if not isReadable(p):
			raise ResourceNotFound(f"Stub file not found or not readable: {p}", str(p))
		return StubResponse(
			status=status,
			headers=Headers(headers),
			body=StubBodyFile(p, p.stat().st_size),
			timeToFirstByte=timeToFirstByte,
			timing=asTiming(timing),
		)

	@staticmethod
	def FromStream(
		source: TStreamSource,
		size: int,
		status: int = 200,
		timeToFirstByte: float = 0.0,
		timing: TTiming | float | None = None,
		headers: THeaders = None,
	) -> "StubResponse":
		"""Creates a response whose body is produced by calling `source`,
		which must yield exactly `size` bytes."""
		if not callable(source):
			raise ValidationError(f"Stream source must be callable, got: {source!r}")
		return StubResponse(
			status=status,
			headers=Headers(headers),
			body=StubBodyStream(source, size),
			timeToFirstByte=timeToFirstByte,
			timing=asTiming(timing),
		)

	@staticmethod
	def FromHTTPMessage(
		data: bytes,
		timeToFirstByte: float = 0.0,
		timing: TTiming | float | None = None,
	) -> "StubResponse":
		"""Creates a response from a raw HTTP message, typically the output
		of `curl -is URL`."""
		message = parseMessage(data)
		return StubResponse(
			status=message.status,
			headers=message.headers,
			body=StubBodyBlob(message.body),
			timeToFirstByte=timeToFirstByte,
			timing=asTiming(timing),
		)

	@staticmethod
	def Named(
		name: str,
		directory: Path | str | None = None,
		timeToFirstByte: float = 0.0,
		timing: TTiming | float | None = None,
	) -> "StubResponse":
		"""Creates a response from the `<name>.response` HTTP message dump
		located in `directory`, or in the configured stubs path."""
		path = responsePath(name, directory)
		try:
			data = path.read_bytes()
		except (FileNotFoundError, PermissionError, IsADirectoryError) as e:
			raise ResourceNotFound(f"Stub response not found: {path}", str(path)) from e
		return StubResponse.FromHTTPMessage(data, timeToFirstByte, timing)

	@staticmethod
	def FromError(error: BaseException) -> "StubResponse":
		"""Creates a response that fails with the given error instead of
		delivering anything."""
		if error is None:
			raise ValidationError("An error response requires an error")
		return StubResponse(status=0, error=error)

	# =========================================================================
	# API
	# =========================================================================

	@property
	def isError(self) -> bool:
		return self.error is not None

	@property
	def size(self) -> int:
		"""The declared size of the body, in bytes."""
		return 0 if self.body is None or self.error is not None else self.body.length

	@property
	def contentType(self) -> str | None:
		return self.headers.get("Content-Type")

	@property
	def transferDuration(self) -> float:
		return self.timing.duration(self.size)

	def header(self, name: str) -> str | None:
		return self.headers.get(name)

	def withTiming(
		self,
		timeToFirstByte: float | None = None,
		timing: TTiming | float | None = None,
	) -> "StubResponse":
		"""Returns a copy of this response with the given timing, leaving
		unspecified values unchanged."""
		return dataclasses.replace(
			self,
			timeToFirstByte=(
				self.timeToFirstByte if timeToFirstByte is None else timeToFirstByte
			),
			timing=self.timing if timing is None else asTiming(timing),
		)

	def head(self, protocol: str = "HTTP/1.1") -> bytes:
		"""Serializes the status line and headers as a payload."""
		if self.error is not None:
			raise ValidationError("Error responses have no head")
		headers = (
			self.headers
			if "Content-Length" in self.headers
			else self.headers.merged({"Content-Length": str(self.size)})
		)
		lines: list[str] = [f"{k}: {v}" for k, v in headers.items()]
		lines.insert(0, f"{protocol} {self.status} {statusMessage(self.status)}")
		lines.append("")
		lines.append("")
		return "\r\n".join(lines).encode(HEAD_ENCODING)

	def __str__(self) -> str:
		if self.error is not None:
			return f"StubResponse(error={self.error!r} after {self.timeToFirstByte}s)"
		return f"StubResponse({self.status} {dict(self.headers)} {self.size}b ttfb={self.timeToFirstByte}s {self.timing})"


# EOF
