from typing import IO, Generator, Iterable, Iterator, NamedTuple, TypeAlias

from .config import CHUNK_SIZE
from .errors import SizeMismatch, ValidationError
from .model import StubBodyBlob, StubBodyFile, StubBodyStream, StubResponse
from .utils.io import asBytes

# --
# The schedule turns a stub response into a sequence of timed events: each
# chunk of the body is associated with the time (relative to the start of the
# delivery) at which it is considered delivered. The schedule doesn't wait,
# the consumer is responsible for following the timing, see `delivery`.

# -----------------------------------------------------------------------------
#
# EVENTS
#
# -----------------------------------------------------------------------------


class Emission(NamedTuple):
	"""A chunk of the body, delivered `at` seconds after the start."""

	payload: bytes
	at: float
	index: int = 0
	count: int = 1

	@property
	def isLast(self) -> bool:
		return self.index + 1 >= self.count


class Failure(NamedTuple):
	"""A simulated transport error, raised `at` seconds after the start."""

	error: BaseException
	at: float


TEvent: TypeAlias = Emission | Failure

# -----------------------------------------------------------------------------
#
# HELPERS
#
# -----------------------------------------------------------------------------


def chunkCount(size: int, chunkSize: int) -> int:
	"""Returns the number of chunks for a body of `size` bytes, an empty body
	still being delivered as one empty chunk."""
	return max(1, -(-size // chunkSize))


def emissionTime(timeToFirstByte: float, duration: float, index: int, count: int) -> float:
	"""Returns the time at which the chunk at `index` is delivered."""
	# NOTE: Times are derived from the index and never accumulated, so that
	# the last one is exactly `timeToFirstByte + duration`.
	if index + 1 >= count:
		return timeToFirstByte + duration
	else:
		return timeToFirstByte + duration * ((index + 1) / count)


def pieces(source: Iterable[bytes] | IO[bytes], size: int) -> Iterator[bytes]:
	"""Iterates on the bytes produced by the given file-like object or iterable."""
	if hasattr(source, "read"):
		while chunk := source.read(size):
			yield asBytes(chunk)
	else:
		for chunk in source:
			yield asBytes(chunk)


def rechunk(data: Iterator[bytes], size: int, chunkSize: int) -> Iterator[bytes]:
	"""Groups the given data in chunks of `chunkSize`, raising a `SizeMismatch`
	as soon as the data exceeds `size`, or once exhausted if it's short. The
	last chunk is only yielded once the data is known to be complete."""
	buffer: bytearray = bytearray()
	read: int = 0
	sent: int = 0
	for piece in data:
		read += len(piece)
		if read > size:
			raise SizeMismatch(size, read)
		buffer += piece
		while len(buffer) >= chunkSize and sent + chunkSize < size:
			yield bytes(buffer[:chunkSize])
			del buffer[:chunkSize]
			sent += chunkSize
	if read < size:
		raise SizeMismatch(size, read)
	yield bytes(buffer)


# -----------------------------------------------------------------------------
#
# SCHEDULE
#
# -----------------------------------------------------------------------------


class Schedule:
	"""A single-pass iterator over the events of one delivery of a stub
	response. File and stream bodies are opened on the first iteration and
	closed once the schedule is exhausted, fails or is closed."""

	__slots__ = ["response", "chunkSize", "size", "count", "duration", "end", "_events"]

	def __init__(self, response: StubResponse, chunkSize: int = CHUNK_SIZE):
		if isinstance(chunkSize, bool) or not isinstance(chunkSize, int) or chunkSize <= 0:
			raise ValidationError(f"Chunk size must be a positive integer, got: {chunkSize!r}")
		self.response: StubResponse = response
		self.chunkSize: int = chunkSize
		self.size: int = response.size
		self.duration: float = 0.0 if response.isError else response.transferDuration
		self.count: int = 1 if response.isError else chunkCount(self.size, chunkSize)
		self.end: float = response.timeToFirstByte + self.duration
		self._events: Generator[TEvent, None, None] = self._generate()

	def at(self, index: int) -> float:
		"""Returns the time of the event at the given index."""
		if index < 0 or index >= self.count:
			raise IndexError(f"Event index out of range: {index} not in 0-{self.count}")
		return emissionTime(self.response.timeToFirstByte, self.duration, index, self.count)

	def times(self) -> list[float]:
		return [self.at(_) for _ in range(self.count)]

	def load(self) -> bytes:
		"""Consumes the schedule, returning the whole body. A simulated error
		is raised as is."""
		res = bytearray()
		for atom in self:
			if isinstance(atom, Failure):
				raise atom.error
			res += atom.payload
		return bytes(res)

	def close(self) -> None:
		"""Stops the delivery, releasing any open source."""
		self._events.close()

	def __iter__(self) -> "Schedule":
		return self

	def __next__(self) -> TEvent:
		return next(self._events)

	def __enter__(self) -> "Schedule":
		return self

	def __exit__(self, *args: object) -> None:
		self.close()

	def _generate(self) -> Generator[TEvent, None, None]:
		response = self.response
		if response.error is not None:
			yield Failure(response.error, response.timeToFirstByte)
			return
		chunks = self._chunks()
		try:
			for i, payload in enumerate(chunks):
				yield Emission(payload, self.at(i), i, self.count)
		finally:
			chunks.close()

	def _chunks(self) -> Generator[bytes, None, None]:
		body = self.response.body
		if isinstance(body, StubBodyBlob):
			if not body.payload:
				yield b""
			else:
				for o in range(0, body.length, self.chunkSize):
					yield body.payload[o : o + self.chunkSize]
		elif isinstance(body, StubBodyFile) or isinstance(body, StubBodyStream):
			source = body.open()
			try:
				yield from rechunk(pieces(source, self.chunkSize), body.length, self.chunkSize)
			finally:
				if close := getattr(source, "close", None):
					close()
		else:
			raise ValueError(f"Unsupported body format: {body}")

	def __str__(self) -> str:
		return f"Schedule({self.count} events until {self.end}s, {self.response})"


# EOF
