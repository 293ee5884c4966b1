import asyncio
import time
from abc import ABC, abstractmethod
from typing import AsyncGenerator

from mypy_extensions import mypyc_attr

from .config import CHUNK_SIZE, LOG_DELIVERIES
from .errors import ResourceNotFound, SizeMismatch
from .model import StubResponse
from .schedule import Emission, Failure, Schedule
from .utils.logging import event, warning

# --
# Drives the delivery of a stub response, following its schedule. Time is
# given by a clock, so that tests can run deliveries without waiting.

# -----------------------------------------------------------------------------
#
# CLOCKS
#
# -----------------------------------------------------------------------------


@mypyc_attr(allow_interpreted_subclasses=True)
class Clock(ABC):
	@abstractmethod
	def now(self) -> float: ...

	@abstractmethod
	async def sleep(self, delay: float) -> None: ...


class MonotonicClock(Clock):
	"""Real time, using the monotonic clock."""

	def now(self) -> float:
		return time.monotonic()

	async def sleep(self, delay: float) -> None:
		await asyncio.sleep(delay)


class VirtualClock(Clock):
	"""A clock whose time only advances when sleeping, which returns right
	away. Sleeps are recorded in `sleeps`."""

	def __init__(self, start: float = 0.0):
		self.time: float = start
		self.sleeps: list[float] = []

	def now(self) -> float:
		return self.time

	async def sleep(self, delay: float) -> None:
		self.sleeps.append(delay)
		self.time += max(0.0, delay)
		# We still yield to the loop, like a real sleep would
		await asyncio.sleep(0)


# -----------------------------------------------------------------------------
#
# DELIVERY
#
# -----------------------------------------------------------------------------


async def deliver(
	response: StubResponse,
	chunkSize: int = CHUNK_SIZE,
	*,
	clock: Clock | None = None,
) -> AsyncGenerator[Emission, None]:
	"""Delivers the given response, yielding each emission once its time is
	reached. A simulated error is raised once its time is reached. Closing
	the generator stops the delivery and releases its resources."""
	clock = clock or MonotonicClock()
	schedule = Schedule(response, chunkSize)
	started: float = clock.now()
	if LOG_DELIVERIES:
		event(
			"stub.delivery.start",
			response.status,
			Size=schedule.size,
			Chunks=schedule.count,
			End=schedule.end,
		)
	failure: BaseException | None = None
	try:
		# NOTE: Each chunk is produced before waiting for its time
		for atom in schedule:
			delay = started + atom.at - clock.now()
			if delay > 0:
				await clock.sleep(delay)
			if isinstance(atom, Failure):
				failure = atom.error
				break
			yield atom
	except SizeMismatch as e:
		warning(
			"Stub body size mismatch, delivery aborted",
			Expected=e.expected,
			Actual=e.actual,
		)
		raise e
	except ResourceNotFound as e:
		warning("Stub body could not be opened, delivery aborted", Path=e.path)
		raise e
	finally:
		schedule.close()
	# Simulated errors are raised as given, outside of the handlers above
	if failure is not None:
		if LOG_DELIVERIES:
			event("stub.delivery.error", str(failure))
		raise failure
	if LOG_DELIVERIES:
		event(
			"stub.delivery.end",
			response.status,
			Elapsed=clock.now() - started,
		)


async def load(
	response: StubResponse,
	chunkSize: int = CHUNK_SIZE,
	*,
	clock: Clock | None = None,
) -> bytes:
	"""Delivers the given response, returning the whole body once the last
	chunk is delivered."""
	res = bytearray()
	async for emission in deliver(response, chunkSize, clock=clock):
		res += emission.payload
	return bytes(res)


# EOF
