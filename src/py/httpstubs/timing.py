from dataclasses import dataclass
from math import isfinite
from typing import TypeAlias
from .errors import ValidationError

# --
# Timing of a stub response body transfer. A transfer either takes a fixed
# amount of time, or happens at a given rate. Legacy APIs encode both in a
# single number, with the sign as the discriminant: use `asTiming` to
# translate them.

# Number of bytes in a KB, as used by rates.
KB: int = 1024


def asNumber(value: float | int, name: str) -> float:
	"""Ensures that the given value is a finite, non-negative number,
	raising a `ValidationError` otherwise."""
	if isinstance(value, bool) or not isinstance(value, (int, float)):
		raise ValidationError(f"{name} must be a number, got: {value!r}")
	elif not isfinite(value) or value < 0:
		raise ValidationError(f"{name} must be finite and >= 0, got: {value!r}")
	return float(value)


@dataclass(slots=True, frozen=True)
class FixedDuration:
	"""The whole body is transferred over `seconds`."""

	seconds: float = 0.0

	def __post_init__(self) -> None:
		object.__setattr__(self, "seconds", asNumber(self.seconds, "Duration"))

	def duration(self, size: int) -> float:
		"""Returns `seconds`, except for an empty body (`size == 0`) which
		takes no time and completes at the time to first byte."""
		return 0.0 if size == 0 else self.seconds


@dataclass(slots=True, frozen=True)
class Rate:
	"""The body is transferred at `kbps` kilobytes per second."""

	kbps: float

	def __post_init__(self) -> None:
		kbps = asNumber(self.kbps, "Rate")
		if kbps == 0:
			raise ValidationError("Rate must be > 0")
		object.__setattr__(self, "kbps", kbps)

	def duration(self, size: int) -> float:
		# NOTE: An empty body is instant, whatever the rate
		return 0.0 if size == 0 else size / (self.kbps * KB)


TTiming: TypeAlias = FixedDuration | Rate

INSTANT: FixedDuration = FixedDuration(0.0)

# Typical download speeds, in KB/s (from kbit/s)
SPEED_GPRS: Rate = Rate(56 / 8)
SPEED_EDGE: Rate = Rate(128 / 8)
SPEED_3G: Rate = Rate(3200 / 8)
SPEED_3GPLUS: Rate = Rate(7200 / 8)
SPEED_WIFI: Rate = Rate(12000 / 8)


def asTiming(value: TTiming | float | int | None) -> TTiming:
	"""Returns the timing corresponding to the given value. Numbers follow
	the legacy convention: a positive value is the transfer duration in
	seconds, a negative value is the (negated) rate in KB/s."""
	if value is None:
		return INSTANT
	elif isinstance(value, (FixedDuration, Rate)):
		return value
	elif isinstance(value, bool) or not isinstance(value, (int, float)):
		raise ValidationError(f"Unsupported timing: {value!r}")
	elif value < 0:
		return Rate(-value)
	else:
		return FixedDuration(value)


# EOF
