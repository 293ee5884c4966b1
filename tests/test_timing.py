import math
import pytest
from httpstubs import (
	FixedDuration,
	Rate,
	ValidationError,
	asTiming,
	SPEED_GPRS,
	SPEED_WIFI,
)
from httpstubs.timing import INSTANT


def test_legacy_positive_is_duration():
	assert asTiming(2.5) == FixedDuration(2.5)
	assert asTiming(0) == FixedDuration(0.0)


def test_legacy_negative_is_rate():
	timing = asTiming(-10)
	assert isinstance(timing, Rate)
	assert timing.kbps == 10.0


def test_default_is_instant():
	assert asTiming(None) is INSTANT
	assert INSTANT.duration(1_000_000) == 0.0


def test_variants_pass_through():
	rate = Rate(3)
	assert asTiming(rate) is rate


@pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf, "1", True])
def test_invalid_legacy_values(value):
	with pytest.raises(ValidationError):
		asTiming(value)


def test_invalid_variants():
	with pytest.raises(ValidationError):
		FixedDuration(-1)
	with pytest.raises(ValidationError):
		Rate(0)
	with pytest.raises(ValidationError):
		Rate(-5)


def test_rate_duration():
	assert Rate(1).duration(1024) == 1.0
	assert Rate(2).duration(1024) == 0.5
	assert Rate(1).duration(0) == 0.0


def test_fixed_duration_of_empty_body():
	assert FixedDuration(3).duration(1) == 3.0
	assert FixedDuration(3).duration(0) == 0.0


def test_speeds():
	assert SPEED_GPRS.kbps == 7.0
	assert SPEED_WIFI.kbps == 1500.0
	assert SPEED_GPRS.duration(7 * 1024) == 1.0


def test_timing_is_immutable():
	timing = FixedDuration(1)
	with pytest.raises(AttributeError):
		timing.seconds = 2  # type: ignore


# EOF
