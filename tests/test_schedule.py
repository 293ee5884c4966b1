import io
import pytest
from httpstubs import (
	Emission,
	Failure,
	FixedDuration,
	Rate,
	ResourceNotFound,
	Schedule,
	SimulatedTransportError,
	SizeMismatch,
	StubResponse,
	ValidationError,
)
from httpstubs.schedule import chunkCount, emissionTime


@pytest.mark.parametrize("chunkSize", [1, 3, 7, 64, 1000])
@pytest.mark.parametrize("ttfb,duration", [(0, 0), (0.1, 0.3), (1.7, 2.9), (0.3, 1e-9)])
def test_fixed_duration_ends_exactly(chunkSize, ttfb, duration):
	response = StubResponse.FromBytes(b"x" * 100, timeToFirstByte=ttfb, timing=duration)
	events = list(Schedule(response, chunkSize))
	assert events[-1].at == ttfb + duration
	times = [_.at for _ in events]
	assert times == sorted(times)
	assert times[0] >= ttfb


@pytest.mark.parametrize("rate", [0.5, 1, 7, 1500])
@pytest.mark.parametrize("size", [1, 1000, 4096, 12345])
def test_rate_ends_at_size_over_rate(rate, size):
	response = StubResponse.FromBytes(b"x" * size, timeToFirstByte=0.2, timing=Rate(rate))
	schedule = Schedule(response, 512)
	events = list(schedule)
	assert events[-1].at == 0.2 + size / (rate * 1024)
	assert schedule.end == events[-1].at
	assert len(events) == schedule.count == chunkCount(size, 512)


def test_zero_length_body():
	for timing in (FixedDuration(3), Rate(1), FixedDuration(0)):
		response = StubResponse.FromBytes(b"", timeToFirstByte=0.25, timing=timing)
		events = list(Schedule(response, 16))
		assert events == [Emission(b"", 0.25, 0, 1)]


def test_chunks_reproduce_body():
	data = bytes(range(256)) * 10
	response = StubResponse.FromBytes(data, 200, 0, FixedDuration(0), {})
	events = list(Schedule(response, 100))
	assert b"".join(_.payload for _ in events) == data
	assert [len(_.payload) for _ in events] == [100] * 25 + [60]
	assert [_.index for _ in events] == list(range(26))
	assert events[-1].isLast and not events[0].isLast


def test_emission_times():
	response = StubResponse.FromBytes(b"x" * 4, timeToFirstByte=1, timing=2)
	schedule = Schedule(response, 1)
	assert schedule.times() == [1.5, 2.0, 2.5, 3.0]
	assert [_.at for _ in schedule] == [1.5, 2.0, 2.5, 3.0]
	assert emissionTime(1, 2, 0, 1) == 3
	with pytest.raises(IndexError):
		schedule.at(4)


def test_invalid_chunk_size():
	response = StubResponse.FromBytes(b"abc")
	for size in (0, -1, 1.5, True):
		with pytest.raises(ValidationError):
			Schedule(response, size)  # type: ignore


def test_schedule_is_single_pass():
	schedule = Schedule(StubResponse.FromBytes(b"abcdef"), 2)
	assert iter(schedule) is schedule
	assert len(list(schedule)) == 3
	assert list(schedule) == []


def test_response_is_reusable():
	response = StubResponse.FromStream(lambda: iter([b"abc", b"def"]), 6)
	assert Schedule(response, 4).load() == b"abcdef"
	assert Schedule(response, 1).load() == b"abcdef"


def test_error_schedule():
	error = SimulatedTransportError.TimedOut()
	response = StubResponse.FromError(error).withTiming(timeToFirstByte=1.5)
	schedule = Schedule(response, 8)
	assert schedule.count == 1
	assert schedule.end == 1.5
	assert list(schedule) == [Failure(error, 1.5)]
	with pytest.raises(SimulatedTransportError):
		Schedule(response).load()


def test_file_body(tmp_path):
	path = tmp_path / "body.txt"
	path.write_bytes(b"a" * 10)
	response = StubResponse.FromFile(path)
	assert [_.payload for _ in Schedule(response, 4)] == [b"aaaa", b"aaaa", b"aa"]
	# Each delivery reads the file independently
	first, second = Schedule(response, 5), Schedule(response, 5)
	assert next(first).payload == b"aaaaa"
	assert second.load() == b"a" * 10
	assert next(first).payload == b"aaaaa"
	first.close()


def test_file_removed_after_creation(tmp_path):
	path = tmp_path / "gone.txt"
	path.write_bytes(b"data")
	response = StubResponse.FromFile(path)
	path.unlink()
	schedule = Schedule(response)
	with pytest.raises(ResourceNotFound):
		next(schedule)


def test_file_grown_after_creation(tmp_path):
	path = tmp_path / "grown.txt"
	path.write_bytes(b"data")
	response = StubResponse.FromFile(path)
	path.write_bytes(b"more data")
	with pytest.raises(SizeMismatch) as e:
		list(Schedule(response, 2))
	assert e.value.expected == 4


def test_stream_too_short():
	response = StubResponse.FromStream(lambda: iter([b"abc", b"de"]), 8)
	schedule = Schedule(response, 2)
	delivered = []
	with pytest.raises(SizeMismatch) as e:
		for atom in schedule:
			delivered.append(atom.payload)
	assert delivered == [b"ab", b"cd"]
	assert (e.value.expected, e.value.actual) == (8, 5)
	assert list(schedule) == []


def test_stream_too_long():
	response = StubResponse.FromStream(lambda: iter([b"abc", b"def"]), 4)
	schedule = Schedule(response, 2)
	assert next(schedule).payload == b"ab"
	# The excess is detected before the last chunk is reported
	with pytest.raises(SizeMismatch) as e:
		next(schedule)
	assert e.value.actual == 6


def test_stream_from_file_object():
	opened: list[io.BytesIO] = []

	def source() -> io.BytesIO:
		opened.append(io.BytesIO(b"0123456789"))
		return opened[-1]

	response = StubResponse.FromStream(source, 10)
	with Schedule(response, 3) as schedule:
		assert next(schedule).payload == b"012"
		assert not opened[0].closed
	assert opened[0].closed


def test_exhausted_schedule_releases_source():
	closed: list[bool] = []

	def source():
		try:
			yield b"abcd"
		finally:
			closed.append(True)

	assert Schedule(StubResponse.FromStream(source, 4), 2).load() == b"abcd"
	assert closed == [True]


# EOF
