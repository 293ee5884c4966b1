from typing import Any

DEFAULT_ENCODING: str = "utf8"
# NOTE: Header blocks are decoded as Latin-1, which maps every byte
HEAD_ENCODING: str = "latin1"


def asBytes(value: str | bytes | bytearray | memoryview | Any) -> bytes:
	if isinstance(value, bytes):
		return value
	elif isinstance(value, (bytearray, memoryview)):
		return bytes(value)
	elif isinstance(value, str):
		return value.encode(DEFAULT_ENCODING)
	elif value is None:
		return b""
	else:
		raise TypeError(f"Expected bytes or str, got: {type(value)}")


# EOF
