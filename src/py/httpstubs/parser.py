from typing import NamedTuple
from .errors import MalformedMessage
from .headers import Headers
from .utils.io import HEAD_ENCODING
from .utils.logging import warning

# --
# Parses HTTP message dumps, as produced by `curl -is URL`: a status line,
# headers, an empty line and then the body, verbatim.

SEPARATORS: tuple[bytes, ...] = (b"\r\n\r\n", b"\n\n")
DEFAULT_STATUS: int = 200


class ParsedMessage(NamedTuple):
	status: int
	headers: Headers
	body: bytes


def split(data: bytes) -> tuple[bytes, bytes]:
	"""Splits the message at the first empty line, returning the head and the body."""
	end: int = -1
	size: int = 0
	for sep in SEPARATORS:
		i = data.find(sep)
		if i != -1 and (end == -1 or i < end):
			end = i
			size = len(sep)
	if end == -1:
		raise MalformedMessage("Message has no empty line separating headers from body")
	return data[:end], data[end + size :]


def parseStatus(line: str) -> int | None:
	"""Parses the status code of a `HTTP/1.1 200 OK` response line."""
	if not line.startswith("HTTP/"):
		return None
	parts = line.split(None, 2)
	if len(parts) < 2 or not (parts[1].isascii() and parts[1].isdigit()):
		return None
	status = int(parts[1])
	return status if 100 <= status <= 999 else None


def parseHeaders(lines: list[str]) -> Headers:
	res: list[tuple[str, str]] = []
	for ln in lines:
		i = ln.find(":")
		# Lines without a separator are not headers, we skip them
		if i > 0:
			res.append((ln[:i].strip(), ln[i + 1 :].strip()))
	return Headers(res)


def parseMessage(data: bytes) -> ParsedMessage:
	"""Parses the given raw HTTP message into a status, headers and body."""
	head, body = split(bytes(data))
	lines: list[str] = [_.rstrip("\r") for _ in head.decode(HEAD_ENCODING).split("\n")]
	status = parseStatus(lines[0].strip()) if lines else None
	if status is None:
		warning(
			"Could not parse message status line, using default",
			Line=lines[0] if lines else "",
			Status=DEFAULT_STATUS,
		)
	return ParsedMessage(
		DEFAULT_STATUS if status is None else status,
		parseHeaders(lines[1:]),
		body,
	)


# EOF
