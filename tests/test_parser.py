import pytest
from httpstubs import MalformedMessage
from httpstubs.parser import parseMessage, split


def test_crlf_message():
	message = parseMessage(b"HTTP/1.1 404 Not Found\r\nX-Test: yes\r\n\r\nbody-bytes")
	assert message.status == 404
	assert message.headers == {"X-Test": "yes"}
	assert message.body == b"body-bytes"


def test_lf_message():
	message = parseMessage(b"HTTP/1.0 201 Created\nLocation: /items/1\n\n{}")
	assert message.status == 201
	assert message.headers["location"] == "/items/1"
	assert message.body == b"{}"


def test_first_separator_wins():
	head, body = split(b"HTTP/1.1 200 OK\nA: b\n\nbody\r\n\r\nmore")
	assert head == b"HTTP/1.1 200 OK\nA: b"
	assert body == b"body\r\n\r\nmore"
	head, body = split(b"HTTP/1.1 200 OK\r\nA: b\r\n\r\nbody\n\nmore")
	assert head == b"HTTP/1.1 200 OK\r\nA: b"
	assert body == b"body\n\nmore"


def test_body_is_verbatim():
	body = b"\x00\xff\r\n\r\nbinary"
	assert parseMessage(b"HTTP/1.1 200 OK\r\n\r\n" + body).body == body


@pytest.mark.parametrize(
	"line",
	[b"", b"garbage", b"HTTP/1.1 abc Bad", b"HTTP/1.1", b"HTTP/1.1 42 Nope"],
)
def test_default_status(line):
	assert parseMessage(line + b"\r\nA: 1\r\n\r\n").status == 200


def test_duplicate_headers_last_wins():
	message = parseMessage(
		b"HTTP/1.1 200 OK\r\nX-Value: 1\r\nx-value: 2\r\nNot a header\r\n\r\n"
	)
	assert len(message.headers) == 1
	assert message.headers["X-VALUE"] == "2"


def test_header_values_are_trimmed():
	message = parseMessage(b"HTTP/1.1 200 OK\r\nLink:  <a>; rel=next \r\n\r\n")
	assert message.headers["Link"] == "<a>; rel=next"


def test_missing_separator():
	with pytest.raises(MalformedMessage):
		parseMessage(b"HTTP/1.1 200 OK\r\nContent-Type: text/plain\r\n")


# EOF
