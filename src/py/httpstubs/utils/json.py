from typing import Any, TypeAlias, cast
import json as basejson
from .primitives import asPrimitive
from ..errors import EncodingError


TJSON: TypeAlias = None | int | float | bool | str | list[Any] | dict[str, Any]


def json(value: Any) -> bytes:
	"""Encodes the given value as UTF-8 JSON, raising an `EncodingError`
	when it has no JSON representation."""
	try:
		# NOTE: NaN and infinities are not valid JSON
		return basejson.dumps(asPrimitive(value), allow_nan=False).encode("utf8")
	except (TypeError, ValueError, RecursionError) as e:
		raise EncodingError(f"Value can't be encoded as JSON: {e}") from e


def unjson(value: bytes | str) -> TJSON:
	"""Decodes a JSON-encoded value."""
	return cast(TJSON, basejson.loads(value))


# EOF
