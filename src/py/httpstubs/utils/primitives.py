from typing import Any
from time import struct_time
from decimal import Decimal
from datetime import date, datetime
from dataclasses import is_dataclass, fields
from pathlib import Path
from enum import Enum


TLiteral = bool | int | float | str | bytes
TComposite = (
	list[TLiteral] | dict[TLiteral, TLiteral] | set[TLiteral] | tuple[TLiteral, ...]
)
TPrimitive = TLiteral | TComposite | list[Any] | dict[str, Any] | None


def asPrimitive(value: Any) -> Any:
	"""Converts the given value to a primitive value, that can be converted
	to JSON. Values that have no primitive equivalent are returned as-is.
	Cyclic values exhaust the recursion limit and raise a `RecursionError`."""
	if value is None or type(value) in (bool, float, int, str):
		return value
	elif isinstance(value, tuple) and hasattr(value, "_fields"):
		return {k: asPrimitive(getattr(value, k)) for k in value._fields}
	elif isinstance(value, list) or isinstance(value, tuple) or isinstance(value, set):
		return [asPrimitive(v) for v in value]
	elif is_dataclass(value) and not isinstance(value, type):
		return {_.name: asPrimitive(getattr(value, _.name)) for _ in fields(value)}
	elif isinstance(value, Enum):
		return asPrimitive(value.value)
	elif isinstance(value, dict):
		return {asPrimitive(k): asPrimitive(v) for k, v in value.items()}
	elif isinstance(value, Decimal):
		return str(value)
	elif isinstance(value, Path):
		return str(value)
	elif isinstance(value, datetime) or isinstance(value, date):
		return value.isoformat()
	elif isinstance(value, struct_time):
		return tuple(value)
	else:
		return value


# EOF
