from functools import lru_cache
from typing import Iterable, Iterator, Mapping

# -----------------------------------------------------------------------------
#
# HELPERS
#
# -----------------------------------------------------------------------------

# Number of normalized header names kept in cache
HEADERNAME_CACHE: int = 1024


@lru_cache(maxsize=HEADERNAME_CACHE)
def headername(name: str) -> str:
	"""Normalizes the header name as `Kebab-Case`."""
	return "-".join(_.capitalize() for _ in name.lower().split("-"))


# -----------------------------------------------------------------------------
#
# HEADERS
#
# -----------------------------------------------------------------------------


class Headers(Mapping[str, str]):
	"""A read-only, case-insensitive mapping of header names to values.
	When a name is given more than once, in any case, the last value wins."""

	__slots__ = ["_values"]

	def __init__(
		self, headers: Mapping[str, str] | Iterable[tuple[str, str]] | None = None
	):
		self._values: dict[str, tuple[str, str]] = {}
		items = (
			()
			if headers is None
			else headers.items()
			if isinstance(headers, Mapping)
			else headers
		)
		for k, v in items:
			name = str(k).strip()
			self._values[name.lower()] = (headername(name), str(v))

	def __getitem__(self, name: str) -> str:
		if not isinstance(name, str):
			raise KeyError(name)
		return self._values[name.lower()][1]

	def __iter__(self) -> Iterator[str]:
		return (_[0] for _ in self._values.values())

	def __len__(self) -> int:
		return len(self._values)

	def merged(
		self, headers: Mapping[str, str] | Iterable[tuple[str, str]] | None
	) -> "Headers":
		"""Returns new headers with the given ones set over these."""
		return Headers([*self.items(), *(Headers(headers).items())])

	def __repr__(self) -> str:
		return f"Headers({dict(self.items())})"


# EOF
