from typing import ClassVar
import os
import sys

# SEE: https://no-color.org/
NO_COLOR: bool = "NO_COLOR" in os.environ
FORCE_COLOR: bool = "FORCE_COLOR" in os.environ
# Test runners capture stderr, in which case we don't want escape codes
COLOR: bool = FORCE_COLOR or (not NO_COLOR and bool(sys.stderr and sys.stderr.isatty()))


class Term:
	BOLD: ClassVar[str] = "\033[1m" if COLOR else ""
	NORMAL: ClassVar[str] = "\033[0m" if COLOR else ""
	RESET: ClassVar[str] = "\033[0m" if COLOR else ""

	@staticmethod
	def Color(color: int, bold: bool = False) -> str:
		return f"\033[{'1' if bold else '0'};38;5;{color}m" if COLOR else ""


# EOF
