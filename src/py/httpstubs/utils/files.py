from pathlib import Path
from ..config import STUBS_PATH

RESPONSE_EXTENSION: str = ".response"


def stubsPath(directory: Path | str | None = None) -> Path:
	"""Returns the directory where stub files are looked up, defaulting
	to the configured `STUBS_PATH`."""
	return Path(STUBS_PATH if directory is None else directory).absolute()


def pathFor(name: str, directory: Path | str | None = None) -> Path:
	"""Returns the path of the given file name within the stubs directory."""
	return stubsPath(directory) / name


def responsePath(name: str, directory: Path | str | None = None) -> Path:
	"""Returns the path of the `.response` dump with the given name."""
	return pathFor(
		name if name.endswith(RESPONSE_EXTENSION) else f"{name}{RESPONSE_EXTENSION}",
		directory,
	)


def isReadable(path: Path) -> bool:
	"""Tells if the path is a regular file that can be opened for reading."""
	try:
		with open(path, "rb"):
			return path.is_file()
	except OSError:
		return False


# EOF
