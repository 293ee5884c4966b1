import sys
import time
from enum import Enum
from typing import NamedTuple, Any
from contextvars import ContextVar
from .primitives import TPrimitive
from .term import Term
from ..config import LOG_LEVEL

ERR = sys.stderr


LogOrigin: ContextVar[str] = ContextVar("LogOrigin", default="httpstubs")


class LogType(Enum):
	Message = 0  # A general information message
	Event = 20  # An event


class LogLevel(Enum):
	Debug = 0
	Info = 10
	Warning = 30
	Error = 40


LOG_LEVEL_COLOR = {
	LogLevel.Debug: 31,
	LogLevel.Info: 75,
	LogLevel.Warning: 202,
	LogLevel.Error: 160,
}


class LogEntry(NamedTuple):
	origin: str
	time: float
	type: LogType = LogType.Message
	level: LogLevel = LogLevel.Info
	message: str | None = None
	name: str | None = None
	value: TPrimitive | None = None
	context: dict[str, TPrimitive] | None = None


def level(name: str) -> LogLevel:
	"""Returns the log level with the given (case-insensitive) name,
	defaulting to `Info`."""
	for _ in LogLevel:
		if _.name.lower() == name.strip().lower():
			return _
	return LogLevel.Info


# Entries below that level are not sent
THRESHOLD: LogLevel = level(LOG_LEVEL)


def formatData(value: Any) -> str:
	if value is None or value == () or value == [] or value == {}:
		return "◌"
	elif isinstance(value, dict):
		return " ".join(
			f"{Term.BOLD}{k}{Term.NORMAL}={formatData(v)}" for k, v in value.items()
		)
	elif isinstance(value, list) or isinstance(value, tuple):
		return ",".join(formatData(v) for v in value)
	elif isinstance(value, str):
		return repr(value) if " " in value else value
	elif isinstance(value, bool):
		return "✓" if value else "✗"
	elif isinstance(value, float):
		return f"{value:0.3f}"
	else:
		return str(value)


def logged(entryLevel: LogLevel) -> bool:
	"""Tells if entries of the given level are currently sent. This is used
	to guard against building entries when not necessary."""
	return entryLevel.value >= THRESHOLD.value


def send(entry: LogEntry) -> LogEntry:
	if not logged(entry.level):
		return entry
	clr: str = Term.Color(LOG_LEVEL_COLOR[entry.level])
	if entry.type == LogType.Event:
		ERR.write(
			f"{clr}{Term.BOLD}[{entry.origin}] {entry.name}{Term.RESET} {formatData(entry.value)} {formatData(entry.context)}{Term.RESET}\n"
		)
	else:
		ERR.write(
			f"{clr}{Term.BOLD}[{entry.origin}]{Term.RESET} {entry.message} {formatData(entry.context)}{Term.RESET}\n"
		)
	ERR.flush()
	return entry


def entry(
	*,
	origin: str | None = None,
	at: float | None = None,
	type: LogType = LogType.Message,
	level: LogLevel = LogLevel.Info,
	message: str | None = None,
	name: str | None = None,
	value: TPrimitive | None = None,
	context: dict[str, TPrimitive],
) -> LogEntry:
	return LogEntry(
		origin=origin or LogOrigin.get(),
		time=time.time() if at is None else at,
		type=type,
		level=level,
		message=message,
		name=name,
		value=value,
		context=context,
	)


def info(
	message: str,
	*,
	origin: str | None = None,
	**context: TPrimitive,
) -> LogEntry:
	return send(entry(message=message, origin=origin, context=context))


def warning(
	message: str,
	*,
	origin: str | None = None,
	**context: TPrimitive,
) -> LogEntry:
	return send(
		entry(
			message=message,
			level=LogLevel.Warning,
			origin=origin,
			context=context,
		)
	)


def event(
	event: str,
	value: Any = None,
	*,
	origin: str | None = None,
	level: LogLevel = LogLevel.Info,
	**context: TPrimitive,
) -> LogEntry:
	return send(
		entry(
			name=event,
			value=value,
			type=LogType.Event,
			level=level,
			origin=origin,
			context=context,
		)
	)


# EOF
