"""
Structured logging for function code.

Functions deployed with dbtrigger usually run on a platform that parses
JSON log lines into structured entries. This module provides helpers that
emit such entries through the standard logging machinery:

- ``write(entry)`` logs a complete entry with an explicit severity
- ``debug``/``log``/``info``/``warn``/``error`` build the entry from their
  arguments; a trailing plain ``dict`` becomes the entry's JSON payload

Records go to the ``dbtrigger.user`` logger and propagate like any other
logger until ``configure_structured_logging()`` attaches a JSON handler.
``reset_structured_logging()`` detaches it again.

Example:
    >>> from dbtrigger import logger
    >>> logger.configure_structured_logging()
    >>> logger.info("user created", {"uid": "alice"})
    {"uid": "alice", "severity": "INFO", "message": "user created"}
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from typing import IO, Any, Literal

from dbtrigger.serialization import json_dumps

LogSeverity = Literal[
    "DEBUG",
    "INFO",
    "NOTICE",
    "WARNING",
    "ERROR",
    "CRITICAL",
    "ALERT",
    "EMERGENCY",
]

# Entry with "severity", optional "message" and arbitrary payload keys
LogEntry = dict[str, Any]

NOTICE = 25
ALERT = 60
EMERGENCY = 70

SEVERITY_LEVELS: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "NOTICE": NOTICE,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
    "ALERT": ALERT,
    "EMERGENCY": EMERGENCY,
}

logging.addLevelName(NOTICE, "NOTICE")
logging.addLevelName(ALERT, "ALERT")
logging.addLevelName(EMERGENCY, "EMERGENCY")

USER_LOGGER_NAME = "dbtrigger.user"
CIRCULAR_MARKER = "[Circular]"

_user_logger = logging.getLogger(USER_LOGGER_NAME)
_handler: logging.Handler | None = None


def remove_circular(obj: Any, _ancestors: frozenset[int] = frozenset()) -> Any:
    """
    Return a copy of obj that is safe to serialize as JSON.

    Containers that reference one of their own ancestors are replaced with
    ``"[Circular]"``. Objects defining ``to_json()`` are replaced by its result.

    Args:
        obj: Any value

    Returns:
        A structure of plain dicts, lists and scalars
    """
    to_json = getattr(obj, "to_json", None)
    if callable(to_json):
        return to_json()
    if not isinstance(obj, Mapping | list | tuple):
        return obj

    ancestors = _ancestors | {id(obj)}
    if isinstance(obj, Mapping):
        return {
            key: CIRCULAR_MARKER if id(value) in ancestors else remove_circular(value, ancestors)
            for key, value in obj.items()
        }
    return [
        CIRCULAR_MARKER if id(value) in ancestors else remove_circular(value, ancestors)
        for value in obj
    ]


def _severity_for_level(levelno: int) -> str:
    """Map a stdlib level to the closest severity at or below it."""
    severity = "DEBUG"
    for name, level in SEVERITY_LEVELS.items():
        if levelno >= level:
            severity = name
    return severity


class StructuredLogFormatter(logging.Formatter):
    """
    Formats log records as structured entries.

    In structured mode every record becomes a single JSON object holding the
    payload keys plus ``severity`` and ``message``. In plain mode the message
    is followed by the payload as indented JSON.

    Args:
        structured: Emit one JSON object per record (default True)
    """

    def __init__(self, structured: bool = True) -> None:
        super().__init__()
        self._structured = structured

    def format(self, record: logging.LogRecord) -> str:
        severity = getattr(record, "severity", None) or _severity_for_level(record.levelno)
        payload = getattr(record, "json_payload", None) or {}
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"

        if self._structured:
            entry = {**payload, "severity": severity, "message": message}
            return json_dumps(remove_circular(entry))

        if payload:
            message = f"{message} {json_dumps(remove_circular(payload), indent=2)}"
        return message


def write(entry: Mapping[str, Any]) -> None:
    """
    Write a log entry.

    Args:
        entry: Mapping with a ``severity``, an optional ``message`` and any
            additional structured metadata

    Raises:
        ValueError: If the severity is not a known LogSeverity
    """
    severity = entry.get("severity")
    if severity not in SEVERITY_LEVELS:
        raise ValueError(
            f"Unknown log severity {severity!r}, expected one of {', '.join(SEVERITY_LEVELS)}"
        )
    message = entry.get("message") or ""
    payload = {key: value for key, value in entry.items() if key not in ("severity", "message")}
    _user_logger.log(
        SEVERITY_LEVELS[severity],
        "%s",
        message,
        extra={"severity": severity, "json_payload": payload},
    )


def entry_from_args(severity: LogSeverity, args: tuple[Any, ...]) -> LogEntry:
    """Build an entry from positional log arguments."""
    values = list(args)
    payload: dict[str, Any] = {}
    if values and type(values[-1]) is dict:
        payload = values.pop()
    return {
        **payload,
        "severity": severity,
        "message": " ".join(str(value) for value in values),
    }


def debug(*args: Any) -> None:
    """Write a DEBUG entry. A trailing dict is added to the JSON payload."""
    write(entry_from_args("DEBUG", args))


def log(*args: Any) -> None:
    """Write an INFO entry. A trailing dict is added to the JSON payload."""
    write(entry_from_args("INFO", args))


def info(*args: Any) -> None:
    """Write an INFO entry. A trailing dict is added to the JSON payload."""
    write(entry_from_args("INFO", args))


def warn(*args: Any) -> None:
    """Write a WARNING entry. A trailing dict is added to the JSON payload."""
    write(entry_from_args("WARNING", args))


def error(*args: Any) -> None:
    """Write an ERROR entry. A trailing dict is added to the JSON payload."""
    write(entry_from_args("ERROR", args))


def configure_structured_logging(
    stream: IO[str] | None = None,
    structured: bool = True,
    level: int = logging.DEBUG,
) -> logging.Handler:
    """
    Attach a structured handler to the user logger.

    Calling this again replaces the previously installed handler. Records no
    longer propagate to the root logger while the handler is installed.

    Args:
        stream: Destination stream (default sys.stdout)
        structured: Emit one JSON object per record
        level: Minimum level to emit

    Returns:
        The installed handler
    """
    global _handler

    reset_structured_logging()
    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(StructuredLogFormatter(structured=structured))
    _user_logger.addHandler(handler)
    _user_logger.setLevel(level)
    _user_logger.propagate = False
    _handler = handler
    return handler


def reset_structured_logging() -> None:
    """Remove the handler installed by configure_structured_logging, if any."""
    global _handler

    if _handler is not None:
        _user_logger.removeHandler(_handler)
        _handler = None
    _user_logger.setLevel(logging.NOTSET)
    _user_logger.propagate = True


__all__ = [
    "LogSeverity",
    "LogEntry",
    "SEVERITY_LEVELS",
    "USER_LOGGER_NAME",
    "StructuredLogFormatter",
    "remove_circular",
    "write",
    "entry_from_args",
    "debug",
    "log",
    "info",
    "warn",
    "error",
    "configure_structured_logging",
    "reset_structured_logging",
]
