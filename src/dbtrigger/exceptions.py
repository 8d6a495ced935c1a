"""Library exceptions for the dbtrigger package."""

from typing import Any


class DbTriggerError(Exception):
    """Base exception for dbtrigger library."""

    pass


class ConfigurationError(DbTriggerError):
    """Raised when a function declaration is misconfigured."""

    pass


class PatternSyntaxError(ConfigurationError):
    """
    Raised when a path template cannot be compiled.

    This error occurs when:
    - A template contains more than one multi-segment token (`**` or `{name=**}`)
    - A template contains an unterminated or malformed `{...}` capture

    Attributes:
        pattern: The offending template, as supplied
        reason: Human-readable description of the problem
    """

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid path pattern '{pattern}': {reason}")


class InvalidOptionsError(ConfigurationError):
    """Raised when trigger options are neither a path string nor an options object."""

    def __init__(self, received: Any) -> None:
        self.received_type = type(received).__name__
        super().__init__(
            f"Expected a reference path string or an options mapping, "
            f"got {self.received_type}"
        )


class OptionValidationError(ConfigurationError):
    """
    Raised when a deployment option is outside its allowed values.

    Attributes:
        option: Name of the option as supplied by the caller
        value: The rejected value
        reason: Why the value was rejected
    """

    def __init__(self, option: str, value: Any, reason: str) -> None:
        self.option = option
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid value {value!r} for option '{option}': {reason}")


class PathMismatchError(DbTriggerError):
    """
    Raised when a delivered event path does not match the declared pattern.

    The platform only delivers events that already passed the deployed
    filters, so this indicates a filter or trigger configuration mismatch.

    Attributes:
        path: The concrete path carried by the event
        pattern: Source string of the pattern it failed to match
    """

    def __init__(self, path: str, pattern: str) -> None:
        self.path = path
        self.pattern = pattern
        super().__init__(f"Path '{path}' does not match pattern '{pattern}'")


class EventDecodeError(DbTriggerError):
    """Raised when a raw event envelope cannot be decoded."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Could not decode database event: {message}")


__all__ = [
    "DbTriggerError",
    "ConfigurationError",
    "PatternSyntaxError",
    "InvalidOptionsError",
    "OptionValidationError",
    "PathMismatchError",
    "EventDecodeError",
]
