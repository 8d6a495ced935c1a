"""
dbtrigger - Realtime database triggers for serverless functions.

This library provides:
- Path pattern compilation and matching with wildcards and named captures
- Normalization of trigger declarations (reference path or options object)
- Deployment manifest assembly with exact-match and path-pattern filters
- CloudFunction values that extract path params and build typed events
- Structured logging helpers for function code
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("dbtrigger-py")
except PackageNotFoundError:
    # Package not installed (running from source without install)
    __version__ = "0.0.0.dev0"

# Events
from dbtrigger.events import (
    Change,
    DatabaseEvent,
    DataSnapshot,
    RawDatabaseEvent,
    ReferenceEventData,
)
from dbtrigger.exceptions import (
    ConfigurationError,
    DbTriggerError,
    EventDecodeError,
    InvalidOptionsError,
    OptionValidationError,
    PathMismatchError,
    PatternSyntaxError,
)

# Patterns
from dbtrigger.patterns import PathPattern, Segment, SegmentKind, compile_pattern

# Triggers
from dbtrigger.triggers import (
    CREATED_EVENT_TYPE,
    DELETED_EVENT_TYPE,
    UPDATED_EVENT_TYPE,
    WRITTEN_EVENT_TYPE,
    CloudFunction,
    EventTrigger,
    ManifestEndpoint,
    NormalizedOptions,
    ReferenceOptions,
    get_opts,
    make_endpoint,
    make_params,
    on_changed_operation,
    on_operation,
    on_value_created,
    on_value_deleted,
    on_value_updated,
    on_value_written,
)

__all__ = [
    "__version__",
    # Exceptions
    "DbTriggerError",
    "ConfigurationError",
    "PatternSyntaxError",
    "InvalidOptionsError",
    "OptionValidationError",
    "PathMismatchError",
    "EventDecodeError",
    # Patterns
    "PathPattern",
    "Segment",
    "SegmentKind",
    "compile_pattern",
    # Events
    "RawDatabaseEvent",
    "ReferenceEventData",
    "DataSnapshot",
    "Change",
    "DatabaseEvent",
    # Triggers
    "NormalizedOptions",
    "ReferenceOptions",
    "get_opts",
    "make_params",
    "EventTrigger",
    "ManifestEndpoint",
    "make_endpoint",
    "CloudFunction",
    "WRITTEN_EVENT_TYPE",
    "CREATED_EVENT_TYPE",
    "UPDATED_EVENT_TYPE",
    "DELETED_EVENT_TYPE",
    "on_changed_operation",
    "on_operation",
    "on_value_written",
    "on_value_created",
    "on_value_updated",
    "on_value_deleted",
]
