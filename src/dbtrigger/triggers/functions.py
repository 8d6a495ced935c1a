"""
Declaration of database-triggered functions.

Each on_value_* function turns a reference template (or options object) and
a callback into a CloudFunction:

- calling the CloudFunction invokes the callback directly (local testing)
- ``endpoint`` holds the deployment manifest built at declaration time
- ``run(raw_event)`` is the platform entry point: it extracts the path
  params, builds the typed DatabaseEvent and invokes the callback

Example:
    >>> from dbtrigger import on_value_created
    >>>
    >>> @on_value_created("/users/{uid}/posts/{postId}")
    ... def on_post_created(event):
    ...     print(event.params["uid"], event.data.val())
    >>>
    >>> on_post_created.endpoint.to_dict()["eventTrigger"]["eventFilterPathPatterns"]
    {'ref': 'users/{uid}/posts/{postId}', 'instance': '*'}

The callback's return value is passed back unchanged. An async callback
returns a coroutine from ``run`` for the host to await; errors raised by the
callback propagate to the host.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Mapping
from typing import Any

from dbtrigger.events.database import (
    DatabaseEvent,
    make_changed_database_event,
    make_database_event,
)
from dbtrigger.events.raw import RawDatabaseEvent, decode_raw_event
from dbtrigger.exceptions import ConfigurationError
from dbtrigger.observability.attributes import (
    ATTR_EVENT_TYPE,
    ATTR_FUNCTION_NAME,
    ATTR_INSTANCE,
    ATTR_PARAM_COUNT,
    ATTR_PATTERN,
    ATTR_REF,
)
from dbtrigger.observability.tracer import Tracer, create_tracer
from dbtrigger.patterns.pattern import PathPattern, compile_pattern
from dbtrigger.triggers.config import validate_options
from dbtrigger.triggers.endpoint import ManifestEndpoint, make_endpoint
from dbtrigger.triggers.options import ReferenceOptions, get_opts
from dbtrigger.triggers.params import make_params
from dbtrigger.types import EventHandler, EventType, ParamMap

logger = logging.getLogger(__name__)

WRITTEN_EVENT_TYPE = "google.firebase.database.ref.v1.written"
CREATED_EVENT_TYPE = "google.firebase.database.ref.v1.created"
UPDATED_EVENT_TYPE = "google.firebase.database.ref.v1.updated"
DELETED_EVENT_TYPE = "google.firebase.database.ref.v1.deleted"

CHANGED_EVENT_TYPES = frozenset({WRITTEN_EVENT_TYPE, UPDATED_EVENT_TYPE})
OPERATION_EVENT_TYPES = frozenset({CREATED_EVENT_TYPE, DELETED_EVENT_TYPE})

ReferenceOrOptions = str | Mapping[str, Any] | ReferenceOptions

# Builds the typed event for one event type from the raw event and its params
EventBuilder = Callable[[RawDatabaseEvent, ParamMap], DatabaseEvent]

EVENT_BUILDERS: dict[str, EventBuilder] = {
    CREATED_EVENT_TYPE: lambda raw, params: make_database_event(raw, raw.data.delta, params),
    DELETED_EVENT_TYPE: lambda raw, params: make_database_event(raw, raw.data.data, params),
    UPDATED_EVENT_TYPE: make_changed_database_event,
    WRITTEN_EVENT_TYPE: make_changed_database_event,
}


def get_handler_name(handler: Any) -> str:
    """Get a descriptive name for a handler for logging and tracing."""
    name = getattr(handler, "__name__", None)
    if isinstance(name, str):
        return name
    return type(handler).__name__


class CloudFunction:
    """
    A deployable database-triggered function.

    Instances are created by the on_value_* functions rather than directly.
    Everything is fixed at declaration time; invocations share no state.

    Attributes:
        endpoint: The deployment manifest
        event_type: Event type the function is registered for
        path: Compiled reference path pattern
        instance: Compiled instance pattern
    """

    def __init__(
        self,
        handler: EventHandler,
        event_type: str,
        endpoint: ManifestEndpoint,
        path: PathPattern,
        instance: PathPattern,
        tracer: Tracer | None = None,
    ) -> None:
        self._handler = handler
        self._event_type = event_type
        self._endpoint = endpoint
        self._path = path
        self._instance = instance
        self._build_event = EVENT_BUILDERS[event_type]
        self._tracer = tracer or create_tracer(__name__)
        self._name = get_handler_name(handler)
        functools.update_wrapper(self, handler)

    @property
    def name(self) -> str:
        return self._name

    @property
    def endpoint(self) -> ManifestEndpoint:
        return self._endpoint

    @property
    def event_type(self) -> str:
        return self._event_type

    @property
    def path(self) -> PathPattern:
        return self._path

    @property
    def instance(self) -> PathPattern:
        return self._instance

    @property
    def handler(self) -> EventHandler:
        return self._handler

    def __call__(self, event: DatabaseEvent[Any]) -> Any:
        """Invoke the callback directly with an already typed event."""
        return self._handler(event)

    def run(self, raw_event: RawDatabaseEvent | Mapping[str, Any]) -> Any:
        """
        Handle a raw change notification delivered by the platform.

        Args:
            raw_event: The raw event or its JSON mapping

        Returns:
            Whatever the callback returns (a coroutine for async callbacks)

        Raises:
            EventDecodeError: If the envelope is malformed
            PathMismatchError: If the event does not match the patterns
        """
        raw = decode_raw_event(raw_event)
        attributes = None
        if self._tracer.enabled:
            attributes = {
                ATTR_FUNCTION_NAME: self._name,
                ATTR_EVENT_TYPE: self._event_type,
                ATTR_PATTERN: self._path.source,
                ATTR_REF: raw.ref,
                ATTR_INSTANCE: raw.instance,
            }
        with self._tracer.span("dbtrigger.function.decode", attributes) as span:
            params = make_params(raw, self._path, self._instance)
            event = self._build_event(raw, params)
            if span is not None:
                span.set_attribute(ATTR_PARAM_COUNT, len(params))
        return self._handler(event)

    def __repr__(self) -> str:
        return f"CloudFunction({self._name}, {self._event_type}, ref={self._path.source!r})"


def _declare(
    event_type: EventType,
    reference_or_opts: ReferenceOrOptions,
    handler: EventHandler,
    tracer: Tracer | None,
) -> CloudFunction:
    if not callable(handler):
        raise TypeError(f"Handler must be callable, got {type(handler).__name__}")

    normalized = get_opts(reference_or_opts)
    validate_options(normalized.opts)
    path = compile_pattern(normalized.path)
    instance = compile_pattern(normalized.instance)
    endpoint = make_endpoint(event_type, normalized.opts, path, instance)

    function = CloudFunction(handler, event_type, endpoint, path, instance, tracer=tracer)
    logger.debug(
        "Declared %s for %s on ref %r (instance %r)",
        function.name,
        event_type,
        path.source,
        instance.source,
    )
    return function


def on_changed_operation(
    event_type: EventType,
    reference_or_opts: ReferenceOrOptions,
    handler: EventHandler,
    tracer: Tracer | None = None,
) -> CloudFunction:
    """
    Declare a function receiving before/after snapshots (written, updated).

    Raises:
        ConfigurationError: If event_type is not a written or updated type,
            or the declaration is invalid
    """
    if event_type not in CHANGED_EVENT_TYPES:
        raise ConfigurationError(f"{event_type} is not a written or updated event type")
    return _declare(event_type, reference_or_opts, handler, tracer)


def on_operation(
    event_type: EventType,
    reference_or_opts: ReferenceOrOptions,
    handler: EventHandler,
    tracer: Tracer | None = None,
) -> CloudFunction:
    """
    Declare a function receiving a single snapshot (created, deleted).

    Raises:
        ConfigurationError: If event_type is not a created or deleted type,
            or the declaration is invalid
    """
    if event_type not in OPERATION_EVENT_TYPES:
        raise ConfigurationError(f"{event_type} is not a created or deleted event type")
    return _declare(event_type, reference_or_opts, handler, tracer)


def _factory(
    declare: Callable[..., CloudFunction],
    event_type: str,
    reference_or_opts: ReferenceOrOptions,
    handler: EventHandler | None,
    tracer: Tracer | None,
) -> Any:
    if handler is None:

        def decorator(func: EventHandler) -> CloudFunction:
            return declare(event_type, reference_or_opts, func, tracer=tracer)

        return decorator
    return declare(event_type, reference_or_opts, handler, tracer=tracer)


def on_value_written(
    reference_or_opts: ReferenceOrOptions,
    handler: EventHandler | None = None,
    *,
    tracer: Tracer | None = None,
) -> Any:
    """
    Trigger on any create, update or delete at the reference.

    The event data is a Change of DataSnapshots. Without a handler, returns
    a decorator.
    """
    return _factory(on_changed_operation, WRITTEN_EVENT_TYPE, reference_or_opts, handler, tracer)


def on_value_created(
    reference_or_opts: ReferenceOrOptions,
    handler: EventHandler | None = None,
    *,
    tracer: Tracer | None = None,
) -> Any:
    """Trigger when a value is created; the event data is a DataSnapshot."""
    return _factory(on_operation, CREATED_EVENT_TYPE, reference_or_opts, handler, tracer)


def on_value_updated(
    reference_or_opts: ReferenceOrOptions,
    handler: EventHandler | None = None,
    *,
    tracer: Tracer | None = None,
) -> Any:
    """Trigger when a value is updated; the event data is a Change of DataSnapshots."""
    return _factory(on_changed_operation, UPDATED_EVENT_TYPE, reference_or_opts, handler, tracer)


def on_value_deleted(
    reference_or_opts: ReferenceOrOptions,
    handler: EventHandler | None = None,
    *,
    tracer: Tracer | None = None,
) -> Any:
    """Trigger when a value is deleted; the event data is a snapshot of the removed value."""
    return _factory(on_operation, DELETED_EVENT_TYPE, reference_or_opts, handler, tracer)


__all__ = [
    "WRITTEN_EVENT_TYPE",
    "CREATED_EVENT_TYPE",
    "UPDATED_EVENT_TYPE",
    "DELETED_EVENT_TYPE",
    "CloudFunction",
    "on_changed_operation",
    "on_operation",
    "on_value_written",
    "on_value_created",
    "on_value_updated",
    "on_value_deleted",
]
