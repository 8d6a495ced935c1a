"""
Observability utilities for dbtrigger.

Provides a composition-based tracer and standard span attribute names.
OpenTelemetry is an optional dependency; without it every tracer created
through create_tracer() is a NullTracer.

Example:
    >>> from dbtrigger.observability import MockTracer
    >>> from dbtrigger import on_value_created
    >>>
    >>> tracer = MockTracer()
    >>> fn = on_value_created("users/{uid}", handler, tracer=tracer)
"""

from dbtrigger.observability.attributes import (
    ATTR_EVENT_TYPE,
    ATTR_FUNCTION_NAME,
    ATTR_INSTANCE,
    ATTR_PARAM_COUNT,
    ATTR_PATTERN,
    ATTR_REF,
)
from dbtrigger.observability.tracer import (
    OTEL_AVAILABLE,
    MockTracer,
    NullTracer,
    OpenTelemetryTracer,
    RecordedSpan,
    SpanAttributes,
    Tracer,
    create_tracer,
)

__all__ = [
    "OTEL_AVAILABLE",
    "Tracer",
    "NullTracer",
    "OpenTelemetryTracer",
    "RecordedSpan",
    "SpanAttributes",
    "MockTracer",
    "create_tracer",
    "ATTR_FUNCTION_NAME",
    "ATTR_EVENT_TYPE",
    "ATTR_REF",
    "ATTR_INSTANCE",
    "ATTR_PATTERN",
    "ATTR_PARAM_COUNT",
]
