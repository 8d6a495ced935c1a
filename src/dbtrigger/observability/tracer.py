"""
Tracing for function invocations.

CloudFunction.run() opens one span per delivered event through the tracer
it was declared with. The tracer decides where spans go:

- NullTracer drops them (the default when OpenTelemetry is not installed)
- OpenTelemetryTracer starts real spans on the current trace
- MockTracer keeps them in memory for test assertions

Example:
    >>> from dbtrigger.observability import MockTracer
    >>>
    >>> tracer = MockTracer()
    >>> fn = on_value_created("users/{uid}", handler, tracer=tracer)
    >>> fn.run(raw_event)
    >>> tracer.span_names
    ['dbtrigger.function.decode']
"""

from __future__ import annotations

import contextlib
from collections.abc import Iterator
from contextlib import AbstractContextManager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from opentelemetry.trace import TracerProvider

try:
    from opentelemetry import trace

    OTEL_AVAILABLE = True
except ImportError:
    OTEL_AVAILABLE = False
    trace = None  # type: ignore[assignment]

# Span attribute name -> value
SpanAttributes = dict[str, Any]


@runtime_checkable
class Tracer(Protocol):
    """
    What a CloudFunction needs from a tracer.

    ``span()`` yields an object with ``set_attribute(key, value)``, or None
    when nothing is recorded. Callers skip computing attributes when
    ``enabled`` is False.
    """

    def span(
        self,
        name: str,
        attributes: SpanAttributes | None = None,
    ) -> AbstractContextManager[Any]: ...

    @property
    def enabled(self) -> bool: ...


class NullTracer:
    """Tracer that records nothing."""

    @contextlib.contextmanager
    def span(
        self,
        name: str,
        attributes: SpanAttributes | None = None,
    ) -> Iterator[None]:
        yield None

    @property
    def enabled(self) -> bool:
        return False


class OpenTelemetryTracer:
    """
    Tracer backed by the OpenTelemetry API.

    Args:
        name: Instrumentation scope name (typically __name__)
        tracer_provider: Provider to use instead of the globally configured one

    Raises:
        ImportError: If opentelemetry-api is not installed
    """

    def __init__(self, name: str, tracer_provider: TracerProvider | None = None) -> None:
        if not OTEL_AVAILABLE:
            raise ImportError(
                "OpenTelemetryTracer requires opentelemetry-api; "
                "install dbtrigger-py[telemetry]"
            )
        self._tracer = trace.get_tracer(name, tracer_provider=tracer_provider)

    def span(
        self,
        name: str,
        attributes: SpanAttributes | None = None,
    ) -> AbstractContextManager[Any]:
        return self._tracer.start_as_current_span(name, attributes=attributes or {})

    @property
    def enabled(self) -> bool:
        return True


@dataclass
class RecordedSpan:
    """
    A span kept by MockTracer.

    Attributes:
        name: Span name
        attributes: Attributes given at creation plus any set inside the span
    """

    name: str
    attributes: SpanAttributes = field(default_factory=dict)

    def set_attribute(self, key: str, value: Any) -> None:
        self.attributes[key] = value


class MockTracer:
    """
    Tracer keeping every span in memory, in creation order.

    Example:
        >>> tracer = MockTracer()
        >>> with tracer.span("operation", {"key": "value"}) as span:
        ...     span.set_attribute("count", 2)
        >>> tracer.spans
        [RecordedSpan(name='operation', attributes={'key': 'value', 'count': 2})]
    """

    def __init__(self) -> None:
        self.spans: list[RecordedSpan] = []

    @contextlib.contextmanager
    def span(
        self,
        name: str,
        attributes: SpanAttributes | None = None,
    ) -> Iterator[RecordedSpan]:
        recorded = RecordedSpan(name, dict(attributes or {}))
        self.spans.append(recorded)
        yield recorded

    @property
    def enabled(self) -> bool:
        return True

    @property
    def span_names(self) -> list[str]:
        return [span.name for span in self.spans]

    def clear(self) -> None:
        self.spans.clear()


def create_tracer(name: str, enable_tracing: bool = True) -> Tracer:
    """
    Pick the tracer for a new CloudFunction.

    Returns:
        An OpenTelemetryTracer when tracing is enabled and OpenTelemetry is
        installed, a NullTracer otherwise
    """
    if enable_tracing and OTEL_AVAILABLE:
        return OpenTelemetryTracer(name)
    return NullTracer()


__all__ = [
    "OTEL_AVAILABLE",
    "SpanAttributes",
    "Tracer",
    "NullTracer",
    "OpenTelemetryTracer",
    "RecordedSpan",
    "MockTracer",
    "create_tracer",
]
