"""Unit tests for the tracer implementations."""

import pytest

from dbtrigger.observability import (
    OTEL_AVAILABLE,
    MockTracer,
    NullTracer,
    OpenTelemetryTracer,
    RecordedSpan,
    Tracer,
    create_tracer,
)


class TestNullTracer:
    """Tests for NullTracer."""

    def test_span_yields_none(self):
        with NullTracer().span("operation", {"key": "value"}) as span:
            assert span is None

    def test_disabled(self):
        assert NullTracer().enabled is False

    def test_satisfies_protocol(self):
        assert isinstance(NullTracer(), Tracer)


class TestMockTracer:
    """Tests for MockTracer."""

    def test_records_spans(self):
        tracer = MockTracer()

        with tracer.span("first", {"k": "v"}):
            pass
        with tracer.span("second"):
            pass

        assert tracer.spans == [RecordedSpan("first", {"k": "v"}), RecordedSpan("second")]
        assert tracer.span_names == ["first", "second"]
        assert tracer.enabled is True

    def test_set_attribute_inside_span(self):
        tracer = MockTracer()

        with tracer.span("operation", {"k": "v"}) as span:
            span.set_attribute("count", 2)

        assert tracer.spans[0].attributes == {"k": "v", "count": 2}

    def test_given_attributes_are_copied(self):
        tracer = MockTracer()
        attributes = {"k": "v"}

        with tracer.span("operation", attributes) as span:
            span.set_attribute("extra", 1)

        assert attributes == {"k": "v"}

    def test_satisfies_protocol(self):
        assert isinstance(MockTracer(), Tracer)

    def test_clear(self):
        tracer = MockTracer()
        with tracer.span("first"):
            pass

        tracer.clear()

        assert tracer.spans == []


class TestCreateTracer:
    """Tests for create_tracer()."""

    def test_disabled_returns_null_tracer(self):
        assert isinstance(create_tracer(__name__, enable_tracing=False), NullTracer)

    def test_enabled_depends_on_opentelemetry(self):
        tracer = create_tracer(__name__)

        expected = OpenTelemetryTracer if OTEL_AVAILABLE else NullTracer
        assert isinstance(tracer, expected)

    @pytest.mark.skipif(not OTEL_AVAILABLE, reason="opentelemetry not installed")
    def test_opentelemetry_span(self):
        tracer = OpenTelemetryTracer(__name__)

        with tracer.span("dbtrigger.function.decode", {"dbtrigger.ref": "a"}) as span:
            assert span is not None

        assert tracer.enabled is True

    @pytest.mark.skipif(OTEL_AVAILABLE, reason="opentelemetry installed")
    def test_opentelemetry_tracer_requires_package(self):
        with pytest.raises(ImportError, match="telemetry"):
            OpenTelemetryTracer(__name__)
