"""
Shared pytest fixtures for the dbtrigger tests.

This module provides:
- Raw event fixtures (raw_event, raw_event_factory)
- Compiled pattern fixtures (any_instance)
- Logging isolation (structured logging is reset after every test)
- Tracing fixtures (mock_tracer)
"""

from __future__ import annotations

from collections.abc import Callable, Generator

import pytest

from dbtrigger import logger
from dbtrigger.events import RawDatabaseEvent
from dbtrigger.observability import MockTracer
from dbtrigger.patterns import PathPattern
from dbtrigger.testing import make_raw_event


@pytest.fixture
def raw_event() -> RawDatabaseEvent:
    """A raw event at 'foo/bar' on 'my-instance' with empty data and delta."""
    return make_raw_event()


@pytest.fixture
def raw_event_factory() -> Callable[..., RawDatabaseEvent]:
    """Factory building raw events with overridden fields."""
    return make_raw_event


@pytest.fixture
def any_instance() -> PathPattern:
    """Instance pattern matching every database instance."""
    return PathPattern("*")


@pytest.fixture
def mock_tracer() -> MockTracer:
    """Tracer recording spans for assertions."""
    return MockTracer()


@pytest.fixture(autouse=True)
def reset_structured_logging() -> Generator[None, None, None]:
    """Remove any structured handler installed by a test."""
    yield
    logger.reset_structured_logging()

