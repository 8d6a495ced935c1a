"""
Standard span attributes for dbtrigger.

Example:
    >>> from dbtrigger.observability.attributes import ATTR_FUNCTION_NAME, ATTR_REF
    >>>
    >>> with tracer.span(
    ...     "dbtrigger.function.decode",
    ...     {ATTR_FUNCTION_NAME: "on_user_created", ATTR_REF: "users/alice"},
    ... ):
    ...     pass
"""

# =============================================================================
# Function Attributes
# =============================================================================

ATTR_FUNCTION_NAME = "dbtrigger.function.name"
"""Name of the user callback wrapped by the cloud function."""

ATTR_EVENT_TYPE = "dbtrigger.event.type"
"""Event type the function is registered for (e.g., '...ref.v1.written')."""

# =============================================================================
# Database Attributes
# =============================================================================

ATTR_REF = "dbtrigger.ref"
"""Concrete path of the changed value."""

ATTR_INSTANCE = "dbtrigger.instance"
"""Database instance that produced the event."""

ATTR_PATTERN = "dbtrigger.pattern"
"""Source of the resource path pattern."""

ATTR_PARAM_COUNT = "dbtrigger.param.count"
"""Number of params captured from the event (integer)."""


__all__ = [
    "ATTR_FUNCTION_NAME",
    "ATTR_EVENT_TYPE",
    "ATTR_REF",
    "ATTR_INSTANCE",
    "ATTR_PATTERN",
    "ATTR_PARAM_COUNT",
]
