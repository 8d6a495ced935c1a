"""
Test utilities for dbtrigger.

Example:
    >>> from dbtrigger.testing import make_raw_event
    >>>
    >>> raw = make_raw_event(ref="users/alice", delta={"name": "Alice"})
    >>> on_user_created.run(raw)

Note:
    This module is intended for test code and local invocation only.
"""

from dbtrigger.testing.events import RAW_EVENT_DEFAULTS, make_raw_event

__all__ = [
    "RAW_EVENT_DEFAULTS",
    "make_raw_event",
]
