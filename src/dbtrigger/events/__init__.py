"""
Database event types.

This module provides:
- RawDatabaseEvent: The change notification envelope delivered by the platform
- DataSnapshot: Read-only view of a value at a database path
- Change: Before/after pair for written and updated events
- DatabaseEvent: Typed event handed to user callbacks
"""

from dbtrigger.events.change import Change, apply_change, prune_nulls
from dbtrigger.events.database import (
    DatabaseEvent,
    instance_url,
    make_changed_database_event,
    make_database_event,
)
from dbtrigger.events.raw import (
    DEFAULT_DATABASE_HOST,
    REFERENCE_EVENT_DATA_TYPE,
    RawDatabaseEvent,
    ReferenceEventData,
    decode_raw_event,
)
from dbtrigger.events.snapshot import DataSnapshot

__all__ = [
    "RawDatabaseEvent",
    "ReferenceEventData",
    "REFERENCE_EVENT_DATA_TYPE",
    "DEFAULT_DATABASE_HOST",
    "decode_raw_event",
    "DataSnapshot",
    "Change",
    "apply_change",
    "prune_nulls",
    "DatabaseEvent",
    "instance_url",
    "make_database_event",
    "make_changed_database_event",
]
