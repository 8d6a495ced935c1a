"""
Serialization utilities for dbtrigger.

JSON serialization with support for UUIDs, datetimes, pydantic models and
objects exposing ``to_json()`` (such as DataSnapshot).

Example:
    >>> from dbtrigger.serialization import json_dumps
    >>> json_dumps({"labels": {}})
    '{"labels": {}}'
"""

from dbtrigger.serialization.json import (
    DbTriggerJSONEncoder,
    json_dumps,
    json_loads,
)

__all__ = [
    "DbTriggerJSONEncoder",
    "json_dumps",
    "json_loads",
]
