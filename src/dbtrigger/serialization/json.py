"""
JSON encoding for manifests, snapshots and log payloads.

These values can hold objects the stdlib encoder rejects; json_dumps()
converts them through DbTriggerJSONEncoder:

    >>> from dbtrigger.events import DataSnapshot
    >>> json_dumps({"snapshot": DataSnapshot({"name": "alice"}, "users/alice")})
    '{"snapshot": {"name": "alice"}}'
"""

import json
from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel


class DbTriggerJSONEncoder(json.JSONEncoder):
    """
    Encoder used by json_dumps().

    Conversions, checked in order:
    - objects with a ``to_json()`` method (DataSnapshot, ManifestEndpoint):
      the method's result
    - pydantic models: ``model_dump`` in JSON mode with field aliases
    - UUID: its string form
    - date and datetime: ISO 8601 string
    - set and frozenset: a list
    """

    def default(self, obj: Any) -> Any:
        to_json = getattr(obj, "to_json", None)
        if callable(to_json):
            return to_json()
        if isinstance(obj, BaseModel):
            return obj.model_dump(mode="json", by_alias=True)
        if isinstance(obj, UUID):
            return str(obj)
        if isinstance(obj, date | datetime):
            return obj.isoformat()
        if isinstance(obj, set | frozenset):
            return list(obj)
        # Raises TypeError for anything else
        return super().default(obj)


def json_dumps(obj: Any, indent: int | None = None) -> str:
    """
    Encode a value as JSON.

    Args:
        obj: Value to encode
        indent: Indentation for pretty output (default: compact)

    Raises:
        TypeError: If obj holds a value the encoder cannot convert
    """
    return json.dumps(obj, cls=DbTriggerJSONEncoder, indent=indent)


def json_loads(s: str | bytes) -> Any:
    return json.loads(s)


__all__ = [
    "DbTriggerJSONEncoder",
    "json_dumps",
    "json_loads",
]
