"""
Raw change notifications as delivered by the platform.

The envelope is a CloudEvent whose ``data`` holds the value at the changed
reference before the change (``data``) and the change itself (``delta``).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from dbtrigger.exceptions import EventDecodeError

REFERENCE_EVENT_DATA_TYPE = "type.googleapis.com/google.events.firebase.database.v1.ReferenceEventData"
DEFAULT_DATABASE_HOST = "firebaseio.com"


class ReferenceEventData(BaseModel):
    """
    Payload of a database change notification.

    Attributes:
        type: Protobuf type URL of the payload (``@type`` on the wire)
        data: Value at the reference before the change
        delta: The change applied to the reference
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    type: str = Field(default=REFERENCE_EVENT_DATA_TYPE, alias="@type")
    data: Any = None
    delta: Any = None


class RawDatabaseEvent(BaseModel):
    """
    Envelope of a database change notification.

    Only ``ref``, ``instance`` and ``data`` drive matching and event
    construction; the remaining CloudEvent attributes are carried through
    to the typed event.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    ref: str
    instance: str
    data: ReferenceEventData = Field(default_factory=ReferenceEventData)
    firebasedatabasehost: str = DEFAULT_DATABASE_HOST
    location: str | None = None

    id: str = ""
    source: str = ""
    specversion: str = "1.0"
    type: str = ""
    time: str = ""
    subject: str | None = None


def decode_raw_event(raw: RawDatabaseEvent | Mapping[str, Any]) -> RawDatabaseEvent:
    """
    Validate a raw envelope.

    Args:
        raw: A RawDatabaseEvent or its JSON mapping

    Returns:
        The validated RawDatabaseEvent

    Raises:
        EventDecodeError: If required fields are missing or malformed
    """
    if isinstance(raw, RawDatabaseEvent):
        return raw
    try:
        return RawDatabaseEvent.model_validate(raw)
    except ValidationError as e:
        raise EventDecodeError(str(e)) from e


__all__ = [
    "REFERENCE_EVENT_DATA_TYPE",
    "DEFAULT_DATABASE_HOST",
    "ReferenceEventData",
    "RawDatabaseEvent",
    "decode_raw_event",
]
