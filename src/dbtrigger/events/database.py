"""
Typed database events handed to user callbacks.

A DatabaseEvent carries the CloudEvent attributes of the raw notification,
the params captured from the triggering path, and a data value shaped for
the trigger's event type:

- created: DataSnapshot of the new value (the delta)
- deleted: DataSnapshot of the removed value
- written/updated: Change of DataSnapshots before and after the change
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from dbtrigger.events.change import Change, apply_change
from dbtrigger.events.raw import RawDatabaseEvent
from dbtrigger.events.snapshot import DataSnapshot

T = TypeVar("T")


class DatabaseEvent(BaseModel, Generic[T]):
    """
    A change notification with the captured path params.

    Attributes:
        id: CloudEvent id
        source: CloudEvent source
        specversion: CloudEvent spec version
        type: CloudEvent type
        time: CloudEvent time
        subject: CloudEvent subject, if any
        location: Region of the database instance
        firebase_database_host: Domain of the database instance
        instance: Name of the database instance
        ref: Path of the changed value
        params: Values captured from ref and instance by the trigger patterns
        data: Snapshot or Change of snapshots, depending on the event type
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    id: str = ""
    source: str = ""
    specversion: str = "1.0"
    type: str = ""
    time: str = ""
    subject: str | None = None
    location: str | None = None
    firebase_database_host: str = ""
    instance: str
    ref: str
    params: dict[str, str] = Field(default_factory=dict)
    data: T


def instance_url(raw: RawDatabaseEvent) -> str:
    """URL of the database instance that produced the event."""
    return f"https://{raw.instance}.{raw.firebasedatabasehost}"


def _build_event(raw: RawDatabaseEvent, data: Any, params: dict[str, str]) -> DatabaseEvent[Any]:
    return DatabaseEvent(
        id=raw.id,
        source=raw.source,
        specversion=raw.specversion,
        type=raw.type,
        time=raw.time,
        subject=raw.subject,
        location=raw.location,
        firebase_database_host=raw.firebasedatabasehost,
        instance=raw.instance,
        ref=raw.ref,
        params=dict(params),
        data=data,
    )


def make_database_event(
    raw: RawDatabaseEvent,
    data: Any,
    params: dict[str, str],
) -> DatabaseEvent[DataSnapshot]:
    """Build an event whose data is a snapshot of the given value."""
    snapshot = DataSnapshot(data, raw.ref, instance_url(raw))
    return _build_event(raw, snapshot, params)


def make_changed_database_event(
    raw: RawDatabaseEvent,
    params: dict[str, str],
) -> DatabaseEvent[Change[DataSnapshot]]:
    """Build an event whose data holds snapshots before and after the change."""
    url = instance_url(raw)
    before = DataSnapshot(raw.data.data, raw.ref, url)
    after = DataSnapshot(apply_change(raw.data.data, raw.data.delta), raw.ref, url)
    return _build_event(raw, Change(before=before, after=after), params)


__all__ = [
    "DatabaseEvent",
    "instance_url",
    "make_database_event",
    "make_changed_database_event",
]
