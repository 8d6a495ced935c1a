"""Extraction of path params from delivered events."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from dbtrigger.events.raw import RawDatabaseEvent, decode_raw_event
from dbtrigger.exceptions import PathMismatchError
from dbtrigger.patterns.pattern import PathPattern
from dbtrigger.types import ParamMap

logger = logging.getLogger(__name__)


def make_params(
    event: RawDatabaseEvent | Mapping[str, Any],
    path: PathPattern,
    instance: PathPattern,
) -> ParamMap:
    """
    Collect the params captured by the reference and instance patterns.

    Captures from the instance pattern are applied after those from the
    reference pattern, so the instance value wins if both use one name.

    Args:
        event: The raw event (or its JSON mapping)
        path: Compiled reference path pattern
        instance: Compiled instance pattern

    Returns:
        A fresh mapping of capture name to value

    Raises:
        PathMismatchError: If the event's ref or instance does not match.
            Events are filtered by the platform before delivery, so this
            indicates a deployed filter that disagrees with the patterns.
    """
    raw = decode_raw_event(event)

    params = path.match(raw.ref)
    if params is None:
        raise PathMismatchError(raw.ref, path.source)

    instance_params = instance.match(raw.instance)
    if instance_params is None:
        raise PathMismatchError(raw.instance, instance.source)

    shared = params.keys() & instance_params.keys()
    if shared:
        logger.warning(
            "Params %s are captured by both %r and %r; using the instance values",
            sorted(shared),
            path.source,
            instance.source,
        )

    params.update(instance_params)
    return params


__all__ = ["make_params"]
