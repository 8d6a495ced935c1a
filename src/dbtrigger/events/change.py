"""Before/after pairs and delta merging for change events."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Change(Generic[T]):
    """
    The state of a value before and after a change.

    Attributes:
        before: Value before the change
        after: Value after the change
    """

    before: T
    after: T


def prune_nulls(obj: Any) -> Any:
    """Return a copy of obj with None values removed from nested mappings."""
    if not isinstance(obj, Mapping):
        return obj
    return {key: prune_nulls(value) for key, value in obj.items() if value is not None}


def apply_change(src: Any, delta: Any) -> Any:
    """
    Apply a change notification's delta to the previous value.

    Nested mappings are merged key by key and a None in the delta deletes the
    key. Any other delta replaces the previous value outright.

    Example:
        >>> apply_change({"a": 1, "b": {"c": 2}}, {"b": {"d": 3}, "a": None})
        {'b': {'c': 2, 'd': 3}}
    """
    if not isinstance(delta, Mapping):
        return delta
    if not isinstance(src, Mapping):
        return prune_nulls(delta)
    return _merge(prune_nulls(src), delta)


def _merge(src: Mapping[str, Any], delta: Mapping[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key in {**src, **delta}:
        if key in delta:
            if delta[key] is None:
                continue
            result[key] = apply_change(src.get(key), delta[key])
        elif src[key] is not None:
            result[key] = src[key]
    return result


__all__ = [
    "Change",
    "apply_change",
    "prune_nulls",
]
