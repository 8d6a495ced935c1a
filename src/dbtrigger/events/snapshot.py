"""Read-only snapshots of database values."""

from __future__ import annotations

import copy
from collections.abc import Callable, Mapping
from typing import Any

from dbtrigger.patterns.paths import join_path, normalize_path, path_parts


class DataSnapshot:
    """
    Immutable view of the value stored at a database path.

    Args:
        data: JSON value at the path (None when nothing is stored)
        path: Path of the value within the database
        instance: URL of the database instance holding the value

    Example:
        >>> snapshot = DataSnapshot({"name": "alice", "age": 30}, "users/alice")
        >>> snapshot.child("name").val()
        'alice'
        >>> snapshot.key
        'alice'
    """

    __slots__ = ("_data", "_path", "_instance")

    def __init__(self, data: Any, path: str = "", instance: str = "") -> None:
        self._data = data
        self._path = normalize_path(path)
        self._instance = instance

    @property
    def ref(self) -> str:
        """Path of this snapshot within the database."""
        return self._path

    @property
    def instance(self) -> str:
        return self._instance

    @property
    def key(self) -> str | None:
        """Last component of the path, or None at the root."""
        parts = path_parts(self._path)
        return parts[-1] if parts else None

    def val(self) -> Any:
        """Return a copy of the stored value."""
        return copy.deepcopy(self._data)

    def exists(self) -> bool:
        """True unless the value is missing or an empty object."""
        if self._data is None:
            return False
        if isinstance(self._data, Mapping) and not self._data:
            return False
        return True

    def child(self, path: str) -> DataSnapshot:
        """Snapshot of a descendant path; missing descendants have no value."""
        value = self._data
        for part in path_parts(path):
            if not isinstance(value, Mapping):
                value = None
                break
            value = value.get(part)
        return DataSnapshot(value, join_path(self._path, path), self._instance)

    def has_child(self, path: str) -> bool:
        return self.child(path).exists()

    def has_children(self) -> bool:
        return isinstance(self._data, Mapping) and len(self._data) > 0

    def num_children(self) -> int:
        return len(self._data) if isinstance(self._data, Mapping) else 0

    def for_each(self, action: Callable[[DataSnapshot], bool | None]) -> bool:
        """
        Call action with a snapshot of each direct child.

        Iteration stops early when action returns True.

        Returns:
            True if iteration was stopped early
        """
        if not isinstance(self._data, Mapping):
            return False
        for key in self._data:
            if action(self.child(key)) is True:
                return True
        return False

    def to_json(self) -> Any:
        return self.val()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, DataSnapshot):
            return (self._data, self._path, self._instance) == (
                other._data,
                other._path,
                other._instance,
            )
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"DataSnapshot(ref={self._path!r}, data={self._data!r})"


__all__ = ["DataSnapshot"]
