"""
Path pattern compilation and matching.

This module turns path templates into immutable PathPattern objects and
matches concrete database paths against them to extract named captures.

Example:
    >>> from dbtrigger.patterns import compile_pattern
    >>>
    >>> pattern = compile_pattern("/users/{uid}/posts/{postId}/")
    >>> str(pattern)
    'users/{uid}/posts/{postId}'
    >>> pattern.match("users/alice/posts/42")
    {'uid': 'alice', 'postId': '42'}
    >>> pattern.match("users/alice") is None
    True

A single multi-segment token may appear anywhere in the template. Its span
is computed from the candidate's length, so fixed-length segments on both
sides still line up exactly:

    >>> compile_pattern("logs/{rest=**}/entry/{id}").match("logs/a/b/entry/7")
    {'rest': 'a/b', 'id': '7'}
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from dbtrigger.exceptions import PatternSyntaxError
from dbtrigger.patterns.paths import PATH_SEPARATOR, normalize_path, path_parts
from dbtrigger.patterns.segments import Segment

logger = logging.getLogger(__name__)

ROUTING_CHARACTERS = frozenset("*{}")


class PathPattern:
    """
    A compiled, immutable path template.

    Compiling validates the template once; matching never mutates the
    pattern, so a single instance can be shared by concurrent invocations.

    Args:
        source: The path template; leading and trailing separators are ignored

    Raises:
        PatternSyntaxError: If the template holds more than one multi-segment
            token or a malformed capture
    """

    __slots__ = ("_source", "_segments", "_multi_index")

    def __init__(self, source: str) -> None:
        self._source = normalize_path(source)
        self._segments = tuple(Segment.parse(token, source) for token in path_parts(source))

        multi_positions = [i for i, segment in enumerate(self._segments) if segment.is_multi]
        if len(multi_positions) > 1:
            raise PatternSyntaxError(
                source,
                "only one multi-segment wildcard ('**' or '{name=**}') is allowed",
            )
        self._multi_index: int | None = multi_positions[0] if multi_positions else None

        logger.debug(
            "Compiled path pattern %r into %d segments",
            self._source,
            len(self._segments),
        )

    @property
    def source(self) -> str:
        """Canonical (slash-trimmed) template string."""
        return self._source

    @property
    def segments(self) -> tuple[Segment, ...]:
        return self._segments

    @property
    def has_wildcards(self) -> bool:
        """True if any segment matches more than its own literal text."""
        return any(segment.is_wildcard for segment in self._segments)

    @property
    def has_captures(self) -> bool:
        return any(segment.is_capture for segment in self._segments)

    @property
    def has_multi_segment(self) -> bool:
        return self._multi_index is not None

    @property
    def has_routing_syntax(self) -> bool:
        """
        True if the template source contains '*', '{' or '}'.

        Templates without routing syntax identify exactly one path and can be
        deployed as exact-match filters.
        """
        return not ROUTING_CHARACTERS.isdisjoint(self._source)

    @property
    def capture_names(self) -> tuple[str, ...]:
        return tuple(segment.value for segment in self._segments if segment.is_capture)

    def match(self, candidate: str) -> dict[str, str] | None:
        """
        Match a concrete path against this pattern.

        Args:
            candidate: Concrete path; leading and trailing separators are ignored

        Returns:
            A fresh mapping of capture name to matched value, or None if the
            path does not match
        """
        parts = path_parts(candidate)
        params: dict[str, str] = {}

        if self._multi_index is None:
            if len(parts) != len(self._segments):
                return None
            if not _match_fixed(self._segments, parts, params):
                return None
            return params

        # Components consumed by the multi segment
        span = len(parts) - (len(self._segments) - 1)
        if span < 0:
            return None

        index = self._multi_index
        if not _match_fixed(self._segments[:index], parts[:index], params):
            return None

        multi = self._segments[index]
        if multi.is_capture:
            params[multi.value] = PATH_SEPARATOR.join(parts[index : index + span])

        if not _match_fixed(self._segments[index + 1 :], parts[index + span :], params):
            return None
        return params

    def matches(self, candidate: str) -> bool:
        """Check whether a concrete path matches, discarding captures."""
        return self.match(candidate) is not None

    def __str__(self) -> str:
        return PATH_SEPARATOR.join(str(segment) for segment in self._segments)

    def __repr__(self) -> str:
        return f"PathPattern({self._source!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PathPattern):
            return self._source == other._source
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._source)


def _match_fixed(
    segments: Sequence[Segment],
    parts: Sequence[str],
    params: dict[str, str],
) -> bool:
    """Match single-component segments positionally, recording captures."""
    for segment, component in zip(segments, parts, strict=True):
        if not segment.matches(component):
            return False
        if segment.is_capture:
            params[segment.value] = component
    return True


def compile_pattern(source: str) -> PathPattern:
    """
    Compile a path template.

    Args:
        source: The path template

    Returns:
        The compiled PathPattern

    Raises:
        PatternSyntaxError: If the template is malformed
    """
    return PathPattern(source)


__all__ = [
    "PathPattern",
    "compile_pattern",
    "ROUTING_CHARACTERS",
]
