"""
Path pattern compilation and matching.

Example:
    >>> from dbtrigger.patterns import compile_pattern
    >>> compile_pattern("users/{uid}").match("users/alice")
    {'uid': 'alice'}
"""

from dbtrigger.patterns.paths import (
    PATH_SEPARATOR,
    join_path,
    normalize_path,
    path_parts,
    trim_param,
)
from dbtrigger.patterns.pattern import ROUTING_CHARACTERS, PathPattern, compile_pattern
from dbtrigger.patterns.segments import Segment, SegmentKind

__all__ = [
    "PathPattern",
    "compile_pattern",
    "Segment",
    "SegmentKind",
    "ROUTING_CHARACTERS",
    "PATH_SEPARATOR",
    "normalize_path",
    "path_parts",
    "join_path",
    "trim_param",
]
