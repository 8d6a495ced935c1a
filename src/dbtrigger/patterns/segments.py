"""
Segment types for compiled path patterns.

A path template such as ``users/{uid}/posts/{postId}`` is compiled into an
ordered tuple of segments, one per slash-delimited token. Each token is
classified purely by its syntax:

- ``*``: wildcard, matches exactly one component without capturing
- ``{name}``: capture, matches exactly one component and records it
- ``**``: multi wildcard, matches zero or more components without capturing
- ``{name=**}``: multi capture, matches zero or more components and records
  them joined with the path separator
- anything else: literal, matches itself

Capture names may hold any text except "/", "{", "}" and "=".
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from dbtrigger.exceptions import PatternSyntaxError
from dbtrigger.patterns.paths import trim_param

WILDCARD_TOKEN = "*"
MULTI_WILDCARD_TOKEN = "**"

# Any text except the separator, braces and "="
CAPTURE_NAME_REGEX = re.compile(r"[^/{}=]+")
MULTI_CAPTURE_SUFFIX = "=**}"


class SegmentKind(Enum):
    """Kinds of path pattern segments."""

    LITERAL = "literal"
    WILDCARD = "wildcard"
    CAPTURE = "capture"
    MULTI_WILDCARD = "multi_wildcard"
    MULTI_CAPTURE = "multi_capture"


@dataclass(frozen=True)
class Segment:
    """
    One unit of a compiled path pattern.

    Attributes:
        kind: How the segment matches candidate components
        value: Literal text for literal segments, capture name for captures,
            empty for anonymous wildcards
    """

    kind: SegmentKind
    value: str = ""

    @classmethod
    def parse(cls, token: str, pattern: str) -> Segment:
        """
        Classify a single template token.

        Args:
            token: One slash-delimited token of the template
            pattern: The full template, used in error messages

        Raises:
            PatternSyntaxError: If the token contains a malformed capture
        """
        if token == WILDCARD_TOKEN:
            return cls(SegmentKind.WILDCARD)
        if token == MULTI_WILDCARD_TOKEN:
            return cls(SegmentKind.MULTI_WILDCARD)

        if token.startswith("{") and token.endswith("}"):
            name = trim_param(token)
            if CAPTURE_NAME_REGEX.fullmatch(name):
                if token.endswith(MULTI_CAPTURE_SUFFIX):
                    return cls(SegmentKind.MULTI_CAPTURE, name)
                return cls(SegmentKind.CAPTURE, name)

        if "{" in token or "}" in token:
            if token.startswith("{") and "}" not in token:
                raise PatternSyntaxError(pattern, f"unterminated capture '{token}'")
            raise PatternSyntaxError(
                pattern,
                f"malformed capture '{token}', expected '{{name}}' or '{{name=**}}'",
            )
        return cls(SegmentKind.LITERAL, token)

    @property
    def is_multi(self) -> bool:
        """True for segments spanning zero or more components."""
        return self.kind in (SegmentKind.MULTI_WILDCARD, SegmentKind.MULTI_CAPTURE)

    @property
    def is_capture(self) -> bool:
        return self.kind in (SegmentKind.CAPTURE, SegmentKind.MULTI_CAPTURE)

    @property
    def is_wildcard(self) -> bool:
        """True for every non-literal segment."""
        return self.kind is not SegmentKind.LITERAL

    @property
    def name(self) -> str | None:
        """Capture name, or None for uncaptured segments."""
        return self.value if self.is_capture else None

    def matches(self, component: str) -> bool:
        """Check a single candidate component against a non-multi segment."""
        if self.kind is SegmentKind.LITERAL:
            return component == self.value
        return True

    def __str__(self) -> str:
        if self.kind is SegmentKind.WILDCARD:
            return WILDCARD_TOKEN
        if self.kind is SegmentKind.MULTI_WILDCARD:
            return MULTI_WILDCARD_TOKEN
        if self.kind is SegmentKind.CAPTURE:
            return f"{{{self.value}}}"
        if self.kind is SegmentKind.MULTI_CAPTURE:
            return f"{{{self.value}=**}}"
        return self.value


__all__ = [
    "SegmentKind",
    "Segment",
    "WILDCARD_TOKEN",
    "MULTI_WILDCARD_TOKEN",
    "CAPTURE_NAME_REGEX",
]
