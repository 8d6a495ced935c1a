"""
Normalization of trigger declarations.

A trigger is declared with either a bare reference path or an options
object. get_opts() reduces both shapes to a single NormalizedOptions record
so nothing downstream needs to probe the input type again.

Example:
    >>> get_opts("/users/{uid}/")
    NormalizedOptions(path='users/{uid}', instance='*', opts={})
    >>> get_opts({"ref": "/users/{uid}", "instance": "{db}", "region": "us-east1"})
    NormalizedOptions(path='users/{uid}', instance='{db}', opts={'region': 'us-east1'})
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict

from dbtrigger.exceptions import ConfigurationError, InvalidOptionsError
from dbtrigger.patterns.paths import normalize_path

DEFAULT_INSTANCE = "*"


class ReferenceOptions(BaseModel):
    """
    Typed options object for declaring a database trigger.

    Any field besides ``ref`` and ``instance`` is kept as a deployment option.

    Attributes:
        ref: Path template of the watched reference
        instance: Template of the database instance(s) to watch (default: all)

    Example:
        >>> ReferenceOptions(ref="users/{uid}", region="us-east1", min_instances=1)
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    ref: str
    instance: str = DEFAULT_INSTANCE


@dataclass(frozen=True)
class NormalizedOptions:
    """
    Canonical form of a trigger declaration.

    Attributes:
        path: Slash-trimmed reference path template
        instance: Slash-trimmed instance template, "*" when not supplied
        opts: All other deployment options, unexamined
    """

    path: str
    instance: str = DEFAULT_INSTANCE
    opts: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "instance": self.instance, "opts": dict(self.opts)}


def _from_mapping(options: Mapping[str, Any]) -> NormalizedOptions:
    opts = dict(options)
    ref = opts.pop("ref", None)
    path = opts.pop("path", None)
    reference = ref if ref is not None else path
    if reference is None:
        raise ConfigurationError("Trigger options must include a 'ref' path")
    if not isinstance(reference, str):
        raise ConfigurationError(
            f"Trigger 'ref' must be a string, got {type(reference).__name__}"
        )

    instance = opts.pop("instance", None)
    if instance is not None and not isinstance(instance, str):
        raise ConfigurationError(
            f"Trigger 'instance' must be a string, got {type(instance).__name__}"
        )
    return NormalizedOptions(
        path=normalize_path(reference),
        instance=normalize_path(instance) or DEFAULT_INSTANCE,
        opts=opts,
    )


def get_opts(reference_or_opts: str | Mapping[str, Any] | ReferenceOptions) -> NormalizedOptions:
    """
    Normalize a trigger declaration.

    Args:
        reference_or_opts: A reference path, an options mapping holding
            ``ref`` (or ``path``), an optional ``instance`` and deployment
            options, or a ReferenceOptions model

    Returns:
        The NormalizedOptions record

    Raises:
        InvalidOptionsError: If the input is neither a string nor an options object
        ConfigurationError: If an options object has no usable ``ref``
    """
    if isinstance(reference_or_opts, str):
        return NormalizedOptions(path=normalize_path(reference_or_opts))
    if isinstance(reference_or_opts, ReferenceOptions):
        options: dict[str, Any] = {"ref": reference_or_opts.ref}
        if "instance" in reference_or_opts.model_fields_set:
            options["instance"] = reference_or_opts.instance
        options.update(reference_or_opts.model_extra or {})
        return _from_mapping(options)
    if isinstance(reference_or_opts, Mapping):
        return _from_mapping(reference_or_opts)
    raise InvalidOptionsError(reference_or_opts)


__all__ = [
    "DEFAULT_INSTANCE",
    "ReferenceOptions",
    "NormalizedOptions",
    "get_opts",
]
