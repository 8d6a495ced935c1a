"""
Deployment manifest assembly for database triggers.

make_endpoint() builds the manifest fragment an external deployment tool
reads for one function. Field names and nesting of ``to_dict()`` are the
wire format:

    {
        "platform": "gcfv2",
        "region": ["us-central1"],          # omitted when not configured
        "labels": {},
        "minInstances": 1,                  # allow-listed pass-through fields
        "eventTrigger": {
            "eventType": "google.firebase.database.ref.v1.written",
            "eventFilters": {"instance": "my-instance"},
            "eventFilterPathPatterns": {"ref": "users/{uid}"},
            "retry": False,
        },
    }

The instance template appears in exactly one of ``eventFilters`` (a literal
instance name) or ``eventFilterPathPatterns`` (a template with routing
syntax).
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from dbtrigger.exceptions import ConfigurationError
from dbtrigger.patterns.pattern import PathPattern
from dbtrigger.triggers.options import NormalizedOptions
from dbtrigger.types import DeploymentOptions, EventType

logger = logging.getLogger(__name__)

PLATFORM = "gcfv2"

# Deployment options copied onto the manifest: Python name -> manifest name.
# Options may also be given directly by their manifest name.
PASS_THROUGH_FIELDS: dict[str, str] = {
    "memory": "memory",
    "cpu": "cpu",
    "concurrency": "concurrency",
    "timeout_seconds": "timeoutSeconds",
    "min_instances": "minInstances",
    "max_instances": "maxInstances",
    "vpc_connector": "vpcConnector",
    "vpc_connector_egress_settings": "vpcConnectorEgressSettings",
    "service_account": "serviceAccount",
    "ingress_settings": "ingressSettings",
    "secrets": "secrets",
    "omit": "omit",
}

_MANIFEST_NAMES = frozenset(PASS_THROUGH_FIELDS.values())

# Accepted but not configurable; see EventTrigger.retry
IGNORED_OPTIONS = frozenset({"retry"})


def _freeze(value: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(value))


def _thaw(value: Mapping[str, Any]) -> dict[str, Any]:
    return dict(value)


# Read-only view over a private copy; dumped as a plain dict
FrozenMapping = Annotated[Mapping[str, Any], AfterValidator(_freeze), PlainSerializer(_thaw)]
FrozenStrMapping = Annotated[Mapping[str, str], AfterValidator(_freeze), PlainSerializer(_thaw)]


class EventTrigger(BaseModel):
    """
    Trigger section of the manifest.

    Attributes:
        event_type: Event type the function subscribes to
        event_filters: Exact-match filters
        event_filter_path_patterns: Path-pattern filters
        retry: Whether failed invocations are retried; always False
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        validate_default=True,
    )

    event_type: str
    event_filters: FrozenStrMapping = Field(default_factory=dict)
    event_filter_path_patterns: FrozenStrMapping = Field(default_factory=dict)
    retry: bool = False


class ManifestEndpoint(BaseModel):
    """
    Deployment description of one database-triggered function.

    Attributes:
        platform: Hosting platform tag
        region: Regions to deploy to, or None to use the deploy tool's default
        labels: User labels
        pass_through: Allow-listed deployment options keyed by manifest name;
            sequence values are stored as tuples
        event_trigger: The trigger section
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        validate_default=True,
    )

    platform: str = PLATFORM
    region: tuple[str, ...] | None = None
    labels: FrozenStrMapping = Field(default_factory=dict)
    pass_through: FrozenMapping = Field(default_factory=dict)
    event_trigger: EventTrigger

    def to_dict(self) -> dict[str, Any]:
        """Return the manifest in its wire format."""
        manifest: dict[str, Any] = {"platform": self.platform}
        for key, value in self.pass_through.items():
            manifest[key] = list(value) if isinstance(value, tuple) else copy.deepcopy(value)
        if self.region is not None:
            manifest["region"] = list(self.region)
        manifest["labels"] = dict(self.labels)
        manifest["eventTrigger"] = self.event_trigger.model_dump(by_alias=True)
        return manifest

    def to_json(self) -> dict[str, Any]:
        return self.to_dict()


def _regions(region: Any) -> tuple[str, ...] | None:
    if region is None:
        return None
    if isinstance(region, str):
        return (region,)
    if isinstance(region, Sequence):
        return tuple(region)
    raise ConfigurationError(
        f"Option 'region' must be a string or a list of strings, got {type(region).__name__}"
    )


def _pass_through(opts: Mapping[str, Any]) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    for key, value in opts.items():
        if key in ("region", "labels") or value is None:
            continue
        if key in IGNORED_OPTIONS:
            logger.warning("Option %r is not configurable for database triggers; ignoring it", key)
            continue
        manifest_name = PASS_THROUGH_FIELDS.get(key)
        if manifest_name is None and key in _MANIFEST_NAMES:
            manifest_name = key
        if manifest_name is None:
            raise ConfigurationError(
                f"Unsupported option '{key}'; supported options are "
                f"region, labels, {', '.join(PASS_THROUGH_FIELDS)}"
            )
        if manifest_name in fields:
            raise ConfigurationError(f"Option '{key}' is given more than once as '{manifest_name}'")
        fields[manifest_name] = tuple(value) if isinstance(value, list | tuple) else value
    return fields


def make_endpoint(
    event_type: EventType,
    opts: DeploymentOptions | NormalizedOptions,
    path: PathPattern,
    instance: PathPattern,
) -> ManifestEndpoint:
    """
    Build the manifest for a database trigger.

    Args:
        event_type: Event type constant of the trigger
        opts: Deployment options (or the NormalizedOptions holding them)
        path: Compiled reference path pattern
        instance: Compiled instance pattern

    Returns:
        The immutable ManifestEndpoint

    Raises:
        ConfigurationError: If opts holds an option outside the allow-list
    """
    if isinstance(opts, NormalizedOptions):
        opts = opts.opts

    event_filters: dict[str, str] = {}
    event_filter_path_patterns: dict[str, str] = {"ref": path.source}
    if instance.has_routing_syntax:
        event_filter_path_patterns["instance"] = instance.source
    else:
        event_filters["instance"] = instance.source

    return ManifestEndpoint(
        region=_regions(opts.get("region")),
        labels=dict(opts.get("labels") or {}),
        pass_through=_pass_through(opts),
        event_trigger=EventTrigger(
            event_type=event_type,
            event_filters=event_filters,
            event_filter_path_patterns=event_filter_path_patterns,
            retry=False,
        ),
    )


__all__ = [
    "PLATFORM",
    "PASS_THROUGH_FIELDS",
    "IGNORED_OPTIONS",
    "EventTrigger",
    "ManifestEndpoint",
    "make_endpoint",
]
