"""
Deployment option constants and validation.

Options reach the manifest unexamined; validate_options() is the check run
once at declaration time, before the manifest is built. Options may be
given with Python names (``min_instances``) or manifest names
(``minInstances``).

Example:
    >>> validate_options({"memory": "256MB", "timeout_seconds": 60})
    >>> validate_options({"timeout_seconds": 900})
    Traceback (most recent call last):
    ...
    dbtrigger.exceptions.OptionValidationError: Invalid value 900 for option 'timeout_seconds': ...
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic.alias_generators import to_camel

from dbtrigger.exceptions import OptionValidationError
from dbtrigger.types import DeploymentOptions

logger = logging.getLogger(__name__)

SUPPORTED_REGIONS = (
    "us-central1",
    "us-east1",
    "us-east4",
    "us-west2",
    "us-west3",
    "us-west4",
    "europe-central2",
    "europe-west1",
    "europe-west2",
    "europe-west3",
    "europe-west6",
    "asia-east1",
    "asia-east2",
    "asia-northeast1",
    "asia-northeast2",
    "asia-northeast3",
    "asia-south1",
    "asia-southeast1",
    "asia-southeast2",
    "northamerica-northeast1",
    "southamerica-east1",
    "australia-southeast1",
)

MIN_TIMEOUT_SECONDS = 0
MAX_TIMEOUT_SECONDS = 540

VALID_MEMORY_OPTIONS = (
    "128MB",
    "256MB",
    "512MB",
    "1GB",
    "2GB",
    "4GB",
    "8GB",
)

VPC_EGRESS_SETTINGS_OPTIONS = (
    "VPC_CONNECTOR_EGRESS_SETTINGS_UNSPECIFIED",
    "PRIVATE_RANGES_ONLY",
    "ALL_TRAFFIC",
)

INGRESS_SETTINGS_OPTIONS = (
    "INGRESS_SETTINGS_UNSPECIFIED",
    "ALLOW_ALL",
    "ALLOW_INTERNAL_ONLY",
    "ALLOW_INTERNAL_AND_GCLB",
)

MAX_NUMBER_USER_LABELS = 58


def get_option(opts: Mapping[str, Any], name: str) -> tuple[str, Any] | None:
    """
    Look up an option by its Python name or its manifest name.

    Returns:
        (key as supplied, value), or None if the option is absent or None
    """
    for key in (name, to_camel(name)):
        value = opts.get(key)
        if value is not None:
            return key, value
    return None


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_options(opts: DeploymentOptions) -> None:
    """
    Validate deployment options.

    Args:
        opts: Deployment options of a single function

    Raises:
        OptionValidationError: If an option holds a value the platform rejects,
            or is given under both its Python and its manifest name
    """
    for key, value in opts.items():
        manifest_name = to_camel(key) if isinstance(key, str) else key
        if manifest_name != key and value is not None and opts.get(manifest_name) is not None:
            raise OptionValidationError(key, value, f"option is also given as '{manifest_name}'")

    memory = get_option(opts, "memory")
    if memory is not None and memory[1] not in VALID_MEMORY_OPTIONS:
        raise OptionValidationError(
            memory[0], memory[1], f"must be one of {', '.join(VALID_MEMORY_OPTIONS)}"
        )

    timeout = get_option(opts, "timeout_seconds")
    if timeout is not None:
        key, value = timeout
        if not _is_int(value) or not MIN_TIMEOUT_SECONDS <= value <= MAX_TIMEOUT_SECONDS:
            raise OptionValidationError(
                key,
                value,
                f"must be an integer between {MIN_TIMEOUT_SECONDS} and {MAX_TIMEOUT_SECONDS}",
            )

    min_instances = get_option(opts, "min_instances")
    if min_instances is not None and (not _is_int(min_instances[1]) or min_instances[1] < 0):
        raise OptionValidationError(min_instances[0], min_instances[1], "must be a non-negative integer")

    max_instances = get_option(opts, "max_instances")
    if max_instances is not None and (not _is_int(max_instances[1]) or max_instances[1] < 1):
        raise OptionValidationError(max_instances[0], max_instances[1], "must be a positive integer")

    if min_instances is not None and max_instances is not None and min_instances[1] > max_instances[1]:
        raise OptionValidationError(
            max_instances[0],
            max_instances[1],
            f"must not be less than {min_instances[0]} ({min_instances[1]})",
        )

    egress = get_option(opts, "vpc_connector_egress_settings")
    if egress is not None and egress[1] not in VPC_EGRESS_SETTINGS_OPTIONS:
        raise OptionValidationError(
            egress[0], egress[1], f"must be one of {', '.join(VPC_EGRESS_SETTINGS_OPTIONS)}"
        )

    ingress = get_option(opts, "ingress_settings")
    if ingress is not None and ingress[1] not in INGRESS_SETTINGS_OPTIONS:
        raise OptionValidationError(
            ingress[0], ingress[1], f"must be one of {', '.join(INGRESS_SETTINGS_OPTIONS)}"
        )

    labels = opts.get("labels")
    if labels is not None:
        if not isinstance(labels, Mapping):
            raise OptionValidationError("labels", labels, "must be a mapping of strings")
        if len(labels) > MAX_NUMBER_USER_LABELS:
            raise OptionValidationError(
                "labels", labels, f"at most {MAX_NUMBER_USER_LABELS} labels are allowed"
            )
        for label_key, label_value in labels.items():
            if not isinstance(label_key, str) or not isinstance(label_value, str):
                raise OptionValidationError("labels", labels, "keys and values must be strings")

    region = opts.get("region")
    if region is not None:
        regions = [region] if isinstance(region, str) else region
        if not isinstance(regions, Sequence) or not all(isinstance(r, str) for r in regions):
            raise OptionValidationError("region", region, "must be a string or a list of strings")
        for name in regions:
            if name not in SUPPORTED_REGIONS:
                logger.warning(
                    "Region %s is not a known region; deploying there may fail",
                    name,
                )


__all__ = [
    "SUPPORTED_REGIONS",
    "MIN_TIMEOUT_SECONDS",
    "MAX_TIMEOUT_SECONDS",
    "VALID_MEMORY_OPTIONS",
    "VPC_EGRESS_SETTINGS_OPTIONS",
    "INGRESS_SETTINGS_OPTIONS",
    "MAX_NUMBER_USER_LABELS",
    "get_option",
    "validate_options",
]
