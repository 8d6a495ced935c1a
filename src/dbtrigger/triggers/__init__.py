"""
Database trigger declarations.

This module provides:
- get_opts: Normalization of reference strings and options objects
- make_params: Param extraction from delivered events
- make_endpoint: Deployment manifest assembly
- on_value_written / on_value_created / on_value_updated / on_value_deleted:
  Function declarations returning CloudFunction values
"""

from dbtrigger.triggers.config import (
    INGRESS_SETTINGS_OPTIONS,
    MAX_NUMBER_USER_LABELS,
    MAX_TIMEOUT_SECONDS,
    MIN_TIMEOUT_SECONDS,
    SUPPORTED_REGIONS,
    VALID_MEMORY_OPTIONS,
    VPC_EGRESS_SETTINGS_OPTIONS,
    validate_options,
)
from dbtrigger.triggers.endpoint import (
    PASS_THROUGH_FIELDS,
    PLATFORM,
    EventTrigger,
    ManifestEndpoint,
    make_endpoint,
)
from dbtrigger.triggers.functions import (
    CREATED_EVENT_TYPE,
    DELETED_EVENT_TYPE,
    UPDATED_EVENT_TYPE,
    WRITTEN_EVENT_TYPE,
    CloudFunction,
    on_changed_operation,
    on_operation,
    on_value_created,
    on_value_deleted,
    on_value_updated,
    on_value_written,
)
from dbtrigger.triggers.options import NormalizedOptions, ReferenceOptions, get_opts
from dbtrigger.triggers.params import make_params

__all__ = [
    # Options
    "NormalizedOptions",
    "ReferenceOptions",
    "get_opts",
    # Params
    "make_params",
    # Manifest
    "PLATFORM",
    "PASS_THROUGH_FIELDS",
    "EventTrigger",
    "ManifestEndpoint",
    "make_endpoint",
    # Configuration
    "SUPPORTED_REGIONS",
    "MIN_TIMEOUT_SECONDS",
    "MAX_TIMEOUT_SECONDS",
    "VALID_MEMORY_OPTIONS",
    "VPC_EGRESS_SETTINGS_OPTIONS",
    "INGRESS_SETTINGS_OPTIONS",
    "MAX_NUMBER_USER_LABELS",
    "validate_options",
    # Functions
    "WRITTEN_EVENT_TYPE",
    "CREATED_EVENT_TYPE",
    "UPDATED_EVENT_TYPE",
    "DELETED_EVENT_TYPE",
    "CloudFunction",
    "on_changed_operation",
    "on_operation",
    "on_value_written",
    "on_value_created",
    "on_value_updated",
    "on_value_deleted",
]
