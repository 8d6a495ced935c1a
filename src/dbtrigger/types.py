"""Common type definitions for the dbtrigger library."""

from collections.abc import Callable, Mapping
from typing import Any

# Capture name -> matched path value
ParamMap = dict[str, str]

# Open map of deployment options passed through to the manifest
DeploymentOptions = Mapping[str, Any]

# User callback receiving a typed DatabaseEvent; may return an awaitable
EventHandler = Callable[[Any], Any]

# Event type identifiers as published by the platform
EventType = str
