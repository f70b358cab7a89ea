"""Unified device models.

These models are the common language between the backend connectors,
the discovery engine, and the HTTP layer.
"""

from devicehub.core.models.device import (
    DEFAULT_MANUFACTURERS,
    PLATFORM_COMMANDS,
    ROKU_KEYS,
    Device,
    DeviceSummary,
    Platform,
)
from devicehub.core.models.state import ActionOutcome, DeviceState

__all__ = [
    "Platform",
    "Device",
    "DeviceSummary",
    "DeviceState",
    "ActionOutcome",
    "PLATFORM_COMMANDS",
    "DEFAULT_MANUFACTURERS",
    "ROKU_KEYS",
]
