"""Core abstractions for the Device Hub gateway.

Modules:
    interfaces: Connector protocol and the gateway error hierarchy
    models: Unified device, state, and action models
"""

from devicehub.core.interfaces import DeviceConnector
from devicehub.core.models import (
    ActionOutcome,
    Device,
    DeviceState,
    DeviceSummary,
    Platform,
)

__all__ = [
    "DeviceConnector",
    "Device",
    "DeviceSummary",
    "DeviceState",
    "ActionOutcome",
    "Platform",
]
