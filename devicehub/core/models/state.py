"""Device state and action outcome models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class DeviceState(BaseModel):
    """Normalized state of a device.

    Attributes:
        id: Device identifier
        state: Current state value (on, off, Netflix, ...)
        details: Platform-specific extra information
    """

    id: str = Field(..., description="Device identifier")
    state: str = Field(..., description="Current state value")
    details: dict[str, Any] | None = Field(
        default=None,
        description="Platform-specific details",
    )


class ActionOutcome(BaseModel):
    """Result of a dispatched action."""

    id: str = Field(..., description="Device identifier")
    action: str = Field(..., description="Action name that was performed")
