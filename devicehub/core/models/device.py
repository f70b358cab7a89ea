"""Unified device model.

Defines the Platform enumeration and the Device record every backend is
normalized into, along with the redacted DeviceSummary exposed to callers.
"""

from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Platform(str, Enum):
    """Origin of a device."""

    LIRC = "lirc"                    # Infrared remote driven through lircd
    ROKU = "roku"                    # Roku transport/playback controls
    ROKU_APP = "roku-app"            # Launchable Roku application
    HOMEASSISTANT = "homeassistant"  # Home Assistant entity


# Roku ECP keypress names
ROKU_KEYS = frozenset({
    "Home",
    "Rev",
    "Fwd",
    "Play",
    "Select",
    "Left",
    "Right",
    "Down",
    "Up",
    "Back",
    "InstantReplay",
    "Info",
    "Backspace",
    "Search",
    "Enter",
    "VolumeDown",
    "VolumeMute",
    "VolumeUp",
    "PowerOff",
})

# Allowed command tokens per platform. None means any well-formed token
# (LIRC key names come from the remote's lircd.conf).
PLATFORM_COMMANDS: dict[Platform, frozenset[str] | None] = {
    Platform.LIRC: None,
    Platform.ROKU: ROKU_KEYS,
    Platform.ROKU_APP: frozenset({"launch"}),
    Platform.HOMEASSISTANT: frozenset({"turn_on", "turn_off"}),
}

DEFAULT_MANUFACTURERS: dict[Platform, str] = {
    Platform.LIRC: "Sharp",
    Platform.ROKU: "Roku",
    Platform.ROKU_APP: "Roku",
    Platform.HOMEASSISTANT: "Home Assistant",
}

_TOKEN_PATTERN = re.compile(r"^[A-Za-z0-9_.]+$")


class DeviceSummary(BaseModel):
    """Device as exposed to callers: action names only, no command tokens."""

    id: str
    platform: Platform
    name: str
    manufacturer: str | None = None
    actions: list[str] = Field(default_factory=list)


class Device(BaseModel):
    """A normalized device.

    Attributes:
        id: Identifier, unique within a discovery cycle
        platform: Origin platform
        name: Display name
        manufacturer: Display manufacturer (platform default when absent)
        actions: Stable action name -> platform command token

    Examples:
        >>> Device(
        ...     id="light.kitchen",
        ...     platform=Platform.HOMEASSISTANT,
        ...     name="Kitchen",
        ...     actions={"TurnOn": "turn_on", "TurnOff": "turn_off"},
        ... )
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Device identifier")
    platform: Platform = Field(..., description="Origin platform")
    name: str = Field(..., description="Human-readable display name")
    manufacturer: str | None = Field(default=None, description="Manufacturer name")
    actions: dict[str, str] = Field(
        default_factory=dict,
        description="Action name -> platform command token",
    )

    @model_validator(mode="after")
    def validate_actions(self) -> Device:
        """Check every command token against the platform's command table."""
        allowed = PLATFORM_COMMANDS[self.platform]
        for action, token in self.actions.items():
            if not action:
                raise ValueError("action names must not be empty")
            if not _TOKEN_PATTERN.match(token):
                raise ValueError(f"malformed command token for {action}: {token!r}")
            if allowed is not None and token not in allowed:
                raise ValueError(
                    f"command {token!r} is not valid for platform {self.platform.value}"
                )
        if self.manufacturer is None:
            object.__setattr__(self, "manufacturer", DEFAULT_MANUFACTURERS[self.platform])
        return self

    def supports(self, action: str) -> bool:
        """Check whether the device exposes an action name."""
        return action in self.actions

    def command_for(self, action: str) -> str:
        """Get the platform command token for an action name.

        Raises:
            KeyError: If the action is not supported
        """
        return self.actions[action]

    def summary(self) -> DeviceSummary:
        """Redacted view with the command tokens removed."""
        return DeviceSummary(
            id=self.id,
            platform=self.platform,
            name=self.name,
            manufacturer=self.manufacturer,
            actions=sorted(self.actions),
        )
