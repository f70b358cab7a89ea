"""Normalization of raw backend records into unified Devices.

Pure functions, one per platform. Records that cannot be turned into a
valid Device are skipped and logged rather than failing the whole batch.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from devicehub.core.models import Device, Platform

logger = logging.getLogger(__name__)

# Home Assistant domains exposed as devices
ALLOWED_DOMAINS = frozenset({"light", "cover", "switch"})

# Same table for every entity regardless of domain
HOMEASSISTANT_ACTIONS = {
    "TurnOn": "turn_on",
    "TurnOff": "turn_off",
}

ROKU_APP_ACTIONS = {"TurnOn": "launch"}

ROKU_LAUNCHABLE_TYPE = "appl"

ROKU_TRANSPORT_ID = "roku"
ROKU_TRANSPORT_ACTIONS = {
    "StartOver": "InstantReplay",
    "Rewind": "Rev",
    "FastForward": "Fwd",
    "Play": "Play",
    "Previous": "Left",
    "Next": "Right",
    "Mute": "VolumeMute",
}


def _build(**fields: Any) -> Device | None:
    try:
        return Device(**fields)
    except ValidationError as e:
        logger.warning(f"Skipping invalid {fields.get('platform')} device {fields.get('id')!r}: {e}")
        return None


def normalize_lirc(raw_devices: list[dict[str, Any]]) -> list[Device]:
    """Map LIRC records, which already follow the unified schema."""
    devices = []
    for raw in raw_devices:
        device = _build(**raw)
        if device:
            devices.append(device)
    return devices


def normalize_roku(raw_apps: list[dict[str, Any]]) -> list[Device]:
    """Map Roku apps to devices and add the transport-control device.

    Only launchable applications are kept. The transport device is added
    once when at least one app was kept.

    Args:
        raw_apps: App dicts from RokuConnector.list_raw_devices()

    Returns:
        App devices followed by the transport device (if any app was found)
    """
    devices: list[Device] = []
    for app in raw_apps:
        if app.get("type") != ROKU_LAUNCHABLE_TYPE:
            continue
        device = _build(
            id=app.get("id") or "",
            platform=Platform.ROKU_APP,
            name=app.get("name") or str(app.get("id")),
            manufacturer=app.get("manufacturer"),
            actions=dict(ROKU_APP_ACTIONS),
        )
        if device:
            devices.append(device)

    if devices:
        devices.append(
            Device(
                id=ROKU_TRANSPORT_ID,
                platform=Platform.ROKU,
                name="Roku",
                actions=dict(ROKU_TRANSPORT_ACTIONS),
            )
        )
    return devices


def normalize_homeassistant(states: list[dict[str, Any]]) -> list[Device]:
    """Map Home Assistant states to devices.

    Keeps entities whose domain is in ALLOWED_DOMAINS and that are not
    hidden. Name falls back to the entity id when friendly_name is missing.
    """
    devices = []
    for state in states:
        if not isinstance(state, dict):
            continue
        entity_id = state.get("entity_id", "")
        domain = entity_id.split(".")[0] if "." in entity_id else ""
        if domain not in ALLOWED_DOMAINS:
            continue

        attributes = state.get("attributes") or {}
        if attributes.get("hidden"):
            continue

        device = _build(
            id=entity_id,
            platform=Platform.HOMEASSISTANT,
            name=attributes.get("friendly_name") or entity_id,
            manufacturer=attributes.get("manufacturer"),
            actions=dict(HOMEASSISTANT_ACTIONS),
        )
        if device:
            devices.append(device)
    return devices
