"""Device service: the operations exposed to the HTTP layer.

Wires the connectors, cache, miss tracker, resolver, and dispatcher
together and provides list_devices, get_state, and perform_action.
"""

from __future__ import annotations

import logging

from devicehub.adapters import HomeAssistantConnector, LircConnector, RokuConnector
from devicehub.core.interfaces.connector import UnsupportedOperationError
from devicehub.core.models import ActionOutcome, DeviceState, DeviceSummary, Platform
from devicehub.models import Config
from devicehub.security import sanitize
from devicehub.services.discovery import DeviceCache, DeviceDiscovery
from devicehub.services.dispatcher import ActionDispatcher
from devicehub.services.miss_tracker import MissTracker
from devicehub.services.resolver import LookupResolver

logger = logging.getLogger(__name__)


class DeviceService:
    """Unified device directory.

    Example:
        >>> service = DeviceService.from_config(Config())
        >>> devices = await service.list_devices()
        >>> await service.perform_action("light.kitchen", "TurnOn")
    """

    def __init__(
        self,
        lirc: LircConnector,
        roku: RokuConnector,
        homeassistant: HomeAssistantConnector,
        cache: DeviceCache,
        tracker: MissTracker,
        timeout: float,
        max_argument_length: int,
    ) -> None:
        self.lirc = lirc
        self.roku = roku
        self.homeassistant = homeassistant
        self.cache = cache
        self.tracker = tracker
        self.max_argument_length = max_argument_length

        self.discovery = DeviceDiscovery(lirc, roku, homeassistant, cache, timeout)
        self.resolver = LookupResolver(cache, self.discovery, tracker)
        self.dispatcher = ActionDispatcher(lirc, roku, homeassistant, max_argument_length)

    @classmethod
    def from_config(cls, config: Config) -> DeviceService:
        """Build a service with real connectors from configuration."""
        return cls(
            lirc=LircConnector(config),
            roku=RokuConnector(config),
            homeassistant=HomeAssistantConnector(config),
            cache=DeviceCache(),
            tracker=MissTracker(threshold=config.miss_threshold, cooldown=config.miss_cooldown),
            timeout=config.request_timeout,
            max_argument_length=config.max_argument_length,
        )

    async def list_devices(self) -> list[DeviceSummary]:
        """Run a persisted discovery and return the redacted device list.

        Raises:
            DiscoveryError: If every backend failed
        """
        await self.discovery.discover(persist=True)
        return [device.summary() for device in self.cache.all()]

    async def get_state(self, device_id: str) -> DeviceState:
        """Query the current state of a device.

        Args:
            device_id: Device identifier

        Returns:
            DeviceState with id, state, and platform details

        Raises:
            UnsupportedOperationError: If the platform has no state query
        """
        device = await self.resolver.resolve(device_id)

        if device.platform == Platform.HOMEASSISTANT:
            entity_id = sanitize(device.id, self.max_argument_length)
            data = await self.homeassistant.get_state(entity_id)
            return DeviceState(
                id=device.id,
                state=str(data["state"]),
                details=data.get("attributes") or {},
            )

        if device.platform == Platform.ROKU:
            app = await self.roku.active_app()
            return DeviceState(
                id=device.id,
                state=app["name"],
                details={"app_id": app["id"], "type": app["type"]},
            )

        raise UnsupportedOperationError(f"state not supported for device {device.id}")

    async def perform_action(self, device_id: str, action_id: str) -> ActionOutcome:
        """Resolve a device and perform an action on it."""
        device = await self.resolver.resolve(device_id)
        return await self.dispatcher.dispatch(device, action_id)


_device_service: DeviceService | None = None


def get_device_service(config: Config) -> DeviceService:
    """Get or create the global DeviceService instance.

    Args:
        config: Application configuration

    Returns:
        DeviceService instance
    """
    global _device_service
    if _device_service is None:
        _device_service = DeviceService.from_config(config)
    return _device_service
