"""Device lookup with bounded re-discovery on cache misses."""

from __future__ import annotations

import logging

from devicehub.core.interfaces.connector import DeviceNotFoundError, RetryExhaustedError
from devicehub.core.models import Device
from devicehub.services.discovery import DeviceCache, DeviceDiscovery
from devicehub.services.miss_tracker import MissTracker

logger = logging.getLogger(__name__)


class LookupResolver:
    """Resolves device ids against the cache.

    A cache hit returns immediately. A miss triggers at most one persisted
    discovery cycle, subject to the MissTracker's retry budget.
    """

    def __init__(self, cache: DeviceCache, discovery: DeviceDiscovery, tracker: MissTracker):
        self.cache = cache
        self.discovery = discovery
        self.tracker = tracker

    async def resolve(self, device_id: str) -> Device:
        """Get a device by id.

        Args:
            device_id: Device identifier

        Returns:
            The cached device

        Raises:
            RetryExhaustedError: If the miss tracker refused a re-discovery
            DeviceNotFoundError: If the device is still absent after re-discovery
            DiscoveryError: If the re-discovery itself failed
        """
        device = self.cache.get(device_id)
        if device is not None:
            return device

        if not self.tracker.record_attempt(device_id):
            raise RetryExhaustedError(device_id)

        logger.info(f"Device {device_id} not cached, running discovery")
        await self.discovery.discover(persist=True)

        device = self.cache.get(device_id)
        if device is None:
            raise DeviceNotFoundError(device_id)
        return device
