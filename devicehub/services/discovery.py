"""Device discovery and caching.

Polls every connector concurrently, normalizes their results into one
ordered device list, and swaps it into the shared DeviceCache.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from devicehub.core.interfaces.connector import (
    BackendError,
    DeviceConnector,
    DiscoveryError,
)
from devicehub.core.models import Device
from devicehub.services.normalizer import (
    normalize_homeassistant,
    normalize_lirc,
    normalize_roku,
)

logger = logging.getLogger(__name__)

Normalizer = Callable[[list[dict[str, Any]]], list[Device]]


@dataclass(frozen=True)
class _Snapshot:
    devices: tuple[Device, ...] = ()
    index: dict[str, Device] = field(default_factory=dict)
    refreshed_at: float | None = None


def dedupe(devices: list[Device]) -> list[Device]:
    """Drop devices whose id was already seen, keeping the first one."""
    seen: set[str] = set()
    unique: list[Device] = []
    for device in devices:
        if device.id in seen:
            logger.warning(
                f"Duplicate device id {device.id!r} from {device.platform.value}, keeping first"
            )
            continue
        seen.add(device.id)
        unique.append(device)
    return unique


class DeviceCache:
    """Process-wide device list, replaced wholesale on each discovery.

    The cache holds one immutable snapshot. Replacing it is a single
    reference assignment, so readers see either the old or the new list.
    """

    def __init__(self) -> None:
        """Initialize an empty cache."""
        self._snapshot = _Snapshot()

    def replace(self, devices: list[Device]) -> list[Device]:
        """Replace the cached devices.

        Args:
            devices: New device list (duplicate ids are dropped)

        Returns:
            The list that was stored
        """
        unique = dedupe(devices)
        self._snapshot = _Snapshot(
            devices=tuple(unique),
            index={d.id: d for d in unique},
            refreshed_at=time.time(),
        )
        logger.info(f"Device cache replaced: {len(unique)} devices")
        return unique

    def get(self, device_id: str) -> Device | None:
        """Get a cached device by id."""
        return self._snapshot.index.get(device_id)

    def all(self) -> list[Device]:
        """Get all cached devices in discovery order."""
        return list(self._snapshot.devices)

    @property
    def refreshed_at(self) -> float | None:
        """Unix time of the last replacement, None if never filled."""
        return self._snapshot.refreshed_at

    def __contains__(self, device_id: object) -> bool:
        return device_id in self._snapshot.index

    def __len__(self) -> int:
        return len(self._snapshot.devices)


class DeviceDiscovery:
    """Runs discovery cycles across the LIRC, Roku, and Home Assistant connectors.

    Example:
        >>> discovery = DeviceDiscovery(lirc, roku, homeassistant, DeviceCache(), timeout=5)
        >>> devices = await discovery.discover(persist=True)
    """

    def __init__(
        self,
        lirc: DeviceConnector,
        roku: DeviceConnector,
        homeassistant: DeviceConnector,
        cache: DeviceCache,
        timeout: float,
    ) -> None:
        """Initialize discovery service.

        Args:
            lirc: Infrared connector
            roku: Roku connector
            homeassistant: Home Assistant connector
            cache: Cache replaced by persisted discoveries
            timeout: Per-connector timeout in seconds
        """
        self.cache = cache
        self.timeout = timeout
        # Result order follows this list
        self._sources: list[tuple[DeviceConnector, Normalizer]] = [
            (lirc, normalize_lirc),
            (roku, normalize_roku),
            (homeassistant, normalize_homeassistant),
        ]

    async def discover(self, persist: bool = True) -> list[Device]:
        """Run one discovery cycle.

        A failing connector contributes zero devices. The cache is left
        untouched when every connector fails.

        Args:
            persist: Replace the cache with the result

        Returns:
            Devices in LIRC, Roku, Home Assistant order

        Raises:
            DiscoveryError: If every connector failed
        """
        start = time.monotonic()
        results = await asyncio.gather(
            *(self._discover_source(connector, normalize) for connector, normalize in self._sources)
        )

        if all(result is None for result in results):
            raise DiscoveryError("all backends failed")

        devices = dedupe([device for result in results if result for device in result])
        if persist:
            self.cache.replace(devices)

        failed = [c.name for (c, _), r in zip(self._sources, results) if r is None]
        logger.info(
            f"Discovery finished in {time.monotonic() - start:.2f}s: {len(devices)} devices"
            + (f", failed backends: {', '.join(failed)}" if failed else "")
        )
        return devices

    async def _discover_source(
        self, connector: DeviceConnector, normalize: Normalizer
    ) -> list[Device] | None:
        """Discover one backend; any failure becomes None."""
        try:
            raw = await asyncio.wait_for(connector.list_raw_devices(), timeout=self.timeout)
            devices = normalize(raw)
            logger.debug(f"{connector.name}: {len(devices)} devices")
            return devices

        except asyncio.TimeoutError:
            logger.warning(f"Error discovering {connector.name} devices: timeout after {self.timeout}s")
            return None

        except BackendError as e:
            logger.warning(f"Error discovering {connector.name} devices: {e}")
            return None

        except Exception as e:
            logger.error(f"Unexpected error discovering {connector.name} devices: {e}", exc_info=True)
            return None
