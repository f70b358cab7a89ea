"""Tests for LookupResolver."""

from __future__ import annotations

import pytest

from devicehub.core.interfaces.connector import DeviceNotFoundError, RetryExhaustedError
from devicehub.services.discovery import DeviceCache, DeviceDiscovery
from devicehub.services.miss_tracker import MissTracker
from devicehub.services.resolver import LookupResolver


@pytest.fixture
def cache() -> DeviceCache:
    return DeviceCache()


@pytest.fixture
def tracker(fake_clock) -> MissTracker:
    return MissTracker(threshold=3, cooldown=60.0, clock=fake_clock)


@pytest.fixture
def resolver(mock_lirc, mock_roku, mock_homeassistant, cache, tracker) -> LookupResolver:
    discovery = DeviceDiscovery(mock_lirc, mock_roku, mock_homeassistant, cache, timeout=1.0)
    return LookupResolver(cache, discovery, tracker)


class TestLookupResolver:
    """Test suite for LookupResolver."""

    @pytest.mark.asyncio
    async def test_cache_hit_skips_discovery(self, resolver, mock_lirc, tracker):
        """Test cached devices are returned without discovery or miss."""
        await resolver.discovery.discover()
        mock_lirc.list_raw_devices.reset_mock()

        device = await resolver.resolve("sharp")

        assert device.id == "sharp"
        mock_lirc.list_raw_devices.assert_not_awaited()
        assert tracker.get_record("sharp") is None

    @pytest.mark.asyncio
    async def test_miss_triggers_discovery(self, resolver, mock_lirc, tracker):
        """Test a cold cache is filled by one discovery on first lookup."""
        device = await resolver.resolve("light.kitchen")

        assert device.name == "Kitchen Light"
        mock_lirc.list_raw_devices.assert_awaited_once()
        assert tracker.get_record("light.kitchen").consecutive_miss_count == 1

    @pytest.mark.asyncio
    async def test_new_device_found_after_one_cycle(self, resolver, mock_homeassistant):
        """Test a device appearing upstream is found on its first lookup."""
        await resolver.discovery.discover()
        mock_homeassistant.list_raw_devices.return_value = [
            {"entity_id": "switch.heater", "attributes": {"friendly_name": "Heater"}},
        ]

        device = await resolver.resolve("switch.heater")

        assert device.name == "Heater"

    @pytest.mark.asyncio
    async def test_absent_device_not_available(self, resolver):
        """Test an absent device fails after the permitted re-discovery."""
        with pytest.raises(DeviceNotFoundError, match="not available"):
            await resolver.resolve("light.missing")

    @pytest.mark.asyncio
    async def test_retry_bound(self, resolver, mock_lirc):
        """Test exactly `threshold` discoveries, then refusal without discovery."""
        for _ in range(3):
            with pytest.raises(DeviceNotFoundError):
                await resolver.resolve("light.missing")

        assert mock_lirc.list_raw_devices.await_count == 3

        with pytest.raises(RetryExhaustedError, match="no more tries"):
            await resolver.resolve("light.missing")

        assert mock_lirc.list_raw_devices.await_count == 3

    @pytest.mark.asyncio
    async def test_recovers_after_cooldown(self, resolver, tracker, fake_clock, mock_lirc):
        """Test a sweep after the cooldown allows another discovery."""
        for _ in range(3):
            with pytest.raises(DeviceNotFoundError):
                await resolver.resolve("light.missing")

        fake_clock.advance(61)
        tracker.sweep()

        with pytest.raises(DeviceNotFoundError):
            await resolver.resolve("light.missing")
        assert mock_lirc.list_raw_devices.await_count == 4
