"""Tests for DeviceService."""

from __future__ import annotations

import pytest

from devicehub.core.interfaces.connector import (
    BackendUnavailableError,
    DiscoveryError,
    UnsupportedOperationError,
)
from devicehub.core.models import DeviceSummary
from devicehub.models import Config
from devicehub.services.device_service import DeviceService


class TestDeviceService:
    """Test suite for DeviceService."""

    def test_from_config(self, mock_config: Config) -> None:
        """Test real connectors and policy are built from config."""
        service = DeviceService.from_config(mock_config)

        assert service.tracker.threshold == 3
        assert service.tracker.cooldown == 60.0
        assert service.discovery.timeout == 2.0
        assert service.dispatcher.max_argument_length == 32
        assert service.roku.base_url == "http://test-roku:8060"

    @pytest.mark.asyncio
    async def test_list_devices_redacted(self, device_service):
        """Test listed devices carry action names only."""
        devices = await device_service.list_devices()

        assert all(isinstance(d, DeviceSummary) for d in devices)
        transport = next(d for d in devices if d.id == "roku")
        assert "Rewind" in transport.actions
        assert "Rev" not in transport.actions

        tokens = {"turn_on", "turn_off", "launch", "KEY_POWER", "InstantReplay", "VolumeMute"}
        for device in devices:
            assert not tokens & set(device.actions)

    @pytest.mark.asyncio
    async def test_list_devices_idempotent(self, device_service):
        """Test unchanged backends list equal devices."""
        first = await device_service.list_devices()
        second = await device_service.list_devices()

        assert sorted(first, key=lambda d: d.id) == sorted(second, key=lambda d: d.id)

    @pytest.mark.asyncio
    async def test_list_devices_partial_failure(self, device_service, mock_roku):
        """Test a failed Roku leaves LIRC and Home Assistant devices."""
        mock_roku.list_raw_devices.side_effect = BackendUnavailableError("down", "roku")

        ids = [d.id for d in await device_service.list_devices()]

        assert ids == ["sharp", "light.kitchen", "cover.garage"]

    @pytest.mark.asyncio
    async def test_list_devices_total_failure(self, device_service, mock_lirc, mock_roku, mock_homeassistant):
        """Test total failure surfaces DiscoveryError."""
        for connector in (mock_lirc, mock_roku, mock_homeassistant):
            connector.list_raw_devices.side_effect = BackendUnavailableError("down")

        with pytest.raises(DiscoveryError):
            await device_service.list_devices()

    @pytest.mark.asyncio
    async def test_get_state_homeassistant(self, device_service, mock_homeassistant):
        """Test Home Assistant state queries."""
        state = await device_service.get_state("light.kitchen")

        mock_homeassistant.get_state.assert_awaited_once_with("light.kitchen")
        assert state.id == "light.kitchen"
        assert state.state == "on"
        assert state.details["brightness"] == 200

    @pytest.mark.asyncio
    async def test_get_state_roku(self, device_service, mock_roku):
        """Test the Roku transport device reports the active app."""
        state = await device_service.get_state("roku")

        mock_roku.active_app.assert_awaited_once()
        assert state.state == "Netflix"
        assert state.details == {"app_id": "12", "type": "appl"}

    @pytest.mark.asyncio
    async def test_get_state_unsupported(self, device_service):
        """Test LIRC and Roku app devices have no state query."""
        with pytest.raises(UnsupportedOperationError, match="state not supported"):
            await device_service.get_state("sharp")
        with pytest.raises(UnsupportedOperationError):
            await device_service.get_state("12")

    @pytest.mark.asyncio
    async def test_perform_action(self, device_service, mock_roku):
        """Test actions resolve the device and dispatch."""
        outcome = await device_service.perform_action("837", "TurnOn")

        mock_roku.launch.assert_awaited_once_with("837")
        assert outcome.model_dump() == {"id": "837", "action": "TurnOn"}

    @pytest.mark.asyncio
    async def test_perform_unknown_action(self, device_service, mock_homeassistant):
        """Test an unknown action on a valid device makes no backend call."""
        with pytest.raises(UnsupportedOperationError):
            await device_service.perform_action("light.kitchen", "Nonexistent")

        mock_homeassistant.call_service.assert_not_awaited()
