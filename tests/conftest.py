"""Pytest configuration and shared fixtures for Device Hub tests."""

from __future__ import annotations

import copy
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from devicehub.adapters.lirc import LIRC_DEVICE
from devicehub.main import app
from devicehub.models import Config
from devicehub.routers.dependencies import get_device_service_dependency
from devicehub.services.device_service import DeviceService
from devicehub.services.discovery import DeviceCache
from devicehub.services.miss_tracker import MissTracker


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def mock_config() -> Config:
    """Fixture providing mock configuration.

    Returns:
        Config instance with test values
    """
    return Config(
        _env_file=None,
        roku_base_url="http://test-roku:8060/",
        ha_base_url="http://test-ha:8123",
        ha_token="test_token_123",
        port=3000,
        request_timeout=2.0,
        miss_cooldown=60.0,
        miss_threshold=3,
        max_argument_length=32,
    )


@pytest.fixture
def fake_clock() -> FakeClock:
    """Fixture providing a controllable clock."""
    return FakeClock()


@pytest.fixture
def lirc_raw() -> list[dict[str, Any]]:
    """Raw LIRC discovery result."""
    return [copy.deepcopy(LIRC_DEVICE)]


@pytest.fixture
def roku_apps() -> list[dict[str, Any]]:
    """Raw Roku apps as parsed from /query/apps."""
    return [
        {"id": "12", "type": "appl", "version": "4.1.218", "name": "Netflix"},
        {"id": "837", "type": "appl", "version": "2.21.1", "name": "YouTube"},
        {"id": "tvinput.hdmi1", "type": "tvin", "version": "1.0.0", "name": "HDMI 1"},
    ]


@pytest.fixture
def ha_states() -> list[dict[str, Any]]:
    """Mock Home Assistant states."""
    return [
        {
            "entity_id": "light.kitchen",
            "state": "off",
            "attributes": {"friendly_name": "Kitchen Light", "supported_features": 44},
        },
        {
            "entity_id": "switch.fan",
            "state": "on",
            "attributes": {"friendly_name": "Fan", "hidden": True},
        },
        {
            "entity_id": "sensor.temperature",
            "state": "22.5",
            "attributes": {"unit_of_measurement": "°C", "friendly_name": "Temperature"},
        },
        {
            "entity_id": "cover.garage",
            "state": "closed",
            "attributes": {},
        },
    ]


@pytest.fixture
def mock_lirc(lirc_raw):
    """Mock LircConnector."""
    connector = MagicMock()
    connector.name = "lirc"
    connector.list_raw_devices = AsyncMock(return_value=lirc_raw)
    connector.send = AsyncMock(return_value="")
    return connector


@pytest.fixture
def mock_roku(roku_apps):
    """Mock RokuConnector."""
    connector = MagicMock()
    connector.name = "roku"
    connector.list_raw_devices = AsyncMock(return_value=roku_apps)
    connector.launch = AsyncMock(return_value=None)
    connector.keypress = AsyncMock(return_value=None)
    connector.active_app = AsyncMock(
        return_value={"id": "12", "type": "appl", "version": "4.1.218", "name": "Netflix"}
    )
    return connector


@pytest.fixture
def mock_homeassistant(ha_states):
    """Mock HomeAssistantConnector."""
    connector = MagicMock()
    connector.name = "homeassistant"
    connector.list_raw_devices = AsyncMock(return_value=ha_states)
    connector.call_service = AsyncMock(return_value=[])
    connector.get_state = AsyncMock(
        return_value={
            "entity_id": "light.kitchen",
            "state": "on",
            "attributes": {"friendly_name": "Kitchen Light", "brightness": 200},
        }
    )
    return connector


@pytest.fixture
def device_service(mock_lirc, mock_roku, mock_homeassistant, fake_clock) -> DeviceService:
    """DeviceService wired to mock connectors."""
    return DeviceService(
        lirc=mock_lirc,
        roku=mock_roku,
        homeassistant=mock_homeassistant,
        cache=DeviceCache(),
        tracker=MissTracker(threshold=3, cooldown=60.0, clock=fake_clock),
        timeout=2.0,
        max_argument_length=32,
    )


@pytest.fixture
def client(device_service):
    """FastAPI test client backed by the mock DeviceService."""
    app.dependency_overrides[get_device_service_dependency] = lambda: device_service
    yield TestClient(app)
    app.dependency_overrides.clear()
