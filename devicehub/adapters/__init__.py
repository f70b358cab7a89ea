"""Platform connectors.

Each connector implements DeviceConnector for discovery and exposes the
platform's control surface used by the action dispatcher.
"""

from devicehub.adapters.homeassistant import HomeAssistantConnector
from devicehub.adapters.lirc import LircConnector
from devicehub.adapters.roku import RokuConnector

__all__ = ["LircConnector", "RokuConnector", "HomeAssistantConnector"]
