"""Home Assistant REST connector."""

from devicehub.adapters.homeassistant.adapter import HomeAssistantConnector

__all__ = ["HomeAssistantConnector"]
