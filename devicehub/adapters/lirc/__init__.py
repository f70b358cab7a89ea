"""LIRC infrared connector."""

from devicehub.adapters.lirc.adapter import LIRC_DEVICE, LircConnector

__all__ = ["LircConnector", "LIRC_DEVICE"]
