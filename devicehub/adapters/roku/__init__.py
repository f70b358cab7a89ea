"""Roku ECP connector."""

from devicehub.adapters.roku.adapter import RokuConnector

__all__ = ["RokuConnector"]
