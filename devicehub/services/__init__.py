"""Discovery, lookup, and dispatch services."""

from devicehub.services.device_service import DeviceService, get_device_service
from devicehub.services.discovery import DeviceCache, DeviceDiscovery
from devicehub.services.dispatcher import ActionDispatcher
from devicehub.services.miss_tracker import MissRecord, MissTracker
from devicehub.services.resolver import LookupResolver

__all__ = [
    "DeviceService",
    "get_device_service",
    "DeviceCache",
    "DeviceDiscovery",
    "ActionDispatcher",
    "MissTracker",
    "MissRecord",
    "LookupResolver",
]
