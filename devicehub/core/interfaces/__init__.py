"""Protocol definitions and error types for backend connectors."""

from devicehub.core.interfaces.connector import (
    BackendError,
    BackendUnavailableError,
    DeviceConnector,
    DeviceNotFoundError,
    DiscoveryError,
    MalformedUpstreamResponseError,
    RetryExhaustedError,
    UnknownPlatformError,
    UnsupportedOperationError,
)

__all__ = [
    "DeviceConnector",
    "BackendError",
    "BackendUnavailableError",
    "MalformedUpstreamResponseError",
    "DiscoveryError",
    "DeviceNotFoundError",
    "RetryExhaustedError",
    "UnsupportedOperationError",
    "UnknownPlatformError",
]
