"""Backend connector protocol definition.

Defines the interface each platform connector implements for discovery,
together with the exception hierarchy shared by connectors and the
discovery/lookup services.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DeviceConnector(Protocol):
    """Protocol for platform connectors.

    A connector translates one platform's native protocol into raw device
    descriptions. Each call to list_raw_devices() is a one-shot, finite
    result: either a list of raw records or a raised BackendError.

    Example Implementation:
        >>> class MyConnector:
        ...     @property
        ...     def name(self) -> str:
        ...         return "my_platform"
        ...
        ...     async def list_raw_devices(self) -> list[dict[str, Any]]:
        ...         return [{"id": "tv", "name": "TV"}]
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Connector identifier used in logs and errors."""
        ...

    @abstractmethod
    async def list_raw_devices(self) -> list[dict[str, Any]]:
        """Fetch raw device descriptions from the backend.

        Returns:
            List of platform-specific raw device records

        Raises:
            BackendUnavailableError: If the backend cannot be reached
            MalformedUpstreamResponseError: If the response has an unexpected shape
        """
        ...


class BackendError(Exception):
    """Base exception for gateway errors."""

    def __init__(self, message: str, backend: str | None = None) -> None:
        """Initialize backend error.

        Args:
            message: Error description
            backend: Backend name (optional)
        """
        self.backend = backend
        self.message = message
        super().__init__(f"[{backend}] {message}" if backend else message)


class BackendUnavailableError(BackendError):
    """Raised when a backend cannot be reached or answers with an error."""

    pass


class MalformedUpstreamResponseError(BackendUnavailableError):
    """Raised when a backend answers with an unexpected XML/JSON shape."""

    pass


class DiscoveryError(BackendError):
    """Raised when a discovery cycle cannot produce any result."""

    pass


class DeviceNotFoundError(BackendError):
    """Raised when a device is absent after a permitted re-discovery."""

    def __init__(self, device_id: str) -> None:
        """Initialize device not found error.

        Args:
            device_id: Device that was not found
        """
        self.device_id = device_id
        super().__init__(f"device {device_id} not available")


class RetryExhaustedError(BackendError):
    """Raised when the miss tracker refuses another re-discovery."""

    def __init__(self, device_id: str) -> None:
        """Initialize retry exhausted error.

        Args:
            device_id: Device whose lookups are being refused
        """
        self.device_id = device_id
        super().__init__(f"device {device_id} not available, no more tries")


class UnsupportedOperationError(BackendError):
    """Raised when a state query or action is not defined for a device."""

    pass


class UnknownPlatformError(BackendError):
    """Raised when a device carries a platform no component handles."""

    def __init__(self, platform: str) -> None:
        """Initialize unknown platform error.

        Args:
            platform: The unhandled platform value
        """
        self.platform = platform
        super().__init__(f"unknown device platform: {platform}")
