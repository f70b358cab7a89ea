"""Device directory endpoints.

Relays DeviceService results as JSON and maps gateway errors to HTTP
status codes.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from devicehub.core.interfaces.connector import (
    BackendError,
    BackendUnavailableError,
    DeviceNotFoundError,
    DiscoveryError,
    RetryExhaustedError,
    UnsupportedOperationError,
)
from devicehub.core.models import ActionOutcome, DeviceState, DeviceSummary
from devicehub.routers.dependencies import get_device_service_dependency
from devicehub.services.device_service import DeviceService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/devices", tags=["devices"])

# Checked in order; subclasses before their bases
_STATUS_BY_ERROR: list[tuple[type[BackendError], int]] = [
    (DeviceNotFoundError, status.HTTP_404_NOT_FOUND),
    (RetryExhaustedError, status.HTTP_429_TOO_MANY_REQUESTS),
    (UnsupportedOperationError, status.HTTP_400_BAD_REQUEST),
    (BackendUnavailableError, status.HTTP_502_BAD_GATEWAY),
]


def _to_http_error(error: BackendError) -> HTTPException:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=error.message)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=error.message)


@router.get("", response_model=list[DeviceSummary])
async def list_devices(
    service: DeviceService = Depends(get_device_service_dependency),
) -> list[DeviceSummary]:
    """Discover devices and return the directory.

    Returns:
        Devices with their action names (command tokens are not exposed)
    """
    try:
        return await service.list_devices()
    except DiscoveryError as e:
        logger.error(f"Error discovering devices: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="error discovering devices",
        )


@router.get("/{device_id}/state", response_model=DeviceState)
async def get_device_state(
    device_id: str,
    service: DeviceService = Depends(get_device_service_dependency),
) -> DeviceState:
    """Get the current state of a device."""
    try:
        return await service.get_state(device_id)
    except BackendError as e:
        logger.warning(f"State request for {device_id} failed: {e}")
        raise _to_http_error(e)


@router.post("/{device_id}/actions/{action_id}", response_model=ActionOutcome)
async def perform_device_action(
    device_id: str,
    action_id: str,
    service: DeviceService = Depends(get_device_service_dependency),
) -> ActionOutcome:
    """Perform an action on a device.

    Example:
        POST /devices/light.kitchen/actions/TurnOn
    """
    try:
        return await service.perform_action(device_id, action_id)
    except BackendError as e:
        logger.warning(f"Action {action_id} on {device_id} failed: {e}")
        raise _to_http_error(e)
