"""Shared dependencies for API routers."""

from __future__ import annotations

from fastapi import Request

from devicehub.services.device_service import DeviceService


def get_device_service_dependency(request: Request) -> DeviceService:
    """Dependency to get the DeviceService built during startup.

    Args:
        request: Incoming request

    Returns:
        The application's DeviceService
    """
    return request.app.state.device_service
