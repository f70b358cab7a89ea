"""Device Hub FastAPI application.

Main entry point for the unified device directory. Exposes LIRC, Roku,
and Home Assistant devices through one HTTP interface.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager, suppress

from fastapi import FastAPI
from pythonjsonlogger import jsonlogger

from devicehub import __version__
from devicehub.core.interfaces.connector import DiscoveryError
from devicehub.models import Config
from devicehub.routers import devices, health
from devicehub.services.device_service import get_device_service


def setup_logging(log_level: str = "INFO") -> None:
    """Configure structured JSON logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    formatter = jsonlogger.JsonFormatter(  # type: ignore[attr-defined]
        "%(asctime)s %(name)s %(levelname)s %(message)s",
        rename_fields={"asctime": "timestamp", "levelname": "level", "name": "logger"},
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level.upper())

    # Reduce noise from httpx
    logging.getLogger("httpx").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager.

    Builds the device service, runs the boot discovery, and keeps the
    miss sweeper running until shutdown.

    Args:
        app: FastAPI application instance

    Yields:
        None
    """
    # Startup
    config = Config()
    setup_logging(config.log_level)
    logger = logging.getLogger(__name__)

    logger.info("Device Hub starting up")
    logger.info(f"Roku URL: {config.roku_base_url}")
    logger.info(f"Home Assistant URL: {config.ha_base_url}")
    logger.info(
        f"Miss policy: threshold={config.miss_threshold}, cooldown={config.miss_cooldown}s"
    )

    service = get_device_service(config)
    app.state.device_service = service

    try:
        devices_found = await service.discovery.discover(persist=True)
        logger.info(f"Boot discovery found {len(devices_found)} devices")
    except DiscoveryError as e:
        logger.warning(f"Boot discovery failed: {e}. Devices will be discovered on demand.")

    sweeper = asyncio.create_task(service.tracker.run_sweeper(config.sweep_interval))

    yield

    # Shutdown
    logger.info("Device Hub shutting down")
    sweeper.cancel()
    with suppress(asyncio.CancelledError):
        await sweeper


app = FastAPI(
    title="Device Hub",
    description="Unified device directory for LIRC, Roku, and Home Assistant",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(devices.router)
app.include_router(health.router)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint.

    Returns:
        Welcome message with API info
    """
    return {
        "message": "Device Hub",
        "version": __version__,
        "docs": "/docs",
    }
