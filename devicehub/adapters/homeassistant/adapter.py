"""Home Assistant REST API connector.

Fetches entity states for discovery and state queries, and calls the
generic homeassistant.turn_on/turn_off services for control.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from devicehub.core.interfaces.connector import (
    BackendUnavailableError,
    MalformedUpstreamResponseError,
)
from devicehub.models import Config

logger = logging.getLogger(__name__)


class HomeAssistantConnector:
    """Client for the Home Assistant REST API."""

    def __init__(self, config: Config) -> None:
        """Initialize Home Assistant connector.

        Args:
            config: Application configuration
        """
        self.base_url = config.ha_base_url
        self.token = config.ha_token
        self.timeout = config.request_timeout

    @property
    def name(self) -> str:
        """Connector identifier."""
        return "homeassistant"

    def _get_headers(self) -> dict[str, str]:
        """Build authorization headers."""
        return {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        }

    async def list_raw_devices(self) -> list[dict[str, Any]]:
        """Fetch all entity states.

        Returns:
            Raw state objects as returned by /api/states

        Raises:
            BackendUnavailableError: If Home Assistant cannot be reached
            MalformedUpstreamResponseError: If the body is not a JSON list
        """
        data = await self._request("GET", "/api/states")
        if not isinstance(data, list):
            raise MalformedUpstreamResponseError(
                f"expected a list of states, got {type(data).__name__}", self.name
            )
        logger.debug(f"Home Assistant reported {len(data)} states")
        return data

    async def get_state(self, entity_id: str) -> dict[str, Any]:
        """Get the state object of a single entity."""
        data = await self._request("GET", f"/api/states/{entity_id}")
        if not isinstance(data, dict) or "state" not in data:
            raise MalformedUpstreamResponseError(f"unexpected state for {entity_id}", self.name)
        return data

    async def call_service(self, service: str, entity_id: str) -> Any:
        """Call a homeassistant.<service> service on one entity.

        Args:
            service: Service name (turn_on, turn_off)
            entity_id: Target entity

        Returns:
            Parsed JSON response (list of changed states)
        """
        logger.info(f"Calling homeassistant.{service} on {entity_id}")
        return await self._request(
            "POST",
            f"/api/services/homeassistant/{service}",
            json={"entity_id": entity_id},
        )

    async def _request(
        self, method: str, path: str, json: dict[str, Any] | None = None
    ) -> Any:
        """Issue an authenticated request and decode the JSON body.

        Raises:
            BackendUnavailableError: On timeout, connection, or HTTP status errors
            MalformedUpstreamResponseError: If the body is not valid JSON
        """
        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                if method == "GET":
                    response = await client.get(url, headers=self._get_headers())
                else:
                    response = await client.post(url, headers=self._get_headers(), json=json)
                response.raise_for_status()

        except httpx.TimeoutException as e:
            raise BackendUnavailableError(f"timeout calling {url} (>{self.timeout}s)", self.name) from e

        except httpx.HTTPError as e:
            raise BackendUnavailableError(
                f"HTTP error calling {url}: {type(e).__name__}: {e}", self.name
            ) from e

        try:
            return response.json()
        except ValueError as e:
            raise MalformedUpstreamResponseError(f"invalid JSON from {url}: {e}", self.name) from e
