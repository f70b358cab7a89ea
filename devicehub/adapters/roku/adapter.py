"""Roku External Control Protocol connector.

Lists installed channels from /query/apps and exposes the launch,
keypress, and active-app endpoints used for control and state queries.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import Any

import httpx

from devicehub.core.interfaces.connector import (
    BackendUnavailableError,
    MalformedUpstreamResponseError,
)
from devicehub.models import Config

logger = logging.getLogger(__name__)


class RokuConnector:
    """Client for a Roku player's ECP API."""

    def __init__(self, config: Config) -> None:
        """Initialize Roku connector.

        Args:
            config: Application configuration
        """
        self.base_url = config.roku_base_url
        self.timeout = config.request_timeout

    @property
    def name(self) -> str:
        """Connector identifier."""
        return "roku"

    async def list_raw_devices(self) -> list[dict[str, Any]]:
        """Fetch the installed apps.

        Returns:
            List of app dicts with keys: id, type, version, name

        Raises:
            BackendUnavailableError: If the player cannot be reached
            MalformedUpstreamResponseError: If the body is not an <apps> document
        """
        response = await self._request("GET", "/query/apps")
        apps = self.parse_apps(response.text)
        logger.debug(f"Roku reported {len(apps)} apps")
        return apps

    async def launch(self, app_id: str) -> None:
        """Launch an app by id."""
        await self._request("POST", f"/launch/{app_id}")

    async def keypress(self, key: str) -> None:
        """Press a remote-control key (Play, Rev, Fwd, ...)."""
        await self._request("POST", f"/keypress/{key}")

    async def active_app(self) -> dict[str, Any]:
        """Get the app currently in the foreground.

        Returns:
            Dict with keys: id (None on the home screen), type, name
        """
        response = await self._request("GET", "/query/active-app")
        return self.parse_active_app(response.text)

    def parse_apps(self, body: str) -> list[dict[str, Any]]:
        """Parse a /query/apps XML document.

        Args:
            body: XML response text

        Returns:
            List of app dicts
        """
        root = self._parse_xml(body, expected_root="apps")
        return [self._app_from_element(app) for app in root.findall("app")]

    def parse_active_app(self, body: str) -> dict[str, Any]:
        """Parse a /query/active-app XML document."""
        root = self._parse_xml(body, expected_root="active-app")
        app = root.find("app")
        if app is None:
            raise MalformedUpstreamResponseError("active-app response has no <app> element", self.name)
        return self._app_from_element(app)

    def _parse_xml(self, body: str, expected_root: str) -> ET.Element:
        try:
            root = ET.fromstring(body)
        except ET.ParseError as e:
            raise MalformedUpstreamResponseError(f"invalid XML: {e}", self.name) from e

        if root.tag != expected_root:
            raise MalformedUpstreamResponseError(
                f"expected <{expected_root}> root element, got <{root.tag}>", self.name
            )
        return root

    @staticmethod
    def _app_from_element(app: ET.Element) -> dict[str, Any]:
        return {
            "id": app.get("id"),
            "type": app.get("type"),
            "version": app.get("version"),
            "name": (app.text or "").strip(),
        }

    async def _request(self, method: str, path: str) -> httpx.Response:
        """Issue a request against the player.

        Raises:
            BackendUnavailableError: On timeout, connection, or HTTP status errors
        """
        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                if method == "GET":
                    response = await client.get(url)
                else:
                    response = await client.post(url)
                response.raise_for_status()
            return response

        except httpx.TimeoutException as e:
            raise BackendUnavailableError(f"timeout calling {url} (>{self.timeout}s)", self.name) from e

        except httpx.HTTPError as e:
            raise BackendUnavailableError(
                f"HTTP error calling {url}: {type(e).__name__}: {e}", self.name
            ) from e
