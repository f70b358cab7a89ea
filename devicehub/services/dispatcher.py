"""Action dispatch to the platform a device came from."""

from __future__ import annotations

import logging

from devicehub.adapters.homeassistant import HomeAssistantConnector
from devicehub.adapters.lirc import LircConnector
from devicehub.adapters.roku import RokuConnector
from devicehub.core.interfaces.connector import UnknownPlatformError, UnsupportedOperationError
from devicehub.core.models import ActionOutcome, Device, Platform
from devicehub.security import sanitize

logger = logging.getLogger(__name__)


class ActionDispatcher:
    """Maps a device action to a platform command and invokes it.

    The device id and command token are sanitized before they reach a
    subprocess argument or URL path, for every platform.
    """

    def __init__(
        self,
        lirc: LircConnector,
        roku: RokuConnector,
        homeassistant: HomeAssistantConnector,
        max_argument_length: int,
    ) -> None:
        """Initialize dispatcher.

        Args:
            lirc: Infrared connector (irsend)
            roku: Roku connector (launch, keypress)
            homeassistant: Home Assistant connector (service calls)
            max_argument_length: Truncation length for sanitized arguments
        """
        self.lirc = lirc
        self.roku = roku
        self.homeassistant = homeassistant
        self.max_argument_length = max_argument_length

    async def dispatch(self, device: Device, action: str) -> ActionOutcome:
        """Perform an action on a device.

        Args:
            device: Resolved device
            action: Action name (a key of device.actions)

        Returns:
            ActionOutcome naming the device and action

        Raises:
            UnsupportedOperationError: If the device does not expose the action
            UnknownPlatformError: If no invocation is defined for the platform
            BackendUnavailableError: If the backend call fails
        """
        if not device.supports(action):
            raise UnsupportedOperationError(
                f"device {device.id} not capable of action {action}"
            )

        device_id = sanitize(device.id, self.max_argument_length)
        command = sanitize(device.command_for(action), self.max_argument_length)
        logger.info(f"Dispatching {action} ({command}) to device {device_id}")

        if device.platform == Platform.HOMEASSISTANT:
            await self.homeassistant.call_service(command, device_id)
        elif device.platform == Platform.ROKU_APP:
            await self.roku.launch(device_id)
        elif device.platform == Platform.ROKU:
            await self.roku.keypress(command)
        elif device.platform == Platform.LIRC:
            await self.lirc.send(device_id, command)
        else:
            raise UnknownPlatformError(str(device.platform))

        return ActionOutcome(id=device.id, action=action)
