"""LIRC infrared connector.

Checks that the local lircd daemon is running and exposes the statically
known infrared remote as a single device. Key presses are sent through the
irsend utility.
"""

from __future__ import annotations

import asyncio
import copy
import logging
import shlex
from typing import Any

from devicehub.core.interfaces.connector import BackendUnavailableError
from devicehub.models import Config

logger = logging.getLogger(__name__)

# The remote's identity is configured in lircd.conf, not introspected
LIRC_DEVICE: dict[str, Any] = {
    "id": "sharp",
    "name": "TV",
    "platform": "lirc",
    "manufacturer": "Sharp",
    "actions": {
        "TurnOn": "KEY_POWER",
        "TurnOff": "KEY_POWER",
        "VolumeUp": "KEY_VOLUMEUP",
        "VolumeDown": "KEY_VOLUMEDOWN",
        "Mute": "KEY_MUTE",
    },
}


class LircConnector:
    """Connector for infrared devices controlled through lircd.

    Configuration:
        lirc_status_command: Command that succeeds when lircd is running
        lirc_send_command: Command prefix for sending a key
        lirc_use_sudo: Prefix the send command with sudo
        request_timeout: Maximum seconds a command may run
    """

    def __init__(self, config: Config) -> None:
        """Initialize LIRC connector.

        Args:
            config: Application configuration
        """
        self.status_command = shlex.split(config.lirc_status_command)
        self.send_command = shlex.split(config.lirc_send_command)
        if config.lirc_use_sudo:
            self.send_command = ["sudo", *self.send_command]
        self.timeout = config.request_timeout

    @property
    def name(self) -> str:
        """Connector identifier."""
        return "lirc"

    async def list_raw_devices(self) -> list[dict[str, Any]]:
        """Return the infrared remote if lircd is running.

        Returns:
            Single-element list with the fixed remote description

        Raises:
            BackendUnavailableError: If the status check fails
        """
        await self._run(self.status_command)
        return [copy.deepcopy(LIRC_DEVICE)]

    async def send(self, remote: str, key: str) -> str:
        """Send a key press to a remote.

        Arguments must already be sanitized; they are passed as separate
        argv entries, never through a shell.

        Args:
            remote: Remote name as configured in lircd.conf
            key: Key name (e.g. KEY_POWER)

        Returns:
            Command stdout
        """
        logger.info(f"Sending IR key {key} to remote {remote}")
        return await self._run([*self.send_command, remote, key])

    async def _run(self, cmd: list[str]) -> str:
        """Run a command and treat any stderr output as failure.

        Args:
            cmd: Command and arguments

        Returns:
            Decoded stdout

        Raises:
            BackendUnavailableError: If the command cannot run, times out,
                writes to stderr, or exits non-zero
        """
        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise BackendUnavailableError(f"cannot run {cmd[0]}: {e}", self.name) from e

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            proc.kill()
            await proc.wait()
            raise BackendUnavailableError(
                f"command timed out after {self.timeout}s: {' '.join(cmd)}", self.name
            ) from e

        stdout_str = stdout.decode("utf-8", errors="replace").strip() if stdout else ""
        stderr_str = stderr.decode("utf-8", errors="replace").strip() if stderr else ""

        if stderr_str:
            raise BackendUnavailableError(stderr_str, self.name)
        if proc.returncode != 0:
            raise BackendUnavailableError(
                f"command exited with {proc.returncode}: {' '.join(cmd)}", self.name
            )
        return stdout_str
