"""Application configuration for the Device Hub gateway.

Configuration is read from environment variables (and an optional ``.env``
file). The backend addresses, the Home Assistant token, and the lookup policy
knobs have no defaults: a missing value fails validation at startup.
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Gateway configuration.

    Attributes:
        roku_base_url: Roku External Control Protocol address (http://host:8060)
        ha_base_url: Home Assistant base URL (http://host:8123)
        ha_token: Home Assistant long-lived access token
        port: HTTP listening port
        request_timeout: Per-call backend timeout in seconds
        miss_cooldown: Seconds after the last miss before a miss count decays
        miss_threshold: Consecutive misses allowed before lookups are refused
        max_argument_length: Maximum length of a sanitized command argument
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    roku_base_url: str = Field(..., description="Roku ECP base URL")
    ha_base_url: str = Field(..., description="Home Assistant base URL")
    ha_token: str = Field(..., description="Home Assistant access token")
    port: int = Field(..., gt=0, lt=65536, description="HTTP listening port")
    request_timeout: float = Field(..., gt=0, description="Backend call timeout (seconds)")
    miss_cooldown: float = Field(..., gt=0, description="Miss record cooldown (seconds)")
    miss_threshold: int = Field(..., ge=1, description="Miss count before lookups are refused")
    max_argument_length: int = Field(..., ge=1, description="Max sanitized argument length")

    host: str = Field(default="0.0.0.0", description="HTTP bind address")
    sweep_interval: float = Field(default=10.0, gt=0, description="Miss sweep period (seconds)")
    log_level: str = Field(default="INFO", description="Logging level")

    lirc_status_command: str = Field(
        default="systemctl is-active lircd",
        description="Command whose success means lircd is running",
    )
    lirc_send_command: str = Field(
        default="irsend SEND_ONCE",
        description="Command prefix used to send an IR key (remote and key are appended)",
    )
    lirc_use_sudo: bool = Field(
        default=False,
        description="Prefix the send command with sudo",
    )

    @field_validator("roku_base_url", "ha_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URLs so paths can be appended with a single slash."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"base URL must use http:// or https://, got: {v!r}")
        return v.rstrip("/")

    @field_validator("ha_token")
    @classmethod
    def token_not_blank(cls, v: str) -> str:
        """Reject empty tokens."""
        if not v.strip():
            raise ValueError("ha_token must not be empty")
        return v.strip()
