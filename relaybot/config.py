"""Configuration for the GitHub to IRC relay."""

import json
from functools import lru_cache
from typing import Annotated, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support.

    Every field can be set through a ``RELAYBOT_``-prefixed environment
    variable or the ``.env`` file, e.g. ``RELAYBOT_IRC_CHANNELS=#dev,#ops``.
    """

    model_config = SettingsConfigDict(
        env_prefix="RELAYBOT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    environment: str = "development"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 1337
    webhook_path: str = "/"

    # GitHub
    github_webhook_secret: str = Field(min_length=1)

    # IRC connection
    irc_server: str = "chat.freenode.net"
    irc_port: int = 6667
    irc_use_tls: bool = False
    irc_password: Optional[str] = None

    # IRC identity
    irc_nickname: str = "URY-Github"
    irc_username: str = "URY-Github"
    irc_realname: str = "URY-Github"

    # IRC delivery
    irc_channels: Annotated[list[str], NoDecode] = Field(min_length=1)
    irc_use_notice: bool = False
    irc_quit_message: str = "Shutting down"

    # Delivery pipeline
    queue_capacity: int = Field(default=10, ge=1)
    reconnect_interval: float = Field(default=60.0, ge=0)
    connect_timeout: float = Field(default=30.0, gt=0)
    write_timeout: float = Field(default=30.0, gt=0)

    # Link shortener
    shortener_url: str = "https://git.io"
    shortener_timeout: float = Field(default=10.0, gt=0)

    # Formatting
    colors_enabled: bool = True

    @field_validator("irc_channels", mode="before")
    @classmethod
    def split_channels(cls, value):
        """Accept a comma-separated string or a JSON list of channels."""
        if isinstance(value, str):
            value = value.strip()
            if value.startswith("["):
                value = json.loads(value)
            else:
                value = value.split(",")
        return [channel.strip() for channel in value if channel and channel.strip()]

    @property
    def secret_bytes(self) -> bytes:
        return self.github_webhook_secret.encode()


@lru_cache
def get_settings() -> Settings:
    """Build the settings once per process."""
    return Settings()
