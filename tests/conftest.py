"""Shared fixtures."""

import pytest

from relaybot.config import Settings
from tests.helpers import SECRET


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        github_webhook_secret=SECRET,
        irc_channels=["#dev", "#ops"],
        reconnect_interval=0,
        write_timeout=1,
        shortener_url="https://short.test/create",
    )
