"""Link shortener service."""

from relaybot.services.shortener.client import LinkShortener

__all__ = ["LinkShortener"]
