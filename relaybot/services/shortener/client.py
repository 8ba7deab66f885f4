"""Link shortener client - data layer."""

from typing import Optional

import httpx

from relaybot.config import Settings
from relaybot.core.exceptions import ShortenerError
from relaybot.core.logging import get_logger

logger = get_logger("shortener.client")


class LinkShortener:
    """Turns long GitHub URLs into short display links.

    The service answers ``201 Created`` with the short link in the
    ``Location`` header. Anything else counts as a failure.
    """

    def __init__(self, settings: Settings, client: Optional[httpx.AsyncClient] = None) -> None:
        self._endpoint = settings.shortener_url
        self._timeout = settings.shortener_timeout
        self._client = client

    async def shorten(self, url: str) -> str:
        """Shorten a URL or raise ShortenerError."""
        try:
            if self._client is not None:
                response = await self._post(self._client, url)
            else:
                async with httpx.AsyncClient() as client:
                    response = await self._post(client, url)
        except httpx.HTTPError as e:
            raise ShortenerError(url, f"transport error: {e}") from e

        if response.status_code != 201:
            raise ShortenerError(url, f"unexpected status {response.status_code}")

        location = response.headers.get("Location")
        if not location:
            raise ShortenerError(url, "missing Location header")

        return location

    async def shorten_or_original(self, url: str) -> str:
        """Shorten a URL, falling back to the original on any failure."""
        try:
            short = await self.shorten(url)
        except ShortenerError as e:
            logger.warning(f"{e}; using original URL")
            return url

        logger.debug(f"Shortened {url} -> {short}")
        return short

    async def _post(self, client: httpx.AsyncClient, url: str) -> httpx.Response:
        return await client.post(
            self._endpoint,
            data={"url": url},
            timeout=self._timeout,
            follow_redirects=False,
        )
