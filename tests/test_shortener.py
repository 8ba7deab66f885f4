"""Tests for the link shortener client."""

from urllib.parse import parse_qs

import httpx
import pytest

from relaybot.core.exceptions import ShortenerError
from relaybot.services.shortener.client import LinkShortener

LONG_URL = "https://github.com/ury/foo/pull/7"


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestLinkShortener:
    """Tests for LinkShortener."""

    @pytest.mark.asyncio
    async def test_created_with_location(self, settings):
        """201 + Location yields the short URL."""
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(201, headers={"Location": "http://git.io/x"})

        shortener = LinkShortener(settings, client=_client(handler))

        assert await shortener.shorten(LONG_URL) == "http://git.io/x"
        assert requests[0].method == "POST"
        assert str(requests[0].url) == "https://short.test/create"
        assert parse_qs(requests[0].content.decode()) == {"url": [LONG_URL]}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [200, 302, 400, 500])
    async def test_non_created_status_fails(self, settings, status):
        """Only 201 counts as success."""
        shortener = LinkShortener(
            settings,
            client=_client(lambda request: httpx.Response(status, headers={"Location": "http://git.io/x"})),
        )

        with pytest.raises(ShortenerError):
            await shortener.shorten(LONG_URL)

    @pytest.mark.asyncio
    async def test_missing_location_fails(self, settings):
        shortener = LinkShortener(settings, client=_client(lambda request: httpx.Response(201)))

        with pytest.raises(ShortenerError):
            await shortener.shorten(LONG_URL)

    @pytest.mark.asyncio
    async def test_transport_error_fails(self, settings):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        shortener = LinkShortener(settings, client=_client(handler))

        with pytest.raises(ShortenerError) as exc_info:
            await shortener.shorten(LONG_URL)

        assert exc_info.value.url == LONG_URL

    @pytest.mark.asyncio
    async def test_shorten_or_original_success(self, settings):
        shortener = LinkShortener(
            settings,
            client=_client(lambda request: httpx.Response(201, headers={"Location": "http://git.io/x"})),
        )

        assert await shortener.shorten_or_original(LONG_URL) == "http://git.io/x"

    @pytest.mark.asyncio
    async def test_shorten_or_original_falls_back(self, settings):
        """A failed shorten returns the original long URL."""
        shortener = LinkShortener(settings, client=_client(lambda request: httpx.Response(503)))

        assert await shortener.shorten_or_original(LONG_URL) == LONG_URL
