"""GitHub webhook service - business logic layer."""

from typing import Optional

from relaybot.config import Settings
from relaybot.core.logging import get_logger
from relaybot.core.security import require_hub_signature
from relaybot.services.github.decoder import decode_event
from relaybot.services.irc.formatting import ColorTheme, format_event
from relaybot.services.irc.queue import Notification, NotificationQueue
from relaybot.services.shortener.client import LinkShortener

logger = get_logger("github.service")


class WebhookRelay:
    """Turns authenticated webhook deliveries into queued IRC notifications."""

    def __init__(
        self,
        settings: Settings,
        queue: NotificationQueue,
        shortener: LinkShortener,
        theme: ColorTheme,
    ) -> None:
        self._secret = settings.secret_bytes
        self._queue = queue
        self._shortener = shortener
        self._theme = theme

    async def handle(
        self,
        event_type: Optional[str],
        signature: Optional[str],
        body: bytes,
    ) -> Optional[Notification]:
        """Verify, decode, format and enqueue one delivery.

        Returns the queued notification, or None when the event is ignored.
        Waits while the notification queue is full.

        Raises:
            SignatureVerificationError: If the signature does not match
            EventDecodeError: If the body does not match the event type
        """
        require_hub_signature(body, signature, self._secret)

        event = decode_event(event_type, body)
        if event is None:
            return None

        if not event.is_relayed:
            logger.info(f"Ignoring {event_type} action: {event.action}")
            return None

        url = await self._shortener.shorten_or_original(event.subject.url)
        notification = Notification(format_event(event, self._theme, url))

        if self._queue.full():
            logger.warning("Notification queue full, waiting for delivery")
        await self._queue.put(notification)

        logger.info(
            f"Queued {event_type} {event.action} on {event.repository.name} "
            f"by {event.sender.login}"
        )
        return notification
