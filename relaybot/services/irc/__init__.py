"""IRC delivery service."""

from relaybot.services.irc.formatting import DEFAULT_THEME, PLAIN_THEME, ColorTheme, format_event
from relaybot.services.irc.queue import Notification, NotificationQueue
from relaybot.services.irc.session import ChatSession, SessionState

__all__ = [
    "ChatSession",
    "ColorTheme",
    "DEFAULT_THEME",
    "Notification",
    "NotificationQueue",
    "PLAIN_THEME",
    "SessionState",
    "format_event",
]
