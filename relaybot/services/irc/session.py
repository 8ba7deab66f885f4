"""Persistent IRC session: connect, join, reconnect, deliver.

The session owns a single connection at a time and runs two tasks:

- ``run`` connects, registers, reads protocol messages and reconnects after a
  fixed interval whenever the link drops.
- ``deliver_forever`` drains the notification queue into the configured
  channels while the session is connected.

All outbound lines go through ``send``, which holds a lock, so PONGs, JOINs,
notifications and the final QUIT never interleave on the wire.
"""

import asyncio
import ssl
from enum import Enum
from typing import Awaitable, Callable, Optional

from relaybot.config import Settings
from relaybot.core.exceptions import ChatConnectionError
from relaybot.core.logging import get_logger
from relaybot.services.irc.protocol import (
    ERR_NICKNAMEINUSE,
    RPL_WELCOME,
    Message,
    decode_line,
    format_line,
    parse_message,
)
from relaybot.services.irc.queue import Notification, NotificationQueue

logger = get_logger("irc.session")

Connector = Callable[[], Awaitable[tuple[asyncio.StreamReader, asyncio.StreamWriter]]]
Handler = Callable[[Message], Awaitable[None]]


class SessionState(str, Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    RECONNECTING = "reconnecting"


class ChatSession:
    """IRC connection state machine with a single outbound writer."""

    def __init__(
        self,
        settings: Settings,
        queue: NotificationQueue,
        connector: Optional[Connector] = None,
    ) -> None:
        self._settings = settings
        self._queue = queue
        self._connector = connector or self._open_connection
        self._channels = list(settings.irc_channels)
        self._nickname = settings.irc_nickname

        self._state = SessionState.DISCONNECTED
        self._writer: Optional[asyncio.StreamWriter] = None
        self._write_lock = asyncio.Lock()
        self._connected = asyncio.Event()
        self._stopping = False
        self._tasks: list[asyncio.Task] = []

        self._handlers: dict[str, Handler] = {
            "PING": self._on_ping,
            RPL_WELCOME: self._on_welcome,
            "KICK": self._on_kick,
            ERR_NICKNAMEINUSE: self._on_nickname_in_use,
            "ERROR": self._on_error,
        }

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def nickname(self) -> str:
        return self._nickname

    @property
    def channels(self) -> list[str]:
        return list(self._channels)

    async def wait_connected(self) -> None:
        await self._connected.wait()

    # Lifecycle

    def start(self) -> None:
        """Start the connection and delivery tasks on the running loop."""
        self._stopping = False
        self._tasks = [
            asyncio.create_task(self.run(), name="irc-session"),
            asyncio.create_task(self.deliver_forever(), name="irc-delivery"),
        ]

    async def stop(self) -> None:
        """Send QUIT, then cancel the session tasks.

        Notifications still queued are discarded.
        """
        await self.quit(self._settings.irc_quit_message)
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks = []
        self._state = SessionState.DISCONNECTED
        dropped = self._queue.qsize()
        if dropped:
            logger.info(f"Discarding {dropped} queued notifications on shutdown")

    async def run(self) -> None:
        """Connect and keep reconnecting until stopped."""
        interval = self._settings.reconnect_interval
        while not self._stopping:
            self._state = SessionState.CONNECTING
            target = f"{self._settings.irc_server}:{self._settings.irc_port}"
            logger.info(f"Connecting to {target}")

            try:
                reader, writer = await self._connector()
            except (OSError, asyncio.TimeoutError) as e:
                logger.error(f"Connection to {target} failed: {e!r}")
            else:
                self._writer = writer
                try:
                    await self._register()
                    await self._read_loop(reader)
                    logger.warning(f"Connection to {target} closed by server")
                except (OSError, asyncio.TimeoutError) as e:
                    logger.error(f"Connection to {target} lost: {e!r}")
                finally:
                    await self._close_writer()

            if self._stopping:
                break

            self._state = SessionState.RECONNECTING
            logger.info(f"Reconnecting in {interval:g}s")
            await asyncio.sleep(interval)

        self._state = SessionState.DISCONNECTED

    async def quit(self, message: str) -> None:
        """Best-effort farewell; the session will not reconnect afterwards."""
        self._stopping = True
        if self._writer is None:
            return
        try:
            await self.send("QUIT", message)
        except (OSError, asyncio.TimeoutError) as e:
            logger.warning(f"Failed to send QUIT: {e!r}")
        await self._close_writer()

    # Outbound

    async def send(self, command: str, *params: str) -> None:
        """Write one protocol line. The only path to the socket."""
        async with self._write_lock:
            writer = self._writer
            if writer is None or writer.is_closing():
                raise ChatConnectionError("Not connected")
            writer.write(format_line(command, *params))
            await asyncio.wait_for(writer.drain(), timeout=self._settings.write_timeout)

    async def deliver(self, notification: Notification) -> bool:
        """Send a notification to every channel if connected.

        Returns False when the notification was dropped.
        """
        if self._state is not SessionState.CONNECTED:
            logger.debug(f"Dropping notification while {self._state.value}: {notification.text}")
            return False

        command = "NOTICE" if self._settings.irc_use_notice else "PRIVMSG"
        try:
            for channel in self._channels:
                await self.send(command, channel, notification.text)
        except (OSError, asyncio.TimeoutError) as e:
            logger.error(f"Delivery failed, closing connection: {e!r}")
            await self._close_writer()
            return False
        return True

    async def deliver_forever(self) -> None:
        while True:
            notification = await self._queue.get()
            try:
                await self.deliver(notification)
            finally:
                self._queue.task_done()

    # Inbound

    async def dispatch(self, message: Message) -> None:
        handler = self._handlers.get(message.command)
        if handler is not None:
            await handler(message)

    async def _read_loop(self, reader: asyncio.StreamReader) -> None:
        while True:
            raw = await reader.readline()
            if not raw:
                return
            message = parse_message(decode_line(raw))
            if message is not None:
                await self.dispatch(message)
            if self._writer is None:
                return

    async def _on_ping(self, message: Message) -> None:
        await self.send("PONG", *message.params[:1])

    async def _on_welcome(self, message: Message) -> None:
        if message.params:
            self._nickname = message.params[0]
        self._state = SessionState.CONNECTED
        self._connected.set()
        logger.info(f"Registered as {self._nickname}")
        for channel in self._channels:
            await self.send("JOIN", channel)
            logger.info(f"Joining {channel}")

    async def _on_kick(self, message: Message) -> None:
        if len(message.params) < 2:
            return
        channel, target = message.params[0], message.params[1]
        if target.lower() != self._nickname.lower():
            return
        if channel.lower() not in (c.lower() for c in self._channels):
            return
        logger.warning(f"Kicked from {channel} by {message.nick}, rejoining")
        await self.send("JOIN", channel)

    async def _on_nickname_in_use(self, message: Message) -> None:
        if self._state is SessionState.CONNECTED:
            return
        self._nickname += "_"
        logger.warning(f"Nickname in use, trying {self._nickname}")
        await self.send("NICK", self._nickname)

    async def _on_error(self, message: Message) -> None:
        reason = message.params[-1] if message.params else ""
        logger.error(f"Server closed the link: {reason}")
        await self._close_writer()

    # Connection plumbing

    async def _register(self) -> None:
        self._nickname = self._settings.irc_nickname
        if self._settings.irc_password:
            await self.send("PASS", self._settings.irc_password)
        await self.send("NICK", self._nickname)
        await self.send(
            "USER",
            self._settings.irc_username,
            "0",
            "*",
            self._settings.irc_realname,
        )

    async def _open_connection(self) -> tuple[asyncio.StreamReader, asyncio.StreamWriter]:
        ssl_context = ssl.create_default_context() if self._settings.irc_use_tls else None
        return await asyncio.wait_for(
            asyncio.open_connection(
                self._settings.irc_server,
                self._settings.irc_port,
                ssl=ssl_context,
            ),
            timeout=self._settings.connect_timeout,
        )

    async def _close_writer(self) -> None:
        writer, self._writer = self._writer, None
        self._connected.clear()
        if self._state is SessionState.CONNECTED:
            self._state = SessionState.DISCONNECTED
        if writer is None:
            return
        writer.close()
        try:
            await writer.wait_closed()
        except OSError as e:
            logger.debug(f"Error while closing connection: {e!r}")
