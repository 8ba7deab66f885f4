"""Bounded FIFO between webhook ingestion and IRC delivery."""

import asyncio
from dataclasses import dataclass


@dataclass(frozen=True)
class Notification:
    """One formatted line destined for the configured channels."""

    text: str


class NotificationQueue:
    """Fixed-capacity notification queue.

    ``put`` waits while the queue is full, so a slow IRC connection pushes
    back on the webhook handlers instead of dropping notifications.
    """

    def __init__(self, capacity: int = 10) -> None:
        if capacity < 1:
            raise ValueError("Queue capacity must be at least 1")
        self._capacity = capacity
        self._queue: asyncio.Queue[Notification] = asyncio.Queue(maxsize=capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    async def put(self, notification: Notification) -> None:
        await self._queue.put(notification)

    async def get(self) -> Notification:
        return await self._queue.get()

    def get_nowait(self) -> Notification:
        return self._queue.get_nowait()

    def task_done(self) -> None:
        self._queue.task_done()

    def qsize(self) -> int:
        return self._queue.qsize()

    def full(self) -> bool:
        return self._queue.full()

    def empty(self) -> bool:
        return self._queue.empty()
