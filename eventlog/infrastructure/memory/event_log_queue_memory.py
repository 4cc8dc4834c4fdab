"""In-memory event log queue backed by asyncio.Queue. Publisher and consumer in one object, for tests."""

import asyncio
import logging
from typing import Awaitable, Callable

from eventlog.application.exceptions import QueueError
from eventlog.domain.models.event_log import EventLog
from eventlog.domain.schemas.event_log import EventLogMessage

logger = logging.getLogger(__name__)

MessageHandler = Callable[[bytes], Awaitable[object]]


class InMemoryEventLogQueue:
    """
    Implements EventLogPublisher. Messages are serialized on enqueue so producer and
    consumer never share an EventLog instance, matching the broker boundary.
    """

    def __init__(self, max_size: int = 0) -> None:
        self._queue: asyncio.Queue[bytes] = asyncio.Queue(maxsize=max_size)

    def qsize(self) -> int:
        return self._queue.qsize()

    async def enqueue(self, event: EventLog) -> None:
        try:
            self._queue.put_nowait(EventLogMessage.from_event_log(event).to_bytes())
        except asyncio.QueueFull as e:
            logger.error("event_log_enqueue_failed", extra={"error": "queue full"})
            raise QueueError("Failed to enqueue event: queue is full") from e

    async def put_raw(self, body: bytes) -> None:
        """Enqueue an arbitrary body, e.g. a malformed payload."""
        await self._queue.put(body)

    async def consume(self, handler: MessageHandler) -> None:
        """Deliver messages to handler until cancelled. Each message is delivered once."""
        while True:
            body = await self._queue.get()
            try:
                await handler(body)
            finally:
                self._queue.task_done()

    async def drain(self, handler: MessageHandler) -> int:
        """Deliver only the messages already queued. Returns how many were delivered."""
        delivered = 0
        while not self._queue.empty():
            body = self._queue.get_nowait()
            try:
                await handler(body)
            finally:
                self._queue.task_done()
            delivered += 1
        return delivered
