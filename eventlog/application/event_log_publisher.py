"""Event log publisher protocol: the producer side of the ingestion queue."""

from typing import Protocol

from eventlog.domain.models.event_log import EventLog


class EventLogPublisher(Protocol):
    async def enqueue(self, event: EventLog) -> None:
        """Publish the event log for asynchronous persistence. Raises QueueError on failure."""
        ...
