"""Tests for the in-memory queue double: copy semantics, bounded capacity, consume loop."""

import asyncio
from datetime import datetime, timezone

import pytest

from eventlog.application.event_log_consumer import process_event_log_message
from eventlog.application.exceptions import QueueError
from eventlog.domain.models.event_log import EventLog, EventType
from eventlog.domain.models.filter import Filter
from eventlog.infrastructure.memory.event_log_queue_memory import InMemoryEventLogQueue
from eventlog.infrastructure.memory.event_log_repository_memory import InMemoryEventLogRepository


def _event(description: str = "signup") -> EventLog:
    return EventLog(
        type=EventType.API,
        description=description,
        event_date=datetime(2024, 1, 10, tzinfo=timezone.utc),
    )


async def test_enqueue_stores_serialized_bytes():
    queue = InMemoryEventLogQueue()
    await queue.enqueue(_event())

    received = []

    async def handler(body):
        received.append(body)

    assert await queue.drain(handler) == 1
    assert isinstance(received[0], bytes)
    assert queue.qsize() == 0


async def test_full_queue_raises_queue_error():
    queue = InMemoryEventLogQueue(max_size=1)
    await queue.enqueue(_event("a"))
    with pytest.raises(QueueError):
        await queue.enqueue(_event("b"))


async def test_consume_loop_persists_until_cancelled():
    queue = InMemoryEventLogQueue()
    repository = InMemoryEventLogRepository()
    for name in ["one", "two", "three"]:
        await queue.enqueue(_event(name))

    task = asyncio.create_task(
        queue.consume(lambda body: process_event_log_message(body, repository))
    )
    for _ in range(100):
        if len(repository) == 3:
            break
        await asyncio.sleep(0)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    page = await repository.filter(Filter(), 1, 10)
    assert [e.description for e in page.data] == ["one", "two", "three"]
    assert [e.id for e in page.data] == [1, 2, 3]
