"""
Event log use cases. Each is a thin delegation to the gateway passed in, so the
entry points stay independent of the transport and storage implementations.
Errors propagate unchanged; gateways log them where they occur.
"""

import logging
from typing import Union

from eventlog.application.event_log_publisher import EventLogPublisher
from eventlog.application.event_log_repository import EventLogPage, EventLogRepository
from eventlog.domain.models.event_log import EventLog
from eventlog.domain.models.filter import Filter

logger = logging.getLogger(__name__)


async def enqueue_event_log(publisher: EventLogPublisher, event: EventLog) -> None:
    """Ingestion: hand a freshly accepted event log to the queue. Does not wait for persistence."""
    await publisher.enqueue(event)
    logger.info(
        "event_log_enqueued",
        extra={"event_type": event.type.value, "event_date": event.event_date.isoformat()},
    )


async def create_event_log(repository: EventLogRepository, event: EventLog) -> None:
    """Persistence: store a dequeued event log. Invoked only by the consumer loop."""
    await repository.create(event)
    logger.info(
        "event_log_persisted",
        extra={"event_type": event.type.value, "event_date": event.event_date.isoformat()},
    )


async def get_event_log(repository: EventLogRepository, event_id: Union[int, str]) -> EventLog:
    return await repository.get(event_id)


async def filter_event_logs(
    repository: EventLogRepository,
    filter_: Filter,
    page: int,
    limit: int,
) -> EventLogPage:
    return await repository.filter(filter_, page, limit)
