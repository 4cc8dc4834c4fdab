"""RabbitMQ consumer loop: drains the event log queue into storage, acknowledging every message."""

import logging

from aio_pika.abc import AbstractConnection, AbstractIncomingMessage

from eventlog.application.event_log_consumer import process_event_log_message
from eventlog.application.event_log_repository import EventLogRepository
from eventlog.config.settings import AppSettings
from eventlog.infrastructure.messaging.rabbitmq_topology import (
    EventLogTopology,
    declare_topology,
)

logger = logging.getLogger(__name__)


class RabbitMQEventLogConsumer:
    """
    Single consumer on the event log queue, on its own channel. At most one attempt per
    message: failures are logged by the handler and the message is acked anyway.
    """

    def __init__(
        self,
        connection: AbstractConnection,
        repository: EventLogRepository,
        topology: EventLogTopology | None = None,
        prefetch_count: int = 10,
    ) -> None:
        self._connection = connection
        self._repository = repository
        self._topology = topology or EventLogTopology()
        self._prefetch_count = prefetch_count

    @classmethod
    def from_settings(
        cls,
        connection: AbstractConnection,
        repository: EventLogRepository,
        settings: AppSettings,
    ) -> "RabbitMQEventLogConsumer":
        return cls(
            connection,
            repository,
            topology=EventLogTopology.from_settings(settings),
            prefetch_count=settings.consumer_prefetch_count,
        )

    async def run(self) -> None:
        """Consume until cancelled."""
        channel = await self._connection.channel()
        await channel.set_qos(prefetch_count=self._prefetch_count)
        _, queue = await declare_topology(channel, self._topology)
        logger.info("event_log_consumer_started", extra={"queue": self._topology.queue})
        try:
            async with queue.iterator() as queue_iter:
                async for message in queue_iter:
                    await self.on_message(message)
        finally:
            logger.info("event_log_consumer_stopped", extra={"queue": self._topology.queue})
            if not channel.is_closed:
                await channel.close()

    async def on_message(self, message: AbstractIncomingMessage) -> bool:
        """Process one delivery and ack it regardless of the outcome."""
        async with message.process(requeue=False, ignore_processed=True):
            return await process_event_log_message(message.body, self._repository)
