# eventlog/infrastructure/messaging/rabbitmq_publisher.py

import asyncio
import contextlib
import logging

import aio_pika
from aio_pika.abc import AbstractChannel, AbstractConnection, AbstractExchange
from aio_pika.exceptions import AMQPError, ChannelInvalidStateError

from eventlog.application.exceptions import QueueError
from eventlog.config.settings import AppSettings
from eventlog.domain.models.event_log import EventLog
from eventlog.domain.schemas.event_log import EventLogMessage
from eventlog.infrastructure.messaging.rabbitmq_topology import (
    EventLogTopology,
    declare_topology,
)

logger = logging.getLogger(__name__)

PUBLISH_ERRORS = (AMQPError, ChannelInvalidStateError, ConnectionError, asyncio.TimeoutError)


class RabbitMQEventLogPublisher:
    """
    Publishes event logs with publisher confirms. Each enqueue makes up to max_attempts
    confirmed deliveries before raising QueueError. The connection is injected and owned
    by the caller; this class only opens and closes its own channel.
    """

    def __init__(
        self,
        connection: AbstractConnection,
        topology: EventLogTopology | None = None,
        max_attempts: int = 3,
        publish_timeout: float = 5.0,
        retry_backoff: float = 0.2,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self._connection = connection
        self._topology = topology or EventLogTopology()
        self._max_attempts = max_attempts
        self._publish_timeout = publish_timeout
        self._retry_backoff = retry_backoff
        self._channel: AbstractChannel | None = None
        self._exchange: AbstractExchange | None = None

    @classmethod
    def from_settings(cls, connection: AbstractConnection, settings: AppSettings):
        return cls(
            connection,
            topology=EventLogTopology.from_settings(settings),
            max_attempts=settings.publish_max_attempts,
            publish_timeout=settings.publish_timeout_seconds,
            retry_backoff=settings.publish_retry_backoff_seconds,
        )

    async def connect(self):
        self._channel = await self._connection.channel(publisher_confirms=True)
        self._exchange, _ = await declare_topology(self._channel, self._topology)

    def _is_ready(self) -> bool:
        return (
            self._exchange is not None
            and self._channel is not None
            and not self._channel.is_closed
        )

    async def enqueue(self, event: EventLog) -> None:
        body = EventLogMessage.from_event_log(event).to_bytes()
        last_error: BaseException | None = None

        for attempt in range(1, self._max_attempts + 1):
            try:
                if not self._is_ready():
                    await self.connect()
                msg = aio_pika.Message(
                    body=body,
                    content_type="application/json",
                    delivery_mode=aio_pika.DeliveryMode.PERSISTENT,
                )
                # With confirms enabled this resolves only once the broker acks.
                await self._exchange.publish(
                    msg,
                    routing_key=self._topology.routing_key,
                    timeout=self._publish_timeout,
                )
                return
            except PUBLISH_ERRORS as e:
                last_error = e
                await self._discard_channel()
                logger.warning(
                    "event_log_publish_attempt_failed",
                    extra={
                        "attempt": attempt,
                        "max_attempts": self._max_attempts,
                        "error": repr(e),
                    },
                )
                if attempt < self._max_attempts and self._retry_backoff > 0:
                    await asyncio.sleep(self._retry_backoff * attempt)

        logger.error(
            "event_log_enqueue_failed",
            extra={
                "event_type": event.type.value,
                "attempts": self._max_attempts,
                "error": repr(last_error),
            },
        )
        raise QueueError(
            f"Failed to enqueue event after {self._max_attempts} attempts: {last_error!r}"
        ) from last_error

    async def close(self):
        if self._channel is not None and not self._channel.is_closed:
            await self._channel.close()
        self._channel = None
        self._exchange = None

    async def _discard_channel(self):
        """Close and forget the current channel; the next attempt opens a fresh one."""
        channel, self._channel, self._exchange = self._channel, None, None
        if channel is not None and not channel.is_closed:
            with contextlib.suppress(*PUBLISH_ERRORS):
                await channel.close()
