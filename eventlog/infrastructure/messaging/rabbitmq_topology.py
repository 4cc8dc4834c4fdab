# eventlog/infrastructure/messaging/rabbitmq_topology.py

from dataclasses import dataclass

import aio_pika
from aio_pika.abc import AbstractChannel, AbstractExchange, AbstractQueue

from eventlog.config.settings import AppSettings


@dataclass(frozen=True)
class EventLogTopology:
    """One durable topic exchange bound to one durable queue by one routing key."""

    exchange: str = "registration"
    queue: str = "event-logs"
    routing_key: str = "event.logs"

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "EventLogTopology":
        return cls(
            exchange=settings.rabbitmq_exchange,
            queue=settings.rabbitmq_queue,
            routing_key=settings.rabbitmq_routing_key,
        )


async def declare_topology(
    channel: AbstractChannel,
    topology: EventLogTopology,
) -> tuple[AbstractExchange, AbstractQueue]:
    """Declare exchange, queue and binding. Re-declaring identical topology is a no-op on the broker."""
    exchange = await channel.declare_exchange(
        topology.exchange,
        aio_pika.ExchangeType.TOPIC,
        durable=True,
    )
    queue = await channel.declare_queue(topology.queue, durable=True)
    await queue.bind(exchange, routing_key=topology.routing_key)
    return exchange, queue
