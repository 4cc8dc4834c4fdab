"""Standalone consumer process: python -m eventlog.worker. Drains the event log queue into storage."""

import asyncio
import contextlib
import logging

import aio_pika

from eventlog.config.logging import configure_logging
from eventlog.config.settings import get_settings
from eventlog.infrastructure.database.event_log_repository_db import DbEventLogRepository
from eventlog.infrastructure.database.session import build_engine, build_session_factory
from eventlog.infrastructure.messaging.rabbitmq_consumer import RabbitMQEventLogConsumer

logger = logging.getLogger(__name__)


async def run_worker() -> None:
    settings = get_settings()
    async with contextlib.AsyncExitStack() as stack:
        engine = build_engine(settings)
        stack.push_async_callback(engine.dispose)
        connection = await aio_pika.connect_robust(settings.rabbitmq_url)
        stack.push_async_callback(connection.close)

        repository = DbEventLogRepository(build_session_factory(engine))
        consumer = RabbitMQEventLogConsumer.from_settings(connection, repository, settings)
        await consumer.run()


def main() -> None:
    configure_logging(get_settings().log_level)
    try:
        asyncio.run(run_worker())
    except KeyboardInterrupt:
        logger.info("event_log_worker_interrupted")


if __name__ == "__main__":
    main()
