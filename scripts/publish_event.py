# scripts/publish_event.py
import sys
from pathlib import Path

# Ensure project root is on the path when running this script directly
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import asyncio
from datetime import datetime, timezone

import aio_pika

from eventlog.config.settings import get_settings
from eventlog.domain.models.event_log import EventLog, EventType
from eventlog.infrastructure.messaging.rabbitmq_publisher import RabbitMQEventLogPublisher


async def publish():
    settings = get_settings()
    connection = await aio_pika.connect_robust(settings.rabbitmq_url)
    try:
        publisher = RabbitMQEventLogPublisher.from_settings(connection, settings)
        description = sys.argv[1] if len(sys.argv) > 1 else "smoke test"
        await publisher.enqueue(
            EventLog(type=EventType.API, description=description, event_date=datetime.now(timezone.utc))
        )
        await publisher.close()
        print("Published")
    finally:
        await connection.close()

asyncio.run(publish())
