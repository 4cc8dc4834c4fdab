"""Transport-agnostic handling of one queue message: decode, persist, log and drop on failure."""

import logging

from pydantic import ValidationError

from eventlog.application.event_log_repository import EventLogRepository
from eventlog.application.event_log_service import create_event_log
from eventlog.domain.schemas.event_log import EventLogMessage

logger = logging.getLogger(__name__)


async def process_event_log_message(body: bytes, repository: EventLogRepository) -> bool:
    """
    Decode and persist one message. Returns True when stored, False when dropped.
    Never raises: the message is acknowledged either way and is not retried or requeued.
    """
    try:
        message = EventLogMessage.model_validate_json(body)
    except ValidationError as e:
        logger.error(
            "event_log_message_rejected",
            extra={"error": str(e), "body_size": len(body)},
        )
        return False

    event = message.to_event_log()
    try:
        await create_event_log(repository, event)
    except Exception as e:
        logger.error(
            "event_log_persist_failed",
            extra={
                "event_type": event.type.value,
                "event_date": event.event_date.isoformat(),
                "error": str(e),
            },
        )
        # Do not re-raise: the message is dropped, not requeued.
        return False
    return True
