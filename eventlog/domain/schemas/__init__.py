"""Domain schemas. Request/response and queue wire format."""

from eventlog.domain.schemas.event_log import (
    EnqueuedResponse,
    EventLogCreateRequest,
    EventLogMessage,
    EventLogPageResponse,
    EventLogResponse,
)

__all__ = [
    "EnqueuedResponse",
    "EventLogCreateRequest",
    "EventLogMessage",
    "EventLogPageResponse",
    "EventLogResponse",
]
