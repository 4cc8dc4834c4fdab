# Application layer: use cases that orchestrate domain and gateways.

from eventlog.application.event_log_consumer import process_event_log_message
from eventlog.application.event_log_publisher import EventLogPublisher
from eventlog.application.event_log_repository import EventLogPage, EventLogRepository
from eventlog.application.event_log_service import (
    create_event_log,
    enqueue_event_log,
    filter_event_logs,
    get_event_log,
)
from eventlog.application.exceptions import (
    ApplicationError,
    ErrorKind,
    NotFoundError,
    PersistenceError,
    QueueError,
)

__all__ = [
    "ApplicationError",
    "ErrorKind",
    "EventLogPage",
    "EventLogPublisher",
    "EventLogRepository",
    "NotFoundError",
    "PersistenceError",
    "QueueError",
    "create_event_log",
    "enqueue_event_log",
    "filter_event_logs",
    "get_event_log",
    "process_event_log_message",
]
