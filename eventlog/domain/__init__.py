"""Domain layer: models, schemas, validators, exceptions. Pure business logic only."""

from eventlog.domain.exceptions import DomainError, DomainValidationError
from eventlog.domain.models import EventLog, EventType, Filter, TimeRange
from eventlog.domain.schemas import (
    EnqueuedResponse,
    EventLogCreateRequest,
    EventLogMessage,
    EventLogPageResponse,
    EventLogResponse,
)
from eventlog.domain.validators import (
    build_filter,
    ensure_utc,
    parse_event_type,
    validate_pagination,
    validate_time_range,
)

__all__ = [
    "DomainError",
    "DomainValidationError",
    "EnqueuedResponse",
    "EventLog",
    "EventLogCreateRequest",
    "EventLogMessage",
    "EventLogPageResponse",
    "EventLogResponse",
    "EventType",
    "Filter",
    "TimeRange",
    "build_filter",
    "ensure_utc",
    "parse_event_type",
    "validate_pagination",
    "validate_time_range",
]
