"""Domain models. Pure business entities."""

from eventlog.domain.models.event_log import EventLog, EventType
from eventlog.domain.models.filter import Filter, TimeRange

__all__ = [
    "EventLog",
    "EventType",
    "Filter",
    "TimeRange",
]
