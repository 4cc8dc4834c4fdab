"""Event log repository protocol. Application layer depends on this; infrastructure implements it."""

from dataclasses import dataclass
from typing import Protocol, Tuple, Union

from eventlog.domain.models.event_log import EventLog
from eventlog.domain.models.filter import Filter


@dataclass(frozen=True)
class EventLogPage:
    """One page of a filter query. total is the number of pages (ceil(matching / limit))."""

    page: int
    total: int
    data: Tuple[EventLog, ...]


class EventLogRepository(Protocol):
    """Protocol for persisting and querying event logs. Storage is the only place ids are assigned."""

    async def create(self, event: EventLog) -> None:
        """Insert a new event log (without id). Raises PersistenceError on store failure."""
        ...

    async def get(self, event_id: Union[int, str]) -> EventLog:
        """Return the event log with this id. Raises NotFoundError or PersistenceError."""
        ...

    async def filter(self, filter_: Filter, page: int, limit: int) -> EventLogPage:
        """Return page `page` (1-indexed) of matching logs ordered by event_date, then id."""
        ...
