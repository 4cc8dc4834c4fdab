"""In-memory event log repository. Same contract as the DB repository; used as a test double."""

import itertools
import logging
import math
from typing import Dict, Union

from eventlog.application.event_log_repository import EventLogPage
from eventlog.application.exceptions import NotFoundError
from eventlog.domain.models.event_log import EventLog
from eventlog.domain.models.filter import Filter
from eventlog.domain.validators.event_log_validator import validate_pagination

logger = logging.getLogger(__name__)


class InMemoryEventLogRepository:
    """Stores event logs in a dict keyed by a monotonically increasing id. Implements EventLogRepository."""

    def __init__(self) -> None:
        self._rows: Dict[int, EventLog] = {}
        self._ids = itertools.count(1)

    def __len__(self) -> int:
        return len(self._rows)

    async def create(self, event: EventLog) -> None:
        event_id = next(self._ids)
        self._rows[event_id] = event.with_id(event_id)

    async def get(self, event_id: Union[int, str]) -> EventLog:
        try:
            key = int(event_id)
        except (TypeError, ValueError):
            key = None
        if key is None or key not in self._rows:
            logger.info("event_log_not_found", extra={"event_id": str(event_id)})
            raise NotFoundError(f"Event not found: id={event_id}")
        return self._rows[key]

    async def filter(self, filter_: Filter, page: int, limit: int) -> EventLogPage:
        validate_pagination(page, limit)
        matching = [
            event
            for event in self._rows.values()
            if (filter_.type is None or event.type == filter_.type)
            and (filter_.time_range is None or filter_.time_range.contains(event.event_date))
        ]
        matching.sort(key=lambda e: (e.event_date, e.id))
        offset = (page - 1) * limit
        return EventLogPage(
            page=page,
            total=math.ceil(len(matching) / limit),
            data=tuple(matching[offset:offset + limit]),
        )
