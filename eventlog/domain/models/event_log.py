"""Domain model for event logs. Pure business semantics, no ORM or infrastructure."""

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Optional


class EventType(str, Enum):
    """Ingestion channel an event log was accepted through."""

    FORM = "FORM"
    API = "API"


@dataclass(frozen=True)
class EventLog:
    """
    A single recorded occurrence. event_date is the acceptance time, not the
    time the record was dequeued or stored. id is absent until storage assigns it.
    """

    type: EventType
    description: str
    event_date: datetime
    id: Optional[int] = None

    def with_id(self, event_id: int) -> "EventLog":
        """Return a copy carrying the storage-assigned identity."""
        return replace(self, id=event_id)
