"""Query predicate over event logs: optional type equality and optional inclusive date range."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from eventlog.domain.models.event_log import EventType


@dataclass(frozen=True)
class TimeRange:
    """Inclusive bounds on event_date. Both ends are always present."""

    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end


@dataclass(frozen=True)
class Filter:
    """Absent fields mean no constraint on that dimension."""

    type: Optional[EventType] = None
    time_range: Optional[TimeRange] = None
