"""Pydantic schemas for the event log API and the queue wire format. No DB or infrastructure."""

from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from eventlog.domain.models.event_log import EventLog, EventType
from eventlog.domain.validators.event_log_validator import ensure_utc


# ---------------------------------------------------------------------------
# Queue wire format
# ---------------------------------------------------------------------------

class EventLogMessage(BaseModel):
    """
    Queue payload for an accepted event log. Carries type, description and eventDate;
    id is never on the wire. Unknown fields are rejected so malformed messages fail fast.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    type: EventType
    description: str = Field(..., min_length=1)
    event_date: datetime = Field(..., alias="eventDate")

    @field_validator("event_date")
    @classmethod
    def event_date_is_utc(cls, v: datetime) -> datetime:
        return ensure_utc(v)

    @classmethod
    def from_event_log(cls, event: EventLog) -> "EventLogMessage":
        return cls(type=event.type, description=event.description, event_date=event.event_date)

    def to_event_log(self) -> EventLog:
        return EventLog(type=self.type, description=self.description, event_date=self.event_date)

    def to_bytes(self) -> bytes:
        """UTF-8 JSON body with camelCase eventDate."""
        return self.model_dump_json(by_alias=True).encode("utf-8")


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class EventLogCreateRequest(BaseModel):
    """Body of POST /events, JSON or form encoded. type and eventDate are set by the server."""

    description: str = Field(..., min_length=1, description="Free-text description; must not be empty")


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class EventLogResponse(BaseModel):
    """Persisted event log as returned by the read endpoints."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    type: EventType
    description: str
    event_date: datetime = Field(..., alias="eventDate")

    @classmethod
    def from_event_log(cls, event: EventLog) -> "EventLogResponse":
        return cls(
            id=event.id,
            type=event.type,
            description=event.description,
            event_date=event.event_date,
        )


class EventLogPageResponse(BaseModel):
    """One page of filtered event logs. total is the number of pages, not rows."""

    page: int
    total: int
    data: List[EventLogResponse]


class EnqueuedResponse(BaseModel):
    message: str = "Event Successfully Enqueued"
