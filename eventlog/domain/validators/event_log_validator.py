"""Validators for event log input rules. Pure functions, no infrastructure or DB access."""

from datetime import datetime, timezone
from typing import Optional

from eventlog.domain.exceptions import DomainValidationError
from eventlog.domain.models.event_log import EventType
from eventlog.domain.models.filter import Filter, TimeRange

MIN_PAGE = 1
MIN_LIMIT = 1


def ensure_utc(value: datetime) -> datetime:
    """
    Naive datetimes are taken to be UTC; aware ones are converted to UTC.
    Raises ValueError when the instant has no UTC representation at the edges of the datetime range.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    try:
        return value.astimezone(timezone.utc)
    except OverflowError as e:
        raise ValueError(f"{value.isoformat()} is outside the supported date range") from e


def parse_event_type(value: Optional[str]) -> Optional[EventType]:
    """Case-insensitive parse of the type filter. None passes through."""
    if value is None:
        return None
    try:
        return EventType(value.strip().upper())
    except ValueError as e:
        allowed = ", ".join(t.value for t in EventType)
        raise DomainValidationError(f"type must be one of: {allowed}", field="type") from e


def _bound_as_utc(value: datetime, field: str) -> datetime:
    try:
        return ensure_utc(value)
    except ValueError as e:
        raise DomainValidationError(str(e), field=field) from e


def validate_time_range(start: Optional[datetime], end: Optional[datetime]) -> Optional[TimeRange]:
    """from and to must be given together; from must not be after to."""
    if start is None and end is None:
        return None
    if start is None:
        raise DomainValidationError("from and to must be provided together", field="from")
    if end is None:
        raise DomainValidationError("from and to must be provided together", field="to")
    start = _bound_as_utc(start, "from")
    end = _bound_as_utc(end, "to")
    if start > end:
        raise DomainValidationError("from must not be after to", field="from")
    return TimeRange(start=start, end=end)


def validate_pagination(page: int, limit: int, max_limit: Optional[int] = None) -> None:
    """page is 1-indexed; limit is rows per page and must be positive (and bounded when max_limit is set)."""
    if page < MIN_PAGE:
        raise DomainValidationError(f"page must be >= {MIN_PAGE}, got {page}", field="page")
    if limit < MIN_LIMIT:
        raise DomainValidationError(f"limit must be >= {MIN_LIMIT}, got {limit}", field="limit")
    if max_limit is not None and limit > max_limit:
        raise DomainValidationError(f"limit must be <= {max_limit}, got {limit}", field="limit")


def build_filter(
    event_type: Optional[str],
    start: Optional[datetime],
    end: Optional[datetime],
) -> Filter:
    """Build a Filter from raw query values. Raises DomainValidationError on malformed input."""
    return Filter(
        type=parse_event_type(event_type),
        time_range=validate_time_range(start, end),
    )
