"""Domain validators. Pure validation functions."""

from eventlog.domain.validators.event_log_validator import (
    build_filter,
    ensure_utc,
    parse_event_type,
    validate_pagination,
    validate_time_range,
)

__all__ = [
    "build_filter",
    "ensure_utc",
    "parse_event_type",
    "validate_pagination",
    "validate_time_range",
]
