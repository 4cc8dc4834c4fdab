"""Tests for event log input validators: type, time range, pagination, UTC normalisation."""

from datetime import datetime, timedelta, timezone

import pytest

from eventlog.domain.exceptions import DomainValidationError
from eventlog.domain.models.event_log import EventType
from eventlog.domain.models.filter import Filter, TimeRange
from eventlog.domain.validators.event_log_validator import (
    build_filter,
    ensure_utc,
    parse_event_type,
    validate_pagination,
    validate_time_range,
)

D1 = datetime(2024, 1, 1, tzinfo=timezone.utc)
D2 = datetime(2024, 2, 1, tzinfo=timezone.utc)


def test_parse_event_type_is_case_insensitive():
    assert parse_event_type("api") is EventType.API
    assert parse_event_type(" Form ") is EventType.FORM
    assert parse_event_type(None) is None


def test_parse_event_type_rejects_unknown_channel():
    with pytest.raises(DomainValidationError) as exc_info:
        parse_event_type("email")
    assert exc_info.value.field == "type"


def test_time_range_requires_both_bounds():
    with pytest.raises(DomainValidationError, match="together"):
        validate_time_range(D1, None)
    with pytest.raises(DomainValidationError, match="together"):
        validate_time_range(None, D2)
    assert validate_time_range(None, None) is None


def test_time_range_rejects_inverted_bounds():
    with pytest.raises(DomainValidationError):
        validate_time_range(D2, D1)


def test_time_range_naive_bounds_are_utc():
    time_range = validate_time_range(datetime(2024, 1, 1), datetime(2024, 1, 1))
    assert time_range == TimeRange(start=D1, end=D1)


@pytest.mark.parametrize(
    "page,limit,max_limit,field",
    [(0, 10, None, "page"), (1, 0, None, "limit"), (1, -5, None, "limit"), (1, 101, 100, "limit")],
)
def test_validate_pagination_rejects_out_of_range(page, limit, max_limit, field):
    with pytest.raises(DomainValidationError) as exc_info:
        validate_pagination(page, limit, max_limit)
    assert exc_info.value.field == field


def test_validate_pagination_accepts_bounds():
    validate_pagination(1, 1)
    validate_pagination(3, 100, max_limit=100)


def test_build_filter_combines_dimensions():
    assert build_filter(None, None, None) == Filter()
    assert build_filter("FORM", D1, D2) == Filter(type=EventType.FORM, time_range=TimeRange(D1, D2))


def test_ensure_utc_normalises_naive_and_offset_values():
    assert ensure_utc(datetime(2024, 1, 1, 8)) == datetime(2024, 1, 1, 8, tzinfo=timezone.utc)
    converted = ensure_utc(datetime(2024, 1, 1, 8, tzinfo=timezone(timedelta(hours=2))))
    assert converted == datetime(2024, 1, 1, 6, tzinfo=timezone.utc)
    assert converted.utcoffset() == timedelta(0)


def test_ensure_utc_rejects_unrepresentable_instant():
    with pytest.raises(ValueError):
        ensure_utc(datetime(1, 1, 1, tzinfo=timezone(timedelta(hours=1))))


def test_time_range_bound_outside_datetime_range_is_a_validation_error():
    start = datetime(1, 1, 1, tzinfo=timezone(timedelta(hours=1)))
    with pytest.raises(DomainValidationError) as exc_info:
        validate_time_range(start, D2)
    assert exc_info.value.field == "from"
