"""Events API router: POST /events, GET /events/{event_id}, GET /events (filter + pagination)."""

from datetime import datetime, timezone
from typing import Annotated, Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from eventlog.api.dependencies import get_app_settings, get_publisher, get_repository
from eventlog.application.event_log_publisher import EventLogPublisher
from eventlog.application.event_log_repository import EventLogRepository
from eventlog.application.event_log_service import (
    enqueue_event_log,
    filter_event_logs,
    get_event_log,
)
from eventlog.config.settings import AppSettings
from eventlog.domain.exceptions import DomainValidationError
from eventlog.domain.models.event_log import EventLog, EventType
from eventlog.domain.schemas.event_log import (
    EnqueuedResponse,
    EventLogCreateRequest,
    EventLogPageResponse,
    EventLogResponse,
)
from eventlog.domain.validators.event_log_validator import build_filter, validate_pagination

router = APIRouter()

JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# One ingestion channel per accepted content format.
_CHANNEL_BY_CONTENT_TYPE = {
    JSON_CONTENT_TYPE: EventType.API,
    FORM_CONTENT_TYPE: EventType.FORM,
}


def _media_type(request: Request) -> str:
    return request.headers.get("content-type", "").split(";", 1)[0].strip().lower()


async def _read_body(request: Request, media_type: str) -> Dict[str, Any]:
    if media_type == FORM_CONTENT_TYPE:
        form = await request.form()
        return dict(form)
    try:
        payload = await request.json()
    except ValueError as e:
        raise DomainValidationError("body must be valid JSON", field="body") from e
    if not isinstance(payload, dict):
        raise DomainValidationError("body must be a JSON object", field="body")
    return payload


@router.post("", response_model=EnqueuedResponse)
async def create_event(
    request: Request,
    publisher: Annotated[EventLogPublisher, Depends(get_publisher)],
):
    """Accept an event and enqueue it. Responds as soon as the broker confirms; persistence is async."""
    media_type = _media_type(request)
    event_type = _CHANNEL_BY_CONTENT_TYPE.get(media_type)
    if event_type is None:
        return JSONResponse(status_code=400, content={"error": "Format not supported"})

    try:
        body = EventLogCreateRequest.model_validate(await _read_body(request, media_type))
    except ValidationError as e:
        raise RequestValidationError(e.errors()) from e

    event = EventLog(
        type=event_type,
        description=body.description,
        event_date=datetime.now(timezone.utc),
    )
    await enqueue_event_log(publisher, event)
    return EnqueuedResponse()


@router.get("/{event_id}", response_model=EventLogResponse)
async def get_event(
    event_id: int,
    repository: Annotated[EventLogRepository, Depends(get_repository)],
):
    """Get event by ID. NotFoundError is mapped to 404 by the app exception handler."""
    event = await get_event_log(repository, event_id)
    return EventLogResponse.from_event_log(event)


@router.get("", response_model=EventLogPageResponse)
async def filter_events(
    repository: Annotated[EventLogRepository, Depends(get_repository)],
    settings: Annotated[AppSettings, Depends(get_app_settings)],
    event_type: Annotated[Optional[str], Query(alias="type")] = None,
    start: Annotated[Optional[datetime], Query(alias="from")] = None,
    end: Annotated[Optional[datetime], Query(alias="to")] = None,
    page: Annotated[int, Query()] = 1,
    limit: Annotated[Optional[int], Query()] = None,
):
    """Filter by type and inclusive from/to range; ordered by eventDate ascending."""
    if limit is None:
        limit = settings.default_page_limit
    validate_pagination(page, limit, max_limit=settings.max_page_limit)
    filter_ = build_filter(event_type, start, end)

    result = await filter_event_logs(repository, filter_, page, limit)
    return EventLogPageResponse(
        page=result.page,
        total=result.total,
        data=[EventLogResponse.from_event_log(e) for e in result.data],
    )
