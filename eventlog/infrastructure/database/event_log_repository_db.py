"""DB-backed event log repository. Persists and queries the event_logs table via SQLAlchemy async."""

import logging
import math
from typing import List, Union

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from eventlog.application.event_log_repository import EventLogPage
from eventlog.application.exceptions import NotFoundError, PersistenceError
from eventlog.domain.models.event_log import EventLog, EventType
from eventlog.domain.models.filter import Filter
from eventlog.domain.validators.event_log_validator import ensure_utc, validate_pagination
from eventlog.infrastructure.database.models import EventLogRow

logger = logging.getLogger(__name__)


def _from_row(row: EventLogRow) -> EventLog:
    # SQLite hands back naive values.
    return EventLog(
        id=row.id,
        type=EventType(row.type),
        description=row.description,
        event_date=ensure_utc(row.event_date),
    )


class DbEventLogRepository:
    """Implements EventLogRepository. One session per call; each statement is its own unit of work."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def create(self, event: EventLog) -> None:
        """Insert event (id is assigned by the store). Raises PersistenceError; no retry."""
        try:
            row = EventLogRow(
                type=event.type.value,
                description=event.description,
                event_date=ensure_utc(event.event_date),
            )
            async with self._session_factory() as session:
                session.add(row)
                await session.commit()
        except (SQLAlchemyError, ValueError) as e:
            logger.error(
                "event_log_create_failed",
                extra={"event_type": event.type.value, "error": str(e)},
            )
            raise PersistenceError(f"Failed to persist event: {e}") from e

    async def get(self, event_id: Union[int, str]) -> EventLog:
        """Return event by id. Raises NotFoundError when no row matches, PersistenceError on failure."""
        try:
            key = int(event_id)
        except (TypeError, ValueError):
            # A non-numeric id can never match a generated integer key.
            logger.info("event_log_not_found", extra={"event_id": str(event_id)})
            raise NotFoundError(f"Event not found: id={event_id}") from None

        try:
            async with self._session_factory() as session:
                result = await session.execute(select(EventLogRow).where(EventLogRow.id == key))
                row = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("event_log_get_failed", extra={"event_id": str(event_id), "error": str(e)})
            raise PersistenceError(f"Failed to read event: {e}") from e

        if row is None:
            logger.info("event_log_not_found", extra={"event_id": str(event_id)})
            raise NotFoundError(f"Event not found: id={event_id}")
        return _from_row(row)

    async def filter(self, filter_: Filter, page: int, limit: int) -> EventLogPage:
        """
        Page of matching logs ordered by event_date then id. Data and count are two
        separate reads and may disagree under concurrent inserts.
        """
        validate_pagination(page, limit)
        try:
            conditions = self._conditions(filter_)
            data_stmt = (
                select(EventLogRow)
                .where(*conditions)
                .order_by(EventLogRow.event_date.asc(), EventLogRow.id.asc())
                .offset((page - 1) * limit)
                .limit(limit)
            )
            count_stmt = select(func.count()).select_from(EventLogRow).where(*conditions)
            async with self._session_factory() as session:
                rows = (await session.execute(data_stmt)).scalars().all()
                matching = (await session.execute(count_stmt)).scalar_one()
        except (SQLAlchemyError, ValueError) as e:
            logger.error(
                "event_log_filter_failed",
                extra={"page": page, "limit": limit, "error": str(e)},
            )
            raise PersistenceError(f"Failed to filter events: {e}") from e

        return EventLogPage(
            page=page,
            total=math.ceil(matching / limit),
            data=tuple(_from_row(row) for row in rows),
        )

    @staticmethod
    def _conditions(filter_: Filter) -> List:
        if filter_.type is not None:
            conditions = [EventLogRow.type == filter_.type.value]
        else:
            conditions = [EventLogRow.type.is_not(None)]
        if filter_.time_range is not None:
            conditions.append(
                EventLogRow.event_date.between(
                    ensure_utc(filter_.time_range.start),
                    ensure_utc(filter_.time_range.end),
                )
            )
        return conditions
