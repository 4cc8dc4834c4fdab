"""Fixtures for gateway tests: SQLite (aiosqlite) engine, repositories, event factory."""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from eventlog.domain.models.event_log import EventLog, EventType
from eventlog.infrastructure.database.event_log_repository_db import DbEventLogRepository
from eventlog.infrastructure.database.session import build_session_factory, create_schema
from eventlog.infrastructure.memory.event_log_repository_memory import InMemoryEventLogRepository

BASE_DATE = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _sqlite_engine():
    # StaticPool keeps a single in-memory database shared by every session.
    return create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )


@pytest.fixture
async def engine():
    engine = _sqlite_engine()
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
async def bare_engine():
    """Engine whose event_logs table was never created."""
    engine = _sqlite_engine()
    yield engine
    await engine.dispose()


@pytest.fixture
def db_repository(engine):
    return DbEventLogRepository(build_session_factory(engine))


@pytest.fixture(params=["db", "memory"])
async def repository(request):
    """Every EventLogRepository implementation must satisfy the same contract."""
    if request.param == "memory":
        yield InMemoryEventLogRepository()
        return
    engine = _sqlite_engine()
    await create_schema(engine)
    try:
        yield DbEventLogRepository(build_session_factory(engine))
    finally:
        await engine.dispose()


@pytest.fixture
def make_event():
    def _make(
        description: str = "signup",
        event_type: EventType = EventType.API,
        day: int = 0,
        minutes: int = 0,
        event_date: datetime | None = None,
    ) -> EventLog:
        return EventLog(
            type=event_type,
            description=description,
            event_date=event_date or BASE_DATE + timedelta(days=day, minutes=minutes),
        )

    return _make
