"""Fixtures for API unit tests: in-memory repository, mock publisher, AsyncClient."""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from eventlog.main import app
from eventlog.infrastructure.memory.event_log_repository_memory import InMemoryEventLogRepository


@pytest.fixture
def repository():
    return InMemoryEventLogRepository()


@pytest.fixture
def mock_publisher():
    """Mock publisher so tests do not connect to a real broker."""
    p = AsyncMock()
    p.enqueue = AsyncMock(return_value=None)
    return p


@pytest.fixture
def app_with_overrides(repository, mock_publisher):
    """App with repository and publisher overridden for testing."""
    from eventlog.api import dependencies

    app.dependency_overrides[dependencies.get_repository] = lambda: repository
    app.dependency_overrides[dependencies.get_publisher] = lambda: mock_publisher
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(app_with_overrides):
    """Async HTTP client for testing; uses overridden app. Lifespan is not run."""
    transport = ASGITransport(app=app_with_overrides)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
