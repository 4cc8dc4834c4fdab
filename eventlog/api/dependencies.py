"""FastAPI dependency injection: repository, publisher, settings."""

from fastapi import Request

from eventlog.application.event_log_publisher import EventLogPublisher
from eventlog.application.event_log_repository import EventLogRepository
from eventlog.config.settings import AppSettings, get_settings


def get_repository(request: Request) -> EventLogRepository:
    """Return the repository built by the application lifespan."""
    return request.app.state.repository


def get_publisher(request: Request) -> EventLogPublisher:
    """Return the publisher built by the application lifespan."""
    return request.app.state.publisher


def get_app_settings() -> AppSettings:
    return get_settings()
