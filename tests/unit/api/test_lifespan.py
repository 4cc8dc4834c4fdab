"""Lifespan wiring: resources are released on every exit path, consumer crashes are reported."""

import asyncio
import logging
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI

import eventlog.main as main


@pytest.fixture
def engine():
    e = MagicMock()
    e.dispose = AsyncMock(return_value=None)
    return e


@pytest.fixture
def connection():
    conn = MagicMock()
    conn.close = AsyncMock(return_value=None)
    return conn


@pytest.fixture
def publisher():
    p = MagicMock()
    p.connect = AsyncMock(return_value=None)
    p.close = AsyncMock(return_value=None)
    return p


@pytest.fixture
def consumer():
    async def run_until_cancelled():
        await asyncio.Event().wait()

    c = MagicMock()
    c.run = AsyncMock(side_effect=run_until_cancelled)
    return c


@pytest.fixture
def wired(monkeypatch, engine, connection, publisher, consumer):
    """Patch eventlog.main so the lifespan builds mocks instead of real pools and connections."""
    publisher_cls = MagicMock()
    publisher_cls.from_settings.return_value = publisher
    consumer_cls = MagicMock()
    consumer_cls.from_settings.return_value = consumer

    monkeypatch.setattr(main, "settings", main.settings.model_copy(update={"consumer_enabled": True}))
    monkeypatch.setattr(main, "build_engine", lambda settings: engine)
    monkeypatch.setattr(main, "build_session_factory", MagicMock())
    monkeypatch.setattr(main.aio_pika, "connect_robust", AsyncMock(return_value=connection))
    monkeypatch.setattr(main, "RabbitMQEventLogPublisher", publisher_cls)
    monkeypatch.setattr(main, "RabbitMQEventLogConsumer", consumer_cls)
    return consumer_cls


def _assert_released(engine, connection, publisher):
    publisher.close.assert_awaited_once()
    connection.close.assert_awaited_once()
    engine.dispose.assert_awaited_once()


async def test_lifespan_sets_state_and_releases_resources(wired, engine, connection, publisher, consumer):
    app = FastAPI()

    async with main.lifespan(app):
        await asyncio.sleep(0)
        assert app.state.publisher is publisher
        assert app.state.repository is not None
        consumer.run.assert_awaited_once()

    _assert_released(engine, connection, publisher)


async def test_consumer_crash_is_logged_and_shutdown_still_releases(
    wired, engine, connection, publisher, consumer, caplog
):
    caplog.set_level(logging.ERROR)
    consumer.run.side_effect = RuntimeError("PRECONDITION_FAILED on declare")
    app = FastAPI()

    async with main.lifespan(app):
        for _ in range(3):
            await asyncio.sleep(0)
        assert "event_log_consumer_crashed" in caplog.messages

    _assert_released(engine, connection, publisher)


async def test_failed_publisher_connect_releases_connection_and_engine(
    wired, engine, connection, publisher
):
    publisher.connect.side_effect = ConnectionError("refused")

    with pytest.raises(ConnectionError):
        async with main.lifespan(FastAPI()):
            pass

    connection.close.assert_awaited_once()
    engine.dispose.assert_awaited_once()
    wired.from_settings.assert_not_called()
