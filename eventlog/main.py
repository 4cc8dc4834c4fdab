# eventlog/main.py

import asyncio
import contextlib
import logging

import aio_pika
from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from eventlog.api.middleware import AccessLogMiddleware, CorrelationIdMiddleware
from eventlog.api.routers import events, health
from eventlog.application.exceptions import ApplicationError, NotFoundError
from eventlog.config.logging import configure_logging
from eventlog.config.settings import get_settings
from eventlog.domain.exceptions import DomainValidationError
from eventlog.infrastructure.database.event_log_repository_db import DbEventLogRepository
from eventlog.infrastructure.database.session import build_engine, build_session_factory
from eventlog.infrastructure.messaging.rabbitmq_consumer import RabbitMQEventLogConsumer
from eventlog.infrastructure.messaging.rabbitmq_publisher import RabbitMQEventLogPublisher

logger = logging.getLogger(__name__)

settings = get_settings()
configure_logging(settings.log_level)


def _log_consumer_exit(task: asyncio.Task) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("event_log_consumer_crashed", exc_info=exc)


async def _stop_consumer(task: asyncio.Task) -> None:
    task.cancel()
    # A crash was already logged by the done callback.
    with contextlib.suppress(asyncio.CancelledError, Exception):
        await task


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    """Own the DB pool and broker connection; run the consumer loop beside the HTTP server."""
    async with contextlib.AsyncExitStack() as stack:
        engine = build_engine(settings)
        stack.push_async_callback(engine.dispose)
        connection = await aio_pika.connect_robust(settings.rabbitmq_url)
        stack.push_async_callback(connection.close)

        repository = DbEventLogRepository(build_session_factory(engine))
        publisher = RabbitMQEventLogPublisher.from_settings(connection, settings)
        stack.push_async_callback(publisher.close)
        await publisher.connect()

        app.state.repository = repository
        app.state.publisher = publisher

        if settings.consumer_enabled:
            consumer = RabbitMQEventLogConsumer.from_settings(connection, repository, settings)
            consumer_task = asyncio.create_task(consumer.run())
            consumer_task.add_done_callback(_log_consumer_exit)
            stack.push_async_callback(_stop_consumer, consumer_task)

        yield


app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    debug=settings.debug,
    lifespan=lifespan,
)

# Middleware order: last added runs first (outermost). Request flow: CorrelationId -> AccessLog.
app.add_middleware(AccessLogMiddleware)
app.add_middleware(CorrelationIdMiddleware)


def _validation_failed(data) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"code": "Validation Failed", "data": jsonable_encoder(data)},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request, exc: RequestValidationError):
    return _validation_failed(exc.errors())


@app.exception_handler(DomainValidationError)
async def domain_validation_error_handler(request, exc: DomainValidationError):
    return _validation_failed([{"field": exc.field, "msg": exc.message}])


@app.exception_handler(NotFoundError)
async def not_found_error_handler(request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"message": exc.message})


@app.exception_handler(ApplicationError)
async def application_error_handler(request, exc: ApplicationError):
    # Storage and broker details stay in the logs.
    logger.error("request_failed", extra={"kind": exc.kind.value, "path": request.url.path})
    return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


@app.exception_handler(Exception)
async def unexpected_error_handler(request, exc: Exception):
    logger.exception("unexpected_error", extra={"path": request.url.path})
    return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


# Routers: /health, /events
app.include_router(health.router)
app.include_router(events.router, prefix="/events")
