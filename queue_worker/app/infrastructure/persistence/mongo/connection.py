"""Mongo client connection helper."""
from __future__ import annotations

import asyncio
import inspect
from typing import Any, Awaitable, Callable
from urllib.parse import quote_plus

from loguru import logger
from motor.motor_asyncio import AsyncIOMotorClient

from queue_worker.app.config.settings import Settings
from queue_worker.app.core import SERVICE_NAME
from queue_worker.app.core.backoff import BackoffPolicy, retry_with_backoff


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


def build_mongo_uri(settings: Settings) -> str:
    address = f"{settings.database_host}:{settings.database_port}"
    if settings.database_user and settings.database_password:
        credentials = f"{quote_plus(settings.database_user)}:{quote_plus(settings.database_password)}"
        return f"mongodb://{credentials}@{address}"
    return f"mongodb://{address}"


def connection_backoff(settings: Settings) -> BackoffPolicy:
    return BackoffPolicy(
        initial_delay=settings.initial_backoff_seconds,
        max_delay=settings.max_backoff_seconds,
        multiplier=settings.backoff_multiplier,
        max_attempts=settings.max_connection_attempts,
    )


async def create_mongo_client(
    settings: Settings,
    *,
    client_factory: Callable[..., Any] = AsyncIOMotorClient,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> AsyncIOMotorClient:
    """Return a client whose server answered `ping`, retrying with backoff."""
    uri = build_mongo_uri(settings)

    async def _connect() -> AsyncIOMotorClient:
        client = client_factory(uri, serverSelectionTimeoutMS=settings.database_connection_timeout_ms)
        try:
            await client.admin.command("ping")
        except Exception:
            res = client.close()
            if inspect.isawaitable(res):
                await res
            raise
        return client

    def _on_failure(attempt: int, exc: Exception) -> None:
        logger.warning("mongo connect attempt {}/{} failed: {}", attempt, settings.max_connection_attempts, exc)

    _log("mongo_connecting", host=settings.database_host, port=settings.database_port)
    client = await retry_with_backoff(_connect, connection_backoff(settings), on_failure=_on_failure, sleep=sleep)
    _log("mongo_connected", host=settings.database_host)
    return client
