from __future__ import annotations

import asyncio
import inspect
import os
import uuid

import pytest

from queue_worker.app.config.settings import Settings
from queue_worker.app.infrastructure.persistence.mongo.connection import create_mongo_client
from queue_worker.app.infrastructure.persistence.mongo.mongo_status_store import MongoMessageStatusStore


def _build_worker_settings() -> Settings:
    return Settings(
        _env_file=None,
        database_host=os.getenv("DATABASE_HOST", "localhost"),
        database_port=int(os.getenv("DATABASE_PORT", "27017")),
        database_user=os.getenv("DATABASE_USER", ""),
        database_password=os.getenv("DATABASE_PASSWORD", ""),
        database_name=os.getenv("DATABASE_NAME", "queue_worker_test"),
        database_collection=os.getenv("DATABASE_COLLECTION", "message_status"),
        initial_backoff_seconds=float(os.getenv("INITIAL_BACKOFF_SECONDS", "0.5")),
        max_backoff_seconds=float(os.getenv("MAX_BACKOFF_SECONDS", "2")),
        max_connection_attempts=int(os.getenv("MAX_CONNECTION_ATTEMPTS", "3")),
    )


async def _close(client) -> None:
    res = client.close()
    if inspect.isawaitable(res):
        await res


@pytest.mark.integration
def test_two_workers_cannot_hold_the_same_marker() -> None:
    async def _run() -> None:
        settings = _build_worker_settings()
        client = await create_mongo_client(settings)
        collection = client[settings.database_name][settings.database_collection]
        worker_a = MongoMessageStatusStore(collection, owner_id="a")
        worker_b = MongoMessageStatusStore(collection, owner_id="b")
        message_id = f"msg-{uuid.uuid4()}"
        try:
            await worker_a.ensure_indexes()
            results = await asyncio.gather(
                worker_a.mark_in_progress(message_id),
                worker_b.mark_in_progress(message_id),
            )
            assert sorted(results) == [False, True]

            holder, other = (worker_a, worker_b) if results[0] else (worker_b, worker_a)
            assert await other.clear_in_progress(message_id) is False
            assert await holder.clear_in_progress(message_id) is True
            assert await other.mark_in_progress(message_id) is True
        finally:
            await collection.delete_one({"_id": message_id})
            await _close(client)

    asyncio.run(_run())


@pytest.mark.integration
def test_processed_message_cannot_be_locked_again() -> None:
    async def _run() -> None:
        settings = _build_worker_settings()
        client = await create_mongo_client(settings)
        collection = client[settings.database_name][settings.database_collection]
        store = MongoMessageStatusStore(collection)
        message_id = f"msg-{uuid.uuid4()}"
        try:
            assert await store.is_processed(message_id) is False
            assert await store.mark_in_progress(message_id) is True
            assert await store.mark_processed(message_id) is True
            assert await store.is_processed(message_id) is True
            assert await store.clear_in_progress(message_id) is True
            assert await store.mark_in_progress(message_id) is False
        finally:
            await collection.delete_one({"_id": message_id})
            await _close(client)

    asyncio.run(_run())
