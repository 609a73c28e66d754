"""Status store factory: selects and assembles persistence adapters."""
from __future__ import annotations

from queue_worker.app.config.settings import Settings
from queue_worker.app.infrastructure.persistence.inmemory.in_memory_status_store import (
    InMemoryMessageStatusStore,
)
from queue_worker.app.infrastructure.persistence.mongo.connection import create_mongo_client
from queue_worker.app.infrastructure.persistence.mongo.mongo_status_store import MongoMessageStatusStore
from queue_worker.app.ports.message_status_store import MessageStatusStore


async def create_message_status_store(settings: Settings) -> MessageStatusStore:
    """Select status store adapter from configuration and return port type."""
    backend = settings.status_store_backend.strip().lower()

    if backend == "mongo":
        mongo_client = await create_mongo_client(settings)
        store = MongoMessageStatusStore(
            mongo_client[settings.database_name][settings.database_collection],
            client=mongo_client,
            in_progress_ttl_seconds=settings.in_progress_ttl_seconds,
        )
        await store.ensure_indexes()
        return store
    if backend in ("memory", "inmemory"):
        return InMemoryMessageStatusStore(in_progress_ttl_seconds=settings.in_progress_ttl_seconds)
    raise ValueError(f"Unsupported status store backend: {backend}")
