"""MongoDB implementation of MessageStatusStore.

One document per message id (`_id`). The in-progress marker is acquired with a
conditional upsert: the filter only matches a document that is not processed
and whose marker is free or expired, so when another worker holds the marker
the upsert collides with the existing `_id` and the acquire fails.
"""
from __future__ import annotations

import inspect
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

from loguru import logger
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import DuplicateKeyError, PyMongoError

from queue_worker.app.constants import MESSAGE_STATUS


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MongoMessageStatusStore:
    """Concrete implementation of MessageStatusStore using MongoDB."""

    def __init__(
        self,
        collection: AsyncIOMotorCollection,
        *,
        client: Any | None = None,
        in_progress_ttl_seconds: int = 3600,
        owner_id: str | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._collection = collection
        self._client = client
        self._in_progress_ttl_seconds = int(in_progress_ttl_seconds)
        self._owner_id = owner_id or uuid.uuid4().hex
        self._clock = clock

    @property
    def owner_id(self) -> str:
        return self._owner_id

    async def ensure_indexes(self) -> None:
        """Infrastructure bootstrap: create indexes. Not part of the port."""
        await self._collection.create_index("status", name="idx_message_status")
        await self._collection.create_index("updated_at", name="idx_message_updated_at")

    def _expires_at(self, now: datetime) -> datetime | None:
        if self._in_progress_ttl_seconds <= 0:
            return None
        return now + timedelta(seconds=self._in_progress_ttl_seconds)

    async def mark_in_progress(self, message_id: str) -> bool:
        now = self._clock()
        try:
            await self._collection.update_one(
                {
                    "_id": message_id,
                    "status": {"$ne": MESSAGE_STATUS.PROCESSED},
                    "$or": [
                        {"in_progress": {"$ne": True}},
                        {"in_progress_expires_at": {"$lte": now}},
                    ],
                },
                {
                    "$set": {
                        "in_progress": True,
                        "in_progress_owner": self._owner_id,
                        "in_progress_since": now,
                        "in_progress_expires_at": self._expires_at(now),
                        "updated_at": now,
                    },
                    "$setOnInsert": {
                        "status": MESSAGE_STATUS.PENDING,
                        "created_at": now,
                    },
                },
                upsert=True,
            )
        except DuplicateKeyError:
            return False
        return True

    async def clear_in_progress(self, message_id: str) -> bool:
        now = self._clock()
        try:
            result = await self._collection.update_one(
                {"_id": message_id, "in_progress": True, "in_progress_owner": self._owner_id},
                {
                    "$set": {
                        "in_progress": False,
                        "in_progress_owner": None,
                        "in_progress_expires_at": None,
                        "updated_at": now,
                    },
                },
            )
        except PyMongoError as exc:
            logger.warning("clear_in_progress failed for {}: {}", message_id, exc)
            return False
        return result.matched_count == 1

    async def is_processed(self, message_id: str) -> bool:
        doc = await self._collection.find_one(
            {"_id": message_id, "status": MESSAGE_STATUS.PROCESSED},
            projection={"_id": 1},
        )
        return doc is not None

    async def mark_processed(self, message_id: str) -> bool:
        now = self._clock()
        try:
            result = await self._collection.update_one(
                {"_id": message_id},
                {
                    "$set": {
                        "status": MESSAGE_STATUS.PROCESSED,
                        "processed_at": now,
                        "updated_at": now,
                    },
                    "$setOnInsert": {"created_at": now},
                },
                upsert=True,
            )
        except PyMongoError as exc:
            logger.warning("mark_processed failed for {}: {}", message_id, exc)
            return False
        return bool(result.acknowledged)

    async def close(self) -> None:
        """Close underlying Mongo client when owned by this adapter."""
        if self._client is not None:
            res = self._client.close()
            if inspect.isawaitable(res):
                await res
