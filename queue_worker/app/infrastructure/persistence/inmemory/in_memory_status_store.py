"""In-memory status store for local runs and tests.

Only safe within a single process: the marker is not visible to other workers.
"""
from __future__ import annotations

import asyncio
import time
from typing import Callable


class InMemoryMessageStatusStore:
    def __init__(
        self,
        *,
        in_progress_ttl_seconds: float = 0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._lock = asyncio.Lock()
        self._in_progress: dict[str, float | None] = {}
        self._processed: set[str] = set()
        self._in_progress_ttl_seconds = in_progress_ttl_seconds
        self._clock = clock

    @property
    def in_progress_ids(self) -> set[str]:
        return set(self._in_progress)

    @property
    def processed_ids(self) -> set[str]:
        return set(self._processed)

    async def mark_in_progress(self, message_id: str) -> bool:
        async with self._lock:
            now = self._clock()
            expires_at = self._in_progress.get(message_id, 0.0)
            if message_id in self._in_progress and (expires_at is None or expires_at > now):
                return False
            self._in_progress[message_id] = (
                now + self._in_progress_ttl_seconds if self._in_progress_ttl_seconds > 0 else None
            )
            return True

    async def clear_in_progress(self, message_id: str) -> bool:
        async with self._lock:
            if message_id not in self._in_progress:
                return False
            del self._in_progress[message_id]
            return True

    async def is_processed(self, message_id: str) -> bool:
        return message_id in self._processed

    async def mark_processed(self, message_id: str) -> bool:
        async with self._lock:
            self._processed.add(message_id)
            return True

    async def close(self) -> None:
        return
