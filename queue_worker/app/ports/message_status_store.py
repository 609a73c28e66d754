"""Port: de-duplication / in-progress lock store shared by every worker on a queue.

Each operation must be atomic per message id across processes; the processor
relies on that and does no locking of its own.
"""
from __future__ import annotations

from typing import Protocol


class MessageStatusStore(Protocol):
    async def mark_in_progress(self, message_id: str) -> bool:
        """Acquire the in-progress marker. True only if this call acquired it."""
        ...

    async def clear_in_progress(self, message_id: str) -> bool:
        """Release the in-progress marker. True on success."""
        ...

    async def is_processed(self, message_id: str) -> bool: ...

    async def mark_processed(self, message_id: str) -> bool:
        """Record permanent completion. True on success."""
        ...

    async def close(self) -> None: ...
