"""Port: queue transport the processor pulls messages from. Implementations live in infrastructure."""
from __future__ import annotations

from typing import Protocol

from queue_worker.app.domain.models import QueueMessage


class MessageSource(Protocol):
    async def fetch(
        self,
        max_messages: int,
        visibility_timeout: int,
        wait_time_seconds: int,
    ) -> list[QueueMessage]:
        """Return at most max_messages messages, possibly none, waiting up to wait_time_seconds."""
        ...

    async def delete(self, message: QueueMessage) -> None:
        """Remove the delivery identified by message.receipt_handle. Raise on failure."""
        ...

    async def extend_visibility(self, message: QueueMessage, new_visibility_timeout: int) -> None:
        """Keep the message hidden from other consumers for new_visibility_timeout seconds from now."""
        ...

    async def close(self) -> None:
        """Release resources. No-op allowed if nothing to close."""
        ...
