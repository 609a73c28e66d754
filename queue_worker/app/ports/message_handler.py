"""Port: application logic that processes one message."""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from queue_worker.app.domain.models import ProcessingResult, QueueMessage


@runtime_checkable
class MessageHandler(Protocol):
    async def process(self, message: QueueMessage) -> ProcessingResult:
        """Process message; only called while the in-progress marker is held. May raise."""
        ...
