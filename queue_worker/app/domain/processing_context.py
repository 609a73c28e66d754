"""Per-attempt processing context threaded through the processing state machine."""
from __future__ import annotations

from dataclasses import dataclass

from queue_worker.app.core.prefixed_logger import MessageIdPrefixedLogger
from queue_worker.app.domain.models import QueueMessage


@dataclass
class ProcessingContext:
    """State for one processing attempt of one message. Discarded when the attempt ends."""

    message: QueueMessage
    logger: MessageIdPrefixedLogger
    release_in_progress_lock: bool = False

    @property
    def message_id(self) -> str:
        return self.message.message_id
