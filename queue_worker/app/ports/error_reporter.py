"""Port: out-of-band reporting of anomalies seen while processing messages."""
from __future__ import annotations

from typing import Protocol

from queue_worker.app.core.prefixed_logger import MessageIdPrefixedLogger
from queue_worker.app.domain.errors import ProcessingError
from queue_worker.app.domain.models import QueueMessage


class ErrorReporter(Protocol):
    def report(
        self,
        error: ProcessingError,
        message: QueueMessage | None,
        exc: BaseException | None,
        logger: MessageIdPrefixedLogger,
    ) -> None:
        """Best-effort; must not raise."""
        ...
