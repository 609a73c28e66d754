"""Default ErrorReporter: writes each report to the log through the message-prefixed logger."""
from __future__ import annotations

from queue_worker.app.core.prefixed_logger import MessageIdPrefixedLogger
from queue_worker.app.domain.errors import ProcessingError
from queue_worker.app.domain.models import QueueMessage

# Skips are expected under at-least-once delivery; the rest need attention.
_WARNING_ERRORS = frozenset({ProcessingError.ALREADY_COMPLETED, ProcessingError.ALREADY_IN_PROGRESS})


class LoggingErrorReporter:
    def report(
        self,
        error: ProcessingError,
        message: QueueMessage | None,
        exc: BaseException | None,
        logger: MessageIdPrefixedLogger,
    ) -> None:
        parts = [f"Reported {error.name} ({int(error)})"]
        if message is not None:
            parts.append(f"message_id={message.message_id}")
        if exc is not None:
            parts.append(f"{type(exc).__name__}: {exc}")
        text = " ".join(parts)
        level = "WARNING" if error in _WARNING_ERRORS else "ERROR"
        try:
            if exc is not None:
                logger.exception(text, exc, level=level)
            else:
                logger.log(level, text)
        except Exception:
            # Reporting must never break processing.
            return
