"""Conditions the queue processor reports to the ErrorReporter port."""
from __future__ import annotations

from enum import IntEnum


class ProcessingError(IntEnum):
    # Message skipped and deleted: status store says it was already processed.
    ALREADY_COMPLETED = 1
    # Message skipped and left in the queue: another attempt holds the in-progress marker.
    ALREADY_IN_PROGRESS = 2
    # The message handler raised.
    HANDLER_EXCEPTION = 3
    FAILED_TO_MARK_PROCESSED = 4
    FAILED_TO_DELETE = 5
    FAILED_TO_CLEAR_IN_PROGRESS = 6
