"""Worker-level constants shared across modules."""
from __future__ import annotations


class MESSAGE_STATUS:
    PENDING = "PENDING"
    PROCESSED = "PROCESSED"
