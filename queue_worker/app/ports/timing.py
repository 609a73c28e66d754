"""Port: external stop policy consulted once per loop iteration."""
from __future__ import annotations

from typing import Protocol


class Timing(Protocol):
    def should_stop_processing_messages(self) -> bool: ...
