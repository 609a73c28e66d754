"""Queue processor configuration (value object read by the control loop each iteration)."""
from __future__ import annotations

from dataclasses import dataclass, replace

# SQS receive_message limits.
MAX_MESSAGES_PER_REQUEST_LIMIT = 10
MAX_VISIBILITY_TIMEOUT = 43_200
MAX_WAIT_TIME_SECONDS = 20


@dataclass(frozen=True)
class QueueProcessorConfig:
    """Batch size, visibility timeout, long-poll wait and start/end logging flags."""

    max_messages_per_request: int = 10
    visibility_timeout: int = 300
    wait_time_seconds: int = 20
    log_message_start: bool = False
    log_message_end: bool = False

    def __post_init__(self) -> None:
        if not 1 <= self.max_messages_per_request <= MAX_MESSAGES_PER_REQUEST_LIMIT:
            raise ValueError(
                f"max_messages_per_request must be between 1 and {MAX_MESSAGES_PER_REQUEST_LIMIT}"
            )
        if not 0 <= self.visibility_timeout <= MAX_VISIBILITY_TIMEOUT:
            raise ValueError(f"visibility_timeout must be between 0 and {MAX_VISIBILITY_TIMEOUT}")
        if not 0 <= self.wait_time_seconds <= MAX_WAIT_TIME_SECONDS:
            raise ValueError(f"wait_time_seconds must be between 0 and {MAX_WAIT_TIME_SECONDS}")

    def with_log_message_start(self, enabled: bool = True) -> "QueueProcessorConfig":
        return replace(self, log_message_start=enabled)

    def with_log_message_end(self, enabled: bool = True) -> "QueueProcessorConfig":
        return replace(self, log_message_end=enabled)
