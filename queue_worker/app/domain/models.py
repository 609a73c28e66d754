"""Domain models."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class QueueMessage:
    """One delivery of a queue message.

    message_id identifies the logical message; receipt_handle is specific to this
    delivery and is what delete / visibility changes are addressed by.
    """

    message_id: str
    receipt_handle: str
    body: str
    attributes: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.message_id, str) or not self.message_id:
            raise TypeError("message.message_id must be a non-empty str")
        if not isinstance(self.receipt_handle, str):
            raise TypeError("message.receipt_handle must be a str")

    @staticmethod
    def from_sqs(raw: dict[str, Any]) -> "QueueMessage":
        """Build from one entry of an SQS ReceiveMessage response."""
        attributes: dict[str, Any] = {}
        if raw.get("Attributes"):
            attributes.update(raw["Attributes"])
        if raw.get("MessageAttributes"):
            attributes["MessageAttributes"] = dict(raw["MessageAttributes"])
        return QueueMessage(
            message_id=str(raw.get("MessageId", "")),
            receipt_handle=str(raw.get("ReceiptHandle", "")),
            body=str(raw.get("Body", "")),
            attributes=attributes,
        )


@dataclass(frozen=True)
class ProcessingResult:
    """Outcome returned by a MessageHandler.

    Use the constructors rather than instantiating directly:
      - success(): message is marked processed and deleted.
      - failure(new_visibility_timeout=None): processing failed due to an error.
      - delayed(new_visibility_timeout): not done yet, but nothing is wrong
        (the message is retried after the visibility timeout).
    Failure and delayed only differ in how the outcome is logged.
    """

    was_successful: bool
    was_unsuccessful_due_to_error: bool = False
    new_visibility_timeout: int | None = None

    def __post_init__(self) -> None:
        timeout = self.new_visibility_timeout
        if timeout is not None:
            if isinstance(timeout, bool) or not isinstance(timeout, int):
                raise TypeError("new_visibility_timeout must be an int or None")
            if timeout < 0:
                raise ValueError("new_visibility_timeout must be non-negative")
        if self.was_successful and (self.was_unsuccessful_due_to_error or timeout is not None):
            raise ValueError("a successful result carries no error flag or visibility timeout")

    @classmethod
    def success(cls) -> "ProcessingResult":
        return cls(was_successful=True)

    @classmethod
    def failure(cls, new_visibility_timeout: int | None = None) -> "ProcessingResult":
        return cls(
            was_successful=False,
            was_unsuccessful_due_to_error=True,
            new_visibility_timeout=new_visibility_timeout,
        )

    @classmethod
    def delayed(cls, new_visibility_timeout: int) -> "ProcessingResult":
        return cls(
            was_successful=False,
            was_unsuccessful_due_to_error=False,
            new_visibility_timeout=new_visibility_timeout,
        )
