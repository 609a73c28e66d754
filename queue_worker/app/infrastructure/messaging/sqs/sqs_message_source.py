"""
SQS message source: receive / delete / change-visibility over a boto3 SQS client.

boto3 is blocking, so each call runs in a worker thread via asyncio.to_thread
to keep the event loop (and signal handlers) responsive during long polls.
"""
from __future__ import annotations

import asyncio
from typing import Any

from botocore.client import BaseClient
from loguru import logger

from queue_worker.app.core import SERVICE_NAME
from queue_worker.app.domain.models import QueueMessage


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


class SqsMessageSource:
    """MessageSource implementation"""

    def __init__(self, client: BaseClient, queue_url: str) -> None:
        if not queue_url:
            raise ValueError("queue_url is required")
        self._client = client
        self._queue_url = queue_url

    async def fetch(
        self,
        max_messages: int,
        visibility_timeout: int,
        wait_time_seconds: int,
    ) -> list[QueueMessage]:
        response = await asyncio.to_thread(
            self._client.receive_message,
            QueueUrl=self._queue_url,
            MaxNumberOfMessages=max_messages,
            VisibilityTimeout=visibility_timeout,
            WaitTimeSeconds=wait_time_seconds,
            AttributeNames=["All"],
            MessageAttributeNames=["All"],
        )
        raw_messages = response.get("Messages", [])
        messages = [QueueMessage.from_sqs(raw) for raw in raw_messages[:max_messages]]
        if messages:
            _log("sqs_messages_received", count=len(messages))
        return messages

    async def delete(self, message: QueueMessage) -> None:
        await asyncio.to_thread(
            self._client.delete_message,
            QueueUrl=self._queue_url,
            ReceiptHandle=message.receipt_handle,
        )

    async def extend_visibility(self, message: QueueMessage, new_visibility_timeout: int) -> None:
        await asyncio.to_thread(
            self._client.change_message_visibility,
            QueueUrl=self._queue_url,
            ReceiptHandle=message.receipt_handle,
            VisibilityTimeout=int(new_visibility_timeout),
        )
        _log(
            "sqs_visibility_changed",
            message_id=message.message_id,
            visibility_timeout=int(new_visibility_timeout),
        )

    async def close(self) -> None:
        close = getattr(self._client, "close", None)
        if callable(close):
            await asyncio.to_thread(close)
