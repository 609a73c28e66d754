"""Message source factory: selects implementation from config. Only place that imports concrete sources."""
from __future__ import annotations

from queue_worker.app.config.settings import Settings
from queue_worker.app.infrastructure.messaging.sqs.client import create_sqs_client
from queue_worker.app.infrastructure.messaging.sqs.sqs_message_source import SqsMessageSource
from queue_worker.app.ports.message_source import MessageSource


def create_message_source(settings: Settings) -> MessageSource:
    backend = settings.message_source_backend.strip().lower()

    if backend == "sqs":
        return SqsMessageSource(create_sqs_client(settings), settings.sqs_queue_url)

    raise ValueError(f"Unsupported message source backend: {backend}")
