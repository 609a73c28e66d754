"""Worker composition root: build and lifecycle-manage concrete dependencies.

Composition may: import concrete classes, call factories, store interface types,
manage high-level lifecycle.
"""
from __future__ import annotations

from typing import Any

from loguru import logger

from queue_worker.app.application.processing_service import ProcessingService
from queue_worker.app.application.queue_processor import QueueProcessor
from queue_worker.app.config.settings import Settings
from queue_worker.app.core import SERVICE_NAME
from queue_worker.app.handler_loader import load_message_handler
from queue_worker.app.infrastructure.messaging.factory import create_message_source
from queue_worker.app.infrastructure.persistence.factory import create_message_status_store
from queue_worker.app.infrastructure.reporting.log_error_reporter import LoggingErrorReporter
from queue_worker.app.infrastructure.reporting.noop_cleanup import NoopCleanup
from queue_worker.app.infrastructure.timing.policies import create_timing
from queue_worker.app.ports.cleanup import Cleanup
from queue_worker.app.ports.error_reporter import ErrorReporter
from queue_worker.app.ports.message_handler import MessageHandler
from queue_worker.app.ports.message_source import MessageSource
from queue_worker.app.ports.message_status_store import MessageStatusStore


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


class WorkerDependencies:
    """Holds wired worker dependencies and their lifecycle."""

    def __init__(
        self,
        *,
        settings: Settings,
        handler: MessageHandler | None = None,
        error_reporter: ErrorReporter | None = None,
        cleanup: Cleanup | None = None,
    ) -> None:
        self._settings = settings
        self._handler = handler
        self._error_reporter: ErrorReporter = error_reporter or LoggingErrorReporter()
        self._cleanup: Cleanup = cleanup or NoopCleanup()
        self._status_store: MessageStatusStore | None = None
        self._message_source: MessageSource | None = None
        self._queue_processor: QueueProcessor | None = None

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def status_store(self) -> MessageStatusStore:
        if self._status_store is None:
            raise RuntimeError("status_store is not initialized")
        return self._status_store

    @property
    def message_source(self) -> MessageSource:
        if self._message_source is None:
            raise RuntimeError("message_source is not initialized")
        return self._message_source

    @property
    def queue_processor(self) -> QueueProcessor:
        if self._queue_processor is None:
            raise RuntimeError("queue_processor is not initialized")
        return self._queue_processor

    async def connect(self) -> None:
        if self._handler is None:
            if not self._settings.message_handler:
                raise ValueError("MESSAGE_HANDLER is not configured")
            self._handler = load_message_handler(self._settings.message_handler)

        self._status_store = await create_message_status_store(self._settings)
        self._message_source = create_message_source(self._settings)

        config = self._settings.to_processor_config()
        processing_service = ProcessingService(
            config,
            self._status_store,
            self._message_source,
            self._handler,
            self._error_reporter,
            self._cleanup,
        )
        self._queue_processor = QueueProcessor(
            config,
            create_timing(self._settings.max_iterations, self._settings.max_runtime_seconds),
            self._message_source,
            processing_service,
        )
        _log("dependencies_connected")

    async def close(self) -> None:
        if self._message_source is not None:
            try:
                await self._message_source.close()
            except Exception as exc:
                logger.warning("message source close failed: {}", exc)
            self._message_source = None

        if self._status_store is not None:
            try:
                await self._status_store.close()
            except Exception as exc:
                logger.warning("status store close failed: {}", exc)
            self._status_store = None

        self._queue_processor = None


def create_worker_dependencies(
    settings: Settings | None = None,
    *,
    handler: MessageHandler | None = None,
) -> WorkerDependencies:
    return WorkerDependencies(settings=settings or Settings(), handler=handler)
