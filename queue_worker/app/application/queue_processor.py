"""Queue processor control loop: fetch a batch, process it in order, repeat until told to stop."""
from __future__ import annotations

import asyncio
import signal
from typing import Any

from loguru import logger

from queue_worker.app.application.processing_service import ProcessingService
from queue_worker.app.core import SERVICE_NAME
from queue_worker.app.core.prefixed_logger import MessageIdPrefixedLogger
from queue_worker.app.domain.processor_config import QueueProcessorConfig
from queue_worker.app.ports.message_source import MessageSource
from queue_worker.app.ports.timing import Timing

# SIGINT: Ctrl-C, SIGTERM: kill, SIGHUP: terminal closed.
SHUTDOWN_SIGNALS: tuple[signal.Signals, ...] = tuple(
    sig
    for sig in (
        getattr(signal, "SIGINT", None),
        getattr(signal, "SIGTERM", None),
        getattr(signal, "SIGHUP", None),
    )
    if sig is not None
)


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


class QueueProcessor:
    """
    Runs the processing loop for one worker.

    Messages of a batch are processed sequentially in the order the source
    returned them. A shutdown signal only sets a flag; the batch in flight is
    finished and the flag is checked before the next fetch.
    """

    def __init__(
        self,
        config: QueueProcessorConfig,
        timing: Timing,
        message_source: MessageSource,
        processing_service: ProcessingService,
        *,
        logger: MessageIdPrefixedLogger | None = None,
    ) -> None:
        self._config = config
        self._timing = timing
        self._message_source = message_source
        self._processing_service = processing_service
        self._logger = logger or MessageIdPrefixedLogger()
        self._shutdown_signal_detected = False
        self._installed_signals: list[signal.Signals] = []
        self._loop: asyncio.AbstractEventLoop | None = None

    @property
    def shutdown_signal_detected(self) -> bool:
        return self._shutdown_signal_detected

    def handle_signal(self, signum: int) -> None:
        self._logger.info(f"Signal {int(signum)} detected. Will shut down.")
        self._shutdown_signal_detected = True

    def install_signal_handlers(self) -> None:
        loop = asyncio.get_running_loop()
        self._loop = loop
        for sig in SHUTDOWN_SIGNALS:
            try:
                loop.add_signal_handler(sig, self.handle_signal, int(sig))
            except (NotImplementedError, RuntimeError):
                continue
            self._installed_signals.append(sig)

    def remove_signal_handlers(self) -> None:
        if self._loop is not None:
            for sig in self._installed_signals:
                self._loop.remove_signal_handler(sig)
        self._installed_signals = []
        self._loop = None

    async def process_messages(self) -> None:
        self.install_signal_handlers()
        _log("processor_started")
        try:
            while not self._shutdown_signal_detected and not self._timing.should_stop_processing_messages():
                messages = await self._message_source.fetch(
                    self._config.max_messages_per_request,
                    self._config.visibility_timeout,
                    self._config.wait_time_seconds,
                )
                for message in messages:
                    await self._processing_service.process_message(message)
        finally:
            self.remove_signal_handlers()
            _log("processor_stopped", shutdown_signal_detected=self._shutdown_signal_detected)
