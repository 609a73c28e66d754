from __future__ import annotations

import os
from dataclasses import dataclass

import pytest

from queue_worker.app.application.processing_service import ProcessingService
from queue_worker.app.application.queue_processor import QueueProcessor
from queue_worker.app.core.prefixed_logger import MessageIdPrefixedLogger
from queue_worker.app.domain.processor_config import QueueProcessorConfig
from queue_worker.app.infrastructure.timing.policies import MaxIterations
from tests.fakes import (
    CapturingErrorReporter,
    CapturingLogger,
    CapturingStatusStore,
    CountingCleanup,
    FakeMessageSource,
    ScriptedHandler,
)


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if os.getenv("RUN_INTEGRATION") == "1":
        return
    skip = pytest.mark.skip(reason="set RUN_INTEGRATION=1 to run integration tests")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip)


@dataclass
class Harness:
    """All collaborators of one processor, wired together."""

    config: QueueProcessorConfig
    source: FakeMessageSource
    store: CapturingStatusStore
    handler: ScriptedHandler
    reporter: CapturingErrorReporter
    cleanup: CountingCleanup
    log: CapturingLogger
    service: ProcessingService

    def processor(self, loops: int = 1) -> QueueProcessor:
        return QueueProcessor(
            self.config,
            MaxIterations(loops),
            self.source,
            self.service,
            logger=MessageIdPrefixedLogger(self.log),
        )


def build_harness(
    *,
    batches=None,
    store: CapturingStatusStore | None = None,
    handler: ScriptedHandler | None = None,
    source: FakeMessageSource | None = None,
    config: QueueProcessorConfig | None = None,
) -> Harness:
    config = config or QueueProcessorConfig().with_log_message_start().with_log_message_end()
    source = source or FakeMessageSource(batches)
    store = store or CapturingStatusStore()
    handler = handler or ScriptedHandler()
    reporter = CapturingErrorReporter()
    cleanup = CountingCleanup()
    log = CapturingLogger()
    service = ProcessingService(
        config,
        store,
        source,
        handler,
        reporter,
        cleanup,
        logger=MessageIdPrefixedLogger(log),
    )
    return Harness(config, source, store, handler, reporter, cleanup, log, service)


@pytest.fixture()
def harness_factory():
    return build_harness
