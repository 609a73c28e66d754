from __future__ import annotations

import asyncio
from typing import Any

from loguru import logger

from queue_worker.app.composition import create_worker_dependencies
from queue_worker.app.config.settings import Settings
from queue_worker.app.core import SERVICE_NAME
from queue_worker.app.core.logging_config import configure_logging


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


async def run_worker(settings: Settings | None = None) -> None:
    settings = settings or Settings()
    deps = create_worker_dependencies(settings)
    await deps.connect()
    _log("worker_started", queue_url=settings.sqs_queue_url)
    try:
        await deps.queue_processor.process_messages()
    finally:
        await deps.close()
        _log("worker_stopped")


def main() -> None:
    settings = Settings()
    configure_logging(settings)
    try:
        asyncio.run(run_worker(settings))
    except KeyboardInterrupt:
        _log("worker_interrupted")
    except Exception as e:
        # Exit non-zero so the process supervisor restarts the worker.
        logger.exception("worker failed: {}", e)
        raise


if __name__ == "__main__":
    main()
