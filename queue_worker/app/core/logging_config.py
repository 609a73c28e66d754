"""Process-wide loguru sink configuration."""
from __future__ import annotations

import sys

from loguru import logger

from queue_worker.app.config.settings import Settings


def configure_logging(settings: Settings) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.log_level.strip().upper() or "INFO",
        serialize=settings.log_json,
        backtrace=False,
        diagnose=False,
    )
