"""Logger façade that prepends a prefix (the current message id) to every line.

Each processing attempt gets its own instance via `with_prefix`, so the prefix
lives with the attempt instead of in shared state.
"""
from __future__ import annotations

from typing import Any, Protocol

from loguru import logger as _default_logger


class LevelLogger(Protocol):
    """Anything with loguru's `log(level, message, *args, **kwargs)` and `opt(exception=...)`."""

    def log(self, level: str, message: str, *args: Any, **kwargs: Any) -> None: ...

    def opt(self, *, exception: Any = None, **kwargs: Any) -> "LevelLogger": ...


class MessageIdPrefixedLogger:
    def __init__(self, logger: LevelLogger | None = None, prefix: str = "") -> None:
        self._logger = logger if logger is not None else _default_logger
        self._prefix = prefix

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def wrapped(self) -> LevelLogger:
        return self._logger

    def with_prefix(self, prefix: str) -> "MessageIdPrefixedLogger":
        return MessageIdPrefixedLogger(self._logger, prefix)

    def for_message(self, message_id: str) -> "MessageIdPrefixedLogger":
        return self.with_prefix(f"({message_id}) - ")

    def log(self, level: str, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.log(level, self._prefix + message, *args, **kwargs)

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        self.log("DEBUG", message, *args, **kwargs)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        self.log("INFO", message, *args, **kwargs)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        self.log("WARNING", message, *args, **kwargs)

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        self.log("ERROR", message, *args, **kwargs)

    def exception(self, message: str, exc: BaseException, level: str = "ERROR") -> None:
        """Log with the exception attached so the sink renders its traceback."""
        self._logger.opt(exception=exc).log(level, self._prefix + message)
