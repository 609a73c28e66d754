"""Resolve the configured MessageHandler from a `module:attribute` import path."""
from __future__ import annotations

import importlib
import inspect

from queue_worker.app.ports.message_handler import MessageHandler


def load_message_handler(path: str) -> MessageHandler:
    """
    Import `package.module:attribute`.

    A class is instantiated with no arguments; any other object must already
    expose an async `process(message)` method.
    """
    module_name, sep, attr_path = path.strip().partition(":")
    if not sep or not module_name or not attr_path:
        raise ValueError(f"message handler must look like 'module:attribute', got {path!r}")

    target: object = importlib.import_module(module_name)
    for attr in attr_path.split("."):
        target = getattr(target, attr)

    if inspect.isclass(target):
        target = target()

    process = getattr(target, "process", None)
    if not callable(process) or not inspect.iscoroutinefunction(process):
        raise TypeError(f"{path!r} does not provide an async process(message) method")
    return target  # type: ignore[return-value]
