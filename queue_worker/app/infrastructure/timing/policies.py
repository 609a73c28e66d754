"""Timing policies deciding when the processing loop should stop."""
from __future__ import annotations

import time
from typing import Callable

from queue_worker.app.ports.timing import Timing


class RunForever:
    def should_stop_processing_messages(self) -> bool:
        return False


class MaxIterations:
    """Allow exactly `iterations` loop iterations, then stop."""

    def __init__(self, iterations: int) -> None:
        if iterations < 0:
            raise ValueError("iterations must be non-negative")
        self._remaining = iterations

    @property
    def remaining(self) -> int:
        return self._remaining

    def should_stop_processing_messages(self) -> bool:
        if self._remaining == 0:
            return True
        self._remaining -= 1
        return False


class MaxRuntime:
    """Stop once `seconds` have elapsed since construction (checked between batches)."""

    def __init__(self, seconds: float, *, clock: Callable[[], float] = time.monotonic) -> None:
        if seconds <= 0:
            raise ValueError("seconds must be positive")
        self._clock = clock
        self._deadline = clock() + seconds

    def should_stop_processing_messages(self) -> bool:
        return self._clock() >= self._deadline


class AnyOf:
    """Stop as soon as any wrapped policy says so. Every policy is consulted each time."""

    def __init__(self, *policies: Timing) -> None:
        self._policies = policies

    def should_stop_processing_messages(self) -> bool:
        decisions = [policy.should_stop_processing_messages() for policy in self._policies]
        return any(decisions)


def create_timing(max_iterations: int = 0, max_runtime_seconds: float = 0.0) -> Timing:
    policies: list[Timing] = []
    if max_iterations > 0:
        policies.append(MaxIterations(max_iterations))
    if max_runtime_seconds > 0:
        policies.append(MaxRuntime(max_runtime_seconds))
    if not policies:
        return RunForever()
    if len(policies) == 1:
        return policies[0]
    return AnyOf(*policies)
