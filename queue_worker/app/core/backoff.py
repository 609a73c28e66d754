"""Retry with capped exponential backoff for connecting to external services."""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterator, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class BackoffPolicy:
    initial_delay: float
    max_delay: float
    multiplier: float
    max_attempts: int

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.initial_delay < 0 or self.max_delay < 0:
            raise ValueError("delays must be non-negative")
        if self.multiplier < 1:
            raise ValueError("multiplier must be at least 1")

    def delays(self) -> Iterator[float]:
        """Pause before each retry; an exhausted iterator means give up."""
        delay = min(self.initial_delay, self.max_delay)
        for _ in range(self.max_attempts - 1):
            yield delay
            delay = min(delay * self.multiplier, self.max_delay)


async def retry_with_backoff(
    operation: Callable[[], Awaitable[T]],
    policy: BackoffPolicy,
    *,
    on_failure: Optional[Callable[[int, Exception], None]] = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """Await `operation` until it succeeds; the last failure is re-raised."""
    delays = policy.delays()
    attempt = 0
    while True:
        attempt += 1
        try:
            return await operation()
        except Exception as exc:
            if on_failure is not None:
                on_failure(attempt, exc)
            delay = next(delays, None)
            if delay is None:
                raise
            await sleep(delay)
