"""Default Cleanup: nothing to roll back."""
from __future__ import annotations


class NoopCleanup:
    async def clean_up_after_exception(self) -> None:
        return
