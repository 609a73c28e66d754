"""Port: hook run after an exception escapes processing of a message (e.g. roll back a DB session)."""
from __future__ import annotations

from typing import Protocol


class Cleanup(Protocol):
    async def clean_up_after_exception(self) -> None: ...
