"""Clock and sleep capabilities used by the retry engine."""

from __future__ import annotations

import asyncio
import time
from typing import Protocol


class Timer(Protocol):
    def now(self) -> float: ...

    async def delay(self, seconds: float) -> None: ...


class MonotonicTimer:
    def now(self) -> float:
        return time.monotonic()

    async def delay(self, seconds: float) -> None:
        await asyncio.sleep(seconds)


class ManualTimer:
    """Deterministic timer: ``delay`` advances virtual time instead of sleeping."""

    def __init__(self, start: float = 0.0) -> None:
        self.current = start
        self.delays: list[float] = []

    def now(self) -> float:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += seconds

    async def delay(self, seconds: float) -> None:
        self.delays.append(seconds)
        self.current += seconds
