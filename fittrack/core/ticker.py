"""Single-flight tick sources driving player countdowns.

A tick source holds at most one callback. Starting a new countdown replaces
the previous one, so two countdowns never run side by side. Ticks are never
replayed: a loop that was blocked for several seconds delivers one tick when
it resumes, not one per missed second.
"""

from __future__ import annotations

import asyncio
from typing import Callable, Optional, Protocol


TickCallback = Callable[[], None]


class Ticker(Protocol):
    @property
    def active(self) -> bool: ...

    def start(self, callback: TickCallback) -> None: ...

    def cancel(self) -> None: ...


class AsyncioTicker:
    def __init__(
        self,
        interval_sec: float = 1.0,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        if interval_sec <= 0:
            raise ValueError("interval_sec must be > 0")
        self._interval_sec = interval_sec
        self._loop = loop
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def active(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, callback: TickCallback) -> None:
        self.cancel()
        loop = self._loop or asyncio.get_running_loop()
        self._task = loop.create_task(self._run(callback))

    def cancel(self) -> None:
        task = self._task
        self._task = None
        if task is not None and not task.done():
            task.cancel()

    async def _run(self, callback: TickCallback) -> None:
        while True:
            await asyncio.sleep(self._interval_sec)
            callback()


class ManualTicker:
    """Tick source fired by hand, for tests and scripted sessions."""

    def __init__(self) -> None:
        self._callback: TickCallback | None = None
        self.starts = 0
        self.cancels = 0

    @property
    def active(self) -> bool:
        return self._callback is not None

    def start(self, callback: TickCallback) -> None:
        self.cancel()
        self._callback = callback
        self.starts += 1

    def cancel(self) -> None:
        if self._callback is not None:
            self._callback = None
            self.cancels += 1

    def advance(self, ticks: int = 1) -> int:
        fired = 0
        for _ in range(ticks):
            if self._callback is None:
                break
            self._callback()
            fired += 1
        return fired
