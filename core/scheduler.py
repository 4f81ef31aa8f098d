"""
core/scheduler.py
-----------------
Delayed-callback schedulers driving the typing renderer.

- ``ManualScheduler``: virtual clock. The HTTP layer runs it to idle so a
  command's full output is computed in one request; tests step it.
- ``AsyncioScheduler``: real delays on a running event loop.

Delays are in milliseconds.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
from typing import Callable, List, Optional, Protocol, Tuple


class Scheduler(Protocol):
    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> None:
        ...


class ManualScheduler:
    """Deterministic scheduler on a virtual millisecond clock."""

    def __init__(self) -> None:
        self.now_ms: float = 0.0
        self._queue: List[Tuple[float, int, Callable[[], None]]] = []
        self._seq = itertools.count()

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> None:
        heapq.heappush(self._queue, (self.now_ms + max(delay_ms, 0.0), next(self._seq), callback))

    @property
    def pending(self) -> int:
        return len(self._queue)

    def advance(self, ms: float) -> int:
        """Run every callback due within the next ``ms`` milliseconds."""
        deadline = self.now_ms + ms
        ran = 0
        while self._queue and self._queue[0][0] <= deadline:
            due, _, callback = heapq.heappop(self._queue)
            self.now_ms = due
            callback()
            ran += 1
        self.now_ms = deadline
        return ran

    def run_until_idle(self, max_callbacks: int = 1_000_000) -> int:
        """Run callbacks in due order until nothing is scheduled."""
        ran = 0
        while self._queue:
            if ran >= max_callbacks:
                raise RuntimeError(f"Scheduler still busy after {max_callbacks} callbacks.")
            due, _, callback = heapq.heappop(self._queue)
            self.now_ms = due
            callback()
            ran += 1
        return ran


class AsyncioScheduler:
    """Scheduler backed by ``loop.call_later``."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop or asyncio.get_running_loop()

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> None:
        self._loop.call_later(max(delay_ms, 0.0) / 1000.0, callback)
