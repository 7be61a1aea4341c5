"""Timer services for the reveal-expiry callback.

All services fire callbacks on the thread or loop that owns them, so engine
handlers and timer expiries never interleave.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Callable

logger = logging.getLogger(__name__)


@dataclass(order=True)
class ManualTimerHandle:
    """Handle returned by ``ManualTimerService.schedule_once``."""

    deadline_ms: int
    sequence: int
    callback: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)
    fired: bool = field(default=False, compare=False)

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)


class ManualTimerService:
    """
    Timer service driven by a virtual clock.

    Nothing fires until ``advance`` moves the clock past a deadline. Hosts
    with their own frame loop can call ``advance`` once per tick; tests use it
    to step through the reveal window deterministically.

    Examples:
        >>> timers = ManualTimerService()
        >>> fired = []
        >>> _ = timers.schedule_once(2000, lambda: fired.append(True))
        >>> timers.advance(1999)
        0
        >>> timers.advance(1), fired
        (1, [True])
    """

    def __init__(self) -> None:
        self.now_ms = 0
        self._queue: list[ManualTimerHandle] = []
        self._sequence = itertools.count()

    def schedule_once(self, delay_ms: int, callback: Callable[[], None]) -> ManualTimerHandle:
        handle = ManualTimerHandle(
            deadline_ms=self.now_ms + max(0, int(delay_ms)),
            sequence=next(self._sequence),
            callback=callback,
        )
        heapq.heappush(self._queue, handle)
        return handle

    def cancel(self, handle: ManualTimerHandle) -> None:
        """Drop ``handle`` from the queue; a no-op once it has fired or been canceled."""
        if not handle.active:
            return
        handle.cancelled = True
        self._queue = [queued for queued in self._queue if queued is not handle]
        heapq.heapify(self._queue)

    @property
    def pending_count(self) -> int:
        """Number of scheduled callbacks that have neither fired nor been canceled."""
        return len(self._queue)

    def advance(self, ms: int) -> int:
        """Move the clock forward by ``ms`` and fire every due callback in deadline order.

        Callbacks scheduled by a firing callback run in the same call when
        their deadline is also due. Returns the number of callbacks fired.
        """
        target = self.now_ms + max(0, int(ms))
        fired = 0
        while self._queue and self._queue[0].deadline_ms <= target:
            handle = heapq.heappop(self._queue)
            self.now_ms = handle.deadline_ms
            handle.fired = True
            handle.callback()
            fired += 1
        self.now_ms = target
        return fired

    def run_all(self) -> int:
        """Fire everything still pending, however far in the future."""
        fired = 0
        while self._queue:
            remaining = self._queue[0].deadline_ms - self.now_ms
            fired += self.advance(max(0, remaining))
        return fired


class AsyncioTimerService:
    """Timer service backed by ``loop.call_later`` on a single event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            try:
                self._loop = asyncio.get_running_loop()
            except RuntimeError as e:
                raise RuntimeError(
                    "AsyncioTimerService needs a running event loop; schedule reveals "
                    "from inside the loop or pass one explicitly"
                ) from e
        return self._loop

    def schedule_once(self, delay_ms: int, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self.loop.call_later(max(0, delay_ms) / 1000.0, callback)

    def cancel(self, handle: asyncio.TimerHandle) -> None:
        # TimerHandle.cancel() is already a no-op once fired or canceled.
        handle.cancel()
