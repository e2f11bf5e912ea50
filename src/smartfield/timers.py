"""One-shot, cancellable scheduling for field instances.

The autofill confirmation is the only delayed transition in the engine. It
is scheduled through a Scheduler so that hosts can run it on their event
loop and tests can drive it with a VirtualScheduler.

Delays are in milliseconds.
"""

import asyncio
import heapq
import itertools
from typing import Callable, Protocol


class TimerHandle(Protocol):
    """A scheduled callback that can be cancelled before it fires."""

    def cancel(self) -> None:
        ...

    def cancelled(self) -> bool:
        ...


class Scheduler(Protocol):
    """Schedules a callback to run once after a delay."""

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        ...


# =============================================================================
# asyncio
# =============================================================================


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop.

    When no loop is given, the running loop is bound at construction, so the
    scheduler must then be created from within a coroutine or callback.

    Raises:
        RuntimeError: If no loop is given and none is running
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop if loop is not None else asyncio.get_running_loop()

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self._loop.call_later(delay_ms / 1000.0, callback)


# =============================================================================
# Virtual clock
# =============================================================================


class VirtualTimer:
    """Handle returned by VirtualScheduler."""

    def __init__(self, due: float, callback: Callable[[], None]):
        self.due = due
        self.callback = callback
        self._cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self._cancelled = True

    def cancelled(self) -> bool:
        return self._cancelled


class VirtualScheduler:
    """Scheduler driven by a manually advanced clock.

    Example:
        scheduler = VirtualScheduler()
        scheduler.call_later(1500, on_fire)
        scheduler.advance(1499)   # nothing yet
        scheduler.advance(1)      # on_fire runs
    """

    def __init__(self) -> None:
        self.now: float = 0.0
        self._queue: list[tuple[float, int, VirtualTimer]] = []
        self._sequence = itertools.count()

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> VirtualTimer:
        timer = VirtualTimer(self.now + max(delay_ms, 0), callback)
        heapq.heappush(self._queue, (timer.due, next(self._sequence), timer))
        return timer

    def advance(self, ms: float) -> int:
        """Move the clock forward, firing due timers in order.

        Returns:
            Number of callbacks that ran
        """
        target = self.now + ms
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, timer = heapq.heappop(self._queue)
            self.now = due
            if timer.cancelled():
                continue
            timer.fired = True
            timer.callback()
            fired += 1
        self.now = target
        return fired

    def run_all(self) -> int:
        """Fire every pending timer, advancing the clock as needed."""
        if not self._queue:
            return 0
        return self.advance(max(due for due, _, _ in self._queue) - self.now)

    @property
    def pending(self) -> int:
        """Number of scheduled timers that are neither fired nor cancelled."""
        return sum(1 for _, _, t in self._queue if not t.cancelled())
