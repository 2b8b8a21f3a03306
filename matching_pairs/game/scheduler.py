"""Single-threaded scheduling of delayed actions.

Delayed actions are queued with a deadline and run on the caller's thread
when the event loop is pumped, so they are ordered with every other event
the frontend delivers. A task that has been scheduled always fires.
"""

from __future__ import annotations

import heapq
import itertools
import logging
import time
from dataclasses import dataclass, field
from typing import Callable

logger = logging.getLogger(__name__)


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class ManualClock:
    """Clock that only moves when told to (milliseconds)."""

    def __init__(self, start: float = 0.0):
        self._now = start

    def now(self) -> float:
        return self._now

    def advance(self, ms: float) -> None:
        if ms < 0:
            raise ValueError("Cannot move clock backwards")
        self._now += ms

    def __call__(self) -> float:
        return self._now


@dataclass(order=True)
class ScheduledTask:
    """Fire-once callback with a deadline in milliseconds."""

    deadline: float
    seq: int
    callback: Callable[[], None] = field(compare=False)


class EventLoop:
    """Queue of delayed callbacks processed on a single thread."""

    def __init__(self, clock: Callable[[], float] | None = None):
        """Initialize event loop.

        Args:
            clock: Returns the current time in milliseconds.
                Defaults to the monotonic clock.
        """
        self.clock = clock or _monotonic_ms
        self._queue: list[ScheduledTask] = []
        self._counter = itertools.count()

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> ScheduledTask:
        """Schedule callback to run once delay_ms from now."""
        task = ScheduledTask(
            deadline=self.clock() + max(delay_ms, 0),
            seq=next(self._counter),
            callback=callback,
        )
        heapq.heappush(self._queue, task)
        logger.debug(f"Scheduled task #{task.seq} in {delay_ms}ms")
        return task

    def run_due(self) -> int:
        """Run every task whose deadline has passed.

        Tasks run in deadline order, FIFO among equal deadlines, each to
        completion before the next one starts.

        Returns:
            Number of tasks run.
        """
        count = 0
        while self._queue and self._queue[0].deadline <= self.clock():
            task = heapq.heappop(self._queue)
            task.callback()
            count += 1
        return count

    def run_until_idle(self, sleep: Callable[[float], None] = time.sleep) -> int:
        """Wait for and run tasks until the queue is empty.

        Args:
            sleep: Called with the number of seconds to wait for the next deadline.

        Returns:
            Number of tasks run.
        """
        count = 0
        while self.pending():
            wait_ms = self.next_deadline() - self.clock()
            if wait_ms > 0:
                sleep(wait_ms / 1000.0)
            count += self.run_due()
        return count

    def advance(self, ms: float) -> int:
        """Move a ManualClock forward and run due tasks."""
        if not isinstance(self.clock, ManualClock):
            raise TypeError("advance() requires a ManualClock")
        self.clock.advance(ms)
        return self.run_due()

    def next_deadline(self) -> float | None:
        """Deadline of the earliest pending task."""
        return self._queue[0].deadline if self._queue else None

    def pending(self) -> int:
        """Number of tasks not yet fired."""
        return len(self._queue)
