"""Manually advanced clock for deterministic tests."""

import heapq
import itertools

from .base import Clock
from .models import TimerCallback, TimerHandle

# Upper bound on callbacks fired by run_all before assuming a timer loop
MAX_DRAIN_CALLBACKS = 10_000


class ManualClock(Clock):
    """Clock that only moves when told to.

    Example:
        clock = ManualClock()
        clock.schedule_after(500, on_sent)
        clock.advance(500)  # on_sent runs here
    """

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now = start_ms
        self._queue: list[tuple[float, int, TimerHandle]] = []
        self._ids = itertools.count(1)

    def now(self) -> float:
        return self._now

    def schedule_after(self, delay_ms: float, callback: TimerCallback) -> TimerHandle:
        if delay_ms < 0:
            raise ValueError(f"delay_ms must be >= 0, got {delay_ms}")
        handle = TimerHandle(id=next(self._ids), due_ms=self._now + delay_ms, callback=callback)
        heapq.heappush(self._queue, (handle.due_ms, handle.id, handle))
        return handle

    def cancel(self, handle: TimerHandle) -> bool:
        if not handle.active:
            return False
        handle.cancelled = True
        return True

    def pending_count(self) -> int:
        return sum(1 for _, _, handle in self._queue if handle.active)

    def advance(self, delta_ms: float) -> int:
        """Move time forward, firing every callback that falls due.

        Callbacks scheduled while advancing also fire if they fall inside
        the window. Time is set to each callback's due time while it runs.

        Args:
            delta_ms: Milliseconds to advance (must be >= 0)

        Returns:
            Number of callbacks fired
        """
        if delta_ms < 0:
            raise ValueError(f"delta_ms must be >= 0, got {delta_ms}")
        target = self._now + delta_ms
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, handle = heapq.heappop(self._queue)
            if not handle.active:
                continue
            self._now = due
            handle.fired = True
            handle.callback()
            fired += 1
        self._now = target
        return fired

    def run_all(self) -> int:
        """Fire everything that is pending, however far in the future.

        Raises:
            RuntimeError: If callbacks keep rescheduling themselves
        """
        fired = 0
        while self.pending_count():
            next_due = min(h.due_ms for _, _, h in self._queue if h.active)
            fired += self.advance(next_due - self._now)
            if fired > MAX_DRAIN_CALLBACKS:
                raise RuntimeError("run_all exceeded callback limit; timers keep rescheduling")
        return fired
