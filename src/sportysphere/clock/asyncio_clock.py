"""Clock backed by the asyncio event loop.

The loop's own timer heap does not promise submission order for equal
deadlines, so this clock keeps its own ``(due, id)`` heap and arms a single
loop timer for the earliest entry.
"""

import asyncio
import heapq
import itertools
import time

from .base import Clock
from .models import TimerCallback, TimerHandle


class AsyncioClock(Clock):
    """Clock that schedules on an asyncio event loop.

    The loop is bound lazily on first use, so the clock can be built
    outside a running loop and used inside it.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop
        self._queue: list[tuple[float, int, TimerHandle]] = []
        self._ids = itertools.count(1)
        self._armed: asyncio.TimerHandle | None = None
        self._armed_due: float | None = None
        self._tolerance_ms = time.get_clock_info("monotonic").resolution * 1000

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def now(self) -> float:
        return self._get_loop().time() * 1000

    def schedule_after(self, delay_ms: float, callback: TimerCallback) -> TimerHandle:
        if delay_ms < 0:
            raise ValueError(f"delay_ms must be >= 0, got {delay_ms}")
        handle = TimerHandle(id=next(self._ids), due_ms=self.now() + delay_ms, callback=callback)
        heapq.heappush(self._queue, (handle.due_ms, handle.id, handle))
        self._arm()
        return handle

    def cancel(self, handle: TimerHandle) -> bool:
        if not handle.active:
            return False
        handle.cancelled = True
        self._arm()
        return True

    def pending_count(self) -> int:
        return sum(1 for _, _, handle in self._queue if handle.active)

    def close(self) -> None:
        """Cancel every pending callback and disarm the loop timer."""
        for _, _, handle in self._queue:
            handle.cancelled = True
        self._queue.clear()
        self._disarm()

    def _disarm(self) -> None:
        if self._armed is not None:
            self._armed.cancel()
        self._armed = None
        self._armed_due = None

    def _arm(self) -> None:
        while self._queue and not self._queue[0][2].active:
            heapq.heappop(self._queue)
        if not self._queue:
            self._disarm()
            return

        head_due = self._queue[0][0]
        if self._armed is not None and self._armed_due is not None and self._armed_due <= head_due:
            return
        self._disarm()
        self._armed = self._get_loop().call_at(head_due / 1000, self._fire_due)
        self._armed_due = head_due

    def _fire_due(self) -> None:
        self._armed = None
        self._armed_due = None
        horizon = self.now() + self._tolerance_ms
        while self._queue and self._queue[0][0] <= horizon:
            _, _, handle = heapq.heappop(self._queue)
            if not handle.active:
                continue
            handle.fired = True
            try:
                handle.callback()
            except Exception as e:
                self._get_loop().call_exception_handler({
                    "message": f"Unhandled exception in clock callback {handle.id}",
                    "exception": e,
                })
        self._arm()
