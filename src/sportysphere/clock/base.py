"""Abstract base class for clocks.

The clock hides where time comes from:
- The running asyncio event loop in the application
- A manually advanced counter in tests
"""

import asyncio
from abc import ABC, abstractmethod

from .models import TimerCallback, TimerHandle


class Clock(ABC):
    """Timer collaborator used by the interaction core.

    Implementations must fire callbacks in due-time order, with callbacks due
    at the same instant firing in submission order, and must honour
    ``cancel`` for any handle that has not fired yet.
    """

    @abstractmethod
    def now(self) -> float:
        """Current time in milliseconds."""

    @abstractmethod
    def schedule_after(self, delay_ms: float, callback: TimerCallback) -> TimerHandle:
        """Run ``callback`` once after ``delay_ms`` milliseconds.

        Args:
            delay_ms: Delay in milliseconds (must be >= 0)
            callback: Zero-argument callable

        Returns:
            Handle that can be passed to ``cancel``

        Raises:
            ValueError: If delay_ms is negative
        """

    @abstractmethod
    def cancel(self, handle: TimerHandle) -> bool:
        """Cancel a scheduled callback.

        Returns:
            True if the callback was pending and will no longer fire
        """

    @abstractmethod
    def pending_count(self) -> int:
        """Number of callbacks that are scheduled and not cancelled."""

    async def sleep(self, delay_ms: float) -> None:
        """Suspend the calling coroutine for ``delay_ms`` on this clock."""
        future = asyncio.get_running_loop().create_future()

        def _wake() -> None:
            if not future.done():
                future.set_result(None)

        handle = self.schedule_after(delay_ms, _wake)
        try:
            await future
        finally:
            self.cancel(handle)
