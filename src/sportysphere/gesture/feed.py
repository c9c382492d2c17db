"""Feed refresh operation injected into the feed surface's controller."""

from collections.abc import Callable
from typing import Any

from ..clock import Clock
from ..config import FEED_REFRESH_DELAY_MS
from ..notifications import Notifier


class FeedRefresher:
    """Simulated feed reload.

    Waits on the clock instead of fetching anything, then reloads the
    in-memory feed through an optional hook and notifies the user.
    Calls made while a reload is running return immediately.
    """

    def __init__(
        self,
        clock: Clock,
        delay_ms: int = FEED_REFRESH_DELAY_MS,
        notifier: Notifier | None = None,
        reload: Callable[[], Any] | None = None
    ) -> None:
        self._clock = clock
        self._delay_ms = delay_ms
        self._notifier = notifier
        self._reload = reload
        self.refreshing = False
        self.refresh_count = 0

    async def __call__(self) -> None:
        if self.refreshing:
            return
        self.refreshing = True
        try:
            await self._clock.sleep(self._delay_ms)
            if self._reload is not None:
                self._reload()
        finally:
            self.refreshing = False

        self.refresh_count += 1
        if self._notifier is not None:
            self._notifier.notify("Feed refreshed!")
