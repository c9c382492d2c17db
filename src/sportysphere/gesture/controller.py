"""Pull-to-refresh gesture recognizer.

Turns a touch sequence on a scrollable surface into at most one refresh per
committed pull. Hides:
- Session bookkeeping and the phase state machine
- Damping of the raw pull distance
- The re-entrancy guard around the refresh operation
"""

from collections.abc import Awaitable, Callable
from typing import Any

from ..config import GestureConfig
from ..errors import GestureIgnored, RefreshFailed
from ..notifications import Notifier, ToastLevel
from .models import (
    GesturePhase,
    GestureSession,
    GestureSnapshot,
    PointerSample,
    RefreshOutcome,
)

RefreshOperation = Callable[[], Awaitable[Any]]
ProgressCallback = Callable[[float, GesturePhase], None]


class PullToRefreshController:
    """Recognizes pull-to-refresh on one scrollable surface.

    One controller per surface; sessions are never shared.

    Example:
        controller = PullToRefreshController(reload_feed, on_progress=draw)
        controller.on_interaction_start(PointerSample(y=100), surface_scroll_offset=0)
        controller.on_interaction_move(PointerSample(y=240))  # damped 70
        outcome = await controller.on_interaction_end()      # refresh runs once
    """

    def __init__(
        self,
        refresh: RefreshOperation,
        config: GestureConfig | None = None,
        on_progress: ProgressCallback | None = None,
        on_refresh_start: Callable[[], None] | None = None,
        on_refresh_end: Callable[[RefreshOutcome], None] | None = None,
        notifier: Notifier | None = None
    ) -> None:
        self._refresh = refresh
        self.config = config or GestureConfig()
        self._on_progress = on_progress
        self._on_refresh_start = on_refresh_start
        self._on_refresh_end = on_refresh_end
        self._notifier = notifier
        self._session: GestureSession | None = None
        self._torn_down = False
        self._debug_callback: Any | None = None
        self.last_ignored: GestureIgnored | None = None

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "PullToRefresh", message)

    @property
    def phase(self) -> GesturePhase:
        if self._session is None:
            return GesturePhase.IDLE
        return self._session.phase

    @property
    def damped_distance(self) -> float:
        return self._session.damped_distance if self._session else 0.0

    @property
    def is_refreshing(self) -> bool:
        return self.phase in (GesturePhase.COMMITTING, GesturePhase.REFRESHING)

    def snapshot(self) -> GestureSnapshot:
        session = self._session
        return GestureSnapshot(
            phase=self.phase,
            raw_distance=session.raw_distance if session else 0.0,
            damped_distance=session.damped_distance if session else 0.0,
            threshold=self.config.threshold,
        )

    def _ignore(self, reason: str) -> None:
        self.last_ignored = GestureIgnored(reason)
        self._debug("debug", str(self.last_ignored))

    def _report(self, damped: float, phase: GesturePhase) -> None:
        if self._on_progress is not None and not self._torn_down:
            self._on_progress(damped, phase)

    def on_interaction_start(self, position: PointerSample, surface_scroll_offset: float) -> bool:
        """Begin a session if the surface is scrolled to the top.

        Returns:
            True if a session was started
        """
        if self._torn_down:
            self._ignore("surface torn down")
            return False
        if self.is_refreshing:
            self._ignore("refresh already in flight")
            return False
        if surface_scroll_offset != 0:
            # Drop any half-finished session so later moves stay no-ops
            self._session = None
            self._ignore(f"scroll offset {surface_scroll_offset} is not at top")
            return False

        self._session = GestureSession(origin_y=position.y, started_at=position.timestamp)
        self._debug("debug", f"Tracking from y={position.y}")
        return True

    def on_interaction_move(self, position: PointerSample) -> bool:
        """Update the pull distance.

        Returns:
            True if the event was consumed and native scroll must be suppressed
        """
        session = self._session
        if session is None or session.phase != GesturePhase.TRACKING:
            self._ignore("move without an active session")
            return False

        session.raw_distance = max(0.0, position.y - session.origin_y)
        session.damped_distance = session.raw_distance * self.config.damping_factor
        self._report(session.damped_distance, GesturePhase.TRACKING)
        return session.raw_distance > 0

    async def on_interaction_end(self) -> RefreshOutcome | None:
        """Release the pull, running the refresh if the threshold was passed.

        Returns:
            The refresh outcome, or None if no refresh was triggered
        """
        session = self._session
        if session is None or session.phase != GesturePhase.TRACKING:
            self._ignore("release without an active session")
            return None

        released = session.damped_distance
        if released <= self.config.threshold:
            self._debug("debug", f"Released at {released:.1f}, below threshold {self.config.threshold}")
            self._reset(session)
            return None

        session.phase = GesturePhase.COMMITTING
        self._report(released, GesturePhase.COMMITTING)
        session.phase = GesturePhase.REFRESHING
        self._report(released, GesturePhase.REFRESHING)
        if self._on_refresh_start is not None and not self._torn_down:
            self._on_refresh_start()
        self._debug("info", f"Refresh triggered at {released:.1f}")

        failure: RefreshFailed | None = None
        try:
            await self._refresh()
        except Exception as e:
            failure = RefreshFailed(e)
            self._debug("warning", str(failure))
        finally:
            self._reset(session)

        outcome = RefreshOutcome(success=failure is None, failure=failure, damped_distance=released)
        if not self._torn_down:
            if self._on_refresh_end is not None:
                self._on_refresh_end(outcome)
            if failure is not None and self._notifier is not None:
                self._notifier.notify("Refresh failed", ToastLevel.ERROR)
        return outcome

    def teardown(self) -> None:
        """Detach from the surface.

        Pending session state is dropped without refreshing. A refresh already
        in flight finishes for its awaiting caller, but no further callbacks
        reach the presentation layer.
        """
        self._torn_down = True
        if self._session is not None and self._session.phase == GesturePhase.TRACKING:
            self._session = None
        self._debug("debug", "Torn down")

    def _reset(self, session: GestureSession) -> None:
        if self._session is not session:
            return
        self._session = None
        self._report(0.0, GesturePhase.IDLE)
