"""Toast queue with timed dismissal."""

from collections.abc import Callable

from ..clock import Clock, TimerHandle
from ..config import TOAST_DURATION_MS
from .base import Notifier
from .models import Toast, ToastLevel


class ToastQueue(Notifier):
    """Keeps the visible toasts and dismisses each after a fixed duration.

    Example:
        toasts = ToastQueue(clock)
        toasts.notify("Feed refreshed!")
        toasts.active()  # [Toast(id=1, message='Feed refreshed!', ...)]
    """

    def __init__(
        self,
        clock: Clock,
        duration_ms: int = TOAST_DURATION_MS,
        on_change: Callable[[list[Toast]], None] | None = None
    ) -> None:
        self._clock = clock
        self._duration_ms = duration_ms
        self._on_change = on_change
        self._toasts: list[Toast] = []
        self._timers: dict[int, TimerHandle] = {}
        self._next_id = 1
        self.history: list[Toast] = []

    def notify(self, message: str, level: ToastLevel | str = ToastLevel.SUCCESS) -> None:
        toast = Toast(
            id=self._next_id,
            message=message,
            level=ToastLevel(level),
            created_ms=self._clock.now(),
        )
        self._next_id += 1
        self._toasts.append(toast)
        self.history.append(toast)
        self._timers[toast.id] = self._clock.schedule_after(
            self._duration_ms, lambda: self._dismiss(toast.id)
        )
        self._emit()

    def active(self) -> list[Toast]:
        """Visible toasts, oldest first."""
        return list(self._toasts)

    def dismiss(self, toast_id: int) -> bool:
        """Remove a toast before its timer fires."""
        handle = self._timers.get(toast_id)
        if handle is not None:
            self._clock.cancel(handle)
        return self._dismiss(toast_id)

    def close(self) -> None:
        """Cancel all pending dismissals and clear the queue."""
        for handle in self._timers.values():
            self._clock.cancel(handle)
        self._timers.clear()
        self._toasts.clear()

    def _dismiss(self, toast_id: int) -> bool:
        self._timers.pop(toast_id, None)
        before = len(self._toasts)
        self._toasts = [t for t in self._toasts if t.id != toast_id]
        if len(self._toasts) == before:
            return False
        self._emit()
        return True

    def _emit(self) -> None:
        if self._on_change is not None:
            self._on_change(self.active())
