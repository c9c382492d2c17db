"""Timer handle representation shared by clock implementations."""

from collections.abc import Callable
from dataclasses import dataclass, field

TimerCallback = Callable[[], None]


@dataclass
class TimerHandle:
    """A scheduled callback.

    Handles order by ``(due_ms, id)``; ids are assigned in submission order
    so callbacks due at the same instant fire in the order they were scheduled.
    """

    id: int
    due_ms: float
    callback: TimerCallback = field(repr=False)
    cancelled: bool = False
    fired: bool = False

    @property
    def active(self) -> bool:
        """Whether the callback can still fire."""
        return not (self.cancelled or self.fired)
