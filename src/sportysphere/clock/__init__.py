"""Clock module for sportysphere.

Provides the timer collaborator that drives every simulated delay.
"""

from .asyncio_clock import AsyncioClock
from .base import Clock
from .factory import create_clock
from .manual import ManualClock
from .models import TimerCallback, TimerHandle

__all__ = [
    "AsyncioClock",
    "Clock",
    "ManualClock",
    "TimerCallback",
    "TimerHandle",
    "create_clock",
]
