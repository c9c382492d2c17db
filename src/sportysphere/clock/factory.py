"""Factory for creating clocks."""

from typing import Any

from .base import Clock


def create_clock(kind: str = "asyncio", **kwargs: Any) -> Clock:
    """Create a clock.

    Args:
        kind: Clock type ("asyncio" or "manual")
        **kwargs: Clock-specific configuration
            - loop: event loop for "asyncio"
            - start_ms: initial time for "manual"

    Returns:
        Clock instance

    Raises:
        ValueError: If clock type is not supported
    """
    if kind == "asyncio":
        from .asyncio_clock import AsyncioClock
        return AsyncioClock(**kwargs)

    elif kind == "manual":
        from .manual import ManualClock
        return ManualClock(**kwargs)

    raise ValueError(
        f"Unsupported clock: {kind}. "
        f"Supported clocks: asyncio, manual"
    )
