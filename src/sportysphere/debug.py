"""Debug callback rendering.

Components report through ``callback(level, component, message)``.
This module hides how those lines end up on a terminal.
"""

from datetime import datetime

from rich.console import Console
from rich.markup import escape

from .config import LogLevel

LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
LOG_MAX_MESSAGE_LENGTH = 500  # Characters before truncating log messages

_LEVEL_STYLES = {
    LogLevel.DEBUG: "dim",
    LogLevel.INFO: "cyan",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "bold red",
}


class RichDebugLog:
    """Debug callback that prints level-filtered lines to a Rich console.

    Example:
        log = RichDebugLog(min_level=LogLevel.INFO)
        pipeline.set_debug_callback(log)
    """

    def __init__(self, console: Console | None = None, min_level: int = LogLevel.DEBUG) -> None:
        self.console = console or Console(stderr=True)
        self.min_level = min_level
        self.records: list[tuple[str, str, str]] = []

    def __call__(self, level: str, component: str, message: str) -> None:
        numeric = LogLevel.parse(level)
        if numeric < self.min_level:
            return
        self.records.append((level, component, message))

        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."
        stamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        style = _LEVEL_STYLES.get(numeric, "white")
        self.console.print(
            f"[dim]{stamp}[/] [{style}]{numeric.name:<7}[/] "
            f"[bold]{escape(component)}[/]: {escape(message)}"
        )
