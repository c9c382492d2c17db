"""Provider functions for CLI.

Centralizes creation of configuration, clocks and notifiers for commands.
Hides configuration details from command implementations.
"""

import mimetypes
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console

from ..clock import AsyncioClock
from ..config import AppConfig, LogLevel, load_config
from ..debug import RichDebugLog
from ..messaging import AttachmentHandle
from ..notifications import Toast, ToastLevel, ToastQueue

# Default console for output
_console = Console()

_TOAST_STYLES = {
    ToastLevel.SUCCESS: "green",
    ToastLevel.ERROR: "red",
    ToastLevel.INFO: "blue",
}


def get_config(console: Console | None = None) -> AppConfig:
    """Load configuration from environment variables.

    Raises:
        SystemExit: If a variable holds an invalid value
    """
    import typer

    con = console or _console
    try:
        return load_config()
    except (ValidationError, ValueError) as e:
        con.print(f"[red]Error: invalid configuration: {e}[/red]")
        raise typer.Exit(code=1)


def get_debug_log(verbose: bool) -> RichDebugLog | None:
    """Debug callback for --verbose, or None."""
    if not verbose:
        return None
    return RichDebugLog(min_level=LogLevel.DEBUG)


def get_toasts(clock: AsyncioClock, config: AppConfig, console: Console | None = None) -> ToastQueue:
    """Toast queue that echoes each new toast to the console."""
    con = console or _console
    shown: set[int] = set()

    def _render(toasts: list[Toast]) -> None:
        for toast in toasts:
            if toast.id in shown:
                continue
            shown.add(toast.id)
            style = _TOAST_STYLES.get(toast.level, "white")
            con.print(f"[{style}]● {toast.message}[/{style}]")

    return ToastQueue(clock, duration_ms=config.toast_duration_ms, on_change=_render)


def read_attachment(path: Path) -> AttachmentHandle:
    """Build an attachment handle from a file path.

    Unreadable files produce a handle without data; resolving it fails
    later without stopping the message.
    """
    mime_type, _ = mimetypes.guess_type(path.name)
    try:
        data = path.read_bytes()
    except OSError:
        data = None
    return AttachmentHandle(
        name=path.name,
        mime_type=mime_type or "application/octet-stream",
        data=data,
    )
