"""Main CLI application using Typer."""
import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ..clock import AsyncioClock
from ..gesture import (
    FeedRefresher,
    GesturePhase,
    PointerSample,
    PullToRefreshController,
    RefreshOutcome,
)
from ..messaging import ChatDirectory, ConversationManager, ConversationSnapshot, MessageOrigin
from .providers import get_config, get_debug_log, get_toasts, read_attachment

# Create Typer app
app = typer.Typer(
    name="sportysphere",
    help="Simulated SportySphere chat and feed interactions",
    no_args_is_help=True,
    add_completion=False,
)

# Console for rich output
console = Console()

_STATUS_ICONS = {
    "sending": "◷",
    "sent": "✓",
    "delivered": "✓✓",
    "read": "[blue]✓✓[/blue]",
}


@app.command()
def chats(
    search: str = typer.Option(
        "",
        "--search",
        "-s",
        help="Only show chats whose name contains this text"
    )
):
    """List chats with their unread counts."""
    directory = ChatDirectory.from_sample_data()
    results = directory.search(search) if search else directory.all()
    if not results:
        console.print("[yellow]No chats found[/yellow]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("ID", style="dim", width=4)
    table.add_column("Name", style="cyan")
    table.add_column("Last message")
    table.add_column("When", style="dim", width=5)
    table.add_column("Unread", style="bold red", width=6)

    for summary in results:
        name = summary.name
        if summary.is_online:
            name += " [green]●[/green]"
        table.add_row(
            summary.id,
            name,
            summary.last_message,
            summary.last_message_time,
            summary.unread_badge or "",
        )
    console.print(table)


@app.command()
def chat(
    chat_id: str = typer.Argument(..., help="Chat to open (see 'chats')"),
    message: str = typer.Option(
        "Hello",
        "--message",
        "-m",
        help="Text to send"
    ),
    attach: Path | None = typer.Option(
        None,
        "--attach",
        "-a",
        help="File to send after the text"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show pipeline debug output"
    )
):
    """Send a message and watch delivery and the simulated reply."""
    async def _chat():
        config = get_config(console)
        clock = AsyncioClock()
        toasts = get_toasts(clock, config, console)
        reply_arrived = asyncio.Event()
        seen: dict[int, str] = {}

        def on_changed(snapshot: ConversationSnapshot) -> None:
            for item in snapshot.messages:
                if seen.get(item.id) == item.status.value:
                    continue
                if item.id not in seen and item.origin == MessageOrigin.REMOTE:
                    reply_arrived.set()
                seen[item.id] = item.status.value
                icon = _STATUS_ICONS[item.status.value]
                console.print(f"  #{item.id} {item.sender_name}: {item.preview} {icon}")

        def on_typing(conversation_id: str, visible: bool) -> None:
            if visible:
                console.print("[dim]  typing...[/dim]")

        manager = ConversationManager(
            clock,
            timings=config.delivery,
            notifier=toasts,
            on_conversation_changed=on_changed,
            on_typing_indicator_changed=on_typing,
        )
        debug_log = get_debug_log(verbose)
        if debug_log:
            manager.set_debug_callback(debug_log)

        if chat_id not in manager.directory:
            console.print(f"[red]Error: unknown chat '{chat_id}'[/red]")
            raise typer.Exit(code=1)

        try:
            pipeline = manager.open_conversation(chat_id)
            history = pipeline.snapshot()
            console.print(f"[bold cyan]{manager.directory.get(chat_id).name}[/bold cyan]")
            for item in history.messages:
                seen[item.id] = item.status.value
                console.print(f"[dim]  #{item.id} {item.sender_name}: {item.body}[/dim]")

            sent_text = manager.send_message(chat_id, message) is not None
            if attach is None and not sent_text:
                console.print("[yellow]Nothing to send[/yellow]")
                return
            if attach is not None:
                submission = manager.send_attachment(chat_id, read_attachment(attach))
                if not submission.success:
                    console.print(f"[yellow]{submission.failure}[/yellow]")
                if not sent_text:
                    # Attachment-only sends still get a reply
                    manager.request_simulated_reply(chat_id)

            timeout = (config.delivery.reply_delay_ms + 1000) / 1000
            await asyncio.wait_for(reply_arrived.wait(), timeout=timeout)
            # Delivery can be configured to land after the reply
            remaining_ms = config.delivery.delivered_delay_ms - config.delivery.reply_delay_ms
            if remaining_ms > 0:
                await clock.sleep(remaining_ms)
            console.print("[green]Reply received[/green]")

        except asyncio.TimeoutError:
            console.print("[red]Error: no reply received[/red]")
            raise typer.Exit(code=1)
        finally:
            manager.close_all()
            toasts.close()
            clock.close()

    asyncio.run(_chat())


@app.command()
def refresh(
    pull: float = typer.Option(
        140.0,
        "--pull",
        "-p",
        help="Distance to drag downward"
    ),
    offset: float = typer.Option(
        0.0,
        "--offset",
        help="Scroll offset of the feed when the touch starts"
    ),
    steps: int = typer.Option(
        4,
        "--steps",
        min=1,
        help="Number of move samples"
    ),
    fail: bool = typer.Option(
        False,
        "--fail",
        help="Make the feed reload fail"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show recognizer debug output"
    )
):
    """Simulate a pull-to-refresh gesture on the feed."""
    async def _refresh():
        config = get_config(console)
        clock = AsyncioClock()
        toasts = get_toasts(clock, config, console)
        feed = FeedRefresher(clock, delay_ms=config.feed_refresh_delay_ms, notifier=toasts)

        async def reload_feed() -> None:
            if fail:
                raise RuntimeError("feed unavailable")
            await feed()

        def on_progress(damped: float, phase: GesturePhase) -> None:
            console.print(f"[dim]  {phase.value:<10} {damped:6.1f}[/dim]")

        def on_refresh_end(outcome: RefreshOutcome) -> None:
            if outcome.success:
                console.print("[green]Refresh complete[/green]")
            else:
                console.print(f"[red]{outcome.failure}[/red]")

        controller = PullToRefreshController(
            reload_feed,
            config=config.gesture,
            on_progress=on_progress,
            on_refresh_start=lambda: console.print("[cyan]Refreshing...[/cyan]"),
            on_refresh_end=on_refresh_end,
            notifier=toasts,
        )
        debug_log = get_debug_log(verbose)
        if debug_log:
            controller.set_debug_callback(debug_log)

        try:
            origin = 100.0
            if not controller.on_interaction_start(PointerSample(y=origin), surface_scroll_offset=offset):
                console.print("[yellow]Feed is not at the top; gesture ignored[/yellow]")
                return
            for i in range(1, steps + 1):
                controller.on_interaction_move(
                    PointerSample(y=origin + pull * i / steps, timestamp=i * 16.0)
                )
            outcome = await controller.on_interaction_end()
            if outcome is None:
                console.print("[yellow]Released below threshold; no refresh[/yellow]")
        finally:
            controller.teardown()
            toasts.close()
            clock.close()

    asyncio.run(_refresh())


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
