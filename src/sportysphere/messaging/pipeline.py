"""Message lifecycle pipeline for one conversation.

Simulates delivery without a network. Hides:
- Id assignment and the optimistic insert
- Timer scheduling and group cancellation on teardown
- The status rank guard that rejects stale transitions
- The simulated peer reply and its typing indicator
"""

from collections.abc import Callable, Iterable
from datetime import datetime, timedelta
from typing import Any

from ..clock import Clock, TimerCallback, TimerHandle
from ..config import (
    DEFAULT_REPLY_TEXT,
    LOCAL_SENDER_ID,
    LOCAL_SENDER_NAME,
    DeliveryTimings,
)
from ..errors import AttachmentResolutionFailed, ConversationClosedError, StaleTransition
from ..notifications import Notifier, ToastLevel
from .attachments import AttachmentResolver, InlineAttachmentResolver
from .models import (
    AttachmentHandle,
    AttachmentSubmission,
    ConversationSnapshot,
    Message,
    MessageKind,
    MessageOrigin,
    MessageStatus,
    ResolvedMedia,
    TypingIndicatorState,
)

ConversationCallback = Callable[[ConversationSnapshot], None]
TypingCallback = Callable[[bool], None]


class MessagePipeline:
    """Owns one conversation's messages and drives their delivery status.

    All mutations happen on timer callbacks of the injected clock, which fires
    them one at a time in due order. Listeners receive a fresh snapshot after
    every change and never see the internal list.

    Example:
        pipeline = MessagePipeline("2", clock, peer_id="2", peer_name="LeBron James")
        message_id = pipeline.submit_local_message(MessageKind.TEXT, "Hello")
        pipeline.request_simulated_reply()
        clock.advance(2000)  # sent, delivered, typing, reply
    """

    def __init__(
        self,
        conversation_id: str,
        clock: Clock,
        timings: DeliveryTimings | None = None,
        peer_id: str | None = None,
        peer_name: str = "",
        reply_text: str = DEFAULT_REPLY_TEXT,
        resolver: AttachmentResolver | None = None,
        notifier: Notifier | None = None,
        on_conversation_changed: ConversationCallback | None = None,
        on_typing_indicator_changed: TypingCallback | None = None,
        local_sender_id: str = LOCAL_SENDER_ID,
        local_sender_name: str = LOCAL_SENDER_NAME,
        started_at: datetime | None = None
    ) -> None:
        self.conversation_id = conversation_id
        self._clock = clock
        self.timings = timings or DeliveryTimings()
        self.peer_id = peer_id or conversation_id
        self.peer_name = peer_name
        self.reply_text = reply_text
        self._resolver = resolver or InlineAttachmentResolver()
        self._notifier = notifier
        self._on_conversation_changed = on_conversation_changed
        self._on_typing_indicator_changed = on_typing_indicator_changed
        self._local_sender_id = local_sender_id
        self._local_sender_name = local_sender_name
        # Wall time matching clock.now() at construction
        self._started_at = started_at or datetime.now()
        self._started_ms = clock.now()

        self._messages: list[Message] = []
        self._positions: dict[int, int] = {}
        self._next_id = 1
        self._typing = TypingIndicatorState.HIDDEN
        self._timers: dict[int, TimerHandle] = {}
        self._closed = False
        self._debug_callback: Any | None = None
        self.stale_transitions: list[StaleTransition] = []

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, f"Conversation[{self.conversation_id}]", message)

    # ------------------------------------------------------------------
    # Read side

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def typing_state(self) -> TypingIndicatorState:
        return self._typing

    @property
    def pending_timers(self) -> int:
        return len(self._timers)

    def snapshot(self) -> ConversationSnapshot:
        return ConversationSnapshot(
            conversation_id=self.conversation_id,
            messages=tuple(self._messages),
            typing=self._typing,
        )

    def get_message(self, message_id: int) -> Message | None:
        position = self._positions.get(message_id)
        return self._messages[position] if position is not None else None

    # ------------------------------------------------------------------
    # Write side

    def load_history(self, messages: Iterable[Message]) -> None:
        """Append existing messages without notifying listeners.

        Raises:
            ValueError: If ids are not strictly increasing past existing ones
        """
        self._ensure_open()
        for message in messages:
            if message.id < self._next_id:
                raise ValueError(
                    f"History message id {message.id} must be >= {self._next_id}"
                )
            self._append(message)
            self._next_id = message.id + 1

    def submit_local_message(
        self,
        kind: MessageKind,
        body: str,
        media_url: str | None = None,
        attachment_error: str | None = None
    ) -> int:
        """Optimistically append a local message and schedule its delivery.

        Returns:
            The new message's id

        Raises:
            ConversationClosedError: If the pipeline was torn down
        """
        self._ensure_open()
        message = Message(
            id=self._take_id(),
            sender_id=self._local_sender_id,
            sender_name=self._local_sender_name,
            body=body,
            kind=kind,
            origin=MessageOrigin.LOCAL,
            status=MessageStatus.SENDING,
            media_url=media_url,
            attachment_error=attachment_error,
            created_at=self._timestamp(),
        )
        self._append(message)
        self._debug("debug", f"Message {message.id} queued ({kind.value})")
        self._emit_conversation()

        self._schedule(
            self.timings.sent_delay_ms,
            lambda: self.apply_status(message.id, MessageStatus.SENT),
        )
        self._schedule(
            self.timings.delivered_delay_ms,
            lambda: self.apply_status(message.id, MessageStatus.DELIVERED),
        )
        return message.id

    def submit_attachment(self, handle: AttachmentHandle) -> AttachmentSubmission:
        """Send a picked file as a message.

        Resolution failure does not stop the message: it is appended as text
        carrying the file name and progresses through the usual statuses.
        """
        self._ensure_open()
        try:
            media = self._resolve(handle)
        except AttachmentResolutionFailed as failure:
            self._debug("warning", str(failure))
            message_id = self.submit_local_message(
                MessageKind.TEXT, handle.name, attachment_error=str(failure)
            )
            self._notify(f"Could not attach {handle.name}", ToastLevel.ERROR)
            return AttachmentSubmission(
                message_id=message_id, kind=MessageKind.TEXT, failure=failure
            )

        message_id = self.submit_local_message(media.kind, handle.name, media_url=media.url)
        self._notify(f"{media.kind.value} uploaded successfully!")
        return AttachmentSubmission(message_id=message_id, kind=media.kind)

    def request_simulated_reply(self) -> None:
        """Schedule the peer's typing indicator and reply.

        Raises:
            ConversationClosedError: If the pipeline was torn down
        """
        self._ensure_open()
        self._schedule(self.timings.typing_delay_ms, self._show_typing)
        self._schedule(self.timings.reply_delay_ms, self._deliver_reply)

    def mark_conversation_read(self) -> int:
        """Mark every remote message as read.

        Returns:
            Number of messages that changed
        """
        if self._closed:
            return 0
        changed = 0
        for position, message in enumerate(self._messages):
            if message.origin == MessageOrigin.REMOTE and message.status != MessageStatus.READ:
                self._messages[position] = message.model_copy(update={"status": MessageStatus.READ})
                changed += 1
        if changed:
            self._emit_conversation()
        return changed

    def apply_status(self, message_id: int, status: MessageStatus) -> bool:
        """Advance a message's status if it ranks above the current one.

        Lower or equal ranks are recorded as stale and dropped.

        Returns:
            True if the status changed
        """
        if self._closed:
            return False
        position = self._positions.get(message_id)
        if position is None:
            self._debug("warning", f"Status {status.value} for unknown message {message_id}")
            return False

        current = self._messages[position]
        if status.rank <= current.status.rank:
            stale = StaleTransition(message_id, current.status, status)
            self.stale_transitions.append(stale)
            self._debug("debug", str(stale))
            return False

        self._messages[position] = current.model_copy(update={"status": status})
        self._debug("debug", f"Message {message_id}: {current.status.value} -> {status.value}")
        self._emit_conversation()
        return True

    def close(self) -> None:
        """Tear down: cancel every pending timer and refuse further mutation."""
        if self._closed:
            return
        self._closed = True
        for handle in self._timers.values():
            self._clock.cancel(handle)
        cancelled = len(self._timers)
        self._timers.clear()
        self._debug("debug", f"Closed, {cancelled} pending timer(s) cancelled")

    # ------------------------------------------------------------------
    # Internals

    def _ensure_open(self) -> None:
        if self._closed:
            raise ConversationClosedError(self.conversation_id)

    def _resolve(self, handle: AttachmentHandle) -> ResolvedMedia:
        try:
            return self._resolver.resolve(handle)
        except AttachmentResolutionFailed:
            raise
        except Exception as e:
            raise AttachmentResolutionFailed(str(e), attachment_name=handle.name) from e

    def _timestamp(self) -> datetime:
        elapsed = self._clock.now() - self._started_ms
        return self._started_at + timedelta(milliseconds=elapsed)

    def _take_id(self) -> int:
        message_id = self._next_id
        self._next_id += 1
        return message_id

    def _append(self, message: Message) -> None:
        self._positions[message.id] = len(self._messages)
        self._messages.append(message)

    def _schedule(self, delay_ms: int, action: TimerCallback) -> None:
        def _run() -> None:
            self._timers.pop(handle.id, None)
            if self._closed:
                return
            action()

        handle = self._clock.schedule_after(delay_ms, _run)
        self._timers[handle.id] = handle

    def _show_typing(self) -> None:
        if self._typing == TypingIndicatorState.VISIBLE:
            return
        self._typing = TypingIndicatorState.VISIBLE
        self._emit_typing()

    def _deliver_reply(self) -> None:
        was_visible = self._typing == TypingIndicatorState.VISIBLE
        self._typing = TypingIndicatorState.HIDDEN
        reply = Message(
            id=self._take_id(),
            sender_id=self.peer_id,
            sender_name=self.peer_name,
            body=self.reply_text,
            kind=MessageKind.TEXT,
            origin=MessageOrigin.REMOTE,
            status=MessageStatus.READ,
            created_at=self._timestamp(),
        )
        self._append(reply)
        self._debug("debug", f"Reply {reply.id} received")
        if was_visible:
            self._emit_typing()
        self._emit_conversation()

    def _emit_conversation(self) -> None:
        if self._on_conversation_changed is not None:
            self._on_conversation_changed(self.snapshot())

    def _emit_typing(self) -> None:
        if self._on_typing_indicator_changed is not None:
            self._on_typing_indicator_changed(self._typing == TypingIndicatorState.VISIBLE)

    def _notify(self, message: str, level: ToastLevel = ToastLevel.SUCCESS) -> None:
        if self._notifier is not None:
            self._notifier.notify(message, level)
