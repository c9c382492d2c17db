"""Conversation lifecycle for the chat surface.

Opens and closes one pipeline per chat and keeps the chat list in step
with what happens inside each conversation.
"""

from collections.abc import Callable
from typing import Any

from ..clock import Clock
from ..config import DEFAULT_REPLY_TEXT, DeliveryTimings
from ..errors import ConversationClosedError
from ..notifications import Notifier
from .attachments import AttachmentResolver
from .directory import ChatDirectory
from .models import AttachmentHandle, AttachmentSubmission, ConversationSnapshot, MessageKind
from .pipeline import MessagePipeline


class ConversationManager:
    """Entry point the chat screen talks to.

    Example:
        manager = ConversationManager(clock, ChatDirectory.from_sample_data())
        manager.open_conversation("2")
        manager.send_message("2", "Hello")
        ...
        manager.close_conversation("2")  # pending timers are cancelled
    """

    def __init__(
        self,
        clock: Clock,
        directory: ChatDirectory | None = None,
        timings: DeliveryTimings | None = None,
        resolver: AttachmentResolver | None = None,
        notifier: Notifier | None = None,
        on_conversation_changed: Callable[[ConversationSnapshot], None] | None = None,
        on_typing_indicator_changed: Callable[[str, bool], None] | None = None,
        reply_text: str = DEFAULT_REPLY_TEXT
    ) -> None:
        self._clock = clock
        self.directory = directory or ChatDirectory.from_sample_data()
        self._timings = timings or DeliveryTimings()
        self._resolver = resolver
        self._notifier = notifier
        self._on_conversation_changed = on_conversation_changed
        self._on_typing_indicator_changed = on_typing_indicator_changed
        self._reply_text = reply_text
        self._pipelines: dict[str, MessagePipeline] = {}
        self._debug_callback: Any | None = None

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback and propagate it to open pipelines.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback
        for pipeline in self._pipelines.values():
            pipeline.set_debug_callback(callback)

    @property
    def open_ids(self) -> list[str]:
        return list(self._pipelines)

    def open_conversation(self, chat_id: str) -> MessagePipeline:
        """Open a chat, seeding its history and clearing its unread count.

        Opening an already open chat returns the live pipeline.

        Raises:
            ConversationClosedError: If the chat is not in the directory
        """
        if chat_id in self._pipelines:
            return self._pipelines[chat_id]

        chat = self.directory.get(chat_id)
        if chat is None:
            raise ConversationClosedError(chat_id)

        from ..data import seed_history

        pipeline = MessagePipeline(
            chat_id,
            self._clock,
            timings=self._timings,
            peer_id=chat.id,
            peer_name=chat.name,
            reply_text=self._reply_text,
            resolver=self._resolver,
            notifier=self._notifier,
            on_conversation_changed=self._conversation_changed,
            on_typing_indicator_changed=lambda visible: self._typing_changed(chat_id, visible),
        )
        if self._debug_callback:
            pipeline.set_debug_callback(self._debug_callback)
        pipeline.load_history(seed_history(chat))
        self.directory.mark_read(chat_id)
        self._pipelines[chat_id] = pipeline
        return pipeline

    def get(self, chat_id: str) -> MessagePipeline:
        pipeline = self._pipelines.get(chat_id)
        if pipeline is None:
            raise ConversationClosedError(chat_id)
        return pipeline

    def close_conversation(self, chat_id: str) -> bool:
        pipeline = self._pipelines.pop(chat_id, None)
        if pipeline is None:
            return False
        pipeline.close()
        return True

    def close_all(self) -> None:
        for chat_id in list(self._pipelines):
            self.close_conversation(chat_id)

    def send_message(self, chat_id: str, text: str) -> int | None:
        """Send text and ask the peer for a reply.

        Returns:
            The new message id, or None if the text was blank
        """
        pipeline = self.get(chat_id)
        body = text.strip()
        if not body:
            return None
        message_id = pipeline.submit_local_message(MessageKind.TEXT, body)
        pipeline.request_simulated_reply()
        return message_id

    def send_attachment(self, chat_id: str, handle: AttachmentHandle) -> AttachmentSubmission:
        return self.get(chat_id).submit_attachment(handle)

    def request_simulated_reply(self, chat_id: str) -> None:
        self.get(chat_id).request_simulated_reply()

    def mark_conversation_read(self, chat_id: str) -> int:
        changed = self.get(chat_id).mark_conversation_read()
        self.directory.mark_read(chat_id)
        return changed

    def snapshot(self, chat_id: str) -> ConversationSnapshot:
        return self.get(chat_id).snapshot()

    def _conversation_changed(self, snapshot: ConversationSnapshot) -> None:
        last = snapshot.last_message
        if last is not None:
            self.directory.record_message(snapshot.conversation_id, last.preview, last.time_label)
        if self._on_conversation_changed is not None:
            self._on_conversation_changed(snapshot)

    def _typing_changed(self, chat_id: str, visible: bool) -> None:
        if self._on_typing_indicator_changed is not None:
            self._on_typing_indicator_changed(chat_id, visible)
