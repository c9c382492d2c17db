"""Data models for conversations.

Messages are frozen; the pipeline replaces a stored message with an updated
copy on every transition, so snapshots handed out never change underneath
their holders.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from ..errors import AttachmentResolutionFailed


class MessageKind(str, Enum):
    """Payload type of a message."""

    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"


class MessageOrigin(str, Enum):
    """Who produced the message."""

    LOCAL = "local"      # Sent by this device's user
    REMOTE = "remote"    # Received from the peer


class MessageStatus(str, Enum):
    """Delivery status, totally ordered by rank."""

    SENDING = "sending"
    SENT = "sent"
    DELIVERED = "delivered"
    READ = "read"

    @property
    def rank(self) -> int:
        return _STATUS_RANKS[self]


_STATUS_RANKS = {
    MessageStatus.SENDING: 0,
    MessageStatus.SENT: 1,
    MessageStatus.DELIVERED: 2,
    MessageStatus.READ: 3,
}


class TypingIndicatorState(str, Enum):
    """Whether the simulated peer is shown as typing."""

    HIDDEN = "hidden"
    VISIBLE = "visible"


class Message(BaseModel):
    """A single message in a conversation."""

    id: int = Field(description="Monotonic identifier within the conversation")
    sender_id: str
    sender_name: str
    body: str = Field(description="Text, or file name for media messages")
    kind: MessageKind = MessageKind.TEXT
    origin: MessageOrigin
    status: MessageStatus
    created_at: datetime = Field(default_factory=datetime.now)
    media_url: str | None = None
    attachment_error: str | None = Field(
        default=None,
        description="Why the attached media could not be resolved"
    )

    model_config = {"frozen": True}

    @property
    def is_own(self) -> bool:
        return self.origin == MessageOrigin.LOCAL

    @property
    def time_label(self) -> str:
        """Clock time in the chat bubble format, e.g. ``10:30 AM``."""
        return self.created_at.strftime("%I:%M %p")

    @property
    def preview(self) -> str:
        """One-line summary for the chat list."""
        if self.kind == MessageKind.IMAGE:
            return "\U0001F4F7 Photo"
        if self.kind == MessageKind.VIDEO:
            return "\U0001F3A5 Video"
        return self.body


class ConversationSnapshot(BaseModel):
    """Read-only view of a conversation at one point in time."""

    conversation_id: str
    messages: tuple[Message, ...] = ()
    typing: TypingIndicatorState = TypingIndicatorState.HIDDEN

    model_config = {"frozen": True}

    @property
    def typing_visible(self) -> bool:
        return self.typing == TypingIndicatorState.VISIBLE

    @property
    def last_message(self) -> Message | None:
        return self.messages[-1] if self.messages else None

    def get(self, message_id: int) -> Message | None:
        for message in self.messages:
            if message.id == message_id:
                return message
        return None


class AttachmentHandle(BaseModel):
    """A file picked by the user, before it is read."""

    name: str
    mime_type: str = "application/octet-stream"
    data: bytes | None = Field(default=None, description="File contents, None if unreadable")


class ResolvedMedia(BaseModel):
    """A readable attachment ready to be shown in a message."""

    kind: MessageKind
    url: str


class AttachmentSubmission(BaseModel):
    """Result of sending an attachment.

    The message is always appended; ``failure`` reports media that could
    not be resolved.
    """

    message_id: int
    kind: MessageKind
    failure: AttachmentResolutionFailed | None = None

    model_config = {"arbitrary_types_allowed": True}

    @property
    def success(self) -> bool:
        return self.failure is None
