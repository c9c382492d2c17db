"""Messaging module for sportysphere.

Provides the simulated message delivery pipeline and the chat list.

Module structure:
- models.py: Message, status ranks, snapshots
- attachments.py: How picked files become displayable media
- pipeline.py: One conversation's timed status progression
- directory.py: Chat list, search and unread counts
- manager.py: Opening and closing conversations
"""

from .attachments import AttachmentResolver, InlineAttachmentResolver, kind_for_mime
from .directory import ChatDirectory, ChatSummary
from .manager import ConversationManager
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
from .pipeline import MessagePipeline

__all__ = [
    "AttachmentHandle",
    "AttachmentResolver",
    "AttachmentSubmission",
    "ChatDirectory",
    "ChatSummary",
    "ConversationManager",
    "ConversationSnapshot",
    "InlineAttachmentResolver",
    "Message",
    "MessageKind",
    "MessageOrigin",
    "MessagePipeline",
    "MessageStatus",
    "ResolvedMedia",
    "TypingIndicatorState",
    "kind_for_mime",
]
