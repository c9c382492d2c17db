"""Error taxonomy for the interaction core.

Most of these never cross the core boundary as raised exceptions. They are
carried inside outcome values (refresh outcomes, attachment submissions) or
recorded for inspection, so callers branch on results instead of catching.
"""

from typing import Any


class SportySphereError(Exception):
    """Base class for interaction core errors."""

    def is_user_visible(self) -> bool:
        """Override in subclasses that should reach the user."""
        return False


class GestureIgnored(SportySphereError):
    """A gesture was dropped (non-zero scroll offset or out of order)."""

    def __init__(self, reason: str):
        super().__init__(f"Gesture ignored: {reason}")
        self.reason = reason


class RefreshFailed(SportySphereError):
    """The injected refresh operation raised."""

    def __init__(self, cause: BaseException):
        super().__init__(f"Refresh failed: {cause}")
        self.cause = cause

    def is_user_visible(self) -> bool:
        return True


class AttachmentResolutionFailed(SportySphereError):
    """A local message's media payload could not be read or encoded."""

    def __init__(self, message: str, attachment_name: str | None = None):
        msg = f"Attachment resolution failed: {message}"
        if attachment_name:
            msg += f" (attachment: {attachment_name})"
        super().__init__(msg)
        self.attachment_name = attachment_name

    def is_user_visible(self) -> bool:
        return True


class StaleTransition(SportySphereError):
    """A status transition arrived after a higher-ranked status was set."""

    def __init__(self, message_id: int, current: Any, attempted: Any):
        super().__init__(
            f"Stale transition for message {message_id}: "
            f"{getattr(current, 'value', current)} -> {getattr(attempted, 'value', attempted)}"
        )
        self.message_id = message_id
        self.current = current
        self.attempted = attempted


class ConversationClosedError(SportySphereError):
    """The conversation is unknown or was torn down."""

    def __init__(self, conversation_id: str):
        super().__init__(f"Conversation is not open: {conversation_id}")
        self.conversation_id = conversation_id
