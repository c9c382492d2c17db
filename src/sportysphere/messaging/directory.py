"""Chat list shown next to the conversation view."""

from collections.abc import Iterable

from pydantic import BaseModel, Field

# Unread counts above this collapse to "99+"
UNREAD_BADGE_CAP = 99


class ChatSummary(BaseModel):
    """One entry of the chat list."""

    id: str
    name: str
    avatar: str = ""
    last_message: str = ""
    last_message_time: str = ""
    unread_count: int = Field(default=0, ge=0)
    is_online: bool = False
    verification_tier: str | None = None
    is_group: bool = False
    participants: list[str] = Field(default_factory=list)

    @property
    def unread_badge(self) -> str | None:
        if self.unread_count == 0:
            return None
        if self.unread_count > UNREAD_BADGE_CAP:
            return f"{UNREAD_BADGE_CAP}+"
        return str(self.unread_count)


class ChatDirectory:
    """In-memory chat list with search and unread bookkeeping."""

    def __init__(self, chats: Iterable[ChatSummary] = ()) -> None:
        self._chats: dict[str, ChatSummary] = {}
        for chat in chats:
            self._chats[chat.id] = chat

    @classmethod
    def from_sample_data(cls) -> "ChatDirectory":
        from ..data import sample_chats
        return cls(sample_chats())

    def __len__(self) -> int:
        return len(self._chats)

    def __contains__(self, chat_id: object) -> bool:
        return chat_id in self._chats

    def all(self) -> list[ChatSummary]:
        return list(self._chats.values())

    def get(self, chat_id: str) -> ChatSummary | None:
        return self._chats.get(chat_id)

    def search(self, query: str) -> list[ChatSummary]:
        """Chats whose name contains ``query``, ignoring case."""
        needle = query.strip().lower()
        return [chat for chat in self._chats.values() if needle in chat.name.lower()]

    def mark_read(self, chat_id: str) -> bool:
        chat = self._chats.get(chat_id)
        if chat is None or chat.unread_count == 0:
            return False
        chat.unread_count = 0
        return True

    def record_message(self, chat_id: str, preview: str, time_label: str = "now") -> None:
        chat = self._chats.get(chat_id)
        if chat is None:
            return
        chat.last_message = preview
        chat.last_message_time = time_label

    def total_unread(self) -> int:
        return sum(chat.unread_count for chat in self._chats.values())
