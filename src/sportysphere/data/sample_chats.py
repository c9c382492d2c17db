"""Sample chats and the seed history every conversation opens with."""

from datetime import date, datetime, time
from typing import Any

from ..config import LOCAL_SENDER_ID, LOCAL_SENDER_NAME
from ..messaging.directory import ChatSummary
from ..messaging.models import Message, MessageOrigin, MessageStatus

_AVATAR = "https://images.pexels.com/photos/{photo}/pexels-photo-{photo}.jpeg?auto=compress&cs=tinysrgb&w=64&h=64&dpr=1"

SAMPLE_CHATS: list[dict[str, Any]] = [
    {
        "id": "1",
        "name": "ESPN",
        "avatar": _AVATAR.format(photo=274422),
        "last_message": "Breaking: Major trade announcement coming soon!",
        "last_message_time": "2m",
        "unread_count": 3,
        "is_online": True,
        "verification_tier": "reporter",
    },
    {
        "id": "2",
        "name": "LeBron James",
        "avatar": _AVATAR.format(photo=1752757),
        "last_message": "Thanks for the support! \U0001F64F",
        "last_message_time": "15m",
        "is_online": True,
        "verification_tier": "player",
    },
    {
        "id": "3",
        "name": "Lakers Fans",
        "avatar": _AVATAR.format(photo=1884574),
        "last_message": "Who's watching the game tonight?",
        "last_message_time": "1h",
        "unread_count": 12,
        "is_group": True,
        "participants": ["You", "Mike", "Sarah", "+47 others"],
    },
    {
        "id": "4",
        "name": "Cristiano Ronaldo",
        "avatar": _AVATAR.format(photo=1884574),
        "last_message": "Siuuuu! ⚽",
        "last_message_time": "2h",
        "unread_count": 1,
        "verification_tier": "player",
    },
    {
        "id": "5",
        "name": "NBA Updates",
        "avatar": _AVATAR.format(photo=358042),
        "last_message": "Game highlights from last night",
        "last_message_time": "3h",
        "is_online": True,
        "is_group": True,
        "participants": ["You", "Admin", "+1.2M others"],
    },
]


def sample_chats() -> list[ChatSummary]:
    """Fresh copies of the sample chat list."""
    return [ChatSummary(**entry) for entry in SAMPLE_CHATS]


def _today_at(hour: int, minute: int) -> datetime:
    return datetime.combine(date.today(), time(hour, minute))


def seed_history(chat: ChatSummary) -> list[Message]:
    """The three-message history a conversation opens with."""
    return [
        Message(
            id=1,
            sender_id=chat.id,
            sender_name=chat.name,
            body="Hey! How are you doing?",
            origin=MessageOrigin.REMOTE,
            status=MessageStatus.READ,
            created_at=_today_at(10, 30),
        ),
        Message(
            id=2,
            sender_id=LOCAL_SENDER_ID,
            sender_name=LOCAL_SENDER_NAME,
            body="I'm good! Just watching the game highlights.",
            origin=MessageOrigin.LOCAL,
            status=MessageStatus.READ,
            created_at=_today_at(10, 32),
        ),
        Message(
            id=3,
            sender_id=chat.id,
            sender_name=chat.name,
            body="That last play was incredible! \U0001F525",
            origin=MessageOrigin.REMOTE,
            status=MessageStatus.READ,
            created_at=_today_at(10, 35),
        ),
    ]
