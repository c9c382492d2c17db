"""Static sample data for the demo client."""

from .sample_chats import SAMPLE_CHATS, sample_chats, seed_history

__all__ = [
    "SAMPLE_CHATS",
    "sample_chats",
    "seed_history",
]
