"""
SportySphere: the interaction core of a simulated sports social client.

This package follows Parnas's information hiding principles,
where each module hides a specific design decision:
- clock: where time comes from
- gesture: how touch samples become a refresh
- messaging: how messages move through delivery statuses
- notifications: how short messages reach the user
"""

__version__ = "0.1.0"

from .clock import AsyncioClock, Clock, ManualClock, create_clock
from .config import AppConfig, DeliveryTimings, GestureConfig, load_config
from .errors import (
    AttachmentResolutionFailed,
    ConversationClosedError,
    GestureIgnored,
    RefreshFailed,
    SportySphereError,
    StaleTransition,
)
from .gesture import (
    FeedRefresher,
    GesturePhase,
    PointerSample,
    PullToRefreshController,
    RefreshOutcome,
)
from .messaging import (
    ConversationManager,
    ConversationSnapshot,
    Message,
    MessageKind,
    MessageOrigin,
    MessagePipeline,
    MessageStatus,
    TypingIndicatorState,
)
from .notifications import Notifier, ToastQueue

__all__ = [
    "AppConfig",
    "AsyncioClock",
    "AttachmentResolutionFailed",
    "Clock",
    "ConversationClosedError",
    "ConversationManager",
    "ConversationSnapshot",
    "DeliveryTimings",
    "FeedRefresher",
    "GestureConfig",
    "GestureIgnored",
    "GesturePhase",
    "ManualClock",
    "Message",
    "MessageKind",
    "MessageOrigin",
    "MessagePipeline",
    "MessageStatus",
    "Notifier",
    "PointerSample",
    "PullToRefreshController",
    "RefreshFailed",
    "RefreshOutcome",
    "SportySphereError",
    "StaleTransition",
    "ToastQueue",
    "TypingIndicatorState",
    "create_clock",
    "load_config",
]
