"""Gesture module for sportysphere.

Provides the pull-to-refresh recognizer and the feed refresh operation.
"""

from .controller import ProgressCallback, PullToRefreshController, RefreshOperation
from .feed import FeedRefresher
from .models import (
    GesturePhase,
    GestureSession,
    GestureSnapshot,
    PointerSample,
    RefreshOutcome,
)

__all__ = [
    "FeedRefresher",
    "GesturePhase",
    "GestureSession",
    "GestureSnapshot",
    "PointerSample",
    "ProgressCallback",
    "PullToRefreshController",
    "RefreshOperation",
    "RefreshOutcome",
]
