"""Notification module for sportysphere.

Provides the injectable toast channel used by the feed and chat surfaces.
"""

from .base import Notifier
from .models import Toast, ToastLevel
from .toast import ToastQueue

__all__ = [
    "Notifier",
    "Toast",
    "ToastLevel",
    "ToastQueue",
]
