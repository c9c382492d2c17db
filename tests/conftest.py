"""Pytest configuration and shared fixtures."""
import pytest

from sportysphere.clock import ManualClock
from sportysphere.config import DeliveryTimings, GestureConfig
from sportysphere.messaging import ChatDirectory, MessagePipeline
from sportysphere.notifications import ToastQueue


class EventRecorder:
    """Collects callbacks from the core in the order they happen."""

    def __init__(self):
        self.events: list[tuple] = []

    def __call__(self, *args):
        self.events.append(args)

    def named(self, name: str):
        """Return a callback that records ``(name, *args)``."""
        def _record(*args):
            self.events.append((name, *args))
        return _record

    def of(self, name: str) -> list[tuple]:
        return [event[1:] for event in self.events if event[0] == name]


@pytest.fixture
def clock():
    """Return a manually advanced clock starting at zero."""
    return ManualClock()


@pytest.fixture
def recorder():
    """Return a fresh event recorder."""
    return EventRecorder()


@pytest.fixture
def timings():
    """Return the default delivery timings (500/1000/0/2000 ms)."""
    return DeliveryTimings()


@pytest.fixture
def gesture_config():
    """Return threshold 60 with damping 0.5."""
    return GestureConfig(threshold=60, damping_factor=0.5)


@pytest.fixture
def toasts(clock):
    """Return a toast queue on the manual clock."""
    return ToastQueue(clock)


@pytest.fixture
def directory():
    """Return a directory with the sample chats."""
    return ChatDirectory.from_sample_data()


@pytest.fixture
def pipeline(clock, timings, recorder, toasts):
    """Return a pipeline for chat "2" that records every emitted change."""
    return MessagePipeline(
        "2",
        clock,
        timings=timings,
        peer_name="LeBron James",
        notifier=toasts,
        on_conversation_changed=recorder.named("conversation"),
        on_typing_indicator_changed=recorder.named("typing"),
    )
