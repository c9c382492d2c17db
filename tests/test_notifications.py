"""Tests for the toast notification channel."""
import pytest

from sportysphere.notifications import Notifier, ToastLevel, ToastQueue


class TestNotifierInterface:
    """Tests for the abstract Notifier interface."""

    def test_notifier_is_abstract(self):
        with pytest.raises(TypeError):
            Notifier()  # type: ignore


class TestToastQueue:
    """Tests for ToastQueue."""

    def test_toast_dismissed_after_duration(self, clock):
        toasts = ToastQueue(clock, duration_ms=3000)
        toasts.notify("Bet added to slip!")

        assert [t.message for t in toasts.active()] == ["Bet added to slip!"]
        clock.advance(2999)
        assert len(toasts.active()) == 1
        clock.advance(1)
        assert toasts.active() == []

    def test_ids_and_levels(self, clock):
        toasts = ToastQueue(clock)
        toasts.notify("ok")
        toasts.notify("bad", "error")
        toasts.notify("fyi", ToastLevel.INFO)

        active = toasts.active()
        assert [t.id for t in active] == [1, 2, 3]
        assert [t.level for t in active] == [ToastLevel.SUCCESS, ToastLevel.ERROR, ToastLevel.INFO]

    def test_invalid_level_rejected(self, clock):
        with pytest.raises(ValueError):
            ToastQueue(clock).notify("?", "warning")

    def test_dismiss_early(self, clock):
        toasts = ToastQueue(clock)
        toasts.notify("one")
        toasts.notify("two")

        assert toasts.dismiss(1)
        assert not toasts.dismiss(1)
        assert [t.message for t in toasts.active()] == ["two"]
        assert clock.pending_count() == 1

    def test_on_change_sees_each_state(self, clock):
        states = []
        toasts = ToastQueue(clock, duration_ms=100, on_change=lambda active: states.append([t.id for t in active]))
        toasts.notify("a")
        clock.advance(50)
        toasts.notify("b")
        clock.run_all()

        assert states == [[1], [1, 2], [2], []]

    def test_close_cancels_dismissals(self, clock):
        toasts = ToastQueue(clock)
        toasts.notify("a")

        toasts.close()

        assert toasts.active() == []
        assert clock.pending_count() == 0
        assert [t.message for t in toasts.history] == ["a"]

    def test_queues_are_independent(self, clock):
        feed = ToastQueue(clock)
        chat = ToastQueue(clock)
        feed.notify("Feed refreshed!")

        assert chat.active() == []
