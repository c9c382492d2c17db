"""Unit and property-based tests for the pull-to-refresh recognizer."""
import asyncio

import pytest
from hypothesis import given
from hypothesis import strategies as st

from sportysphere.clock import ManualClock
from sportysphere.config import GestureConfig
from sportysphere.errors import GestureIgnored, RefreshFailed
from sportysphere.gesture import (
    FeedRefresher,
    GesturePhase,
    GestureSnapshot,
    PointerSample,
    PullToRefreshController,
)
from sportysphere.notifications import ToastLevel, ToastQueue


def at(y: float) -> PointerSample:
    return PointerSample(y=y)


def build_controller(refresh, recorder=None, config=None, **kwargs):
    if recorder is not None:
        kwargs.setdefault("on_progress", recorder.named("progress"))
        kwargs.setdefault("on_refresh_start", recorder.named("start"))
        kwargs.setdefault("on_refresh_end", recorder.named("end"))
    return PullToRefreshController(
        refresh,
        config=config or GestureConfig(threshold=60, damping_factor=0.5),
        **kwargs
    )


class TestPullPastThreshold:
    """A pull whose damped distance exceeds the threshold."""

    @pytest.mark.asyncio
    async def test_refreshes_once_and_returns_to_idle(self, recorder):
        calls = []

        async def refresh():
            calls.append("refresh")

        controller = build_controller(refresh, recorder)

        assert controller.on_interaction_start(at(100), surface_scroll_offset=0)
        assert controller.on_interaction_move(at(240))
        assert controller.damped_distance == 70

        outcome = await controller.on_interaction_end()

        assert calls == ["refresh"]
        assert outcome.success
        assert outcome.damped_distance == 70
        assert controller.phase == GesturePhase.IDLE
        assert controller.damped_distance == 0
        assert len(recorder.of("start")) == 1
        assert recorder.of("end") == [(outcome,)]

    @pytest.mark.asyncio
    async def test_phases_are_reported_in_order(self, recorder):
        async def refresh():
            pass

        controller = build_controller(refresh, recorder)
        controller.on_interaction_start(at(0), 0)
        controller.on_interaction_move(at(140))
        await controller.on_interaction_end()

        assert recorder.of("progress") == [
            (70, GesturePhase.TRACKING),
            (70, GesturePhase.COMMITTING),
            (70, GesturePhase.REFRESHING),
            (0.0, GesturePhase.IDLE),
        ]

    @pytest.mark.asyncio
    async def test_second_start_during_refresh_is_ignored(self, recorder):
        gate = asyncio.Event()

        async def refresh():
            await gate.wait()

        controller = build_controller(refresh, recorder)
        controller.on_interaction_start(at(0), 0)
        controller.on_interaction_move(at(200))
        task = asyncio.create_task(controller.on_interaction_end())
        await asyncio.sleep(0)

        assert controller.phase == GesturePhase.REFRESHING
        assert controller.is_refreshing
        assert not controller.on_interaction_start(at(0), 0)
        assert "refresh already in flight" in str(controller.last_ignored)
        assert not controller.on_interaction_move(at(300))
        assert await controller.on_interaction_end() is None

        gate.set()
        outcome = await task

        assert outcome.success
        assert len(recorder.of("start")) == 1
        assert len(recorder.of("end")) == 1
        # A fresh gesture works again once the refresh has ended
        assert controller.on_interaction_start(at(0), 0)

    @pytest.mark.asyncio
    async def test_failed_refresh_is_reported_and_resets(self, recorder):
        clock = ManualClock()
        toasts = ToastQueue(clock)
        error = RuntimeError("feed unavailable")

        async def refresh():
            raise error

        controller = build_controller(refresh, recorder, notifier=toasts)
        controller.on_interaction_start(at(0), 0)
        controller.on_interaction_move(at(200))

        outcome = await controller.on_interaction_end()

        assert not outcome.success
        assert isinstance(outcome.failure, RefreshFailed)
        assert outcome.error is error
        assert outcome.failure.is_user_visible()
        assert recorder.of("end") == [(outcome,)]
        assert controller.phase == GesturePhase.IDLE
        assert controller.damped_distance == 0
        assert [t.level for t in toasts.active()] == [ToastLevel.ERROR]

    @pytest.mark.asyncio
    async def test_cancelled_refresh_still_resets(self, recorder):
        async def refresh():
            await asyncio.sleep(10)

        controller = build_controller(refresh, recorder)
        controller.on_interaction_start(at(0), 0)
        controller.on_interaction_move(at(200))
        task = asyncio.create_task(controller.on_interaction_end())
        await asyncio.sleep(0)

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert controller.phase == GesturePhase.IDLE
        assert recorder.of("end") == []


class TestPullBelowThreshold:
    """A pull released before reaching the threshold."""

    @pytest.mark.asyncio
    async def test_no_refresh_and_back_to_idle(self, recorder):
        calls = []

        async def refresh():
            calls.append("refresh")

        controller = build_controller(refresh, recorder)
        controller.on_interaction_start(at(100), 0)
        controller.on_interaction_move(at(180))
        assert controller.damped_distance == 40

        assert await controller.on_interaction_end() is None

        assert calls == []
        assert recorder.of("start") == []
        assert controller.phase == GesturePhase.IDLE
        assert controller.damped_distance == 0

    @pytest.mark.asyncio
    async def test_exactly_at_threshold_does_not_refresh(self, recorder):
        async def refresh():
            raise AssertionError("must not run")

        controller = build_controller(refresh, recorder)
        controller.on_interaction_start(at(0), 0)
        controller.on_interaction_move(at(120))

        assert await controller.on_interaction_end() is None
        assert recorder.of("start") == []

    @given(st.floats(min_value=0, max_value=240, allow_nan=False))
    def test_refresh_iff_damped_exceeds_threshold(self, pull: float):
        """Property test: refresh starts exactly when damped > threshold."""
        started = []

        async def refresh():
            pass

        controller = build_controller(refresh, on_refresh_start=lambda: started.append(1))
        controller.on_interaction_start(at(0), 0)
        controller.on_interaction_move(at(pull))
        asyncio.run(controller.on_interaction_end())

        assert len(started) == (1 if pull * 0.5 > 60 else 0)


class TestSessionGuards:
    """Sessions that must never progress."""

    @given(
        st.floats(min_value=0.5, max_value=10_000, allow_nan=False),
        st.lists(st.floats(min_value=-1000, max_value=1000, allow_nan=False), max_size=10)
    )
    def test_nonzero_offset_never_reports_or_refreshes(self, offset: float, moves: list[float]):
        """Property test: a gesture starting below the top is ignored entirely."""
        events = []

        async def refresh():
            events.append("refresh")

        controller = build_controller(
            refresh,
            on_progress=lambda *args: events.append(("progress", args)),
            on_refresh_start=lambda: events.append("start"),
        )

        assert not controller.on_interaction_start(at(0), surface_scroll_offset=offset)
        for y in moves:
            assert not controller.on_interaction_move(at(y))
        assert asyncio.run(controller.on_interaction_end()) is None

        assert events == []
        assert controller.phase == GesturePhase.IDLE

    def test_move_and_end_without_start_are_noops(self, recorder):
        async def refresh():
            raise AssertionError("must not run")

        controller = build_controller(refresh, recorder)

        assert not controller.on_interaction_move(at(500))
        assert isinstance(controller.last_ignored, GestureIgnored)
        assert "move without an active session" in str(controller.last_ignored)
        assert asyncio.run(controller.on_interaction_end()) is None
        assert "release without an active session" in str(controller.last_ignored)
        assert recorder.events == []

    def test_upward_motion_reports_zero(self, recorder):
        async def refresh():
            pass

        controller = build_controller(refresh, recorder)
        controller.on_interaction_start(at(300), 0)

        consumed = controller.on_interaction_move(at(100))

        assert not consumed
        assert controller.damped_distance == 0
        assert recorder.of("progress") == [(0.0, GesturePhase.TRACKING)]

    @given(
        st.floats(min_value=-500, max_value=500, allow_nan=False),
        st.floats(min_value=0.01, max_value=1.0, allow_nan=False),
        st.lists(st.floats(min_value=-1000, max_value=1000, allow_nan=False), min_size=1, max_size=20)
    )
    def test_damped_distance_tracks_pull(self, origin: float, damping: float, ys: list[float]):
        """Property test: damped == max(0, y - origin) * damping, never negative."""
        async def refresh():
            pass

        controller = build_controller(
            refresh, config=GestureConfig(threshold=60, damping_factor=damping)
        )
        controller.on_interaction_start(at(origin), 0)
        for y in ys:
            controller.on_interaction_move(at(y))
            assert controller.damped_distance >= 0
            assert controller.damped_distance == pytest.approx(max(0.0, y - origin) * damping)

    def test_teardown_mid_session_drops_state(self, recorder):
        calls = []

        async def refresh():
            calls.append("refresh")

        controller = build_controller(refresh, recorder)
        controller.on_interaction_start(at(0), 0)
        controller.on_interaction_move(at(400))

        controller.teardown()

        assert asyncio.run(controller.on_interaction_end()) is None
        assert calls == []
        assert controller.phase == GesturePhase.IDLE
        assert not controller.on_interaction_start(at(0), 0)

    @pytest.mark.asyncio
    async def test_teardown_during_refresh_silences_callbacks(self, recorder):
        gate = asyncio.Event()

        async def refresh():
            await gate.wait()

        controller = build_controller(refresh, recorder)
        controller.on_interaction_start(at(0), 0)
        controller.on_interaction_move(at(200))
        task = asyncio.create_task(controller.on_interaction_end())
        await asyncio.sleep(0)

        controller.teardown()
        gate.set()
        outcome = await task

        assert outcome.success
        assert recorder.of("end") == []
        assert controller.phase == GesturePhase.IDLE


class TestGestureSnapshot:
    """Tests for the rendering view of a gesture."""

    def test_progress_and_offset_while_pulling(self):
        snapshot = GestureSnapshot(
            phase=GesturePhase.TRACKING, raw_distance=60, damped_distance=30, threshold=60
        )
        assert snapshot.progress == 0.5
        assert snapshot.content_offset == 15
        assert snapshot.is_pulling

    def test_values_are_capped(self):
        snapshot = GestureSnapshot(
            phase=GesturePhase.TRACKING, raw_distance=800, damped_distance=400, threshold=60
        )
        assert snapshot.progress == 1.0
        assert snapshot.content_offset == 60

    def test_no_offset_outside_tracking(self):
        snapshot = GestureSnapshot(phase=GesturePhase.REFRESHING, damped_distance=70, threshold=60)
        assert snapshot.content_offset == 0

    def test_controller_snapshot(self):
        async def refresh():
            pass

        controller = build_controller(refresh)
        controller.on_interaction_start(at(10), 0)
        controller.on_interaction_move(at(70))

        snapshot = controller.snapshot()

        assert snapshot.phase == GesturePhase.TRACKING
        assert snapshot.raw_distance == 60
        assert snapshot.damped_distance == 30
        assert snapshot.threshold == 60


class TestFeedRefresher:
    """Tests for the simulated feed reload."""

    @pytest.mark.asyncio
    async def test_waits_on_clock_then_notifies(self):
        clock = ManualClock()
        toasts = ToastQueue(clock)
        reloads = []
        feed = FeedRefresher(clock, delay_ms=500, notifier=toasts, reload=lambda: reloads.append(1))

        task = asyncio.create_task(feed())
        await asyncio.sleep(0)
        assert feed.refreshing
        assert reloads == []

        clock.advance(500)
        await asyncio.wait_for(task, timeout=1)

        assert reloads == [1]
        assert feed.refresh_count == 1
        assert not feed.refreshing
        assert [t.message for t in toasts.active()] == ["Feed refreshed!"]

    @pytest.mark.asyncio
    async def test_reentrant_call_returns_immediately(self):
        clock = ManualClock()
        feed = FeedRefresher(clock, delay_ms=500)

        first = asyncio.create_task(feed())
        await asyncio.sleep(0)
        await asyncio.wait_for(feed(), timeout=1)

        clock.advance(500)
        await first

        assert feed.refresh_count == 1

    @pytest.mark.asyncio
    async def test_drives_controller_end_to_end(self, recorder):
        clock = ManualClock()
        feed = FeedRefresher(clock, delay_ms=500)
        controller = build_controller(feed, recorder)
        controller.on_interaction_start(at(0), 0)
        controller.on_interaction_move(at(140))

        task = asyncio.create_task(controller.on_interaction_end())
        await asyncio.sleep(0)
        assert controller.phase == GesturePhase.REFRESHING

        clock.advance(500)
        outcome = await asyncio.wait_for(task, timeout=1)

        assert outcome.success
        assert feed.refresh_count == 1
        assert controller.phase == GesturePhase.IDLE
