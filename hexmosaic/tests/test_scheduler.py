"""Tests for the tick loop, pause/resume and rebuild cancellation."""
import pytest
import numpy

from hexmosaic._backend import FixedViewport, RecordingBackend
from hexmosaic._config import MosaicConfig
from hexmosaic._scheduler import (
    AnimationScheduler, CancelToken, ManualTimer, RUNNING, PAUSED,
)


@pytest.fixture
def scheduler():
    s = AnimationScheduler(FixedViewport(400, 300), seed=0)
    s.start()
    return s


class TestManualTimer:
    """Tests for the deterministic timer queue."""

    def test_runs_in_due_order(self):
        timer = ManualTimer()
        calls = []
        timer.call_later(20, lambda: calls.append('late'))
        timer.call_later(10, lambda: calls.append('early'))
        assert timer.advance(15) == 1
        assert calls == ['early']
        assert timer.now == 15
        timer.advance(10)
        assert calls == ['early', 'late']

    def test_cancelled_callbacks_skipped(self):
        timer = ManualTimer()
        calls = []
        handle = timer.call_later(5, lambda: calls.append(1))
        handle.cancel()
        assert timer.pending == 0
        assert timer.run_next() is False
        assert calls == []


class TestLifecycle:
    """Tests for start, tick and stop."""

    def test_start_renders_and_arms(self, scheduler):
        assert scheduler.backend.resets == 1
        assert scheduler.backend.size == (400, 300)
        assert scheduler.timer.pending == 1
        assert scheduler.frames == 0
        assert scheduler.state == RUNNING

    def test_tick_before_start(self):
        with pytest.raises(RuntimeError):
            AnimationScheduler().tick()

    def test_ticks_render_current_state(self, scheduler):
        """The rendered frame is the fully mutated state of that tick."""
        assert scheduler.timer.run_next()
        assert scheduler.ticks == 1
        assert scheduler.frames == 1
        assert scheduler.backend.frames == 1
        numpy.testing.assert_array_equal(scheduler.backend.fills,
                                         scheduler.mosaic.fills)
        for drawn, current in zip(scheduler.backend.polygons,
                                  scheduler.mosaic.polygons()):
            numpy.testing.assert_array_equal(drawn, current)
        assert scheduler.timer.pending == 1

    def test_first_tick_after_initial_interval(self, scheduler):
        assert scheduler.timer.advance(99.0) == 0
        assert scheduler.timer.advance(1.0) == 1

    def test_interval_drifts_upward(self, scheduler):
        for _ in range(10):
            scheduler.timer.run_next()
        assert scheduler.interval == pytest.approx(105.0, abs=0.2)
        assert scheduler.backend.duration > 100.0

    def test_stop_cancels(self, scheduler):
        scheduler.stop()
        assert scheduler.timer.pending == 0
        assert scheduler.timer.run_next() is False


class FlakyBackend(RecordingBackend):
    """Recording backend whose first draw fails."""

    def __init__(self):
        super().__init__()
        self.failures = 0

    def draw(self, scale, fills, polygons, duration):
        if self.failures == 0:
            self.failures += 1
            raise RuntimeError("surface lost")
        super().draw(scale, fills, polygons, duration)


class TestFailedTicks:
    """A failing tick is logged and the loop keeps going."""

    def test_render_failure_rearms_timer(self, caplog):
        s = AnimationScheduler(FixedViewport(300, 200), FlakyBackend(), seed=0)
        s.start()
        interval = s.interval
        assert s.timer.run_next()
        assert s.timer.pending == 1
        assert s.ticks == 1
        assert s.frames == 0
        assert s.interval > interval
        assert "Tick 1 failed" in caplog.text

        s.timer.run_next()
        assert s.frames == 1
        assert s.backend.frames == 1

    def test_stop_inside_tick_is_respected(self):
        s = AnimationScheduler(FixedViewport(300, 200), seed=0)
        s.start()
        s.backend.draw = lambda *args: s.stop()
        s.timer.run_next()
        assert s.timer.pending == 0


class TestPauseResume:
    """Tests for the running/paused state machine."""

    def test_paused_ticks_skip_mutation_and_render(self, scheduler):
        scheduler.set_visible(False)
        assert scheduler.state == PAUSED
        points = scheduler.mosaic.points.copy()
        interval = scheduler.interval
        for _ in range(3):
            scheduler.timer.run_next()
        assert scheduler.ticks == 3
        assert scheduler.frames == 0
        assert scheduler.mosaic.generation == 0
        numpy.testing.assert_array_equal(scheduler.mosaic.points, points)
        assert scheduler.interval > interval
        assert scheduler.timer.pending == 1

    def test_resume(self, scheduler):
        scheduler.pause()
        scheduler.timer.run_next()
        scheduler.set_visible(True)
        assert scheduler.state == RUNNING
        scheduler.timer.run_next()
        assert scheduler.frames == 1


class TestRebuild:
    """Tests for rebuilding on resize."""

    def test_rebuild_replaces_mosaic(self, scheduler):
        old = scheduler.mosaic
        scheduler.rebuild(900, 700)
        assert scheduler.mosaic is not old
        assert scheduler.mosaic.width == 900
        assert scheduler.backend.size == (900, 700)
        assert scheduler.backend.resets == 2

    def test_rebuild_cancels_pending_tick(self, scheduler):
        """Only the tick armed by the rebuild is left in the queue."""
        token = scheduler._token
        scheduler.rebuild()
        assert token.cancelled
        assert scheduler.timer.pending == 1

    def test_stale_token_is_ignored(self, scheduler):
        token = CancelToken()
        token.cancel()
        scheduler._fire(token)
        assert scheduler.ticks == 0

    def test_interval_and_state_carry_over(self, scheduler):
        for _ in range(4):
            scheduler.timer.run_next()
        scheduler.pause()
        interval = scheduler.interval
        scheduler.rebuild()
        assert scheduler.interval == interval
        assert scheduler.state == PAUSED

    def test_rebuild_reads_viewport(self):
        viewport = FixedViewport(300, 200)
        s = AnimationScheduler(viewport, seed=1)
        s.start()
        small = len(s.mosaic)
        viewport.width, viewport.height = 1200, 900
        s.rebuild()
        assert len(s.mosaic) > small

    def test_custom_backend_and_config(self):
        config = MosaicConfig(radius=40, initial_interval=10)
        backend = RecordingBackend()
        s = AnimationScheduler(FixedViewport(200, 200), backend, config, seed=2)
        s.start()
        assert s.timer.advance(10) == 1
        assert backend.frames == 1
