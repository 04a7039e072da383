"""
Tick loop driving a mosaic.

The scheduler owns the engine context (a :class:`Mosaic`) and re-arms a
single-shot timer after every tick. It is either running or paused; a paused
scheduler keeps ticking and keeps lengthening its interval but neither mutates
nor renders.
"""
import functools
import heapq
import itertools
import logging

import numpy

from hexmosaic._config import MosaicConfig
from hexmosaic._mosaic import Mosaic
from hexmosaic._backend import FixedViewport, RecordingBackend

logger = logging.getLogger(__name__)

RUNNING = 'running'
PAUSED = 'paused'


class CancelToken:
    """Marks one scheduled tick; a cancelled token makes the tick a no-op."""
    __slots__ = ('cancelled',)

    def __init__(self):
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class TimerHandle:
    __slots__ = ('cancelled',)

    def __init__(self):
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualTimer:
    """
    Deterministic single-threaded timer queue.

    Callbacks are run only when the clock is advanced, in due-time order
    (ties in scheduling order).
    """

    def __init__(self):
        self.now = 0.0
        self._queue = []
        self._seq = itertools.count()

    def call_later(self, delay, callback):
        handle = TimerHandle()
        heapq.heappush(self._queue,
                       (self.now + delay, next(self._seq), callback, handle))
        return handle

    @property
    def pending(self):
        return sum(1 for *_, h in self._queue if not h.cancelled)

    def run_next(self):
        """Run the next live callback, moving the clock to its due time."""
        while self._queue:
            due, _, callback, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self.now = max(self.now, due)
            callback()
            return True
        return False

    def advance(self, ms):
        """Run every callback due within the next ``ms`` milliseconds."""
        end = self.now + ms
        ran = 0
        while self._queue and self._queue[0][0] <= end:
            due, _, callback, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self.now = max(self.now, due)
            callback()
            ran += 1
        self.now = end
        return ran


class AnimationScheduler:
    def __init__(self, viewport=None, backend=None, config=None, timer=None,
                 seed=None, rng=None):
        """
        Owns a mosaic and animates it through a render backend.

        :param viewport: object with ``size() -> (width, height)``,
                         defaults to an 800 x 600 FixedViewport
        :param backend: render backend, defaults to RecordingBackend
        :param config: MosaicConfig, optional
        :param timer: object with ``call_later(delay_ms, callback)`` returning
                      a cancellable handle, defaults to a ManualTimer
        :param seed: int, optional, seed for the random generator
        :param rng: numpy.random.Generator, optional, overrides ``seed``
        """
        self.config = config if config is not None else MosaicConfig()
        self.viewport = viewport if viewport is not None else FixedViewport(800, 600)
        self.backend = backend if backend is not None else RecordingBackend(
            stroke_width=self.config.stroke_width)
        self.timer = timer if timer is not None else ManualTimer()
        self.rng = rng if rng is not None else numpy.random.default_rng(seed)

        self.interval = float(self.config.initial_interval)
        self.running = True
        self.mosaic = None
        self.ticks = 0
        self.frames = 0
        self.rebuilds = 0

        self._token = None
        self._handle = None

    @property
    def state(self):
        return RUNNING if self.running else PAUSED

    # %% Lifecycle
    def start(self):
        """Build the mosaic, draw the first frame and arm the first tick."""
        self.rebuild()

    def rebuild(self, width=None, height=None):
        """Throw away the mosaic and build a new one for the viewport.

        Any pending tick is cancelled first so that it cannot run against the
        new indices. The interval and running state carry over.
        """
        self._cancel()
        if width is None or height is None:
            vw, vh = self.viewport.size()
            width = vw if width is None else width
            height = vh if height is None else height

        self.mosaic = Mosaic(width, height, self.config, self.rng)
        self.rebuilds += 1
        logger.info("Rebuilt mosaic for %sx%s viewport (%d polygons)",
                    width, height, len(self.mosaic))

        scale, fills, polygons = self.mosaic.frame()
        self.backend.reset(scale, fills, polygons, (width, height))
        self._schedule()

    def stop(self):
        self._cancel()
        logger.info("Animation stopped after %d ticks", self.ticks)

    # %% Visibility
    def pause(self):
        if self.running:
            logger.info("Animation paused")
        self.running = False

    def resume(self):
        if not self.running:
            logger.info("Animation resumed")
        self.running = True

    def set_visible(self, visible):
        if visible:
            self.resume()
        else:
            self.pause()

    # %% Ticking
    def tick(self):
        """One step: mutate and render when running, then drift the interval.

        The interval drifts even when mutation or rendering raises.
        """
        if self.mosaic is None:
            raise RuntimeError("Scheduler has no mosaic; call start() first")

        try:
            if self.running:
                self.mosaic.step()
                scale, fills, polygons = self.mosaic.frame()
                self.backend.draw(scale, fills, polygons, self.interval)
                self.frames += 1
        finally:
            c = self.config
            self.interval += float(self.rng.normal(c.interval_drift_mean,
                                                   c.interval_drift_stdev))
            self.ticks += 1

    def _fire(self, token):
        if token.cancelled:
            return
        try:
            self.tick()
        except Exception:
            logger.exception("Tick %d failed; rescheduling", self.ticks)
        finally:
            # A rebuild or stop during the tick replaces or clears the token
            if token is self._token:
                self._schedule()

    def _schedule(self):
        self._token = CancelToken()
        self._handle = self.timer.call_later(
            self.interval, functools.partial(self._fire, self._token))

    def _cancel(self):
        if self._token is not None:
            self._token.cancel()
        if self._handle is not None:
            self._handle.cancel()
        self._token = None
        self._handle = None
