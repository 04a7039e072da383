"""
Matplotlib render backend and interactive animation.

Polygons are drawn as one PolyCollection in pixel coordinates with the y axis
pointing down, so the figure looks like the SVG output.
"""
import logging

import numpy
from matplotlib import pyplot
from matplotlib.collections import PolyCollection

from hexmosaic._scheduler import AnimationScheduler

logger = logging.getLogger(__name__)


class MatplotlibBackend:
    name = "matplotlib"

    def __init__(self, fig=None, ax=None, stroke_width=1.0, figsize=(8, 6),
                 dpi=100):
        if fig is None:
            fig = pyplot.figure(figsize=figsize, dpi=dpi)
        if ax is None:
            ax = fig.add_axes([0, 0, 1, 1])
        ax.set_axis_off()
        self.fig = fig
        self.ax = ax
        self.stroke_width = stroke_width
        self.collection = None

    def size(self):
        """Canvas size in pixels, used as the viewport."""
        width, height = self.fig.get_size_inches() * self.fig.dpi
        return float(width), float(height)

    def reset(self, scale, fills, polygons, size):
        if self.collection is not None:
            self.collection.remove()
        width, height = size
        logger.debug("Drawing %d polygons on a %gx%g canvas",
                     len(polygons), width, height)
        self.collection = PolyCollection(list(polygons),
                                         linewidths=self.stroke_width)
        self.ax.add_collection(self.collection)
        self.ax.set_xlim(0, width)
        self.ax.set_ylim(height, 0)
        self._paint(scale, fills)
        self.fig.canvas.draw_idle()

    def draw(self, scale, fills, polygons, duration):
        # Transitions are not interpolated; the frame is shown as is.
        self.collection.set_verts(list(polygons))
        self._paint(scale, fills)
        self.fig.canvas.draw_idle()

    def _paint(self, scale, fills):
        background = scale(0)
        self.fig.patch.set_facecolor(background)
        self.ax.set_facecolor(background)
        self.collection.set_facecolors(scale.colors_for(numpy.asarray(fills)))
        self.collection.set_edgecolor(background)


class _MatplotlibHandle:
    def __init__(self, timer):
        self.timer = timer

    def cancel(self):
        self.timer.stop()


class MatplotlibTimer:
    """Single-shot canvas timers behind the scheduler's timer interface."""

    def __init__(self, fig):
        self.fig = fig

    def call_later(self, delay, callback):
        timer = self.fig.canvas.new_timer(interval=max(1, int(round(delay))))
        timer.single_shot = True
        timer.add_callback(callback)
        timer.start()
        return _MatplotlibHandle(timer)


def animate_mosaic(config=None, seed=None, figsize=(8, 6), dpi=100,
                   timer=None, show=False):
    """
    Open a figure and animate a mosaic filling it.

    Resizing the window rebuilds the mosaic for the new canvas size and
    closing it stops the loop.

    :param config: MosaicConfig, optional
    :param seed: int, optional random seed
    :param figsize: tuple, figure size in inches
    :param dpi: int, figure resolution
    :param timer: optional timer replacing the canvas timers
    :param show: bool, call pyplot.show() before returning
    :return: fig, ax, scheduler
    """
    backend = MatplotlibBackend(figsize=figsize, dpi=dpi)
    if config is not None:
        backend.stroke_width = config.stroke_width
    if timer is None:
        timer = MatplotlibTimer(backend.fig)

    scheduler = AnimationScheduler(viewport=backend, backend=backend,
                                   config=config, timer=timer, seed=seed)

    canvas = backend.fig.canvas
    canvas.mpl_connect('resize_event', lambda event: scheduler.rebuild())
    canvas.mpl_connect('close_event', lambda event: scheduler.stop())

    scheduler.start()
    if show:
        pyplot.show()
    return backend.fig, backend.ax, scheduler
