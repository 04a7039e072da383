"""
Stochastic walks applied to a mosaic once per animation tick.

Points follow a sparse jump process: almost every tick a coordinate stays
put, and with probability ``1 - cutoff`` it leaps by a clamped normal step.
Fills take a tiny Gaussian step every tick and are only bounded when the
config asks for it. The hue advances through the mosaic's ColorEngine.

Each process first computes a proposal and only commits it when it is
finite, so a bad draw cannot poison later ticks.
"""
from __future__ import annotations

import logging

import numpy

logger = logging.getLogger(__name__)


def point_jumps(rng, shape, cutoff=0.999, stdev=10.0, limit=20.0):
    """Increments of the sparse jump process, mostly zero."""
    thresholds = rng.random(shape)
    jumps = numpy.clip(rng.normal(0.0, stdev, shape), -limit, limit)
    return numpy.where(thresholds > cutoff, jumps, 0.0)


def mutate_points(points, rng, cutoff=0.999, stdev=10.0, limit=20.0):
    points = numpy.asarray(points, dtype=float)
    return points + point_jumps(rng, points.shape, cutoff, stdev, limit)


def mutate_fills(fills, rng, stdev=0.001, bounds=None):
    fills = numpy.asarray(fills, dtype=float)
    fills = fills + rng.normal(0.0, stdev, fills.shape)
    if bounds is not None:
        fills = numpy.clip(fills, bounds[0], bounds[1])
    return fills


class MutationEngine:
    def __init__(self, rng: numpy.random.Generator, config):
        self.rng = rng
        self.config = config
        self.rejected = 0

    def step(self, mosaic):
        """Advance the points, fills and hue of ``mosaic`` by one tick.

        All three proposals are drawn before anything is committed, so the
        mosaic is never observed half-mutated.
        """
        c = self.config
        points = mutate_points(mosaic.points, self.rng, c.jump_cutoff,
                               c.jump_stdev, c.jump_limit)
        fills = mutate_fills(mosaic.fills, self.rng, c.fill_stdev,
                             c.fill_bounds)
        hue = mosaic.color.propose()

        if self._valid('points', points):
            # In place, the shared point set keeps its identity
            mosaic.points[...] = points
        if self._valid('fills', fills):
            mosaic.fills[...] = fills
        if self._valid('hue', hue):
            mosaic.color.hue = hue

    def _valid(self, name, proposal):
        if numpy.all(numpy.isfinite(proposal)):
            return True
        self.rejected += 1
        logger.warning("Rejected non-finite %s mutation; keeping previous "
                       "state", name)
        return False
