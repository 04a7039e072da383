"""
The engine context: one fully built tessellation and its animated state.
"""
import logging

import numpy

from hexmosaic._config import MosaicConfig
from hexmosaic._grid import point_grid
from hexmosaic._hexagon import decompose
from hexmosaic._vertex import index_polygons, reconstruct
from hexmosaic._color import ColorEngine
from hexmosaic._mutation import MutationEngine

logger = logging.getLogger(__name__)


class Mosaic:
    def __init__(self, width, height, config=None, rng=None, hue=None):
        """
        A honeycomb tessellation of a ``width`` x ``height`` viewport whose
        vertices, fills and hue are animated in place.

        Important objects:
            Mosaic.V: The cache of shared vertices and their edge links
            Mosaic.points: (N, 2) array of current vertex positions, row i
                belongs to the shared vertex with index i
            Mosaic.indexed: One tuple of point indices per polygon
            Mosaic.kinds: Kind label of every polygon
            Mosaic.fills: One fill scalar per polygon

        :param width: float, viewport width
        :param height: float, viewport height
        :param config: MosaicConfig, optional, defaults to MosaicConfig()
        :param rng: numpy.random.Generator, optional, the single source of
                    randomness for fills, hue and mutation
        :param hue: float, optional, starting hue, otherwise a random integer
                    in [0, 360)
        """
        self.width = width
        self.height = height
        self.config = config if config is not None else MosaicConfig()
        self.rng = rng if rng is not None else numpy.random.default_rng()

        c = self.config
        self.grid = point_grid(width, height, c.spacing_x, c.spacing_y)
        raw, self.kinds = decompose(self.grid, c.radius)
        self.V, self.indexed = index_polygons(raw, c.snap)

        # Animation starts from the quantized positions
        self.points = self.V.coordinates()
        self.fills = self.rng.random(len(self.indexed))

        self.color = ColorEngine(self.rng, c, hue=hue)
        self.mutator = MutationEngine(self.rng, c)
        self.generation = 0

        logger.debug("Built mosaic %sx%s: %d hexagons, %d polygons, "
                     "%d shared points", width, height, len(self.grid),
                     len(self.indexed), len(self.points))

    def __len__(self):
        return len(self.indexed)

    @property
    def hue(self):
        return self.color.hue

    @property
    def color_scale(self):
        return self.color.scale

    def polygons(self):
        """Concrete polygons dereferenced against the current points."""
        return reconstruct(self.indexed, self.points)

    def polygons_of_kind(self, kind):
        return [i for i, k in enumerate(self.kinds) if k == kind]

    def step(self):
        """Mutate points, fills and hue by one tick."""
        self.mutator.step(self)
        self.generation += 1

    def frame(self):
        """(color scale, fills, polygons) as handed to a render backend."""
        return self.color_scale, self.fills.copy(), self.polygons()
