"""
Animated honeycomb mosaics.

Usage::

    from hexmosaic import AnimationScheduler, FixedViewport

    scheduler = AnimationScheduler(FixedViewport(800, 600), seed=1)
    scheduler.start()
    scheduler.timer.advance(1000)   # roughly ten ticks
    polygons = scheduler.backend.polygons
"""
from ._config import MosaicConfig, load_config
from ._grid import point_grid, row_counts
from ._hexagon import (
    decompose,
    hexagon,
    hexagon_inner_triangles,
    hexagon_squares,
    hexagon_triangles,
    polygon_sides,
)
from ._vertex import (
    VertexCacheIndex,
    VertexLookupError,
    index_polygons,
    quantize,
    reconstruct,
)
from ._color import ColorEngine, ColorScale, color_scale
from ._mutation import MutationEngine, mutate_fills, mutate_points
from ._mosaic import Mosaic
from ._backend import (
    FixedViewport,
    RecordingBackend,
    SvgBackend,
    get_backend,
)
from ._scheduler import AnimationScheduler, CancelToken, ManualTimer

__version__ = "0.1.0"

__all__ = [
    "MosaicConfig",
    "load_config",
    "point_grid",
    "row_counts",
    "hexagon",
    "polygon_sides",
    "hexagon_squares",
    "hexagon_triangles",
    "hexagon_inner_triangles",
    "decompose",
    "VertexCacheIndex",
    "VertexLookupError",
    "index_polygons",
    "quantize",
    "reconstruct",
    "ColorEngine",
    "ColorScale",
    "color_scale",
    "MutationEngine",
    "mutate_points",
    "mutate_fills",
    "Mosaic",
    "FixedViewport",
    "RecordingBackend",
    "SvgBackend",
    "get_backend",
    "AnimationScheduler",
    "CancelToken",
    "ManualTimer",
]
