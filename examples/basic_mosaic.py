"""
Build a single mosaic and report its structure.
"""
import numpy as np
from hexmosaic import Mosaic, MosaicConfig

M = Mosaic(800, 600, MosaicConfig(), rng=np.random.default_rng(0))
print(f"{len(M.grid)} hexagons -> {len(M)} polygons "
      f"on {len(M.points)} shared points")
for kind in ('hexagon', 'square', 'triangle', 'inner_triangle'):
    print(f"  {kind:15s} {len(M.polygons_of_kind(kind))}")
print(f"  {len(M.V.edges())} distinct edges, hue {M.hue:.0f}")
