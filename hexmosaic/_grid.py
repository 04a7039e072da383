"""Honeycomb lattice of hexagon centres covering a viewport."""
from __future__ import annotations

from typing import List, Tuple

Point = Tuple[float, float]


def point_grid(width, height, spacing_x, spacing_y) -> List[Point]:
    """
    Return hexagon centres tiling the ``width`` x ``height`` viewport.

    Rows are emitted top to bottom every ``spacing_y``; odd rows start half a
    horizontal spacing in. Both axes overshoot the viewport by one spacing so
    that the boundary is always covered.

    :param width: float, viewport width
    :param height: float, viewport height
    :param spacing_x: float, distance between centres within a row
    :param spacing_y: float, distance between rows
    :return: list of (x, y) tuples in row-major order
    """
    points = []
    if spacing_x <= 0 or spacing_y <= 0:
        return points

    row = 0
    y = 0.0
    while y < height + spacing_y:
        x = 0.0 if row % 2 == 0 else spacing_x / 2
        while x < width + spacing_x:
            points.append((x, y))
            x += spacing_x
        y += spacing_y
        row += 1

    return points


def row_counts(points) -> List[int]:
    """Number of centres in each consecutive row of a grid."""
    counts = []
    last_y = None
    for _, y in points:
        if y != last_y:
            counts.append(0)
            last_y = y
        counts[-1] += 1
    return counts
