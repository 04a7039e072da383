"""
Hexagon construction and decomposition into filler polygons.

Every hexagon contributes a fixed subset of fillers:

    squares          on edges 3, 4 and 5 (the lower-left, left and upper-left
                     sides), each reaching the neighbouring hexagon,
    outer triangles  anchored at vertices 0 and 1,
    inner triangles  wedges on edges 0, 2 and 4 closed through the centre.

The neighbouring hexagons' own fillers cover the remaining gaps once the whole
grid is assembled, so the subset must not be "completed" per hexagon.

Coordinates are screen coordinates: y grows downward, so vertex 0 sits
directly above the centre.
"""
from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy

SQRT3_2 = numpy.sqrt(3) / 2

HEXAGON = 'hexagon'
SQUARE = 'square'
TRIANGLE = 'triangle'
INNER_TRIANGLE = 'inner_triangle'
KINDS = (HEXAGON, SQUARE, TRIANGLE, INNER_TRIANGLE)


def hexagon(cx, cy, radius) -> numpy.ndarray:
    """Six vertices of the hexagon centred on (cx, cy), clockwise from the top."""
    h = radius * SQRT3_2
    return numpy.array([
        [cx, cy - radius],
        [cx + h, cy - radius / 2],
        [cx + h, cy + radius / 2],
        [cx, cy + radius],
        [cx - h, cy + radius / 2],
        [cx - h, cy - radius / 2],
    ], dtype=float)


def polygon_sides(polygon) -> List[Tuple[numpy.ndarray, numpy.ndarray]]:
    """Consecutive vertex pairs of a closed polygon, wrapping at the end."""
    polygon = numpy.asarray(polygon)
    return list(zip(polygon, numpy.roll(polygon, -1, axis=0)))


def hexagon_squares(hex_vertices, radius) -> List[numpy.ndarray]:
    """
    Squares standing outward on edges 3, 4 and 5 of a hexagon.

    Each square starts with the two edge endpoints in hexagon order, so its
    first edge is exactly the hexagon edge it is attached to.
    """
    sides = polygon_sides(hex_vertices)
    h = radius * SQRT3_2

    a, b = sides[3]
    lower_left = numpy.array([a, b,
                              b + (-radius / 2, h),
                              a + (-radius / 2, h)])

    a, b = sides[4]
    left = numpy.array([a, b,
                        b + (-radius, 0.0),
                        b + (-radius, radius)])

    a, b = sides[5]
    upper_left = numpy.array([a, b,
                              b + (-radius / 2, -h),
                              a + (-radius / 2, -h)])

    return [lower_left, left, upper_left]


def hexagon_triangles(hex_vertices, radius) -> List[numpy.ndarray]:
    """Outer triangles anchored at vertices 0 and 1."""
    hex_vertices = numpy.asarray(hex_vertices)
    h = radius * SQRT3_2
    top, upper_right = hex_vertices[0], hex_vertices[1]
    return [
        numpy.array([top, top + (radius / 2, -h), top + (-radius / 2, -h)]),
        numpy.array([upper_right, upper_right + (radius, 0.0),
                     upper_right + (radius / 2, -h)]),
    ]


def hexagon_inner_triangles(hex_vertices, centre) -> List[numpy.ndarray]:
    """Wedges on edges 0, 2 and 4, closed through the hexagon centre."""
    sides = polygon_sides(hex_vertices)
    centre = numpy.asarray(centre, dtype=float)
    return [numpy.array([a, b, centre]) for a, b in
            (sides[0], sides[2], sides[4])]


def decompose(centres: Sequence, radius):
    """
    Build all hexagons and fillers for a grid of centres.

    Polygons are grouped by kind: every hexagon first, then every square,
    outer triangle and inner triangle, each group in grid order.

    :param centres: sequence of (x, y) hexagon centres
    :param radius: float, hexagon circumradius
    :return: (polygons, kinds), a list of (k, 2) arrays and the matching list
             of kind labels
    """
    hexagons = [hexagon(cx, cy, radius) for cx, cy in centres]
    squares = [s for hx in hexagons for s in hexagon_squares(hx, radius)]
    triangles = [t for hx in hexagons for t in hexagon_triangles(hx, radius)]
    inner = [t for hx, c in zip(hexagons, centres)
             for t in hexagon_inner_triangles(hx, c)]

    polygons = hexagons + squares + triangles + inner
    kinds = ([HEXAGON] * len(hexagons) + [SQUARE] * len(squares)
             + [TRIANGLE] * len(triangles) + [INNER_TRIANGLE] * len(inner))
    return polygons, kinds
