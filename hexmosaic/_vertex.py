import logging

import numpy

logger = logging.getLogger(__name__)


class VertexLookupError(KeyError):
    """A quantized coordinate has no entry in the shared point set."""


def quantize(value, size):
    """Round ``value`` to the nearest multiple of ``size`` (halves go up)."""
    return numpy.floor(numpy.asarray(value, dtype=float) / size + 0.5) * size


def quantize_point(x, size):
    """Quantized, hashable version of a 2D point."""
    qx, qy = quantize(x, size)
    return (float(qx), float(qy))


class SharedVertex:
    """A vertex of the shared point set. ``nn`` holds the vertices joined to
    it by at least one polygon edge."""
    __slots__ = ('x', 'index', 'nn')

    def __init__(self, x, index):
        self.x = x  # quantized coordinate tuple, the cache key
        self.index = index
        self.nn = set()

    def __hash__(self):
        return hash(self.x)

    def __repr__(self):
        return f"SharedVertex({self.x!r}, index={self.index})"


class VertexCacheIndex(object):
    """
    Shared point set keyed by quantized coordinate.

    ``V[x]`` returns the vertex for the quantized tuple ``x``, creating it with
    the next free index on first sight. ``V.lookup(x)`` is the strict
    variant used once the set is complete.
    """
    def __init__(self, snap=5.0):
        self.snap = snap
        self.cache = {}

    def __getitem__(self, x):
        v = self.cache.get(x)
        if v is None:
            v = SharedVertex(x, len(self.cache))
            self.cache[x] = v
        return v

    def __iter__(self):
        for v in self.cache.values():
            yield v

    def __len__(self):
        return len(self.cache)

    def __contains__(self, x):
        return x in self.cache

    @property
    def size(self):
        return len(self.cache)

    def lookup(self, x):
        """Return the vertex stored at quantized ``x`` without inserting."""
        try:
            return self.cache[x]
        except KeyError:
            raise VertexLookupError(
                f"No shared vertex at quantized coordinate {x}; the snap unit "
                f"({self.snap}) or the quantization of the polygon is "
                f"inconsistent with the point set") from None

    def coordinates(self):
        """(N, 2) float array of the vertex positions in index order."""
        if not self.cache:
            return numpy.zeros((0, 2))
        return numpy.array([v.x for v in self.cache.values()], dtype=float)

    def edges(self):
        """Set of sorted index pairs joined by at least one polygon edge."""
        return {tuple(sorted((v.index, u.index)))
                for v in self for u in v.nn}


def index_polygons(polygons, snap=5.0):
    """
    Deduplicate the vertices of ``polygons`` into one shared point set.

    Every vertex is quantized to the nearest multiple of ``snap``; vertices
    landing on the same quantized coordinate become a single shared vertex.
    Shared vertices are numbered in first-seen order.

    :param polygons: iterable of (k, 2) arrays, k >= 3
    :param snap: float, quantization unit
    :return: (V, indexed) where V is the filled VertexCacheIndex and indexed
             holds one tuple of vertex indices per polygon, vertex order kept
    """
    V = VertexCacheIndex(snap=snap)

    quantized = []
    for polygon in polygons:
        polygon = numpy.asarray(polygon, dtype=float)
        if polygon.ndim != 2 or polygon.shape[0] < 3 or polygon.shape[1] != 2:
            raise ValueError(f"Polygons need at least 3 two-dimensional "
                             f"vertices, got shape {polygon.shape}")
        qpoly = [quantize_point(x, snap) for x in polygon]
        for x in qpoly:
            V[x]
        quantized.append(qpoly)

    indexed = []
    for qpoly in quantized:
        verts = [V.lookup(x) for x in qpoly]
        for v, u in zip(verts, verts[1:] + verts[:1]):
            if u is not v:
                v.nn.add(u)
                u.nn.add(v)
        indexed.append(tuple(v.index for v in verts))

    logger.debug("Indexed %d polygons onto %d shared vertices",
                 len(indexed), len(V))
    return V, indexed


def reconstruct(indexed, points):
    """Concrete polygons from index tuples and the current point array."""
    points = numpy.asarray(points)
    return [points[list(indexes)] for indexes in indexed]
