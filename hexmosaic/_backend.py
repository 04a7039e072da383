"""
Render backends for hexmosaic.

A backend receives finished frames from the scheduler and is responsible for
putting them on some surface. Backends:

- ``RecordingBackend``: Keeps the latest frame in memory (default, headless)
- ``SvgBackend``: Renders the latest frame as SVG markup
- ``MatplotlibBackend``: Draws into a matplotlib figure (requires
  ``matplotlib``)

Usage::

    from hexmosaic._backend import get_backend

    backend = get_backend("memory")      # explicit
    backend = get_backend("svg")
    backend = get_backend("matplotlib")  # optional dependency
"""
from __future__ import annotations

from typing import Protocol, runtime_checkable, Any, Sequence, Tuple
import numpy as np


# ---------------------------------------------------------------------------
# Protocols (structural typing interfaces)
# ---------------------------------------------------------------------------
@runtime_checkable
class RenderBackend(Protocol):
    """Protocol for render collaborators."""

    name: str

    def reset(
        self,
        scale,
        fills: np.ndarray,
        polygons: Sequence[np.ndarray],
        size: Tuple[float, float],
    ) -> None:
        """Discard the current surface and draw a fresh initial frame.

        Parameters
        ----------
        scale : ColorScale, fill -> color; ``scale(0)`` is the background
            and stroke color
        fills : ndarray of shape (P,)
        polygons : list of P arrays of shape (k, 2)
        size : (width, height) of the viewport
        """
        ...

    def draw(
        self,
        scale,
        fills: np.ndarray,
        polygons: Sequence[np.ndarray],
        duration: float,
    ) -> None:
        """Update every polygon to the new frame.

        Parameters
        ----------
        duration : float, the current step interval in milliseconds, the
            time over which a transition may be animated
        """
        ...


@runtime_checkable
class Viewport(Protocol):
    """Anything that can report the current drawing surface size."""

    def size(self) -> Tuple[float, float]:
        ...


class FixedViewport:
    """A viewport of constant size."""

    def __init__(self, width: float, height: float):
        self.width = width
        self.height = height

    def size(self) -> Tuple[float, float]:
        return self.width, self.height


# ---------------------------------------------------------------------------
# Recording backend (always available)
# ---------------------------------------------------------------------------
class RecordingBackend:
    """Stores the most recent frame. Default for headless use."""

    name = "memory"

    def __init__(self, stroke_width: float = 1.0):
        self.stroke_width = stroke_width
        self.size = None
        self.scale = None
        self.fills = None
        self.polygons = None
        self.duration = None
        self.frames = 0
        self.resets = 0

    def reset(self, scale, fills, polygons, size):
        self.size = tuple(size)
        self.resets += 1
        self._store(scale, fills, polygons, 0.0)

    def draw(self, scale, fills, polygons, duration):
        self.frames += 1
        self._store(scale, fills, polygons, duration)

    def _store(self, scale, fills, polygons, duration):
        self.scale = scale
        self.fills = np.array(fills, dtype=float)
        self.polygons = [np.array(p, dtype=float) for p in polygons]
        self.duration = duration

    @property
    def background(self):
        return None if self.scale is None else self.scale(0)

    @property
    def colors(self):
        return [] if self.scale is None else self.scale.colors_for(self.fills)


# ---------------------------------------------------------------------------
# SVG backend
# ---------------------------------------------------------------------------
def points_to_string(points) -> str:
    return " ".join(f"{x:g},{y:g}" for x, y in points)


class SvgBackend(RecordingBackend):
    """Renders the latest frame as a standalone SVG document."""

    name = "svg"

    def to_svg(self) -> str:
        if self.scale is None:
            raise RuntimeError("Nothing has been rendered yet")
        width, height = self.size
        stroke = self.scale(0)
        lines = [
            f'<svg xmlns="http://www.w3.org/2000/svg" id="svg" '
            f'width="{width:g}" height="{height:g}" '
            f'viewBox="0 0 {width:g} {height:g}">',
            f'<rect width="100%" height="100%" fill="{stroke}"/>',
        ]
        for polygon, color in zip(self.polygons, self.colors):
            lines.append(
                f'<polygon class="cell" points="{points_to_string(polygon)}" '
                f'stroke-width="{self.stroke_width:g}" stroke="{stroke}" '
                f'fill="{color}"/>')
        lines.append('</svg>')
        return "\n".join(lines) + "\n"

    def save(self, path: str) -> None:
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.to_svg())


# ---------------------------------------------------------------------------
# Backend registry
# ---------------------------------------------------------------------------
def _matplotlib_backend(**kwargs: Any) -> RenderBackend:
    from hexmosaic._plotting import MatplotlibBackend
    return MatplotlibBackend(**kwargs)


_BACKENDS: dict[str, Any] = {
    "memory": RecordingBackend,
    "svg": SvgBackend,
    "matplotlib": _matplotlib_backend,
}


def get_backend(name: str | None = None, **kwargs: Any) -> RenderBackend:
    """Get a render backend by name.

    Parameters
    ----------
    name : str or None
        Backend name: ``"memory"``, ``"svg"``, ``"matplotlib"``, or ``None``
        (memory default).
    **kwargs
        Passed to the backend constructor (e.g. ``stroke_width=2``).

    Returns
    -------
    RenderBackend
        An instance satisfying the :class:`RenderBackend` protocol.
    """
    if name is None:
        name = "memory"
    if name not in _BACKENDS:
        raise ValueError(
            f"Unknown backend {name!r}. Available: {list(_BACKENDS.keys())}"
        )
    return _BACKENDS[name](**kwargs)
