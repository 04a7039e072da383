"""
Drifting hue and the quantized color scale derived from it.
"""
from __future__ import annotations

import colorsys
from typing import Sequence, Tuple

import numpy


def hsl_to_rgb(hue, saturation, lightness) -> numpy.ndarray:
    """HSL (hue in degrees) to an RGB triple in [0, 255]."""
    r, g, b = colorsys.hls_to_rgb((hue % 360.0) / 360.0, lightness, saturation)
    return numpy.array([r, g, b]) * 255.0


def rgb_to_hex(rgb) -> str:
    # Halves round up
    rgb = numpy.floor(numpy.asarray(rgb, dtype=float) + 0.5)
    r, g, b = (int(c) for c in numpy.clip(rgb, 0, 255))
    return f"#{r:02x}{g:02x}{b:02x}"


class ColorScale:
    """
    Quantized mapping from a fill value to a color.

    The domain [0, 1] is split into ``len(colors)`` equal bins. Values below
    the domain take the first color and values at or above 1 the last, so
    fills that have drifted out of range still map to a color.
    """

    def __init__(self, colors: Sequence[str], hue=None):
        if not colors:
            raise ValueError("A color scale needs at least one color")
        self.colors = list(colors)
        self.hue = hue
        n = len(self.colors)
        self.thresholds = numpy.arange(1, n) / n

    def __call__(self, fill) -> str:
        return self.colors[self.bin(fill)]

    def __len__(self):
        return len(self.colors)

    def __repr__(self):
        return f"ColorScale({self.colors!r})"

    def bin(self, fill) -> int:
        return int(numpy.searchsorted(self.thresholds, fill, side='right'))

    def colors_for(self, fills):
        """Colors for a whole sequence of fills."""
        bins = numpy.searchsorted(self.thresholds, numpy.asarray(fills),
                                  side='right')
        return [self.colors[i] for i in bins]

    @property
    def background(self) -> str:
        """Stroke and page background color."""
        return self(0.0)


def color_scale(hue, saturation: Tuple[float, float] = (0.25, 0.3),
                lightness: Tuple[float, float] = (0.8, 0.92),
                steps=4) -> ColorScale:
    """
    Build the ``steps``-color scale for ``hue``.

    Colors are evenly spaced in RGB between the low (saturation[0],
    lightness[0]) and high (saturation[1], lightness[1]) HSL colors of the
    same hue.
    """
    low = hsl_to_rgb(hue, saturation[0], lightness[0])
    high = hsl_to_rgb(hue, saturation[1], lightness[1])
    colors = [rgb_to_hex(low + t * (high - low))
              for t in numpy.linspace(0.0, 1.0, steps)]
    return ColorScale(colors, hue=hue)


class ColorEngine:
    """Holds the current hue and advances it by a small random step."""

    def __init__(self, rng: numpy.random.Generator, config, hue=None):
        self.rng = rng
        self.config = config
        if hue is None:
            hue = int(rng.integers(0, 360))
        self.hue = float(hue)

    def increment(self) -> float:
        """Non-negative hue step, normally distributed around the mean."""
        step = self.rng.normal(self.config.hue_increment_mean,
                               self.config.hue_increment_stdev)
        return max(0.0, float(step))

    def propose(self) -> float:
        return (self.hue + self.increment()) % 360.0

    def advance_hue(self) -> float:
        self.hue = self.propose()
        return self.hue

    def scale_for(self, hue=None) -> ColorScale:
        if hue is None:
            hue = self.hue
        return color_scale(hue, self.config.saturation, self.config.lightness,
                           self.config.color_steps)

    @property
    def scale(self) -> ColorScale:
        return self.scale_for(self.hue)
