"""
Engine configuration.

All tunable constants of the mosaic live in :class:`MosaicConfig`. The
defaults reproduce the classic look: 80 unit hexagons, a 5 unit vertex snap
and a slow, sparse vertex walk.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields, asdict
from typing import Any, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

Range = Tuple[float, float]


@dataclass
class MosaicConfig:
    """Tunable constants for tessellation, mutation, color and timing."""

    # Tessellation
    radius: float = 80.0
    spacing_x_factor: float = 2.728
    spacing_y_factor: float = 2.3625
    snap: float = 5.0

    # Point drift
    jump_cutoff: float = 0.999
    jump_stdev: float = 10.0
    jump_limit: float = 20.0

    # Fill drift
    fill_stdev: float = 0.001
    fill_bounds: Optional[Range] = None

    # Color
    hue_increment_mean: float = 1.0
    hue_increment_stdev: float = 0.5
    saturation: Range = (0.25, 0.3)
    lightness: Range = (0.8, 0.92)
    color_steps: int = 4

    # Timing (milliseconds)
    initial_interval: float = 100.0
    interval_drift_mean: float = 0.5
    interval_drift_stdev: float = 0.01

    # Rendering
    stroke_width: float = 1.0

    _pairs = ('fill_bounds', 'saturation', 'lightness')

    def __post_init__(self):
        for name in self._pairs:
            value = getattr(self, name)
            if value is not None:
                setattr(self, name, tuple(value))
        self.validate()

    def validate(self):
        if isinstance(self.color_steps, bool) or not isinstance(self.color_steps, int):
            raise ValueError(f"color_steps must be an integer, "
                             f"got {self.color_steps!r}")
        for name in ('radius', 'snap', 'spacing_x_factor', 'spacing_y_factor',
                     'initial_interval', 'color_steps'):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, "
                                 f"got {getattr(self, name)!r}")
        if not 0.0 <= self.jump_cutoff <= 1.0:
            raise ValueError(f"jump_cutoff must lie in [0, 1], "
                             f"got {self.jump_cutoff!r}")
        for name in ('jump_limit', 'jump_stdev', 'fill_stdev',
                     'hue_increment_stdev', 'interval_drift_stdev'):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, "
                                 f"got {getattr(self, name)!r}")
        for name in self._pairs:
            value = getattr(self, name)
            if value is None:
                continue
            if len(value) != 2 or value[0] > value[1]:
                raise ValueError(f"{name} must be an ordered (low, high) "
                                 f"pair, got {value!r}")

    @property
    def spacing_x(self) -> float:
        return self.radius * self.spacing_x_factor

    @property
    def spacing_y(self) -> float:
        return self.radius * self.spacing_y_factor

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MosaicConfig":
        """Build a config from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            if key not in known:
                logger.warning("Ignoring unknown configuration key %r", key)
                continue
            kwargs[key] = value
        return cls(**kwargs)

    def to_dict(self) -> dict:
        return asdict(self)


def load_config(path: str) -> MosaicConfig:
    """Read a JSON file of overrides on top of the default config."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in {path}, "
                         f"got {type(data).__name__}")
    logger.debug("Loaded configuration overrides from %s", path)
    return MosaicConfig.from_dict(data)
