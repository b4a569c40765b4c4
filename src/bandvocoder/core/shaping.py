"""
Nonlinear Shaping Tables
========================

Lookup curves used by the band rectifiers and the output soft clipper.

A curve is a fixed-size table sampled on the grid x_i = 2i/N - 1 and read
back by linear interpolation on the same grid. Inputs beyond the table ends
are clamped, so an input of exactly 0 lands on the centre entry and maps to
the curve's true value at 0.

Tables are input-independent, so each is built once per process and shared
read-only by every job.
"""

from dataclasses import dataclass
from functools import lru_cache

import numpy as np

from bandvocoder.core.globals import CURVE_SIZE


@dataclass(frozen=True)
class ShapingCurve:
    """A read-only waveshaping table."""

    name: str
    table: np.ndarray

    def __post_init__(self) -> None:
        if self.table.ndim != 1 or len(self.table) < 2:
            raise ValueError("Shaping table must be a 1-D array with at least 2 entries")
        self.table.setflags(write=False)

    @property
    def size(self) -> int:
        return len(self.table)

    def __call__(self, x: np.ndarray) -> np.ndarray:
        """Shape a block of samples."""
        x = np.asarray(x, dtype=np.float64)
        n = self.size
        pos = np.clip((x + 1.0) * (n / 2.0), 0.0, n - 1)
        idx = np.minimum(pos.astype(np.int64), n - 2)
        frac = pos - idx
        lo = self.table[idx].astype(np.float64)
        hi = self.table[idx + 1].astype(np.float64)
        return (lo + frac * (hi - lo)).astype(np.float32)


def _grid(size: int) -> np.ndarray:
    return np.arange(size, dtype=np.float64) * 2.0 / size - 1.0


@lru_cache(maxsize=None)
def abs_curve(size: int = CURVE_SIZE) -> ShapingCurve:
    """Full-wave rectifier curve: |x|."""
    return ShapingCurve("abs", np.abs(_grid(size)).astype(np.float32))


@lru_cache(maxsize=None)
def soft_clip_curve(size: int = CURVE_SIZE) -> ShapingCurve:
    """Arctangent soft clipper: (2/pi) * atan(2x), bounded to (-1, 1)."""
    table = (2.0 / np.pi) * np.arctan(2.0 * _grid(size))
    return ShapingCurve("soft_clip", table.astype(np.float32))
