"""Conversion between caller coordinates and the engine's integer grid.

The engine works on 64-bit integers.  Coordinates are multiplied by the
scale factor and truncated toward zero on the way in, and divided by the
same factor on the way out.  Truncation (not rounding) is kept so results
match earlier releases bit for bit; it biases negative coordinates toward
zero by up to one grid step.

No range checking is done: a factor that pushes ``coordinate * factor``
past the int64 range is a caller error.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Scale:
    """A positive multiplier between float space and engine space."""

    factor: float

    def __post_init__(self) -> None:
        if not math.isfinite(self.factor) or self.factor <= 0:
            raise ValueError(f"scale factor must be positive and finite, got {self.factor!r}")

    def to_engine(self, coords: np.ndarray) -> np.ndarray:
        """Scale an ``(n, 2)`` float array into engine vertices (int64)."""
        scaled = np.asarray(coords, dtype=np.float64) * self.factor
        # astype truncates toward zero
        return scaled.astype(np.int64)

    def from_engine(self, vertices: np.ndarray) -> np.ndarray:
        """Scale engine vertices back into an ``(n, 2)`` float array."""
        return np.asarray(vertices, dtype=np.float64) / self.factor

    def scale_delta(self, delta: float) -> float:
        """Offset distances live on the same integer grid as coordinates."""
        return delta * self.factor
