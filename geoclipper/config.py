"""Shared defaults for the clipping layer.

Every public operation takes an optional ``factor``; when it is omitted
the value below is used.  The boolean fill rule is deliberately absent:
both operands are always filled with the non-zero rule.

Set ``GEOCLIPPER_FACTOR`` in the environment to change the default for a
whole process.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from typing import Mapping


FACTOR_ENV_VAR = "GEOCLIPPER_FACTOR"


@dataclass(frozen=True)
class ClipperSettings:
    """Process-wide defaults for boolean and offset operations."""

    factor: float = 1.0
    """Multiplier from caller coordinates to the engine's integer grid.
    1.0 keeps integer input exact; use e.g. 1000 for millimetre input
    that should survive to micrometre resolution."""

    def __post_init__(self) -> None:
        if not math.isfinite(self.factor) or self.factor <= 0:
            raise ValueError(f"factor must be a positive finite number, got {self.factor!r}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ClipperSettings:
        """Build settings from ``GEOCLIPPER_FACTOR`` (falls back to defaults)."""
        env = os.environ if environ is None else environ
        raw = env.get(FACTOR_ENV_VAR)
        if raw is None or not raw.strip():
            return cls()
        try:
            factor = float(raw)
        except ValueError:
            raise ValueError(f"{FACTOR_ENV_VAR}={raw!r} is not a number") from None
        return cls(factor=factor)


# Module-level singleton, read from the environment once at import.
CLIPPER_SETTINGS = ClipperSettings.from_env()
