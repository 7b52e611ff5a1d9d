# Copyright (c) 2026 Chromata
# SPDX-License-Identifier: MIT

"""
Global defaults for chromata.

Each Registry carries its own Defaults instance, so tests and embedding
applications can change behaviour without touching process-wide state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional


# Tolerance for gamut checks and bisection convergence.
# Absorbs floating-point round-off right at a coordinate's reference bound.
EPSILON = 0.000005

# Significant digits used when formatting coordinates
DEFAULT_PRECISION = 5

# "<space>.<coordinate>" to reduce, or "clip"
DEFAULT_GAMUT_MAPPING = "lch.chroma"

DEFAULT_SHORTCUTS = {
    "lightness": "lch.lightness",
    "chroma": "lch.chroma",
    "hue": "lch.hue",
}


@dataclass(frozen=True)
class Defaults:
    """Registry-wide defaults."""

    # Method used by to_gamut() when none is given
    gamut_mapping: str = DEFAULT_GAMUT_MAPPING

    # Significant digits for string output (None = no rounding)
    precision: Optional[int] = DEFAULT_PRECISION

    # Short names resolved by Color.get()/Color.set(), e.g. "chroma" -> "lch.chroma"
    shortcuts: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_SHORTCUTS))
