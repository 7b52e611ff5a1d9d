# Copyright (c) 2026 Chromata
# SPDX-License-Identifier: MIT

"""
Conversion between color spaces and mapping into gamut.

All operations are pure functions of their inputs and the registry.
"""

from chromata.convert.adaptation import adapt
from chromata.convert.engine import convert
from chromata.convert.gamut import clip, in_gamut, to_gamut

__all__ = ["adapt", "convert", "in_gamut", "clip", "to_gamut"]
