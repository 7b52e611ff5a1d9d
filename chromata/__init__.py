# Copyright (c) 2026 Chromata
# SPDX-License-Identifier: MIT

"""
Chromata -- Color spaces, conversion and gamut mapping.

Represents colors in any registered color space, converts between spaces
through XYZ (adapting between D50 and D65 white points), maps colors into
gamut, and reads and writes CSS color syntax.

Quick start::

    from chromata import Color

    c = Color.parse("rgb(255 0 0)")
    c.coords_in("lch")          # (54.29..., 106.8..., 40.8...)
    c.to("p3").to_string()      # 'color(display-p3 0.91749 0.20029 0.13856)'
    Color("lch", (80, 150, 30)).to_gamut(space="srgb")
"""

from __future__ import annotations

__version__ = "1.0.0"

# Spaces load first: the built-in spaces pull in the parser and the engine
from chromata.space import (
    D50,
    D65,
    ColorSpace,
    Registry,
    SpaceDefinition,
    create_registry,
    default_registry,
)
from chromata.config import Defaults
from chromata.convert import adapt, clip, convert, in_gamut, to_gamut
from chromata.errors import (
    ChromataError,
    ColorParseError,
    InvalidSpaceError,
    MissingConnectionSpaceError,
    UnknownSpaceError,
    UnsupportedWhitePointError,
)
from chromata.parse import parse, parse_function
from chromata.schema import Color

__all__ = [
    # Core API
    "Color",
    "convert",
    "adapt",
    "in_gamut",
    "clip",
    "to_gamut",
    "parse",
    "parse_function",
    # Spaces
    "Registry",
    "SpaceDefinition",
    "ColorSpace",
    "create_registry",
    "default_registry",
    "D50",
    "D65",
    "Defaults",
    # Errors
    "ChromataError",
    "ColorParseError",
    "UnknownSpaceError",
    "InvalidSpaceError",
    "UnsupportedWhitePointError",
    "MissingConnectionSpaceError",
    # Version
    "__version__",
]
