# Copyright (c) 2026 Chromata
# SPDX-License-Identifier: MIT

"""
Color space definitions and the registry that resolves them.

Spaces are declared as SpaceDefinition records and resolved by a Registry
into flat, immutable ColorSpace records.
"""

from chromata.space.definition import (
    D50,
    D65,
    WHITES,
    ColorSpace,
    Coordinate,
    SpaceDefinition,
    WhitePoint,
    inherit,
)
from chromata.space.registry import Registry
from chromata.space.builtin import BUILTIN_SPACES, create_registry, default_registry

__all__ = [
    # Declarations
    "SpaceDefinition",
    "inherit",
    # Resolved spaces
    "ColorSpace",
    "Coordinate",
    # White points
    "WhitePoint",
    "D50",
    "D65",
    "WHITES",
    # Registry
    "Registry",
    "BUILTIN_SPACES",
    "create_registry",
    "default_registry",
]
