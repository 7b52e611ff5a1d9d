# Copyright (c) 2026 Chromata
# SPDX-License-Identifier: MIT

"""
Coordinate conversion between registered color spaces.

Conversion chain: source → XYZ (source white) → [adaptation] → XYZ (target
white) → target. A target space may short-circuit this with a specialized
conversion from the source space.
"""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from chromata.convert.adaptation import adapt
from chromata.space.registry import Registry, SpaceLike


def _resolve_registry(registry: Optional[Registry]) -> Registry:
    if registry is not None:
        return registry
    from chromata.space.builtin import default_registry
    return default_registry()


def as_coords(values) -> tuple[float, ...]:
    """Flatten a conversion result into a tuple of floats."""
    return tuple(float(v) for v in np.asarray(values, dtype=np.float64).ravel())


def convert(
    coords: Sequence[float],
    from_space: SpaceLike,
    to_space: SpaceLike,
    *,
    registry: Optional[Registry] = None,
):
    """
    Convert coordinates from one color space to another.

    Args:
        coords: Coordinates in ``from_space``
        from_space: Source space id or ColorSpace
        to_space: Target space id or ColorSpace
        registry: Registry used to resolve ids (default registry if None)

    Returns:
        ``coords`` itself when both spaces are the same, otherwise a new
        tuple of floats in ``to_space``.

    Raises:
        UnknownSpaceError: Either id is not registered
        UnsupportedWhitePointError: The spaces' white points cannot be adapted
    """
    registry = _resolve_registry(registry)
    source = registry.space(from_space)
    target = registry.space(to_space)

    if source is target:
        return coords

    # Specialized conversion, responsible for its own white point adaptation
    shortcut = target.conversion_from(source.id)
    if shortcut is not None:
        return as_coords(shortcut(coords))

    xyz = source.to_xyz(coords)

    if source.white is not target.white:
        xyz = adapt(source.white, target.white, xyz)

    return as_coords(target.from_xyz(xyz))
