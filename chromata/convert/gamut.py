# Copyright (c) 2026 Chromata
# SPDX-License-Identifier: MIT

"""
Gamut checks and gamut mapping.

Two mapping methods:
- "clip": clamp every coordinate to its reference range
- "<space>.<coordinate>" (e.g. "lch.chroma"): bisect that coordinate toward
  its lower bound until the color fits, then clip away any residual error

Coordinate reduction assumes being in gamut is monotonic in the reduced
coordinate. It always terminates: the search interval halves every step.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Sequence

from chromata.config import EPSILON
from chromata.convert.engine import _resolve_registry, convert
from chromata.space.registry import Registry, SpaceLike

if TYPE_CHECKING:
    from chromata.schema.color import Color


logger = logging.getLogger(__name__)


def in_gamut(
    space: SpaceLike,
    coords: Sequence[float],
    *,
    registry: Optional[Registry] = None,
    epsilon: float = EPSILON,
) -> bool:
    """
    Check whether coordinates are within a space's gamut.

    A space-specific predicate wins. Otherwise each coordinate must lie within
    its reference bounds, widened by ``epsilon``. Spaces without any bounded
    coordinate contain every color.
    """
    space = _resolve_registry(registry).space(space)

    if space.in_gamut is not None:
        return bool(space.in_gamut(coords))

    if not space.bounded:
        return True

    return all(
        coordinate.in_range(float(value), epsilon=epsilon)
        for coordinate, value in zip(space.coordinates, coords)
    )


def clip(
    space: SpaceLike,
    coords: Sequence[float],
    *,
    registry: Optional[Registry] = None,
) -> tuple[float, ...]:
    """Clamp each coordinate to its reference bounds. Unbounded sides pass through."""
    space = _resolve_registry(registry).space(space)
    return tuple(
        coordinate.clip(float(value))
        for coordinate, value in zip(space.coordinates, coords)
    )


def parse_method(method: str, registry: Registry):
    """
    Split a "<space>.<coordinate>" method into (space, coordinate index).

    Raises:
        ValueError: Malformed method or unknown coordinate
        UnknownSpaceError: Unknown space
    """
    space_id, _, coord_name = method.partition(".")
    if not space_id or not coord_name:
        raise ValueError(
            f'Unknown gamut mapping method "{method}": '
            'expected "clip" or "<space>.<coordinate>"'
        )
    space = registry.space(space_id)
    return space, space.index(coord_name)


def reduce_coordinate(
    coords: Sequence[float],
    map_space,
    index: int,
    target,
    *,
    registry: Registry,
    epsilon: float = EPSILON,
) -> tuple[tuple[float, ...], int]:
    """
    Bisect one coordinate of ``coords`` (in ``map_space``) toward its lower
    bound until the color is at the boundary of ``target``'s gamut.

    Returns:
        (coordinates in ``target`` at the last step, number of bisection steps)
    """
    coordinate = map_space.coordinates[index]
    if coordinate.min is None:
        raise ValueError(
            f"Cannot reduce {map_space.id}.{coordinate.name}: it has no lower bound"
        )

    map_coords = list(coords)
    low = coordinate.min
    high = map_coords[index]
    map_coords[index] /= 2

    result = convert(coords, map_space, target, registry=registry)
    steps = 0

    while high - low > epsilon:
        result = convert(map_coords, map_space, target, registry=registry)
        steps += 1

        if in_gamut(target, result, registry=registry):
            low = map_coords[index]
        else:
            high = map_coords[index]

        map_coords[index] = (high + low) / 2

    return result, steps


def to_gamut(
    color: Color,
    *,
    method: Optional[str] = None,
    space: Optional[SpaceLike] = None,
    in_place: bool = False,
) -> Color:
    """
    Map a color into the gamut of a space.

    Args:
        color: The color to map
        method: "clip" or "<space>.<coordinate>" (registry default if None)
        space: Space whose gamut to map into (the color's own if None)
        in_place: Overwrite the color's coordinates instead of returning a new color

    Returns:
        ``color`` itself if already in gamut or ``in_place`` is set,
        otherwise a new Color in the color's own space with the same alpha.
    """
    from chromata.schema.color import Color

    registry = color.registry
    method = method or registry.defaults.gamut_mapping
    target = registry.space(space) if space is not None else color.space

    if color.in_gamut(target):
        return color

    coords = convert(color.coords, color.space, target, registry=registry)

    if method != "clip":
        map_space, index = parse_method(method, registry)
        coords, steps = reduce_coordinate(
            color.coords_in(map_space), map_space, index, target, registry=registry
        )
        logger.debug("Reduced %s in %d steps", method, steps)

    # Reduction stops within EPSILON of the boundary; clip the rest
    if method == "clip" or not in_gamut(target, coords, registry=registry):
        coords = clip(target, coords, registry=registry)

    coords = convert(coords, target, color.space, registry=registry)

    if in_place:
        color.coords = coords
        return color

    return Color(color.space, coords, color.alpha, registry=registry)
