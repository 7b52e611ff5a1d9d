# Copyright (c) 2026 Chromata
# SPDX-License-Identifier: MIT

"""
Color space descriptors.

A SpaceDefinition is what callers declare; a ColorSpace is the flat, resolved
record the Registry stores after inheritance and connection wiring.

Design principles:
- Immutable: both types are frozen dataclasses
- Flat: inheritance is resolved once, at definition time
- Explicit: a space connects either directly to XYZ or via a named base space
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields, replace
from typing import Any, Callable, Mapping, Optional

import numpy as np


Coords = Any  # Sequence of floats or NDArray of shape (..., N)
Transform = Callable[[Coords], Coords]
Bounds = tuple[Optional[float], Optional[float]]


# =============================================================================
# White Points
# =============================================================================


@dataclass(frozen=True, eq=False)
class WhitePoint:
    """
    A reference illuminant as XYZ tristimulus values (Y = 1).

    White points are compared by identity: two spaces share a white point
    only if they reference the same WhitePoint instance.
    """
    name: str
    xyz: tuple[float, float, float]

    def as_array(self) -> np.ndarray:
        return np.asarray(self.xyz, dtype=np.float64)

    def __repr__(self) -> str:
        return f"WhitePoint({self.name})"


D50 = WhitePoint("D50", (0.96422, 1.00000, 0.82521))
D65 = WhitePoint("D65", (0.95047, 1.00000, 1.08883))

WHITES = {"D50": D50, "D65": D65}


# =============================================================================
# Coordinates
# =============================================================================


@dataclass(frozen=True, slots=True)
class Coordinate:
    """
    A color space coordinate with an optional reference range.

    Attributes:
        name: Coordinate name, e.g. "lightness"
        min: Lower reference bound, or None if unbounded below
        max: Upper reference bound, or None if unbounded above
    """
    name: str
    min: Optional[float] = None
    max: Optional[float] = None

    def __post_init__(self) -> None:
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(
                f"{self.name}: minimum {self.min} greater than maximum {self.max}"
            )

    @property
    def bounded(self) -> bool:
        """True if either side of the range is defined."""
        return self.min is not None or self.max is not None

    @property
    def bounds(self) -> Bounds:
        return (self.min, self.max)

    def in_range(self, value: float, *, epsilon: float = 0.0) -> bool:
        """Check value against each defined bound, widened by epsilon. NaN fails."""
        if self.min is not None and not value >= self.min - epsilon:
            return False
        if self.max is not None and not value <= self.max + epsilon:
            return False
        return True

    def clip(self, value: float) -> float:
        """Clamp value to the defined bounds. NaN becomes the lower bound."""
        if self.min is not None and not value >= self.min:
            value = self.min
        if self.max is not None and not value <= self.max:
            value = self.max
        return value


# =============================================================================
# Declarations
# =============================================================================


@dataclass(frozen=True)
class SpaceDefinition:
    """
    Declaration of a color space, as handed to Registry.define().

    Fields left as None are "not declared" and may be filled in from the
    parent space named by ``inherits``.

    A space connects to XYZ in exactly one of two ways:
    - directly, through ``to_xyz`` / ``from_xyz``
    - via an already-registered ``base`` space, through ``to_base`` /
      ``from_base``

    Attributes:
        id: Unique identifier (lower-cased on registration)
        name: Display name
        coords: Ordered mapping of coordinate name to (min, max) reference range
        white: Reference white point (D50 if never declared)
        css_id: Identifier used in ``color(<css_id> ...)``, defaults to id
        base: Id of the connection space
        to_base / from_base: Conversions to and from the base space
        to_xyz / from_xyz: Direct conversions to and from XYZ
        in_gamut: Predicate replacing the generic bounds check
        parse: Space-specific parser ``(text, parsed_function) -> ParsedColor | None``
        direct: Specialized conversions into this space, keyed by source space id
        instance: Capabilities available on colors in this space,
            name -> callable taking the Color as first argument
        inherits: Id of a parent space
    """
    id: str
    name: Optional[str] = None
    coords: Optional[Mapping[str, Bounds]] = None
    white: Optional[WhitePoint] = None
    css_id: Optional[str] = None
    base: Optional[str] = None
    to_base: Optional[Transform] = None
    from_base: Optional[Transform] = None
    to_xyz: Optional[Transform] = None
    from_xyz: Optional[Transform] = None
    in_gamut: Optional[Callable[[Coords], bool]] = None
    parse: Optional[Callable[..., Any]] = None
    direct: Optional[Mapping[str, Transform]] = None
    instance: Optional[Mapping[str, Callable[..., Any]]] = None
    inherits: Optional[str] = None


# Never copied from a parent space
PROTECTED_FIELDS = frozenset({"id", "parse", "instance", "inherits"})

# The two ways of connecting to XYZ. Declaring any field of one group stops
# the other group from being inherited.
DIRECT_FIELDS = ("to_xyz", "from_xyz")
BASE_FIELDS = ("base", "to_base", "from_base")


def _declares(definition: SpaceDefinition, names) -> bool:
    return any(getattr(definition, name) is not None for name in names)


def inherit(parent: ColorSpace, definition: SpaceDefinition) -> SpaceDefinition:
    """
    Build a flat definition from a parent space and a child's overrides.

    Every field the child leaves undeclared is taken from the parent, except
    the protected fields. A child that connects to XYZ differently from its
    parent (directly vs. via a base) inherits nothing of the parent's
    connection.

    Example::

        # P3 shares sRGB's coordinates, white point and transfer functions
        # but connects through its own linear space
        inherit(srgb, SpaceDefinition(id="p3", base="p3-linear"))
    """
    inherited = parent.as_definition()
    skip = set(PROTECTED_FIELDS)

    if _declares(definition, BASE_FIELDS):
        skip.update(DIRECT_FIELDS)
    if _declares(definition, DIRECT_FIELDS):
        skip.update(BASE_FIELDS)

    overrides = {
        f.name: getattr(inherited, f.name)
        for f in fields(SpaceDefinition)
        if f.name not in skip and getattr(definition, f.name) is None
    }

    return replace(definition, **overrides)


# =============================================================================
# Resolved Spaces
# =============================================================================


@dataclass(frozen=True, eq=False)
class ColorSpace:
    """
    A registered color space.

    Produced by Registry.define(); never constructed by hand. ``to_xyz`` and
    ``from_xyz`` are always present: for spaces declared with a base they
    compose the base conversions.
    """
    id: str
    name: str
    coordinates: tuple[Coordinate, ...]
    white: WhitePoint
    to_xyz: Transform
    from_xyz: Transform
    css_id: Optional[str] = None
    base: Optional[str] = None
    to_base: Optional[Transform] = None
    from_base: Optional[Transform] = None
    in_gamut: Optional[Callable[[Coords], bool]] = None
    parse: Optional[Callable[..., Any]] = None
    direct: Mapping[str, Transform] = field(default_factory=dict)
    instance: Mapping[str, Callable[..., Any]] = field(default_factory=dict)
    inherits: Optional[str] = None
    _index: dict = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "_index", {c.name: i for i, c in enumerate(self.coordinates)}
        )

    @property
    def coord_names(self) -> tuple[str, ...]:
        return tuple(c.name for c in self.coordinates)

    @property
    def bounds(self) -> tuple[Bounds, ...]:
        return tuple(c.bounds for c in self.coordinates)

    @property
    def bounded(self) -> bool:
        """True if any coordinate has a reference bound."""
        return any(c.bounded for c in self.coordinates)

    @property
    def serialized_id(self) -> str:
        """Identifier used inside ``color()``."""
        return self.css_id or self.id

    def __len__(self) -> int:
        return len(self.coordinates)

    def index(self, name: str) -> int:
        """Index of a coordinate by name."""
        try:
            return self._index[name]
        except KeyError:
            raise ValueError(
                f"Color space {self.id} has no coordinate named {name!r}"
            ) from None

    def coordinate(self, name: str) -> Coordinate:
        return self.coordinates[self.index(name)]

    def conversion_from(self, source_id: str) -> Optional[Transform]:
        """
        Specialized conversion from another space into this one, if any.

        Declared ``direct`` conversions win; a space declared with a base also
        converts directly from that base.
        """
        if source_id in self.direct:
            return self.direct[source_id]
        if self.base is not None and self.base == source_id:
            return self.from_base
        return None

    def as_definition(self) -> SpaceDefinition:
        """Declaration equivalent to this space, used for inheritance."""
        connection = (
            {"base": self.base, "to_base": self.to_base, "from_base": self.from_base}
            if self.base is not None
            else {"to_xyz": self.to_xyz, "from_xyz": self.from_xyz}
        )
        return SpaceDefinition(
            id=self.id,
            name=self.name,
            coords={c.name: c.bounds for c in self.coordinates},
            white=self.white,
            css_id=self.css_id,
            in_gamut=self.in_gamut,
            parse=self.parse,
            direct=dict(self.direct) or None,
            instance=dict(self.instance) or None,
            **connection,
        )

    def __repr__(self) -> str:
        return f"ColorSpace({self.id!r})"


def make_coordinates(coords: Mapping[str, Bounds]) -> tuple[Coordinate, ...]:
    """Coordinates from a name -> (min, max) mapping. Empty or NaN bounds are None."""
    result = []
    for name, bounds in coords.items():
        bounds = tuple(bounds or ())
        lo = bounds[0] if len(bounds) > 0 else None
        hi = bounds[1] if len(bounds) > 1 else None
        if lo is not None and math.isnan(lo):
            lo = None
        if hi is not None and math.isnan(hi):
            hi = None
        result.append(Coordinate(name, lo, hi))
    return tuple(result)
