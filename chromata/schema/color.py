# Copyright (c) 2026 Chromata
# SPDX-License-Identifier: MIT

"""
The Color value.

A Color is a space, a coordinate tuple and an alpha. Coordinates are always
expressed in the color's own space; reading them in any other registered
space converts on demand, and writing them in another space converts back.

Colors own their coordinate tuple, so no two colors share mutable state.

Alpha:
    Values above 1 are clamped to 1 whenever alpha is assigned. NaN is kept
    as given (it is not greater than 1). None means fully opaque. A
    non-numeric alpha is kept as given and counts as opaque for output.
"""

from __future__ import annotations

import math
import numbers
from typing import Any, Callable, Mapping, Optional, Sequence, Union

from chromata.convert.engine import _resolve_registry, convert
from chromata.errors import ColorParseError
from chromata.space.definition import ColorSpace, WhitePoint
from chromata.space.registry import Registry, SpaceLike


class Color:
    """
    A color in a registered color space.

    Example::

        red = Color("srgb", (1, 0, 0))
        red.coords_in("lch")        # (54.29..., 106.83..., 40.85...)
        red.get("lch.chroma")       # 106.83...
        red.set("chroma", 50)       # converts back to sRGB
        red.to("lab").to_string()   # "lab(54.29... 80.8... 69.89...)"
    """

    __slots__ = ("_registry", "_space", "_coords", "_alpha")

    def __init__(
        self,
        space: SpaceLike = "srgb",
        coords: Sequence[float] = (0.0, 0.0, 0.0),
        alpha: Optional[float] = 1.0,
        *,
        registry: Optional[Registry] = None,
    ) -> None:
        self._registry = _resolve_registry(registry)
        self._space = self._registry.space(space)
        self.coords = coords
        self.alpha = alpha

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def wrap(cls, value: Any, *, registry: Optional[Registry] = None) -> Color:
        """
        Wrap a value as a Color. A Color is returned unchanged (not copied).

        Accepts a Color, a CSS string, a ParsedColor, a serialized mapping
        ({"spaceId", "coords", "alpha"}) or a sequence of sRGB coordinates.
        """
        from chromata.parse.parser import ParsedColor

        if isinstance(value, Color):
            return value
        if isinstance(value, str):
            return cls.parse(value, registry=registry)
        if isinstance(value, ParsedColor):
            return cls(value.space_id, value.coords, value.alpha, registry=registry)
        if isinstance(value, Mapping) and "spaceId" in value and "coords" in value:
            return cls.from_dict(value, registry=registry)
        if isinstance(value, Sequence):
            return cls("srgb", value, registry=registry)

        raise TypeError(f"Cannot make a color out of {value!r}")

    @classmethod
    def parse(
        cls,
        text: str,
        *,
        registry: Optional[Registry] = None,
        host_resolver: Optional[Callable[[str], Optional[str]]] = None,
    ) -> Color:
        """
        Parse a CSS color string.

        Raises:
            ColorParseError: The string is not a color
            UnknownSpaceError: color() names an unregistered space
        """
        from chromata.parse.parser import ParsedColor, Parser

        result = Parser(registry, host_resolver=host_resolver).parse(text)

        if not isinstance(result, (Color, ParsedColor, Mapping)):
            raise ColorParseError(text)

        return cls.wrap(result, registry=registry)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, registry: Optional[Registry] = None) -> Color:
        """Deserialize from dictionary."""
        return cls(
            data["spaceId"],
            data["coords"],
            data.get("alpha", 1.0),
            registry=registry,
        )

    def copy(self) -> Color:
        return Color(self._space, self._coords, self._alpha, registry=self._registry)

    # -------------------------------------------------------------------------
    # Core attributes
    # -------------------------------------------------------------------------

    @property
    def registry(self) -> Registry:
        return self._registry

    @property
    def space(self) -> ColorSpace:
        return self._space

    @space.setter
    def space(self, value: SpaceLike) -> None:
        self.space_id = value

    @property
    def space_id(self) -> str:
        return self._space.id

    @space_id.setter
    def space_id(self, value: SpaceLike) -> None:
        """Re-express the color in another space, converting its coordinates."""
        space = self._registry.space(value)
        if space is not self._space:
            self._coords = tuple(
                convert(self._coords, self._space, space, registry=self._registry)
            )
            self._space = space

    @property
    def coords(self) -> tuple[float, ...]:
        return self._coords

    @coords.setter
    def coords(self, value: Sequence[float]) -> None:
        coords = tuple(float(c) for c in value)
        if len(coords) != len(self._space.coordinates):
            raise ValueError(
                f"{self._space.id} needs {len(self._space.coordinates)} "
                f"coordinates, got {len(coords)}"
            )
        self._coords = coords

    @property
    def alpha(self) -> Any:
        return self._alpha

    @alpha.setter
    def alpha(self, value: Any) -> None:
        if value is None:
            value = 1.0
        if not isinstance(value, numbers.Real):
            # Opaque for clamping, stored as given
            self._alpha = value
            return
        # NaN > 1 is False, so NaN is preserved
        self._alpha = 1.0 if value > 1 else float(value)

    @property
    def white(self) -> WhitePoint:
        return self._space.white

    # -------------------------------------------------------------------------
    # Coordinate access
    # -------------------------------------------------------------------------

    def coords_in(self, space: SpaceLike) -> tuple[float, ...]:
        """Coordinates of this color in another space."""
        return tuple(convert(self._coords, self._space, space, registry=self._registry))

    def set_coords_in(self, space: SpaceLike, coords: Sequence[float]) -> Color:
        """Set this color from coordinates in another space."""
        self.coords = convert(coords, space, self._space, registry=self._registry)
        return self

    def _resolve_path(self, path: str) -> tuple[ColorSpace, int]:
        path = self._registry.defaults.shortcuts.get(path, path)
        space_id, _, coord_name = path.partition(".")
        if not coord_name:
            raise ValueError(f'Expected "<space>.<coordinate>" or a shortcut, got "{path}"')
        space = self._registry.space(space_id)
        return space, space.index(coord_name)

    def get(self, path: str) -> float:
        """
        Read one coordinate, in any space.

        Args:
            path: "<space>.<coordinate>" (e.g. "lch.chroma") or a shortcut
                such as "lightness"
        """
        space, index = self._resolve_path(path)
        return self.coords_in(space)[index]

    def set(self, path: str, value: Union[float, Callable[[float], float]]) -> Color:
        """
        Write one coordinate, in any space, and return this color.

        ``value`` may be a callable receiving the current value.
        """
        space, index = self._resolve_path(path)
        coords = list(self.coords_in(space))

        if callable(value):
            value = value(coords[index])

        coords[index] = value
        return self.set_coords_in(space, coords)

    def update(self, values: Mapping[str, Union[float, Callable[[float], float]]]) -> Color:
        """Set several coordinates, in order."""
        for path, value in values.items():
            self.set(path, value)
        return self

    # -------------------------------------------------------------------------
    # Space capabilities
    # -------------------------------------------------------------------------

    @property
    def capabilities(self) -> tuple[str, ...]:
        """Capabilities provided by the color's current space."""
        return tuple(self._space.instance)

    def has_capability(self, name: str) -> bool:
        return name in self._space.instance

    def call(self, capability: str, /, *args, **kwargs):
        """Invoke a capability of the current space, e.g. color.call("to_hex")."""
        function = self._space.instance.get(capability)
        if function is None:
            raise AttributeError(f"{self._space.id} colors have no capability {capability!r}")
        return function(self, *args, **kwargs)

    # -------------------------------------------------------------------------
    # Gamut
    # -------------------------------------------------------------------------

    def in_gamut(self, space: Optional[SpaceLike] = None) -> bool:
        """Is the color within the gamut of ``space`` (default: its own)?"""
        from chromata.convert.gamut import in_gamut

        space = self._registry.space(space) if space is not None else self._space
        return in_gamut(space, self.coords_in(space), registry=self._registry)

    def to_gamut(
        self,
        *,
        method: Optional[str] = None,
        space: Optional[SpaceLike] = None,
        in_place: bool = False,
    ) -> Color:
        """Map into gamut. See chromata.convert.gamut.to_gamut()."""
        from chromata.convert.gamut import to_gamut

        return to_gamut(self, method=method, space=space, in_place=in_place)

    def to(self, space: SpaceLike, *, in_gamut: bool = False) -> Color:
        """Return a new color converted to another space."""
        space = self._registry.space(space)
        color = Color(space, self.coords_in(space), self._alpha, registry=self._registry)

        if in_gamut:
            color.to_gamut(in_place=True)

        return color

    def get_coords(
        self,
        *,
        in_gamut: bool = False,
        precision: Optional[int] = None,
        range_aware: bool = False,
    ) -> tuple[float, ...]:
        """
        Coordinates prepared for output.

        Args:
            in_gamut: Map into gamut first
            precision: Significant digits (None = no rounding)
            range_aware: Size the integer part from the coordinate's reference
                range rather than from the value itself
        """
        from chromata.runtime.serializers.base import to_precision

        coords = self._coords

        if in_gamut and not self.in_gamut():
            coords = self.to_gamut().coords

        if precision is not None:
            coords = tuple(
                to_precision(c, precision, coordinate.bounds if range_aware else None)
                for c, coordinate in zip(coords, self._space.coordinates)
            )

        return coords

    # -------------------------------------------------------------------------
    # Color math
    # -------------------------------------------------------------------------

    def delta_e(self, other: Any) -> float:
        """CIE76 color difference in Lab. NaN components are skipped."""
        other = Color.wrap(other, registry=self._registry)
        lab1 = self.coords_in("lab")
        lab2 = other.coords_in("lab")

        total = 0.0
        for c1, c2 in zip(lab1, lab2):
            if math.isnan(c1) or math.isnan(c2):
                continue
            total += (c2 - c1) ** 2

        return math.sqrt(total)

    def luminance(self) -> float:
        """Relative luminance: Y in XYZ."""
        return self.coords_in("xyz")[1]

    def contrast(self, other: Any) -> float:
        """Luminance contrast ratio of this color against another."""
        other = Color.wrap(other, registry=self._registry)
        return (self.luminance() + 0.05) / (other.luminance() + 0.05)

    def lighten(self, amount: float = 0.2, *, in_place: bool = False) -> Color:
        color = self if in_place else self.copy()
        return color.set("lightness", lambda l: l * (1 + amount))

    def darken(self, amount: float = 0.2, *, in_place: bool = False) -> Color:
        color = self if in_place else self.copy()
        return color.set("lightness", lambda l: l * (1 - amount))

    # -------------------------------------------------------------------------
    # Comparison and serialization
    # -------------------------------------------------------------------------

    def equals(self, other: Any) -> bool:
        """Same space, same alpha, same coordinates (exactly)."""
        other = Color.wrap(other, registry=self._registry)
        return (
            self._space is other._space
            and self._alpha == other._alpha
            and self._coords == other._coords
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return self.equals(other)

    __hash__ = None  # mutable

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "spaceId": self._space.id,
            "coords": list(self._coords),
            "alpha": self._alpha,
        }

    def to_json(self, pretty: bool = False) -> str:
        from chromata.runtime.serializers.record import to_json
        return to_json(self, pretty=pretty)

    def to_string(self, **options) -> str:
        """
        CSS serialization.

        Spaces may provide their own format through a ``to_string``
        capability; otherwise the generic color() form is used. See
        chromata.runtime.serializers.css.format_color() for options.
        """
        to_string = self._space.instance.get("to_string")
        if to_string is not None:
            return to_string(self, **options)

        from chromata.runtime.serializers.css import format_color
        return format_color(self, **options)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        coords = ", ".join(repr(c) for c in self._coords)
        return f"Color({self._space.id!r}, ({coords}), alpha={self._alpha!r})"
