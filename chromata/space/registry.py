# Copyright (c) 2026 Chromata
# SPDX-License-Identifier: MIT

"""
Color space registry.

A Registry holds every defined space in registration order, resolving
inheritance and the connection to XYZ once, when a space is defined.
Spaces must therefore be defined after the spaces they inherit from or
connect through.

The registry also owns the extension hooks and the defaults used by colors
bound to it.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional, Union

from chromata.config import Defaults
from chromata.errors import (
    InvalidSpaceError,
    MissingConnectionSpaceError,
    UnknownSpaceError,
)
from chromata.hooks import Hooks
from chromata.space.definition import (
    D50,
    ColorSpace,
    SpaceDefinition,
    inherit,
    make_coordinates,
)


logger = logging.getLogger(__name__)


SpaceLike = Union[str, ColorSpace]


class Registry:
    """
    Insertion-ordered mapping of space id to ColorSpace.

    Example::

        registry = Registry()
        registry.define(SpaceDefinition(
            id="xyz",
            coords={"X": (None, None), "Y": (None, None), "Z": (None, None)},
            to_xyz=lambda c: c,
            from_xyz=lambda c: c,
        ))
        registry.space("XYZ")   # ColorSpace('xyz')
    """

    def __init__(self, defaults: Optional[Defaults] = None) -> None:
        self._spaces: dict[str, ColorSpace] = {}
        self.defaults = defaults or Defaults()
        self.hooks = Hooks()

    # -------------------------------------------------------------------------
    # Definition
    # -------------------------------------------------------------------------

    def define(self, definition: SpaceDefinition) -> ColorSpace:
        """
        Resolve and register a color space.

        Steps:
        1. Validate the id. Re-defining an id replaces the old space.
        2. Flatten inheritance from the parent space, if any.
        3. Wire the connection to XYZ, directly or through the base space.

        Nothing is registered if any step fails.

        Raises:
            ValueError: Missing id or coordinates
            UnknownSpaceError: ``inherits`` names an unregistered space
            MissingConnectionSpaceError: The space cannot be connected to XYZ
        """
        if not definition.id:
            raise ValueError("A color space needs an id")

        space_id = definition.id.lower()

        if definition.inherits is not None:
            definition = inherit(self.space(definition.inherits), definition)

        if definition.coords is None:
            raise ValueError(f"Color space {space_id} declares no coordinates")

        to_xyz, from_xyz = self._connect(space_id, definition)

        space = ColorSpace(
            id=space_id,
            name=definition.name or space_id,
            coordinates=make_coordinates(definition.coords),
            white=definition.white or D50,
            to_xyz=to_xyz,
            from_xyz=from_xyz,
            css_id=definition.css_id,
            base=definition.base.lower() if definition.base is not None else None,
            to_base=definition.to_base,
            from_base=definition.from_base,
            in_gamut=definition.in_gamut,
            parse=definition.parse,
            direct=dict(definition.direct or {}),
            instance=dict(definition.instance or {}),
            inherits=definition.inherits,
        )

        if space_id in self._spaces:
            logger.warning("Redefining color space %s", space_id)

        self._spaces[space_id] = space
        logger.debug(
            "Defined color space %s (connects via %s)", space_id, space.base or "xyz"
        )
        return space

    def _connect(self, space_id: str, definition: SpaceDefinition):
        """Return (to_xyz, from_xyz) for a definition."""
        if definition.to_xyz is not None and definition.from_xyz is not None:
            return definition.to_xyz, definition.from_xyz

        if definition.base is None:
            raise MissingConnectionSpaceError(
                f"No connection space found for {space_id}: declare to_xyz/from_xyz "
                "or a base space"
            )

        base = self._spaces.get(definition.base.lower())
        if base is None:
            raise MissingConnectionSpaceError(
                f"Connection space {definition.base} for {space_id} is not registered"
            )
        if base.to_xyz is None or base.from_xyz is None:
            raise MissingConnectionSpaceError(
                f"Connection space {base.name} for {space_id} has no to_xyz/from_xyz"
            )
        if definition.to_base is None or definition.from_base is None:
            raise MissingConnectionSpaceError(
                f"{space_id} connects via {base.id} but lacks to_base/from_base"
            )

        to_base = definition.to_base
        from_base = definition.from_base

        def to_xyz(coords):
            return base.to_xyz(to_base(coords))

        def from_xyz(xyz):
            return from_base(base.from_xyz(xyz))

        return to_xyz, from_xyz

    def remove(self, space_id: str) -> None:
        """Forget a space. Intended for test isolation."""
        del self._spaces[space_id.lower()]

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def space(self, space: SpaceLike) -> ColorSpace:
        """
        Return a color space from an id or a color space.

        Ids are case-insensitive. A ColorSpace is returned as-is.

        Raises:
            UnknownSpaceError: No space with that id is registered
            InvalidSpaceError: Argument is neither a str nor a ColorSpace
        """
        if isinstance(space, str):
            found = self._spaces.get(space.lower())
            if found is None:
                raise UnknownSpaceError(space)
            return found

        if isinstance(space, ColorSpace):
            return space

        raise InvalidSpaceError(space)

    def get(self, space_id: str, default: Optional[ColorSpace] = None) -> Optional[ColorSpace]:
        return self._spaces.get(space_id.lower(), default)

    def find_css(self, identifier: str) -> Optional[ColorSpace]:
        """
        Space named by a ``color()`` identifier.

        A css_id match wins; otherwise the identifier is looked up as a
        space id, so ``color(xyz ...)`` still finds xyz (css_id "xyz-d50").
        """
        for space in self._spaces.values():
            if space.serialized_id == identifier:
                return space
        return self._spaces.get(identifier.lower())

    def ids(self) -> tuple[str, ...]:
        return tuple(self._spaces)

    def __contains__(self, space_id: object) -> bool:
        return isinstance(space_id, str) and space_id.lower() in self._spaces

    def __iter__(self) -> Iterator[ColorSpace]:
        return iter(list(self._spaces.values()))

    def __len__(self) -> int:
        return len(self._spaces)

    def __repr__(self) -> str:
        return f"Registry({', '.join(self._spaces)})"
