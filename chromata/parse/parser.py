# Copyright (c) 2026 Chromata
# SPDX-License-Identifier: MIT

"""
CSS color parsing.

Dispatch order:
1. ``parse-start`` hooks (a hook may resolve the color outright)
2. Space-specific parsers, in registration order
3. The host resolver, for anything that is not an rgb() function
4. rgb() / rgba()
5. color(<space> ...)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from chromata.convert.engine import _resolve_registry
from chromata.errors import ColorParseError, UnknownSpaceError
from chromata.parse.function import CSSNumber, ParsedFunction, parse_function
from chromata.space.registry import Registry


logger = logging.getLogger(__name__)


# Turns keywords, hex etc. into an rgb() string, or returns None
HostResolver = Callable[[str], Optional[str]]


@dataclass(frozen=True)
class ParsedColor:
    """Result of parsing: a space id, raw coordinates and alpha."""
    space_id: str
    coords: tuple[float, ...]
    alpha: float = 1.0


def _number(arg, text: str) -> float:
    if not isinstance(arg, CSSNumber):
        raise ColorParseError(text)
    return float(arg)


class Parser:
    """
    Parses CSS color strings against a registry.

    Args:
        registry: Registry providing spaces, space parsers and hooks
        host_resolver: Optional fallback for syntax the core does not know
            (named colors, etc.); returns an rgb() string or None
    """

    def __init__(self, registry: Optional[Registry] = None, *, host_resolver: Optional[HostResolver] = None):
        self.registry = _resolve_registry(registry)
        self.host_resolver = host_resolver

    def parse(self, text: str):
        """
        Parse a CSS color string.

        Returns:
            ParsedColor (or whatever a parse-start hook supplied)

        Raises:
            ColorParseError: Nothing could parse the string
            UnknownSpaceError: color() names an unregistered space
        """
        parsed = parse_function(text)

        env = {"str": text, "parsed": parsed}
        self.registry.hooks.run("parse-start", env)

        if env.get("color") is not None:
            logger.debug("parse-start hook resolved %r", text)
            return env["color"]

        for space in self.registry:
            if space.parse is not None:
                color = space.parse(text, parsed)
                if color is not None:
                    return color

        if not self._is_rgb(parsed) and self.host_resolver is not None:
            resolved = self.host_resolver(text)
            if resolved:
                logger.debug("Host resolved %r as %r", text, resolved)
                parsed = parse_function(resolved)

        if parsed is not None:
            if self._is_rgb(parsed):
                return self._parse_rgb(parsed, text)
            if parsed.name == "color":
                return self._parse_color_function(parsed, text)

        raise ColorParseError(text)

    @staticmethod
    def _is_rgb(parsed: Optional[ParsedFunction]) -> bool:
        return parsed is not None and parsed.name.startswith("rgb")

    def _parse_rgb(self, parsed: ParsedFunction, text: str) -> ParsedColor:
        if len(parsed.args) < 3:
            raise ColorParseError(text)

        coords = []
        for arg in parsed.args[:3]:
            value = _number(arg, text)
            # Percentages are already 0-1
            coords.append(value if arg.percentage else value / 255)

        alpha = _number(parsed.args[3], text) if len(parsed.args) > 3 else 1.0

        return ParsedColor("srgb", tuple(coords), alpha)

    def _parse_color_function(self, parsed: ParsedFunction, text: str) -> ParsedColor:
        if not parsed.args:
            raise ColorParseError(text)

        identifier, *args = parsed.args
        space = self.registry.find_css(str(identifier))

        if space is None:
            raise UnknownSpaceError(str(identifier), "Missing a plugin?")

        alpha = 1.0
        if "/" in parsed.raw_args and args:
            alpha = _number(args.pop(), text)

        # https://drafts.csswg.org/css-color-4/#color-function
        # Excess arguments are ignored, missing ones default to 0
        count = len(space.coordinates)
        coords = [_number(arg, text) for arg in args[:count]]
        coords += [0.0] * (count - len(coords))

        return ParsedColor(space.id, tuple(coords), alpha)


def parse(
    text: str,
    *,
    registry: Optional[Registry] = None,
    host_resolver: Optional[HostResolver] = None,
):
    """Parse a CSS color string. See Parser.parse()."""
    return Parser(registry, host_resolver=host_resolver).parse(text)
