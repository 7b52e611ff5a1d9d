# Copyright (c) 2026 Chromata
# SPDX-License-Identifier: MIT

"""
Tokenizer for CSS functional notation: ``name(arg arg ... [/ alpha])``.

Arguments may be separated by whitespace, commas or a slash. Each one is
classified as a number, a percentage, an angle in degrees, or an identifier.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Union


_FUNCTION_RE = re.compile(r"^([a-z]+)\((.+?)\)$", re.IGNORECASE)
_ARGUMENT_RE = re.compile(r"([-\w.+]+(?:%|deg)?)")
_NUMBER_RE = re.compile(r"^[-+]?(?:\d+\.?\d*|\.\d+)(?:e[-+]?\d+)?$", re.IGNORECASE)


class CSSNumber(float):
    """
    A numeric argument tagged with the unit it was written in.

    Percentages are stored as a fraction of 1 ("50%" → 0.5).
    Angles are stored as bare degrees ("90deg" → 90.0).
    """

    unit: Optional[str] = None

    @classmethod
    def tagged(cls, value: float, unit: Optional[str] = None) -> CSSNumber:
        number = cls(value)
        number.unit = unit
        return number

    @property
    def percentage(self) -> bool:
        return self.unit == "%"

    @property
    def deg(self) -> bool:
        return self.unit == "deg"

    def __repr__(self) -> str:
        return f"CSSNumber({float(self)!r}, unit={self.unit!r})"


Argument = Union[CSSNumber, str]


@dataclass(frozen=True)
class ParsedFunction:
    """
    A tokenized CSS function.

    Attributes:
        name: Lower-cased function name, e.g. "rgb"
        raw_args: Text between the parentheses
        args: Classified arguments
    """
    name: str
    raw_args: str
    args: tuple[Argument, ...]


def _classify(token: str) -> Argument:
    lowered = token.lower()

    if token.endswith("%") and _NUMBER_RE.match(token[:-1]):
        return CSSNumber.tagged(float(token[:-1]) / 100, "%")

    if lowered.endswith("deg") and _NUMBER_RE.match(token[:-3]):
        return CSSNumber.tagged(float(token[:-3]), "deg")

    if _NUMBER_RE.match(token):
        return CSSNumber.tagged(float(token))

    # Identifiers, e.g. a color space in color()
    return token


def parse_function(text: Optional[str]) -> Optional[ParsedFunction]:
    """
    Parse a CSS function regardless of its name and arguments.

    Returns:
        ParsedFunction, or None if the text is not a function

    Example::

        >>> parse_function("rgb(255 0 0 / 50%)").args
        (CSSNumber(255.0, unit=None), CSSNumber(0.0, unit=None),
         CSSNumber(0.0, unit=None), CSSNumber(0.5, unit='%'))
    """
    if not text:
        return None

    match = _FUNCTION_RE.match(text.strip())
    if not match:
        return None

    raw_args = match.group(2)
    args = tuple(_classify(token) for token in _ARGUMENT_RE.findall(raw_args))

    return ParsedFunction(name=match.group(1).lower(), raw_args=raw_args, args=args)
