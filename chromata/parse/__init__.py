# Copyright (c) 2026 Chromata
# SPDX-License-Identifier: MIT

"""
CSS color parsing.

parse_function() tokenizes any CSS function; parse() turns a color string
into a space id, coordinates and alpha.
"""

from chromata.parse.function import CSSNumber, ParsedFunction, parse_function
from chromata.parse.parser import ParsedColor, Parser, parse

__all__ = [
    "parse",
    "parse_function",
    "Parser",
    "ParsedColor",
    "ParsedFunction",
    "CSSNumber",
]
