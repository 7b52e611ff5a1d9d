# Copyright (c) 2026 Chromata
# SPDX-License-Identifier: MIT

"""
Exceptions raised by chromata.

Every error derives from ChromataError and from the builtin exception that
best describes it, so callers can catch either.
"""

from __future__ import annotations


class ChromataError(Exception):
    """Base exception for all chromata errors."""


class ColorParseError(ChromataError, ValueError):
    """Raised when a string cannot be parsed as a color."""

    def __init__(self, text: str):
        super().__init__(f'Cannot parse "{text}" as a color')
        self.text = text


class UnknownSpaceError(ChromataError, TypeError):
    """Raised when a color space id is not registered."""

    def __init__(self, space_id: str, hint: str = ""):
        message = f'No color space found with id = "{space_id}"'
        if hint:
            message = f"{message}. {hint}"
        super().__init__(message)
        self.space_id = space_id


class InvalidSpaceError(ChromataError, TypeError):
    """Raised when a space lookup gets neither an id nor a color space."""

    def __init__(self, value: object):
        super().__init__(f"{value!r} is not a valid color space")
        self.value = value


class UnsupportedWhitePointError(ChromataError, TypeError):
    """Raised for chromatic adaptation between unsupported white points."""

    def __init__(self, source: str, target: str):
        super().__init__(
            f"Cannot adapt from white point {source} to {target}: "
            "only D50 and D65 are supported"
        )
        self.source = source
        self.target = target


class MissingConnectionSpaceError(ChromataError, LookupError):
    """Raised when a new space cannot be connected to XYZ."""
