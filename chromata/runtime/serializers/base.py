# Copyright (c) 2026 Chromata
# SPDX-License-Identifier: MIT

"""Base types and utilities for serializers."""

from __future__ import annotations

import math
import numbers
from enum import Enum
from typing import Optional, Sequence


class SerializerFormat(Enum):
    """Output format for serializers."""

    JSON = "json"
    JSON_PRETTY = "json_pretty"


def to_precision(
    value: float,
    precision: Optional[int],
    bounds: Optional[Sequence[Optional[float]]] = None,
) -> float:
    """
    Round a number to ``precision`` significant digits.

    The number of integer digits is taken from the value itself, or from the
    largest finite reference bound when ``bounds`` are given, so that every
    value of a coordinate is rounded to the same number of decimals.

    Example::

        >>> to_precision(59.5432, 5)
        59.543
        >>> to_precision(59.5432, 5, (0, 100))
        59.54
    """
    if not precision or not math.isfinite(value):
        return value

    reference = abs(value)
    if bounds:
        finite = [abs(b) for b in bounds if b is not None and math.isfinite(b)]
        if finite:
            reference = max(finite)

    digits = len(str(math.floor(reference)))

    if precision > digits:
        return round(value, precision - digits)

    p10 = 10 ** (digits - precision)
    return round(value / p10) * p10


def format_number(value) -> str:
    """Shortest text for a number: integral floats lose their ".0"."""
    if isinstance(value, str):
        return value
    value = float(value)
    if math.isfinite(value) and value == int(value) and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def is_translucent(alpha) -> bool:
    """Whether an alpha needs writing out. Non-numeric alphas count as opaque."""
    return isinstance(alpha, numbers.Real) and alpha < 1
