# Copyright (c) 2026 Chromata
# SPDX-License-Identifier: MIT

"""
CSS string serializer.

Formats a Color as a CSS function. The generic form is
``color(<space> c1 c2 c3 [/ alpha])``; spaces with a dedicated CSS function
(rgb(), lab(), lch()) call format_color() with their own ``name``.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Callable, Optional, Union

from chromata.runtime.serializers.base import format_number, is_translucent, to_precision

if TYPE_CHECKING:
    from chromata.schema.color import Color


_UNSET = object()

CoordFormat = Union[str, Callable[[float], object], None]


def format_color(
    color: Color,
    *,
    name: str = "color",
    precision: Optional[int] = _UNSET,
    format: CoordFormat = None,
    commas: bool = False,
    in_gamut: bool = False,
    range_aware: bool = False,
) -> str:
    """Serialize a Color as a CSS function.

    Args:
        color: The color to serialize.
        name: Function name. Only ``color`` gets the space id as first argument.
        precision: Significant digits (registry default if omitted, None = exact).
        format: ``"%"`` for percentages, or a callable applied to each coordinate.
        commas: Separate arguments with commas (and alpha with ``,``).
        in_gamut: Map the color into its space's gamut first.
        range_aware: Round using each coordinate's reference range.

    Returns:
        CSS string.

    Example::

        format_color(Color("lab", (50, 40, 59.5)), name="lab")
        # 'lab(50 40 59.5)'
        format_color(Color("p3", (0, 1, 0), 0.5))
        # 'color(display-p3 0 1 0 / 0.5)'
    """
    if precision is _UNSET:
        precision = color.registry.defaults.precision

    coords = color.get_coords(
        in_gamut=in_gamut, precision=precision, range_aware=range_aware
    )

    # NaN and -0 become 0, to produce valid CSS
    coords = [0.0 if math.isnan(c) or c == 0 else c for c in coords]

    if format == "%":
        def fmt(c):
            return f"{format_number(to_precision(c * 100, precision))}%"
    elif callable(format):
        fmt = format
    else:
        fmt = format_number

    args = [format_number(fmt(c)) for c in coords]

    if name == "color":
        args.insert(0, color.space.serialized_id)

    separator = ", " if commas else " "
    alpha = ""
    if is_translucent(color.alpha):
        alpha = f"{',' if commas else ' /'} {format_number(color.alpha)}"

    return f"{name}({separator.join(args)}{alpha})"
