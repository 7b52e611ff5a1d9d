# Copyright (c) 2026 Chromata
# SPDX-License-Identifier: MIT

"""
Built-in color spaces.

BUILTIN_SPACES is in dependency order: every space comes after the spaces
it inherits from or connects through.

    xyz (D50) ─┬─ lab ── lch
               ├─ prophoto-linear ── prophoto
    xyz-d65   ─┘
    srgb-linear ─┬─ srgb ── hsl ── hsv ── hwb
                 └─ oklab ── oklch
    p3-linear ── p3
    rec2020-linear ── rec2020
"""

from __future__ import annotations

import math
import re
from functools import partial
from typing import Iterable, Optional

from chromata.config import EPSILON, Defaults
from chromata.errors import ColorParseError
from chromata.parse.function import CSSNumber
from chromata.parse.parser import ParsedColor
from chromata.runtime.serializers.base import format_number, is_translucent, to_precision
from chromata.runtime.serializers.css import _UNSET, format_color
from chromata.space import models
from chromata.space.definition import D50, D65, SpaceDefinition
from chromata.space.registry import Registry


# =============================================================================
# Helpers
# =============================================================================


def _identity(coords):
    return coords


def _always(coords) -> bool:
    return True


def _srgb_in_gamut(rgb) -> bool:
    return all(-EPSILON <= float(c) <= 1 + EPSILON for c in rgb)


def _function_parser(names: Iterable[str], space_id: str, percent_scales: tuple[float, ...]):
    """
    Parser for a CSS function with three coordinates and an optional alpha.

    ``percent_scales[i]`` is what 100% means for coordinate i. The keyword
    ``none`` stands for an undefined (NaN) coordinate.
    """
    names = frozenset(names)

    def parse(text, parsed) -> Optional[ParsedColor]:
        if parsed is None or parsed.name not in names:
            return None

        if len(parsed.args) < 3:
            raise ColorParseError(text)

        coords = []
        for arg, scale in zip(parsed.args[:3], percent_scales):
            if isinstance(arg, str) and arg.lower() == "none":
                coords.append(math.nan)
            elif isinstance(arg, CSSNumber):
                coords.append(float(arg) * scale if arg.percentage else float(arg))
            else:
                raise ColorParseError(text)

        alpha = 1.0
        if len(parsed.args) > 3:
            if not isinstance(parsed.args[3], CSSNumber):
                raise ColorParseError(text)
            alpha = float(parsed.args[3])

        return ParsedColor(space_id, tuple(coords), alpha)

    return parse


def _css_function(name: str, **preset):
    """to_string capability emitting ``name(...)`` instead of color()."""
    def to_string(color, **options):
        return format_color(color, **{"name": name, **preset, **options})
    return to_string


# =============================================================================
# sRGB extras
# =============================================================================

_HEX_RE = re.compile(r"^#([0-9a-f]{3,4}|[0-9a-f]{6}|[0-9a-f]{8})$", re.IGNORECASE)


def parse_hex(text, parsed=None) -> Optional[ParsedColor]:
    """
    Parse #rgb, #rgba, #rrggbb or #rrggbbaa.

    Returns:
        ParsedColor in srgb, or None if the text is not a hex color
    """
    match = _HEX_RE.match(text.strip()) if text else None
    if not match:
        return None

    digits = match.group(1)
    if len(digits) <= 4:
        digits = "".join(d * 2 for d in digits)

    values = [int(digits[i:i + 2], 16) / 255 for i in range(0, len(digits), 2)]
    alpha = values[3] if len(values) == 4 else 1.0

    return ParsedColor("srgb", tuple(values[:3]), alpha)


def to_hex(color) -> str:
    """
    Hex string of an sRGB color, mapped into gamut first.

    Returns:
        Hex string like "#3941C8", or "#3941C880" when alpha < 1
    """
    coords = color.get_coords(in_gamut=True)
    r, g, b = (round(max(0.0, min(c, 1.0)) * 255) for c in coords)
    result = f"#{r:02X}{g:02X}{b:02X}"

    if is_translucent(color.alpha):
        result += f"{round(color.alpha * 255):02X}"

    return result


def _rgb_to_string(color, *, precision=_UNSET, **options):
    """rgb() with percentages, mapped into gamut unless told otherwise."""
    if precision is _UNSET:
        precision = color.registry.defaults.precision

    def percent(c):
        return f"{format_number(to_precision(c * 100, precision))}%"

    options.setdefault("name", "rgb")
    options.setdefault("in_gamut", True)
    options.setdefault("format", percent)
    return format_color(color, precision=precision, **options)


# =============================================================================
# Definitions
# =============================================================================

_XYZ_COORDS = {"X": (None, None), "Y": (None, None), "Z": (None, None)}
_RGB_COORDS = {"red": (0, 1), "green": (0, 1), "blue": (0, 1)}
_HUE = (0, 360)

XYZ = SpaceDefinition(
    id="xyz",
    name="XYZ",
    css_id="xyz-d50",
    coords=_XYZ_COORDS,
    white=D50,
    in_gamut=_always,
    to_xyz=_identity,
    from_xyz=_identity,
)

# Same coordinates as xyz; the white point makes conversions adapt
XYZ_D65 = SpaceDefinition(
    id="xyz-d65",
    name="XYZ D65",
    css_id="xyz-d65",
    white=D65,
    inherits="xyz",
)

SRGB_LINEAR = SpaceDefinition(
    id="srgb-linear",
    name="Linear sRGB",
    coords=_RGB_COORDS,
    white=D65,
    to_xyz=partial(models.matrix_transform, models.LINEAR_SRGB_TO_XYZ),
    from_xyz=partial(models.matrix_transform, models.XYZ_TO_LINEAR_SRGB),
)

SRGB = SpaceDefinition(
    id="srgb",
    name="sRGB",
    coords=_RGB_COORDS,
    white=D65,
    base="srgb-linear",
    to_base=models.srgb_to_linear,
    from_base=models.linear_to_srgb,
    parse=parse_hex,
    instance={
        "to_hex": to_hex,
        "to_string": _rgb_to_string,
    },
)

P3_LINEAR = SpaceDefinition(
    id="p3-linear",
    name="Linear P3",
    inherits="srgb-linear",
    to_xyz=partial(models.matrix_transform, models.LINEAR_P3_TO_XYZ),
    from_xyz=partial(models.matrix_transform, models.XYZ_TO_LINEAR_P3),
)

# sRGB transfer function, P3 primaries
P3 = SpaceDefinition(
    id="p3",
    name="P3",
    css_id="display-p3",
    inherits="srgb",
    base="p3-linear",
)

REC2020_LINEAR = SpaceDefinition(
    id="rec2020-linear",
    name="Linear REC.2020",
    inherits="srgb-linear",
    to_xyz=partial(models.matrix_transform, models.LINEAR_REC2020_TO_XYZ),
    from_xyz=partial(models.matrix_transform, models.XYZ_TO_LINEAR_REC2020),
)

REC2020 = SpaceDefinition(
    id="rec2020",
    name="REC.2020",
    inherits="srgb",
    base="rec2020-linear",
    to_base=models.rec2020_to_linear,
    from_base=models.linear_to_rec2020,
)

PROPHOTO_LINEAR = SpaceDefinition(
    id="prophoto-linear",
    name="Linear ProPhoto",
    inherits="srgb-linear",
    white=D50,
    to_xyz=partial(models.matrix_transform, models.LINEAR_PROPHOTO_TO_XYZ),
    from_xyz=partial(models.matrix_transform, models.XYZ_TO_LINEAR_PROPHOTO),
)

PROPHOTO = SpaceDefinition(
    id="prophoto",
    name="ProPhoto",
    css_id="prophoto-rgb",
    inherits="srgb",
    white=D50,
    base="prophoto-linear",
    to_base=models.prophoto_to_linear,
    from_base=models.linear_to_prophoto,
)

LAB = SpaceDefinition(
    id="lab",
    name="Lab",
    coords={"lightness": (0, 100), "a": (-125, 125), "b": (-125, 125)},
    white=D50,
    in_gamut=_always,
    to_xyz=lambda lab: models.lab_to_xyz(lab, D50.as_array()),
    from_xyz=lambda xyz: models.xyz_to_lab(xyz, D50.as_array()),
    parse=_function_parser(["lab"], "lab", (100, 125, 125)),
    instance={"to_string": _css_function("lab")},
)

LCH = SpaceDefinition(
    id="lch",
    name="LCH",
    coords={"lightness": (0, 100), "chroma": (0, 150), "hue": _HUE},
    white=D50,
    in_gamut=_always,
    base="lab",
    to_base=models.polar_to_rectangular,
    from_base=models.rectangular_to_polar,
    parse=_function_parser(["lch"], "lch", (100, 150, 1)),
    instance={"to_string": _css_function("lch")},
)

OKLAB = SpaceDefinition(
    id="oklab",
    name="OKLab",
    coords={"lightness": (0, 1), "a": (-0.4, 0.4), "b": (-0.4, 0.4)},
    white=D65,
    in_gamut=_always,
    base="srgb-linear",
    to_base=models.oklab_to_linear_rgb,
    from_base=models.linear_rgb_to_oklab,
    parse=_function_parser(["oklab"], "oklab", (1, 0.4, 0.4)),
    instance={"to_string": _css_function("oklab")},
)

OKLCH = SpaceDefinition(
    id="oklch",
    name="OKLCH",
    coords={"lightness": (0, 1), "chroma": (0, 0.4), "hue": _HUE},
    white=D65,
    in_gamut=_always,
    base="oklab",
    to_base=models.polar_to_rectangular,
    from_base=models.rectangular_to_polar,
    parse=_function_parser(["oklch"], "oklch", (1, 0.4, 1)),
    instance={"to_string": _css_function("oklch")},
)

HSL = SpaceDefinition(
    id="hsl",
    name="HSL",
    coords={"hue": _HUE, "saturation": (0, 100), "lightness": (0, 100)},
    white=D65,
    in_gamut=lambda hsl: _srgb_in_gamut(models.hsl_to_srgb(hsl)),
    base="srgb",
    to_base=models.hsl_to_srgb,
    from_base=models.srgb_to_hsl,
    parse=_function_parser(["hsl", "hsla"], "hsl", (1, 100, 100)),
)

HSV = SpaceDefinition(
    id="hsv",
    name="HSV",
    coords={"hue": _HUE, "saturation": (0, 100), "value": (0, 100)},
    white=D65,
    in_gamut=lambda hsv: _srgb_in_gamut(models.hsl_to_srgb(models.hsv_to_hsl(hsv))),
    base="hsl",
    to_base=models.hsv_to_hsl,
    from_base=models.hsl_to_hsv,
)

HWB = SpaceDefinition(
    id="hwb",
    name="HWB",
    coords={"hue": _HUE, "whiteness": (0, 100), "blackness": (0, 100)},
    white=D65,
    in_gamut=lambda hwb: _srgb_in_gamut(
        models.hsl_to_srgb(models.hsv_to_hsl(models.hwb_to_hsv(hwb)))
    ),
    base="hsv",
    to_base=models.hwb_to_hsv,
    from_base=models.hsv_to_hwb,
    parse=_function_parser(["hwb"], "hwb", (1, 100, 100)),
)


BUILTIN_SPACES = (
    XYZ,
    XYZ_D65,
    SRGB_LINEAR,
    SRGB,
    P3_LINEAR,
    P3,
    REC2020_LINEAR,
    REC2020,
    PROPHOTO_LINEAR,
    PROPHOTO,
    LAB,
    LCH,
    OKLAB,
    OKLCH,
    HSL,
    HSV,
    HWB,
)


def create_registry(defaults: Optional[Defaults] = None) -> Registry:
    """A new registry holding every built-in space."""
    registry = Registry(defaults)
    for definition in BUILTIN_SPACES:
        registry.define(definition)
    return registry


_default_registry: Optional[Registry] = None


def default_registry() -> Registry:
    """
    The process-wide registry used when no registry is passed explicitly.

    Created on first use. Spaces defined on it are visible to every color
    that does not name its own registry.
    """
    global _default_registry
    if _default_registry is None:
        _default_registry = create_registry()
    return _default_registry
