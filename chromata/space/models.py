# Copyright (c) 2026 Chromata
# SPDX-License-Identifier: MIT

"""
Color model math.

Pure functions used by the built-in spaces. Each accepts an array-like of
shape (..., 3) and returns an NDArray of the same shape, so they work on a
single color as well as on batches.

Conversion chains:
    sRGB / P3 / Rec.2020 / ProPhoto → linear RGB → XYZ
    XYZ → Lab → LCH
    linear sRGB → OKLab → OKLCH
    sRGB → HSL → HSV → HWB

References:
- CSS Color 4: https://www.w3.org/TR/css-color-4/
- OKLab: https://bottosson.github.io/posts/oklab/

Transfer functions are sign-preserving and never clip: out-of-gamut values
must survive the round trip so that gamut mapping can see them.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import ArrayLike, NDArray

from chromata.config import EPSILON


def matrix_transform(matrix: NDArray[np.float64], values: ArrayLike) -> NDArray[np.float64]:
    """Apply a 3x3 matrix to an array of shape (..., 3)."""
    values = np.asarray(values, dtype=np.float64)
    return np.einsum('...j,ij->...i', values, matrix)


# =============================================================================
# Transfer Functions
# =============================================================================


def srgb_to_linear(srgb: ArrayLike) -> NDArray[np.float64]:
    """
    Convert gamma-encoded sRGB to linear light.

    sRGB uses a piecewise gamma curve:
    - For |values| <= 0.04045: linear/12.92
    - For |values| > 0.04045: ((|value| + 0.055) / 1.055) ^ 2.4
    """
    srgb = np.asarray(srgb, dtype=np.float64)
    magnitude = np.abs(srgb)
    linear = np.where(
        magnitude <= 0.04045,
        magnitude / 12.92,
        np.power((magnitude + 0.055) / 1.055, 2.4)
    )
    return np.sign(srgb) * linear


def linear_to_srgb(linear: ArrayLike) -> NDArray[np.float64]:
    """
    Convert linear light to gamma-encoded sRGB.

    Inverse of srgb_to_linear.
    """
    linear = np.asarray(linear, dtype=np.float64)
    magnitude = np.abs(linear)
    srgb = np.where(
        magnitude <= 0.0031308,
        magnitude * 12.92,
        1.055 * np.power(magnitude, 1.0 / 2.4) - 0.055
    )
    return np.sign(linear) * srgb


# Rec. ITU-R BT.2020-2 constants
_REC2020_ALPHA = 1.09929682680944
_REC2020_BETA = 0.018053968510807


def rec2020_to_linear(rgb: ArrayLike) -> NDArray[np.float64]:
    rgb = np.asarray(rgb, dtype=np.float64)
    magnitude = np.abs(rgb)
    linear = np.where(
        magnitude < _REC2020_BETA * 4.5,
        magnitude / 4.5,
        np.power((magnitude + _REC2020_ALPHA - 1) / _REC2020_ALPHA, 1 / 0.45)
    )
    return np.sign(rgb) * linear


def linear_to_rec2020(linear: ArrayLike) -> NDArray[np.float64]:
    linear = np.asarray(linear, dtype=np.float64)
    magnitude = np.abs(linear)
    rgb = np.where(
        magnitude < _REC2020_BETA,
        magnitude * 4.5,
        _REC2020_ALPHA * np.power(magnitude, 0.45) - (_REC2020_ALPHA - 1)
    )
    return np.sign(linear) * rgb


def prophoto_to_linear(rgb: ArrayLike) -> NDArray[np.float64]:
    """ProPhoto RGB uses a 1.8 gamma with a linear toe below 16/512."""
    rgb = np.asarray(rgb, dtype=np.float64)
    magnitude = np.abs(rgb)
    linear = np.where(magnitude <= 16 / 512, magnitude / 16, np.power(magnitude, 1.8))
    return np.sign(rgb) * linear


def linear_to_prophoto(linear: ArrayLike) -> NDArray[np.float64]:
    linear = np.asarray(linear, dtype=np.float64)
    magnitude = np.abs(linear)
    rgb = np.where(magnitude >= 1 / 512, np.power(magnitude, 1 / 1.8), magnitude * 16)
    return np.sign(linear) * rgb


# =============================================================================
# Linear RGB ↔ XYZ
# =============================================================================

# Columns are the XYZ coordinates of the red, green and blue primaries.

LINEAR_SRGB_TO_XYZ = np.array([
    [0.41239079926595934, 0.357584339383878, 0.1804807884018343],
    [0.21263900587151027, 0.715168678767756, 0.07219231536073371],
    [0.01933081871559182, 0.11919477979462598, 0.9505321522496607],
], dtype=np.float64)

LINEAR_P3_TO_XYZ = np.array([
    [0.4865709486482162, 0.26566769316909306, 0.1982172852343625],
    [0.2289745640697488, 0.6917385218365064, 0.079286914093745],
    [0.0, 0.04511338185890264, 1.043944368900976],
], dtype=np.float64)

LINEAR_REC2020_TO_XYZ = np.array([
    [0.6369580483012914, 0.14461690358620832, 0.1688809751641721],
    [0.2627002120112671, 0.6779980715188708, 0.05930171646986196],
    [0.0, 0.028072693049087428, 1.060985057710791],
], dtype=np.float64)

# D50
LINEAR_PROPHOTO_TO_XYZ = np.array([
    [0.7977604896723027, 0.13518583717574031, 0.0313493495815248],
    [0.2880711282292934, 0.7118432178101014, 0.00008565396060525902],
    [0.0, 0.0, 0.8251046025104601],
], dtype=np.float64)

# Inverse matrices
XYZ_TO_LINEAR_SRGB = np.linalg.inv(LINEAR_SRGB_TO_XYZ)
XYZ_TO_LINEAR_P3 = np.linalg.inv(LINEAR_P3_TO_XYZ)
XYZ_TO_LINEAR_REC2020 = np.linalg.inv(LINEAR_REC2020_TO_XYZ)
XYZ_TO_LINEAR_PROPHOTO = np.linalg.inv(LINEAR_PROPHOTO_TO_XYZ)


# =============================================================================
# XYZ ↔ Lab ↔ LCH
# =============================================================================

_LAB_E = 216 / 24389  # 6^3 / 29^3
_LAB_K = 24389 / 27   # 29^3 / 3^3


def xyz_to_lab(xyz: ArrayLike, white: ArrayLike) -> NDArray[np.float64]:
    """
    Convert XYZ to CIE Lab relative to the given reference white.

    Returns:
        Array of shape (..., 3) with (L, a, b), L in [0, 100]
    """
    xyz = np.asarray(xyz, dtype=np.float64) / np.asarray(white, dtype=np.float64)

    f = np.where(xyz > _LAB_E, np.cbrt(xyz), (_LAB_K * xyz + 16) / 116)

    L = 116 * f[..., 1] - 16
    a = 500 * (f[..., 0] - f[..., 1])
    b = 200 * (f[..., 1] - f[..., 2])

    return np.stack([L, a, b], axis=-1)


def lab_to_xyz(lab: ArrayLike, white: ArrayLike) -> NDArray[np.float64]:
    """Convert CIE Lab to XYZ. Inverse of xyz_to_lab."""
    lab = np.asarray(lab, dtype=np.float64)

    L = lab[..., 0]
    f1 = (L + 16) / 116
    f0 = lab[..., 1] / 500 + f1
    f2 = f1 - lab[..., 2] / 200

    x = np.where(f0 ** 3 > _LAB_E, f0 ** 3, (116 * f0 - 16) / _LAB_K)
    y = np.where(L > _LAB_K * _LAB_E, f1 ** 3, L / _LAB_K)
    z = np.where(f2 ** 3 > _LAB_E, f2 ** 3, (116 * f2 - 16) / _LAB_K)

    return np.stack([x, y, z], axis=-1) * np.asarray(white, dtype=np.float64)


def rectangular_to_polar(lab: ArrayLike) -> NDArray[np.float64]:
    """
    Convert (lightness, a, b) to (lightness, chroma, hue).

    Hue is in degrees [0, 360), NaN when both a and b are within EPSILON of 0
    (achromatic: hue is undefined).
    """
    lab = np.asarray(lab, dtype=np.float64)

    L = lab[..., 0]
    a = lab[..., 1]
    b = lab[..., 2]

    C = np.sqrt(a**2 + b**2)
    H = np.degrees(np.arctan2(b, a)) % 360.0
    H = np.where((np.abs(a) < EPSILON) & (np.abs(b) < EPSILON), np.nan, H)

    return np.stack([L, C, H], axis=-1)


def polar_to_rectangular(lch: ArrayLike) -> NDArray[np.float64]:
    """
    Convert (lightness, chroma, hue) to (lightness, a, b).

    A NaN hue is treated as 0 and a negative chroma as 0.
    """
    lch = np.asarray(lch, dtype=np.float64)

    L = lch[..., 0]
    C = np.maximum(lch[..., 1], 0.0)
    H = lch[..., 2]
    H_rad = np.radians(np.where(np.isnan(H), 0.0, H))

    a = C * np.cos(H_rad)
    b = C * np.sin(H_rad)

    return np.stack([L, a, b], axis=-1)


# =============================================================================
# Linear RGB ↔ OKLab
# =============================================================================

# Matrices from https://bottosson.github.io/posts/oklab/

# Linear sRGB to LMS (cone responses)
_M1 = np.array([
    [0.4122214708, 0.5363325363, 0.0514459929],
    [0.2119034982, 0.6806995451, 0.1073969566],
    [0.0883024619, 0.2817188376, 0.6299787005],
], dtype=np.float64)

# LMS to OKLab
_M2 = np.array([
    [0.2104542553, 0.7936177850, -0.0040720468],
    [1.9779984951, -2.4285922050, 0.4505937099],
    [0.0259040371, 0.7827717662, -0.8086757660],
], dtype=np.float64)

# Inverse matrices
_M1_INV = np.linalg.inv(_M1)
_M2_INV = np.linalg.inv(_M2)


def linear_rgb_to_oklab(rgb: ArrayLike) -> NDArray[np.float64]:
    """
    Convert linear sRGB to OKLab.

    Args:
        rgb: Array of shape (..., 3) with linear RGB values

    Returns:
        Array of shape (..., 3) with OKLab values (L, a, b)
    """
    lms = matrix_transform(_M1, rgb)

    # Cube root (np.cbrt keeps the sign for out-of-gamut colors)
    return matrix_transform(_M2, np.cbrt(lms))


def oklab_to_linear_rgb(lab: ArrayLike) -> NDArray[np.float64]:
    """Convert OKLab to linear sRGB. Inverse of linear_rgb_to_oklab."""
    lms_cbrt = matrix_transform(_M2_INV, lab)
    return matrix_transform(_M1_INV, lms_cbrt ** 3)


# =============================================================================
# sRGB ↔ HSL ↔ HSV ↔ HWB
# =============================================================================

# These work on one color at a time. Hue is in degrees and NaN for grays;
# saturation, lightness, value, whiteness and blackness are percentages.


def srgb_to_hsl(rgb: ArrayLike) -> NDArray[np.float64]:
    r, g, b = (float(c) for c in np.asarray(rgb, dtype=np.float64))
    hi = max(r, g, b)
    lo = min(r, g, b)
    h, s, l = math.nan, 0.0, (lo + hi) / 2
    d = hi - lo

    if d != 0:
        s = 0.0 if l == 0 or l == 1 else (hi - l) / min(l, 1 - l)

        if hi == r:
            h = (g - b) / d + (6 if g < b else 0)
        elif hi == g:
            h = (b - r) / d + 2
        else:
            h = (r - g) / d + 4

        h *= 60

    return np.array([h, s * 100, l * 100])


def hsl_to_srgb(hsl: ArrayLike) -> NDArray[np.float64]:
    h, s, l = (float(c) for c in np.asarray(hsl, dtype=np.float64))
    h = 0.0 if math.isnan(h) else h % 360
    s /= 100
    l /= 100

    def f(n):
        k = (n + h / 30) % 12
        a = s * min(l, 1 - l)
        return l - a * max(-1, min(k - 3, 9 - k, 1))

    return np.array([f(0), f(8), f(4)])


def hsl_to_hsv(hsl: ArrayLike) -> NDArray[np.float64]:
    h, s, l = (float(c) for c in np.asarray(hsl, dtype=np.float64))
    s /= 100
    l /= 100

    v = l + s * min(l, 1 - l)
    sv = 0.0 if v == 0 else 2 * (1 - l / v)

    return np.array([h, sv * 100, v * 100])


def hsv_to_hsl(hsv: ArrayLike) -> NDArray[np.float64]:
    h, s, v = (float(c) for c in np.asarray(hsv, dtype=np.float64))
    s /= 100
    v /= 100

    l = v * (1 - s / 2)
    sl = 0.0 if l == 0 or l == 1 else (v - l) / min(l, 1 - l)

    return np.array([h, sl * 100, l * 100])


def hsv_to_hwb(hsv: ArrayLike) -> NDArray[np.float64]:
    h, s, v = (float(c) for c in np.asarray(hsv, dtype=np.float64))
    return np.array([h, (100 - s) * v / 100, 100 - v])


def hwb_to_hsv(hwb: ArrayLike) -> NDArray[np.float64]:
    h, w, b = (float(c) for c in np.asarray(hwb, dtype=np.float64))
    w /= 100
    b /= 100

    # Whiteness and blackness add up to a gray
    if w + b >= 1:
        gray = w / (w + b)
        return np.array([h, 0.0, gray * 100])

    v = 1 - b
    s = 0.0 if v == 0 else 1 - w / v
    return np.array([h, s * 100, v * 100])
