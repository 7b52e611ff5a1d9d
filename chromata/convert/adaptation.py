# Copyright (c) 2026 Chromata
# SPDX-License-Identifier: MIT

"""
Chromatic adaptation between reference white points.

Only D50 and D65 are supported, using fixed Bradford-derived matrices.
"""

from __future__ import annotations

from typing import Optional

import numpy as np
from numpy.typing import ArrayLike

from chromata.errors import UnsupportedWhitePointError
from chromata.space.definition import D50, D65, WhitePoint
from chromata.space.models import matrix_transform


# Bradford, D65 → D50
_D65_TO_D50 = np.array([
    [1.0478112, 0.0228866, -0.0501270],
    [0.0295424, 0.9904844, -0.0170491],
    [-0.0092345, 0.0150436, 0.7521316],
], dtype=np.float64)

# Bradford, D50 → D65
_D50_TO_D65 = np.array([
    [0.9555766, -0.0230393, 0.0631636],
    [-0.0282895, 1.0099416, 0.0210077],
    [0.0122982, -0.0204830, 1.3299098],
], dtype=np.float64)


def adapt(source: Optional[WhitePoint], target: Optional[WhitePoint], xyz: ArrayLike):
    """
    Adapt XYZ values from one white point to another.

    Args:
        source: White point the XYZ values are relative to (None = D50)
        target: White point to adapt to (None = D50)
        xyz: Array-like of shape (..., 3)

    Returns:
        ``xyz`` unchanged if the white points are the same object,
        otherwise the adapted NDArray.

    Raises:
        UnsupportedWhitePointError: Any pair other than D50/D65
    """
    source = source or D50
    target = target or D50

    if source is target:
        return xyz

    if source is D65 and target is D50:
        return matrix_transform(_D65_TO_D50, xyz)

    if source is D50 and target is D65:
        return matrix_transform(_D50_TO_D65, xyz)

    raise UnsupportedWhitePointError(source.name, target.name)
