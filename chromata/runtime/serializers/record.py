# Copyright (c) 2026 Chromata
# SPDX-License-Identifier: MIT

"""
JSON serializer.

Round-trippable form: ``{"spaceId": "lab", "coords": [50, 40, 59.5], "alpha": 1}``
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Optional

from chromata.runtime.serializers.base import SerializerFormat

if TYPE_CHECKING:
    from chromata.schema.color import Color
    from chromata.space.registry import Registry


def to_json(
    color: Color,
    *,
    format: SerializerFormat = SerializerFormat.JSON,
    pretty: bool = False,
) -> str:
    """Serialize a Color as JSON.

    Args:
        color: The color to serialize.
        format: JSON (compact) or JSON_PRETTY.
        pretty: Shorthand for ``format=SerializerFormat.JSON_PRETTY``.

    Returns:
        JSON string. Undefined coordinates are written as ``NaN``.
    """
    data = color.to_dict()

    if pretty or format == SerializerFormat.JSON_PRETTY:
        return json.dumps(data, indent=2)
    return json.dumps(data, separators=(",", ":"))


def from_json(text: str, *, registry: Optional[Registry] = None) -> Color:
    """Deserialize a Color from JSON produced by to_json()."""
    from chromata.schema.color import Color

    return Color.from_dict(json.loads(text), registry=registry)
