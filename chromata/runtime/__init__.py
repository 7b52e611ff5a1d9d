# Copyright (c) 2026 Chromata
# SPDX-License-Identifier: MIT

"""
Output runtime for chromata.

Serialization of Color values:

1. CSS -- color(), rgb(), lab(), lch() functions
2. JSON -- round-trippable {"spaceId", "coords", "alpha"} records
"""

from chromata.runtime.serializers import (
    SerializerFormat,
    format_color,
    from_json,
    to_json,
)

__all__ = [
    "format_color",
    "to_json",
    "from_json",
    "SerializerFormat",
]
