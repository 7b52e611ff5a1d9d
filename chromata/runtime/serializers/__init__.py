# Copyright (c) 2026 Chromata
# SPDX-License-Identifier: MIT

"""
Serializers for Color values.

CSS strings for display and stylesheets, JSON for storage and transport.
"""

from chromata.runtime.serializers.base import SerializerFormat, format_number, to_precision
from chromata.runtime.serializers.css import format_color
from chromata.runtime.serializers.record import from_json, to_json

__all__ = [
    "SerializerFormat",
    "format_color",
    "format_number",
    "to_precision",
    "to_json",
    "from_json",
]
