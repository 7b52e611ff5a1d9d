# Copyright (c) 2026 Chromata
# SPDX-License-Identifier: MIT

"""
The user-facing Color value.

A Color pairs coordinates with the space they are expressed in; every
other module acts on Colors through this type.
"""

from chromata.schema.color import Color

__all__ = ["Color"]
