# Copyright (c) 2026 Chromata
# SPDX-License-Identifier: MIT

"""Tests for the runtime serializers (number rounding, CSS, JSON)."""

import json
import math

import pytest

from chromata.config import Defaults
from chromata.runtime import SerializerFormat, format_color, from_json, to_json
from chromata.runtime.serializers.base import format_number, to_precision
from chromata.schema.color import Color
from chromata.space.builtin import create_registry


@pytest.fixture
def registry():
    return create_registry()


# ---------------------------------------------------------------------------
# Number formatting
# ---------------------------------------------------------------------------

class TestToPrecision:

    def test_significant_digits(self):
        assert to_precision(59.5432, 5) == 59.543
        # The leading zero counts as an integer digit
        assert to_precision(0.123456789, 3) == 0.12

    def test_large_values_lose_integer_digits(self):
        assert to_precision(123456, 3) == 123000

    def test_range_aware(self):
        assert to_precision(59.5432, 5, (0, 100)) == 59.54
        assert to_precision(5.5432, 5, (0, 100)) == 5.54

    def test_unbounded_range_uses_value(self):
        assert to_precision(59.5432, 5, (None, None)) == 59.543

    def test_no_precision(self):
        assert to_precision(59.5432, None) == 59.5432
        assert to_precision(59.5432, 0) == 59.5432

    def test_non_finite_passthrough(self):
        assert math.isnan(to_precision(math.nan, 5))
        assert to_precision(math.inf, 5) == math.inf


class TestFormatNumber:

    def test_integral_float(self):
        assert format_number(50.0) == "50"
        assert format_number(-3.0) == "-3"

    def test_fraction(self):
        assert format_number(59.5) == "59.5"
        assert format_number(0.1) == "0.1"

    def test_string_passthrough(self):
        assert format_number("50%") == "50%"


# ---------------------------------------------------------------------------
# CSS
# ---------------------------------------------------------------------------

class TestFormatColor:

    def test_lab_scenario(self, registry):
        color = Color("lab", (50, 40, 59.5), registry=registry)
        assert format_color(color, name="lab") == "lab(50 40 59.5)"
        assert color.to_string() == "lab(50 40 59.5)"

    def test_color_function_uses_css_id(self, registry):
        color = Color("p3", (0, 1, 0), 0.5, registry=registry)
        assert color.to_string() == "color(display-p3 0 1 0 / 0.5)"

    def test_color_function_falls_back_to_id(self, registry):
        color = Color("srgb-linear", (0.25, 0.5, 1), registry=registry)
        assert color.to_string() == "color(srgb-linear 0.25 0.5 1)"

    def test_nan_and_negative_zero_become_zero(self, registry):
        assert Color("lch", (50, 0, math.nan), registry=registry).to_string() == "lch(50 0 0)"
        assert Color("xyz", (-0.0, 0.5, 1), registry=registry).to_string() == "color(xyz-d50 0 0.5 1)"

    def test_alpha_omitted_when_opaque(self, registry):
        assert "/" not in Color("lab", (50, 0, 0), 1.0, registry=registry).to_string()

    def test_nan_alpha_omitted(self, registry):
        assert Color("lab", (50, 0, 0), math.nan, registry=registry).to_string() == "lab(50 0 0)"

    def test_commas(self, registry):
        color = Color("lab", (50, 40, 59.5), 0.5, registry=registry)
        assert format_color(color, name="lab", commas=True) == "lab(50, 40, 59.5, 0.5)"

    def test_percent_format(self, registry):
        color = Color("srgb", (1, 0.5, 0), registry=registry)
        assert format_color(color, name="rgb", format="%") == "rgb(100% 50% 0%)"

    def test_callable_format(self, registry):
        color = Color("srgb", (1, 0.5, 0), registry=registry)
        assert format_color(color, name="rgb", format=lambda c: round(c * 255)) == "rgb(255 128 0)"

    def test_default_precision(self, registry):
        color = Color("lab", (50.123456789, 0, 0), registry=registry)
        assert color.to_string() == "lab(50.123 0 0)"

    def test_explicit_precision(self, registry):
        color = Color("lab", (50.123456789, 0, 0), registry=registry)
        assert color.to_string(precision=3) == "lab(50.1 0 0)"
        assert color.to_string(precision=None) == "lab(50.123456789 0 0)"

    def test_registry_precision(self):
        registry = create_registry(Defaults(precision=2))
        assert Color("lab", (50.7, 0, 0), registry=registry).to_string() == "lab(51 0 0)"

    def test_range_aware(self, registry):
        color = Color("lab", (5.123456, 0, 0), registry=registry)
        assert color.to_string(range_aware=True) == "lab(5.12 0 0)"

    def test_in_gamut(self):
        registry = create_registry(Defaults(gamut_mapping="clip"))
        color = Color("srgb-linear", (1.5, 0, 0), registry=registry)
        assert format_color(color, in_gamut=True) == "color(srgb-linear 1 0 0)"
        assert format_color(color) == "color(srgb-linear 1.5 0 0)"


class TestRGBString:

    def test_rgb_percentages(self, registry):
        assert Color("srgb", (1, 0, 0), registry=registry).to_string() == "rgb(100% 0% 0%)"

    def test_rgb_alpha(self, registry):
        color = Color("srgb", (1, 0.5, 0), 0.5, registry=registry)
        assert str(color) == "rgb(100% 50% 0% / 0.5)"

    def test_rgb_mapped_into_gamut(self, registry):
        color = Color("srgb", (1.2, 0, 0), registry=registry)
        assert "120%" not in color.to_string()

    def test_rgb_gamut_mapping_optional(self, registry):
        color = Color("srgb", (1.2, 0, 0), registry=registry)
        assert color.to_string(in_gamut=False) == "rgb(120% 0% 0%)"

    def test_function_name_override(self, registry):
        color = Color("srgb", (0.5, 0.1, 0.1), registry=registry)
        assert color.to_string(name="color") == "color(srgb 50% 10% 10%)"
        assert color.to_string(name="color", format=None) == "color(srgb 0.5 0.1 0.1)"

    def test_lab_function_name_override(self, registry):
        color = Color("lab", (50, 40, 59.5), registry=registry)
        assert color.to_string(name="color") == "color(lab 50 40 59.5)"

    def test_rgb_precision_none_is_exact(self, registry):
        color = Color("srgb", (0.123456789, 0, 0), registry=registry)
        assert color.to_string(in_gamut=False) == "rgb(12.35% 0% 0%)"
        assert "12.3456" in color.to_string(precision=None, in_gamut=False)


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------

class TestSerializerFormat:

    def test_members(self):
        assert [f.value for f in SerializerFormat] == ["json", "json_pretty"]


class TestJSON:

    def test_compact(self, registry):
        color = Color("lab", (50, 40, 59.5), registry=registry)
        assert to_json(color) == '{"spaceId":"lab","coords":[50.0,40.0,59.5],"alpha":1.0}'

    def test_pretty(self, registry):
        color = Color("lab", (50, 40, 59.5), registry=registry)
        pretty = to_json(color, format=SerializerFormat.JSON_PRETTY)
        assert "\n" in pretty
        assert pretty == to_json(color, pretty=True)
        assert json.loads(pretty) == json.loads(to_json(color))

    def test_roundtrip(self, registry):
        color = Color("oklch", (0.7, 0.1, 200), 0.25, registry=registry)
        assert from_json(color.to_json(), registry=registry) == color

    def test_nan_coordinate(self, registry):
        color = Color("lch", (50, 0, math.nan), registry=registry)
        restored = from_json(to_json(color), registry=registry)
        assert math.isnan(restored.coords[2])

    def test_missing_alpha_means_opaque(self, registry):
        restored = from_json('{"spaceId": "srgb", "coords": [1, 0, 0]}', registry=registry)
        assert restored.alpha == 1.0
