# Copyright (c) 2026 Chromata
# SPDX-License-Identifier: MIT

"""Tests for coordinates, space declarations and inheritance."""

import math

import numpy as np
import pytest

from chromata.space import models
from chromata.space.builtin import create_registry
from chromata.space.definition import (
    D50,
    D65,
    Coordinate,
    SpaceDefinition,
    inherit,
    make_coordinates,
)


class TestWhitePoint:

    def test_constants(self):
        assert D50.xyz == (0.96422, 1.0, 0.82521)
        assert D65.xyz == (0.95047, 1.0, 1.08883)

    def test_compared_by_identity(self):
        from chromata.space.definition import WhitePoint

        copy = WhitePoint("D65", D65.xyz)
        assert copy != D65
        assert D65 == D65


class TestCoordinate:

    def test_in_range(self):
        c = Coordinate("red", 0, 1)
        assert c.in_range(0.5)
        assert not c.in_range(1.1)
        assert not c.in_range(-0.1)

    def test_in_range_epsilon(self):
        c = Coordinate("red", 0, 1)
        assert c.in_range(1.000004, epsilon=0.000005)
        assert not c.in_range(1.00001, epsilon=0.000005)

    def test_nan_fails_defined_bound(self):
        assert not Coordinate("red", 0, 1).in_range(math.nan)

    def test_unbounded_accepts_anything(self):
        c = Coordinate("X")
        assert not c.bounded
        assert c.in_range(1e9)
        assert c.in_range(math.nan)

    def test_half_bounded(self):
        c = Coordinate("chroma", 0, None)
        assert c.bounded
        assert c.in_range(1e6)
        assert not c.in_range(-1)

    def test_clip(self):
        c = Coordinate("red", 0, 1)
        assert c.clip(1.2) == 1
        assert c.clip(-0.3) == 0
        assert c.clip(0.4) == 0.4

    def test_clip_nan_becomes_lower_bound(self):
        assert Coordinate("red", 0, 1).clip(math.nan) == 0

    def test_inverted_bounds_rejected(self):
        with pytest.raises(ValueError):
            Coordinate("bad", 1, 0)


class TestMakeCoordinates:

    def test_order_preserved(self):
        coords = make_coordinates({"l": (0, 100), "a": (-125, 125), "b": (-125, 125)})
        assert [c.name for c in coords] == ["l", "a", "b"]
        assert coords[1].bounds == (-125, 125)

    def test_missing_and_nan_bounds_are_none(self):
        coords = make_coordinates({"x": None, "y": (math.nan, 1), "z": (0,)})
        assert coords[0].bounds == (None, None)
        assert coords[1].bounds == (None, 1)
        assert coords[2].bounds == (0, None)


class TestColorSpace:

    @pytest.fixture
    def registry(self):
        return create_registry()

    def test_index(self, registry):
        lch = registry.space("lch")
        assert lch.index("chroma") == 1
        assert lch.coordinate("hue").bounds == (0, 360)

    def test_unknown_coordinate(self, registry):
        with pytest.raises(ValueError, match="no coordinate named"):
            registry.space("srgb").index("alpha")

    def test_serialized_id(self, registry):
        assert registry.space("p3").serialized_id == "display-p3"
        assert registry.space("srgb").serialized_id == "srgb"

    def test_conversion_from_base(self, registry):
        lch = registry.space("lch")
        assert lch.conversion_from("lab") is models.rectangular_to_polar
        assert lch.conversion_from("srgb") is None

    def test_conversion_from_direct_wins(self, registry):
        def from_lab(coords):
            return coords

        space = registry.define(SpaceDefinition(id="lch-fast", inherits="lch", direct={"lab": from_lab}))
        assert space.conversion_from("lab") is from_lab

    def test_base_composes_xyz_functions(self, registry):
        lch = registry.space("lch")
        lab = registry.space("lab")
        coords = (50.0, 30.0, 120.0)
        np.testing.assert_allclose(
            lch.to_xyz(coords), lab.to_xyz(models.polar_to_rectangular(coords))
        )


class TestInherit:

    @pytest.fixture
    def srgb(self):
        return create_registry().space("srgb")

    def test_undeclared_fields_copied(self, srgb):
        child = inherit(srgb, SpaceDefinition(id="child", base="p3-linear"))
        assert child.coords == {"red": (0, 1), "green": (0, 1), "blue": (0, 1)}
        assert child.white is D65
        assert child.name == "sRGB"

    def test_declared_fields_kept(self, srgb):
        child = inherit(srgb, SpaceDefinition(id="child", name="Child", white=D50))
        assert child.name == "Child"
        assert child.white is D50

    def test_protected_fields_not_copied(self, srgb):
        child = inherit(srgb, SpaceDefinition(id="child"))
        assert child.id == "child"
        assert child.parse is None
        assert child.instance is None

    def test_base_group_inherited_whole(self, srgb):
        child = inherit(srgb, SpaceDefinition(id="child"))
        assert child.base == "srgb-linear"
        assert child.to_base is models.srgb_to_linear
        assert child.from_base is models.linear_to_srgb

    def test_declaring_base_keeps_transfer_functions(self, srgb):
        child = inherit(srgb, SpaceDefinition(id="child", base="p3-linear"))
        assert child.base == "p3-linear"
        assert child.to_base is models.srgb_to_linear
        assert child.to_xyz is None

    def test_declaring_direct_drops_base_group(self, srgb):
        def to_xyz(c):
            return c

        child = inherit(srgb, SpaceDefinition(id="child", to_xyz=to_xyz, from_xyz=to_xyz))
        assert child.to_xyz is to_xyz
        assert child.base is None
        assert child.to_base is None
        assert child.from_base is None
