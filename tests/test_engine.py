# Copyright (c) 2026 Chromata
# SPDX-License-Identifier: MIT

"""Tests for conversion between spaces and chromatic adaptation."""

import math

import numpy as np
import pytest

from chromata.convert.adaptation import adapt
from chromata.convert.engine import convert
from chromata.errors import UnknownSpaceError, UnsupportedWhitePointError
from chromata.space.builtin import BUILTIN_SPACES, create_registry
from chromata.space.definition import D50, D65, SpaceDefinition, WhitePoint


@pytest.fixture
def registry():
    return create_registry()


class TestSameSpace:

    def test_identity_returns_input(self, registry):
        v = [0.3, 0.4, 0.5]
        assert convert(v, "xyz", "xyz", registry=registry) is v

    def test_identity_by_space_object(self, registry):
        v = (0.1, 0.2, 0.3)
        srgb = registry.space("srgb")
        assert convert(v, srgb, "SRGB", registry=registry) is v


class TestRoundtrip:
    """Converting out of XYZ and back must recover the input."""

    @pytest.mark.parametrize("space_id", [d.id for d in BUILTIN_SPACES])
    def test_roundtrip_through_xyz(self, registry, space_id):
        xyz = convert((0.2, 0.4, 0.6), "srgb", "xyz", registry=registry)
        there = convert(xyz, "xyz", space_id, registry=registry)
        back = convert(there, space_id, "xyz", registry=registry)
        np.testing.assert_allclose(back, xyz, atol=1e-4)

    def test_result_is_tuple_of_floats(self, registry):
        result = convert((1, 0, 0), "srgb", "lab", registry=registry)
        assert isinstance(result, tuple)
        assert all(type(c) is float for c in result)


class TestKnownValues:

    def test_srgb_white_to_xyz_d65(self, registry):
        xyz = convert((1, 1, 1), "srgb", "xyz-d65", registry=registry)
        np.testing.assert_allclose(xyz, D65.xyz, atol=1e-3)

    def test_srgb_white_to_lab(self, registry):
        L, a, b = convert((1, 1, 1), "srgb", "lab", registry=registry)
        assert L == pytest.approx(100.0, abs=0.01)
        assert a == pytest.approx(0.0, abs=0.05)
        assert b == pytest.approx(0.0, abs=0.05)

    def test_srgb_red_to_lch(self, registry):
        L, C, H = convert((1, 0, 0), "srgb", "lch", registry=registry)
        assert L == pytest.approx(54.29, abs=0.05)
        assert C == pytest.approx(106.8, abs=0.2)
        assert H == pytest.approx(40.85, abs=0.1)

    def test_srgb_red_to_oklch(self, registry):
        L, C, H = convert((1, 0, 0), "srgb", "oklch", registry=registry)
        assert L == pytest.approx(0.628, abs=1e-3)
        assert C == pytest.approx(0.2577, abs=1e-3)
        assert H == pytest.approx(29.23, abs=0.1)

    def test_srgb_to_linear(self, registry):
        (r, g, b) = convert((0.5, 0.5, 0.5), "srgb", "srgb-linear", registry=registry)
        assert r == pytest.approx(0.21404, abs=1e-5)

    def test_srgb_green_in_p3(self, registry):
        r, g, b = convert((0, 1, 0), "srgb", "p3", registry=registry)
        assert r == pytest.approx(0.4584, abs=1e-3)
        assert g == pytest.approx(0.9853, abs=1e-3)
        assert b == pytest.approx(0.2983, abs=1e-3)

    def test_srgb_to_hwb(self, registry):
        h, w, b = convert((1, 0, 0), "srgb", "hwb", registry=registry)
        assert min(h, 360 - h) == pytest.approx(0.0, abs=1e-6)
        assert w == pytest.approx(0.0, abs=1e-9)
        assert b == pytest.approx(0.0, abs=1e-9)

    def test_gray_has_undefined_hue(self, registry):
        _, C, H = convert((50, 0, 0), "lab", "lch", registry=registry)
        assert C == 0
        assert math.isnan(H)


class TestShortcuts:

    def test_direct_conversion_used(self, registry):
        calls = []

        def from_srgb(coords):
            calls.append(coords)
            return (1.0, 2.0, 3.0)

        registry.define(SpaceDefinition(id="fast", inherits="lab", direct={"srgb": from_srgb}))
        assert convert((0, 0, 0), "srgb", "fast", registry=registry) == (1.0, 2.0, 3.0)
        assert calls == [(0, 0, 0)]

    def test_base_conversion_used(self, registry):
        calls = []

        def from_base(coords):
            calls.append(coords)
            return (7.0, 8.0, 9.0)

        registry.define(SpaceDefinition(
            id="child", inherits="lch", from_base=from_base,
            to_base=registry.space("lch").to_base,
        ))
        assert convert((50, 0, 0), "lab", "child", registry=registry) == (7.0, 8.0, 9.0)
        assert len(calls) == 1


class TestAdaptation:

    def test_same_white_returns_input(self):
        xyz = [0.5, 0.5, 0.5]
        assert adapt(D65, D65, xyz) is xyz

    def test_none_means_d50(self):
        xyz = [0.5, 0.5, 0.5]
        assert adapt(None, D50, xyz) is xyz

    def test_d65_white_to_d50(self):
        np.testing.assert_allclose(adapt(D65, D50, D65.xyz), D50.xyz, atol=1e-4)

    def test_roundtrip(self):
        xyz = np.array([0.3, 0.5, 0.2])
        np.testing.assert_allclose(adapt(D50, D65, adapt(D65, D50, xyz)), xyz, atol=1e-6)

    def test_unsupported_pair(self):
        e = WhitePoint("E", (1.0, 1.0, 1.0))
        with pytest.raises(UnsupportedWhitePointError, match="E"):
            adapt(e, D65, [0.5, 0.5, 0.5])

    def test_unsupported_white_in_conversion(self, registry):
        e = WhitePoint("E", (1.0, 1.0, 1.0))
        registry.define(SpaceDefinition(id="xyz-e", white=e, inherits="xyz"))
        with pytest.raises(UnsupportedWhitePointError):
            convert((0.5, 0.5, 0.5), "xyz-e", "srgb", registry=registry)

    def test_xyz_d50_to_d65(self, registry):
        xyz = convert(D50.xyz, "xyz", "xyz-d65", registry=registry)
        np.testing.assert_allclose(xyz, D65.xyz, atol=1e-4)


class TestErrors:

    def test_unknown_source(self, registry):
        with pytest.raises(UnknownSpaceError, match="no-such-space"):
            convert((0, 0, 0), "no-such-space", "srgb", registry=registry)

    def test_unknown_target(self, registry):
        with pytest.raises(UnknownSpaceError):
            convert((0, 0, 0), "srgb", "no-such-space", registry=registry)
