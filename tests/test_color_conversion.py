"""Tests for color-space formulas, the conversion registry and the LRU cache."""

from __future__ import annotations

import itertools
import threading

import numpy as np
import pytest

from season_color.config import ConverterConfig
from season_color.conversion.cache import LRUCache
from season_color.conversion.color_spaces import (
    CMYK, HSL, HSV, RGB, XYZ, Lab,
    cmyk_to_rgb, hex_to_rgb, hsl_to_rgb, hsv_to_rgb, kelvin_to_rgb, lab_to_rgb, lab_to_xyz,
    rgb_array_to_lab, rgb_to_cmyk, rgb_to_hex, rgb_to_hsl, rgb_to_hsv, rgb_to_lab, rgb_to_xyz,
    xyz_to_lab,
)
from season_color.conversion.converter import (
    CONVERSIONS, ColorSpace, ColorSpaceConverter, convert, hue_warmth, lookup,
)
from season_color.errors import ColorEngineError, UnsupportedConversionError

GRID = range(0, 256, 51)


class _CountingLock:
    """Lock stand-in that counts how often it is entered."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.entries = 0

    def __enter__(self) -> "_CountingLock":
        self._lock.acquire()
        self.entries += 1
        return self

    def __exit__(self, *exc) -> None:
        self._lock.release()


# ---------------------------------------------------------------------------
# Lab / XYZ
# ---------------------------------------------------------------------------


class TestLab:
    """Tests for the sRGB -> XYZ -> Lab chain."""

    def test_white_is_lab_100(self) -> None:
        """White maps to L=100 with neutral a/b."""
        lab = rgb_to_lab(RGB(255, 255, 255))
        assert lab.l == pytest.approx(100.0, abs=0.5)
        assert lab.a == pytest.approx(0.0, abs=0.5)
        assert lab.b == pytest.approx(0.0, abs=0.5)

    def test_black_is_lab_0(self) -> None:
        lab = rgb_to_lab(RGB(0, 0, 0))
        assert lab == pytest.approx((0.0, 0.0, 0.0), abs=1e-6)

    def test_pure_red_reference_values(self) -> None:
        """sRGB red matches the published D65 Lab coordinates."""
        lab = rgb_to_lab(RGB(255, 0, 0))
        assert lab.l == pytest.approx(53.24, abs=0.1)
        assert lab.a == pytest.approx(80.09, abs=0.2)
        assert lab.b == pytest.approx(67.20, abs=0.2)

    def test_rgb_lab_round_trip_within_one(self) -> None:
        """RGB -> Lab -> RGB stays within one step per channel."""
        for r, g, b in itertools.product(GRID, GRID, GRID):
            back = lab_to_rgb(rgb_to_lab(RGB(r, g, b)))
            assert abs(back.r - r) <= 1
            assert abs(back.g - g) <= 1
            assert abs(back.b - b) <= 1

    def test_xyz_lab_round_trip(self) -> None:
        xyz = rgb_to_xyz(RGB(120, 200, 80))
        back = lab_to_xyz(xyz_to_lab(xyz))
        assert back == pytest.approx(tuple(xyz), abs=1e-9)

    def test_lightness_is_clamped(self) -> None:
        """Out-of-gamut XYZ never yields L outside [0, 100]."""
        assert xyz_to_lab(XYZ(200.0, 200.0, 200.0)).l == 100.0

    def test_out_of_gamut_lab_clamps_to_bytes(self) -> None:
        rgb = lab_to_rgb(Lab(50.0, 127.0, -128.0))
        assert all(0 <= c <= 255 for c in rgb)

    def test_vectorized_lab_matches_scalar(self) -> None:
        """The numpy path agrees with the scalar path."""
        pixels = np.array([[[255, 0, 0], [12, 200, 99]]], dtype=np.uint8)
        labs = rgb_array_to_lab(pixels)
        for i, px in enumerate(pixels[0]):
            expected = rgb_to_lab(RGB(*(int(v) for v in px)))
            assert tuple(float(v) for v in labs[0, i]) == pytest.approx(tuple(expected), abs=1e-6)


# ---------------------------------------------------------------------------
# HSL / HSV / CMYK / Kelvin / hex
# ---------------------------------------------------------------------------


class TestCylindricalSpaces:
    """Tests for HSL and HSV."""

    def test_red_to_hsl(self) -> None:
        assert rgb_to_hsl(RGB(255, 0, 0)) == pytest.approx((0.0, 100.0, 50.0))

    def test_blue_to_hsv(self) -> None:
        assert rgb_to_hsv(RGB(0, 0, 255)) == pytest.approx((240.0, 100.0, 100.0))

    def test_hsl_green(self) -> None:
        assert hsl_to_rgb(HSL(120.0, 100.0, 50.0)) == RGB(0, 255, 0)

    def test_gray_has_zero_saturation(self) -> None:
        hsl = rgb_to_hsl(RGB(128, 128, 128))
        assert hsl.h == 0.0
        assert hsl.s == 0.0

    def test_hue_360_wraps_to_zero(self) -> None:
        assert hsv_to_rgb(HSV(360.0, 100.0, 100.0)) == hsv_to_rgb(HSV(0.0, 100.0, 100.0))

    def test_hue_always_below_360(self) -> None:
        for r, g, b in itertools.product(GRID, GRID, GRID):
            assert 0.0 <= rgb_to_hsl(RGB(r, g, b)).h < 360.0
            assert 0.0 <= rgb_to_hsv(RGB(r, g, b)).h < 360.0

    def test_hsl_and_hsv_round_trip(self) -> None:
        for r, g, b in itertools.product(GRID, GRID, GRID):
            rgb = RGB(r, g, b)
            assert hsl_to_rgb(rgb_to_hsl(rgb)) == rgb
            assert hsv_to_rgb(rgb_to_hsv(rgb)) == rgb


class TestCmyk:
    """Tests for CMYK conversion."""

    def test_black_is_full_key(self) -> None:
        assert rgb_to_cmyk(RGB(0, 0, 0)) == CMYK(0.0, 0.0, 0.0, 100.0)

    def test_cyan(self) -> None:
        assert rgb_to_cmyk(RGB(0, 255, 255)) == pytest.approx((100.0, 0.0, 0.0, 0.0))

    def test_round_trip(self) -> None:
        rgb = RGB(200, 120, 40)
        assert cmyk_to_rgb(rgb_to_cmyk(rgb)) == rgb


class TestKelvinAndHex:
    """Tests for the one-way Kelvin approximation and hex helpers."""

    def test_6600k_is_white(self) -> None:
        assert kelvin_to_rgb(6600) == RGB(255, 255, 255)

    def test_candle_light_is_orange(self) -> None:
        rgb = kelvin_to_rgb(1000)
        assert rgb.r == 255
        assert rgb.b == 0
        assert rgb.g < rgb.r

    def test_kelvin_is_clamped(self) -> None:
        assert kelvin_to_rgb(500) == kelvin_to_rgb(1000)
        assert kelvin_to_rgb(90000) == kelvin_to_rgb(40000)

    def test_hex_round_trip(self) -> None:
        assert hex_to_rgb("#ff5733") == RGB(255, 87, 51)
        assert rgb_to_hex(RGB(255, 87, 51)) == "#FF5733"

    def test_bad_hex_raises(self) -> None:
        with pytest.raises(ValueError):
            hex_to_rgb("#FFF")


# ---------------------------------------------------------------------------
# Registry and converter
# ---------------------------------------------------------------------------


class TestRegistry:
    """Tests for the explicit (from, to) registry."""

    def test_no_conversion_targets_kelvin(self) -> None:
        assert all(dst is not ColorSpace.KELVIN for _, dst in CONVERSIONS)

    def test_every_value_space_reaches_lab(self) -> None:
        for space in (ColorSpace.RGB, ColorSpace.XYZ, ColorSpace.HSL, ColorSpace.HSV,
                      ColorSpace.CMYK, ColorSpace.KELVIN):
            assert lookup(space, ColorSpace.LAB) is not None

    def test_unknown_space_has_no_lookup(self) -> None:
        assert lookup("rgb", "pantone") is None

    def test_convert_to_kelvin_raises(self) -> None:
        with pytest.raises(UnsupportedConversionError) as exc:
            convert((255, 0, 0), "rgb", "kelvin")
        assert "rgb" in str(exc.value)
        assert "kelvin" in str(exc.value)

    def test_unsupported_is_engine_error(self) -> None:
        with pytest.raises(ColorEngineError):
            convert((1, 2, 3), "rgb", "pantone")

    def test_identity_returns_input(self) -> None:
        lab = Lab(50.0, 10.0, -10.0)
        assert convert(lab, ColorSpace.LAB, ColorSpace.LAB) == lab

    def test_string_names_accepted(self) -> None:
        assert convert((255, 255, 255), "RGB", "hsl") == HSL(0.0, 0.0, 100.0)

    def test_bare_tuple_is_coerced(self) -> None:
        assert convert((50.0, 0.0, 0.0), "lab", "rgb") == lab_to_rgb(Lab(50.0, 0.0, 0.0))

    def test_kelvin_to_lab_composes_through_rgb(self) -> None:
        assert convert(6600, "kelvin", "lab") == rgb_to_lab(RGB(255, 255, 255))


class TestConverter:
    """Tests for ColorSpaceConverter and its cache."""

    def test_batch_convert(self) -> None:
        conv = ColorSpaceConverter()
        out = conv.batch_convert([(255, 0, 0), (0, 0, 255)], "rgb", "hsv")
        assert [h.h for h in out] == pytest.approx([0.0, 240.0])

    def test_batch_convert_fails_before_work(self) -> None:
        conv = ColorSpaceConverter()
        with pytest.raises(UnsupportedConversionError):
            conv.batch_convert([(1, 2, 3)], "rgb", "kelvin")
        assert len(conv.cache) == 0

    def test_repeat_conversion_hits_cache(self) -> None:
        conv = ColorSpaceConverter()
        first = conv.rgb_to_lab((10, 20, 30))
        second = conv.rgb_to_lab((10, 20, 30))
        assert first == second
        assert conv.cache.hits == 1

    def test_cache_disabled(self) -> None:
        conv = ColorSpaceConverter(ConverterConfig(cache_size=0))
        conv.rgb_to_lab((10, 20, 30))
        conv.rgb_to_lab((10, 20, 30))
        assert len(conv.cache) == 0
        assert conv.cache.hits == 0

    def test_clear_cache(self) -> None:
        conv = ColorSpaceConverter()
        conv.rgb_to_lab((10, 20, 30))
        conv.clear_cache()
        assert len(conv.cache) == 0

    def test_color_info(self) -> None:
        info = ColorSpaceConverter().color_info((255, 0, 0))
        assert info["hex"] == "#FF0000"
        assert info["brightness"] == 76
        assert info["warmth"] == "warm"
        assert info["cmyk"] == pytest.approx((0.0, 100.0, 100.0, 0.0))


class TestLRUCache:
    """Tests for the bounded LRU cache."""

    def test_evicts_least_recently_used(self) -> None:
        cache = LRUCache(2)
        cache.put("a", 1)
        cache.put("b", 2)
        cache.get("a")
        cache.put("c", 3)
        assert "a" in cache
        assert "b" not in cache
        assert "c" in cache

    def test_miss_returns_none(self) -> None:
        cache = LRUCache(2)
        assert cache.get("missing") is None
        assert cache.stats()["misses"] == 1

    def test_negative_capacity_rejected(self) -> None:
        with pytest.raises(ValueError):
            LRUCache(-1)

    def test_size_and_membership_take_the_lock(self) -> None:
        cache = LRUCache(2)
        cache.put("a", 1)
        lock = _CountingLock()
        cache._lock = lock
        assert len(cache) == 1
        assert "a" in cache
        cache.stats()
        assert lock.entries == 3


class TestHueWarmth:
    """Tests for the color-wheel warmth label."""

    @pytest.mark.parametrize(
        ("hue", "label"),
        [(0.0, "warm"), (45.0, "warm"), (330.0, "warm"), (90.0, "neutral"), (180.0, "cool"), (270.0, "neutral")],
    )
    def test_labels(self, hue: float, label: str) -> None:
        assert hue_warmth(hue) == label
