"""Tests for image region sampling."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from season_color.config import SamplerConfig
from season_color.conversion.color_spaces import RGB, rgb_to_lab
from season_color.errors import InvalidInputError
from season_color.sampling.region_sampler import (
    Region, gray_world_balance, load_image, sample_region, skin_mask,
)


class TestRegion:
    """Tests for region clipping."""

    def test_clip_to_image(self) -> None:
        assert Region(-5, -5, 10, 10).clip((20, 20, 3)) == (0, 0, 5, 5)
        assert Region(15, 15, 10, 10).clip((20, 20, 3)) == (15, 15, 20, 20)


class TestSkinMask:
    """Tests for the YCrCb/HSV skin mask."""

    def test_skin_half_only(self, skin_and_blue_image: np.ndarray) -> None:
        mask = skin_mask(skin_and_blue_image)
        assert mask.shape == (40, 40)
        assert mask.dtype == np.uint8
        assert (mask[:, :18] == 255).all()
        assert (mask[:, 22:] == 0).all()

    def test_no_skin(self) -> None:
        img = np.full((10, 10, 3), (0, 0, 255), dtype=np.uint8)
        assert skin_mask(img).max() == 0


class TestSampleRegion:
    """Tests for region averaging."""

    def test_uniform_region(self) -> None:
        img = np.full((20, 20, 3), (200, 150, 120), dtype=np.uint8)
        sample = sample_region(img, Region(2, 2, 10, 10), use_skin_mask=False)
        assert sample.rgb == RGB(200, 150, 120)
        assert sample.pixel_count == 100
        assert sample.lab == rgb_to_lab(RGB(200, 150, 120))
        assert sample.masked is False

    def test_mask_keeps_skin_pixels(self, skin_and_blue_image: np.ndarray) -> None:
        sample = sample_region(skin_and_blue_image)
        assert sample.masked is True
        assert sample.rgb == RGB(220, 170, 140)
        assert sample.pixel_count == 40 * 20

    def test_without_mask_mixes_colors(self, skin_and_blue_image: np.ndarray) -> None:
        sample = sample_region(skin_and_blue_image, use_skin_mask=False)
        assert sample.rgb != RGB(220, 170, 140)
        assert sample.pixel_count == 40 * 40

    def test_sparse_mask_falls_back_to_region(self) -> None:
        img = np.full((20, 20, 3), (0, 0, 255), dtype=np.uint8)
        sample = sample_region(img, cfg=SamplerConfig(min_skin_fraction=0.5))
        assert sample.masked is False
        assert sample.rgb == RGB(0, 0, 255)

    def test_empty_region_raises(self) -> None:
        img = np.zeros((20, 20, 3), dtype=np.uint8)
        with pytest.raises(InvalidInputError):
            sample_region(img, Region(50, 50, 10, 10))

    def test_wrong_shape_raises(self) -> None:
        with pytest.raises(InvalidInputError):
            sample_region(np.zeros((20, 20), dtype=np.uint8))


class TestWhiteBalance:
    """Tests for Gray-World balancing."""

    def test_neutral_image_unchanged(self) -> None:
        img = np.full((8, 8, 3), 128, dtype=np.uint8)
        np.testing.assert_array_equal(gray_world_balance(img), img)

    def test_cast_is_reduced(self) -> None:
        img = np.full((8, 8, 3), (200, 100, 100), dtype=np.uint8)
        out = gray_world_balance(img)
        r, g, b = (int(v) for v in out[0, 0])
        assert r < 200
        assert g > 100
        assert g == b


class TestLoadImage:
    """Tests for Pillow-based loading."""

    def test_png_round_trip(self, tmp_path: Path) -> None:
        arr = np.zeros((6, 4, 3), dtype=np.uint8)
        arr[..., 0] = 250
        path = tmp_path / "face.png"
        Image.fromarray(arr).save(path)

        loaded = load_image(path)
        assert loaded.shape == (6, 4, 3)
        assert loaded.dtype == np.uint8
        np.testing.assert_array_equal(loaded, arr)

    def test_rgba_is_flattened_to_rgb(self, tmp_path: Path) -> None:
        path = tmp_path / "alpha.png"
        Image.new("RGBA", (3, 3), (10, 20, 30, 128)).save(path)
        loaded = load_image(path)
        assert loaded.shape == (3, 3, 3)
        assert tuple(loaded[0, 0]) == (10, 20, 30)
