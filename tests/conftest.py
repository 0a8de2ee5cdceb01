"""Shared pytest fixtures for the color engine tests."""

from __future__ import annotations

import numpy as np
import pytest

from season_color.classification.season_classifier import SeasonClassifier
from season_color.config import ClassifierConfig, ConverterConfig
from season_color.conversion.color_spaces import Lab
from season_color.conversion.converter import ColorSpaceConverter
from season_color.palette.reference_palette import ReferencePalette, ReferencePoint, default_palette


@pytest.fixture
def palette() -> ReferencePalette:
    """The built-in four-season palette."""
    return default_palette()


@pytest.fixture
def fixture_palette() -> ReferencePalette:
    """One well-separated reference point per season."""
    return ReferencePalette(
        points=(
            ReferencePoint("spring", Lab(70.0, 10.0, 15.0), "spring ref", "warm_spring"),
            ReferencePoint("summer", Lab(72.0, 5.0, -10.0), "summer ref", "cool_summer"),
            ReferencePoint("autumn", Lab(80.0, 0.0, 80.0), "autumn ref", "warm_autumn"),
            ReferencePoint("winter", Lab(30.0, 20.0, -40.0), "winter ref", "deep_winter"),
        ),
        tones=default_palette().tones,
    )


@pytest.fixture
def tied_palette() -> ReferencePalette:
    """Spring and summer share an identical reference point."""
    shared = Lab(65.0, 10.0, 12.0)
    return ReferencePalette(
        points=(
            ReferencePoint("spring", shared, "spring ref"),
            ReferencePoint("summer", shared, "summer ref"),
            ReferencePoint("autumn", Lab(40.0, 20.0, 40.0), "autumn ref"),
            ReferencePoint("winter", Lab(30.0, 20.0, -40.0), "winter ref"),
        ),
        tones=default_palette().tones,
    )


@pytest.fixture
def classifier(palette: ReferencePalette) -> SeasonClassifier:
    """Classifier over the built-in palette with an uncached converter."""
    return SeasonClassifier(palette, ClassifierConfig(), ColorSpaceConverter(ConverterConfig(cache_size=0)))


@pytest.fixture
def skin_and_blue_image() -> np.ndarray:
    """40x40 RGB image: left half skin tone, right half pure blue."""
    img = np.zeros((40, 40, 3), dtype=np.uint8)
    img[:, :20] = (220, 170, 140)
    img[:, 20:] = (0, 0, 255)
    return img
