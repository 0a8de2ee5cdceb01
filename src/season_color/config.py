# src/season_color/config.py
"""
Tunable parameters for conversion, classification and sampling.

All thresholds live here so a consultant-facing app can adjust them without
touching the algorithms. Defaults reproduce the reference behaviour.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Tuple


# Explicit season iteration order; also the tie-break order everywhere.
SEASON_ORDER: Tuple[str, ...] = ("spring", "summer", "autumn", "winter")


# ----------------------- Conversion -----------------------

@dataclass
class ConverterConfig:
    cache_size: int = 1000             # 0 disables memoization


# ----------------------- Classification -----------------------

@dataclass
class ClassifierConfig:
    # Warmth vote (a): RGB ratio test
    warm_red_green_ratio: float = 1.1  # r / (g + 1)
    warm_red_blue_ratio: float = 1.3   # r / (b + 1)

    # Warmth vote (b): Lab sign test
    warm_min_a: float = 5.0
    warm_min_b: float = 10.0

    # Warmth vote (c): ab hue-angle window (degrees, inclusive)
    warm_hue_min: float = 30.0
    warm_hue_max: float = 120.0

    # Warmth vote (d): chroma magnitude
    warm_min_chroma: float = 15.0

    # Votes needed for "warm"; a single vote reads as neutral
    warm_votes_required: int = 2

    # Tone bucket: "hsl" uses HSL saturation x 100, "chroma" uses Lab C*
    tone_saturation: str = "hsl"
    tone_max_distance: float = 50.0    # distance at which bucket confidence hits 0

    def __post_init__(self):
        if self.tone_saturation not in ("hsl", "chroma"):
            raise ValueError(f"tone_saturation must be 'hsl' or 'chroma', got {self.tone_saturation!r}")
        if self.tone_max_distance <= 0:
            raise ValueError("tone_max_distance must be positive")


# ----------------------- Sampling -----------------------

@dataclass
class SamplerConfig:
    # Skin mask (YCrCb + HSV union rule, OpenCV 8-bit ranges)
    cr_min: int = 135
    cr_max: int = 180
    cb_min: int = 85
    cb_max: int = 135
    s_min: int = 40
    v_min: int = 35
    v_max: int = 240
    median_ksize: int = 5

    min_skin_fraction: float = 0.10    # below this, average the whole region
    wb_gain_clip: float = 1.8          # gray-world gain cap


# ----------------------- Logging -----------------------

def configure_logging(level: int = logging.INFO) -> None:
    """Attach a basic stderr handler to the package logger."""
    logger = logging.getLogger("season_color")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(level)
