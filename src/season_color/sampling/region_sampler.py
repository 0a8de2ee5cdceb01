# src/season_color/sampling/region_sampler.py
"""
Region sampler: image region -> one representative RGB sample.

Pipeline:
  load (Pillow, RGB uint8) → optional Gray-World WB in linear light
  → crop region → lightweight skin mask (YCrCb ∩ HSV, median smoothed)
  → mean of kept pixels in linear light → back to sRGB → Lab
"""

from __future__ import annotations
import os
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

import cv2
import numpy as np
from PIL import Image

from season_color.classification.aggregate import classify_group
from season_color.config import SamplerConfig, configure_logging
from season_color.conversion.color_spaces import RGB, Lab, linear_to_srgb, rgb_to_lab, srgb_to_linear
from season_color.errors import InvalidInputError

logger = logging.getLogger(__name__)


# ----------------------- Types -----------------------

@dataclass(frozen=True)
class Region:
    x: int
    y: int
    width: int
    height: int
    name: str = "region"

    def clip(self, shape: Tuple[int, ...]) -> Tuple[int, int, int, int]:
        """(x0, y0, x1, y1) clamped to an image of the given (h, w, ...) shape."""
        h, w = shape[:2]
        x0, y0 = max(0, self.x), max(0, self.y)
        x1, y1 = min(w, self.x + self.width), min(h, self.y + self.height)
        return x0, y0, x1, y1


@dataclass(frozen=True)
class RegionSample:
    rgb: RGB
    lab: Lab
    pixel_count: int
    masked: bool         # False when the skin mask was skipped or too sparse


# ----------------------- Image helpers -----------------------

def load_image(path: Union[str, Path]) -> np.ndarray:
    """Any Pillow-readable file -> (H, W, 3) uint8 RGB."""
    with Image.open(path) as im:
        return np.asarray(im.convert("RGB"), dtype=np.uint8)


def skin_mask(rgb_u8: np.ndarray, cfg: Optional[SamplerConfig] = None) -> np.ndarray:
    """
    Very lightweight skin mask (intersection of YCrCb and HSV rules), median smoothed.
    Returns uint8 mask {0,255}.
    """
    cfg = cfg or SamplerConfig()
    rgb_u8 = np.ascontiguousarray(rgb_u8)

    # YCrCb rule
    ycrcb = cv2.cvtColor(rgb_u8, cv2.COLOR_RGB2YCrCb)
    _, Cr, Cb = cv2.split(ycrcb)
    m1 = (Cr >= cfg.cr_min) & (Cr <= cfg.cr_max) & (Cb >= cfg.cb_min) & (Cb <= cfg.cb_max)

    # HSV rule (avoid very low saturation and extremes)
    hsv = cv2.cvtColor(rgb_u8, cv2.COLOR_RGB2HSV)
    _, S, V = cv2.split(hsv)
    m2 = (S >= cfg.s_min) & (V >= cfg.v_min) & (V <= cfg.v_max)

    mask = (m1 & m2).astype(np.uint8) * 255
    if mask.mean() > 0:
        mask = cv2.medianBlur(mask, cfg.median_ksize)
    return mask


def gray_world_balance(rgb_u8: np.ndarray, clip: float = 1.8) -> np.ndarray:
    """Gray-World white balance in linear light; per-channel gains capped at [1/clip, clip]."""
    lin = srgb_to_linear(rgb_u8)
    mean = lin.reshape(-1, 3).mean(axis=0)
    gains = mean.mean() / (mean + 1e-8)
    gains = np.clip(gains, 1.0 / clip, clip)
    return linear_to_srgb(np.clip(lin * gains, 0.0, 1.0))


# ----------------------- Sampling -----------------------

def sample_region(rgb_u8: np.ndarray, region: Optional[Region] = None, use_skin_mask: bool = True,
                  white_balance: bool = False, cfg: Optional[SamplerConfig] = None) -> RegionSample:
    """
    Average one region of an RGB image into a single color.

    Pixels are averaged in linear light. When the skin mask keeps fewer than
    cfg.min_skin_fraction of the region, every pixel in the region is used.
    """
    cfg = cfg or SamplerConfig()
    if rgb_u8.ndim != 3 or rgb_u8.shape[2] != 3:
        raise InvalidInputError(f"expected an (H, W, 3) RGB array, got shape {rgb_u8.shape}")
    img = rgb_u8.astype(np.uint8, copy=False)

    if white_balance:
        img = gray_world_balance(img, cfg.wb_gain_clip)

    if region is None:
        region = Region(0, 0, img.shape[1], img.shape[0], name="full")
    x0, y0, x1, y1 = region.clip(img.shape)
    if x1 <= x0 or y1 <= y0:
        raise InvalidInputError(f"{region.name} is empty after clipping to image {img.shape[1]}x{img.shape[0]}")
    crop = img[y0:y1, x0:x1]

    pixels = crop.reshape(-1, 3)
    masked = False
    if use_skin_mask:
        keep = skin_mask(crop, cfg).reshape(-1) > 0
        if keep.mean() >= cfg.min_skin_fraction:
            pixels = pixels[keep]
            masked = True
        else:
            logger.debug("%s: skin mask kept %.1f%% of pixels, using whole region",
                         region.name, 100.0 * keep.mean())

    mean_lin = srgb_to_linear(pixels).mean(axis=0)
    r, g, b = (int(v) for v in linear_to_srgb(mean_lin))
    rgb = RGB(r, g, b)
    return RegionSample(rgb=rgb, lab=rgb_to_lab(rgb), pixel_count=int(pixels.shape[0]), masked=masked)


# ----------------------- Batch driver -----------------------

def main():
    # Sample every image in data/raw/ and print one group verdict per file
    root = Path(__file__).resolve().parents[3]
    raw_dir = root / "data" / "raw"
    configure_logging()

    cfg = SamplerConfig()
    if not raw_dir.is_dir():
        print(f"[WARN] No input directory {raw_dir}")
        return

    for fname in sorted(os.listdir(raw_dir)):
        if not fname.lower().endswith((".jpg", ".jpeg", ".png", ".bmp", ".tiff")):
            continue
        ipath = raw_dir / fname
        try:
            img = load_image(ipath)
        except OSError:
            print(f"[WARN] Could not read {ipath}")
            continue

        # centre third of the frame stands in for the cheek/forehead area
        h, w = img.shape[:2]
        center = Region(w // 3, h // 3, max(1, w // 3), max(1, h // 3), name="center")
        sample = sample_region(img, center, white_balance=True, cfg=cfg)
        verdict = classify_group([sample.rgb])
        print(f"[OK] {fname} -> {verdict.dominant_season} | confidence={verdict.confidence:.1f}")
        print(json.dumps(verdict.to_dict(), indent=2))


if __name__ == "__main__":
    main()
