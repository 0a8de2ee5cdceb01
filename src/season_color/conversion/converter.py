# src/season_color/conversion/converter.py
"""
Explicit conversion registry and the cached converter front-end.

Every supported (from, to) pair maps to a function reference in
CONVERSIONS. Pairs without a direct formula are composed through RGB.
Nothing converts *to* Kelvin: the temperature approximation is one-way.
"""

from __future__ import annotations
import logging
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from season_color.config import ConverterConfig
from season_color.conversion.cache import LRUCache
from season_color.conversion.color_spaces import (
    CMYK, HSL, HSV, RGB, XYZ, Lab,
    cmyk_to_rgb, hsl_to_rgb, hsv_to_rgb, kelvin_to_rgb, lab_to_rgb, lab_to_xyz,
    rgb_to_cmyk, rgb_to_hex, rgb_to_hsl, rgb_to_hsv, rgb_to_lab, rgb_to_xyz,
    xyz_to_lab, xyz_to_rgb,
)
from season_color.errors import UnsupportedConversionError

logger = logging.getLogger(__name__)


class ColorSpace(str, Enum):
    RGB = "rgb"
    XYZ = "xyz"
    LAB = "lab"
    HSL = "hsl"
    HSV = "hsv"
    CMYK = "cmyk"
    KELVIN = "kelvin"


Color = Union[RGB, XYZ, Lab, HSL, HSV, CMYK, float]

VALUE_TYPES: Dict[ColorSpace, Callable[..., Any]] = {
    ColorSpace.RGB: RGB,
    ColorSpace.XYZ: XYZ,
    ColorSpace.LAB: Lab,
    ColorSpace.HSL: HSL,
    ColorSpace.HSV: HSV,
    ColorSpace.CMYK: CMYK,
}

# Direct formulas
_TO_RGB: Dict[ColorSpace, Callable[[Any], RGB]] = {
    ColorSpace.XYZ: xyz_to_rgb,
    ColorSpace.LAB: lab_to_rgb,
    ColorSpace.HSL: hsl_to_rgb,
    ColorSpace.HSV: hsv_to_rgb,
    ColorSpace.CMYK: cmyk_to_rgb,
    ColorSpace.KELVIN: kelvin_to_rgb,
}

_FROM_RGB: Dict[ColorSpace, Callable[[RGB], Any]] = {
    ColorSpace.XYZ: rgb_to_xyz,
    ColorSpace.LAB: rgb_to_lab,
    ColorSpace.HSL: rgb_to_hsl,
    ColorSpace.HSV: rgb_to_hsv,
    ColorSpace.CMYK: rgb_to_cmyk,
}

# Exact float paths that must not round-trip through 8-bit RGB
_DIRECT: Dict[Tuple[ColorSpace, ColorSpace], Callable[[Any], Any]] = {
    (ColorSpace.XYZ, ColorSpace.LAB): xyz_to_lab,
    (ColorSpace.LAB, ColorSpace.XYZ): lab_to_xyz,
}


def _compose(first: Callable, second: Callable) -> Callable:
    def composed(color):
        return second(first(color))
    composed.__name__ = f"{first.__name__}__{second.__name__}"
    return composed


def _build_registry() -> Dict[Tuple[ColorSpace, ColorSpace], Callable[[Any], Any]]:
    registry: Dict[Tuple[ColorSpace, ColorSpace], Callable[[Any], Any]] = {}
    for space, fn in _TO_RGB.items():
        registry[(space, ColorSpace.RGB)] = fn
    for space, fn in _FROM_RGB.items():
        registry[(ColorSpace.RGB, space)] = fn
    for src, to_rgb in _TO_RGB.items():
        for dst, from_rgb in _FROM_RGB.items():
            if src != dst:
                registry[(src, dst)] = _compose(to_rgb, from_rgb)
    registry.update(_DIRECT)
    return registry


CONVERSIONS = _build_registry()


def _as_space(space: Union[ColorSpace, str]) -> Optional[ColorSpace]:
    if isinstance(space, ColorSpace):
        return space
    try:
        return ColorSpace(str(space).lower())
    except ValueError:
        return None


def _space_name(space: Union[ColorSpace, str]) -> str:
    return space.value if isinstance(space, ColorSpace) else str(space)


def coerce(color: Any, space: ColorSpace) -> Color:
    """Wrap a bare tuple/list (or number, for Kelvin) in the space's value type."""
    if space is ColorSpace.KELVIN:
        return float(color)
    value_type = VALUE_TYPES[space]
    if isinstance(color, value_type):
        return color
    return value_type(*color)


def lookup(from_space: Union[ColorSpace, str], to_space: Union[ColorSpace, str]) -> Optional[Callable]:
    """Registered function for a pair, the identity for same-space, else None."""
    src, dst = _as_space(from_space), _as_space(to_space)
    if src is None or dst is None:
        return None
    if src == dst:
        return lambda c: c
    return CONVERSIONS.get((src, dst))


def supported_pairs() -> List[Tuple[ColorSpace, ColorSpace]]:
    return sorted(CONVERSIONS, key=lambda p: (p[0].value, p[1].value))


# ----------------------- Converter -----------------------

class ColorSpaceConverter:
    """
    Front-end over the registry with an optional instance-owned LRU cache.

    The cache is keyed by (from, to, exact input tuple) and guarded by a lock,
    so one converter may be shared between threads. Pass cache_size=0 (or a
    ConverterConfig with cache_size=0) for fully uncached, deterministic runs.
    """

    def __init__(self, config: Optional[ConverterConfig] = None, cache: Optional[LRUCache] = None):
        self.cfg = config or ConverterConfig()
        self.cache = cache if cache is not None else LRUCache(self.cfg.cache_size)

    def convert(self, color: Any, from_space: Union[ColorSpace, str], to_space: Union[ColorSpace, str]) -> Color:
        fn = lookup(from_space, to_space)
        if fn is None:
            logger.debug("No conversion registered for %s -> %s", from_space, to_space)
            raise UnsupportedConversionError(_space_name(from_space), _space_name(to_space))

        src, dst = _as_space(from_space), _as_space(to_space)
        value = coerce(color, src)
        key = (src, dst, value)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        result = fn(value)
        self.cache.put(key, result)
        return result

    def batch_convert(self, colors: Iterable[Any], from_space: Union[ColorSpace, str],
                      to_space: Union[ColorSpace, str]) -> List[Color]:
        # Resolve once so an unsupported pair fails before any work is done
        if lookup(from_space, to_space) is None:
            raise UnsupportedConversionError(_space_name(from_space), _space_name(to_space))
        return [self.convert(c, from_space, to_space) for c in colors]

    def rgb_to_lab(self, rgb: Sequence[int]) -> Lab:
        return self.convert(rgb, ColorSpace.RGB, ColorSpace.LAB)

    def lab_to_rgb(self, lab: Sequence[float]) -> RGB:
        return self.convert(lab, ColorSpace.LAB, ColorSpace.RGB)

    def color_info(self, rgb: Sequence[int]) -> Dict[str, Any]:
        """Summary of one color in every space, for report and UI layers."""
        rgb = coerce(rgb, ColorSpace.RGB)
        hsl = self.convert(rgb, ColorSpace.RGB, ColorSpace.HSL)
        hsv = self.convert(rgb, ColorSpace.RGB, ColorSpace.HSV)
        return {
            "rgb": rgb,
            "lab": self.convert(rgb, ColorSpace.RGB, ColorSpace.LAB),
            "hsl": hsl,
            "hsv": hsv,
            "cmyk": self.convert(rgb, ColorSpace.RGB, ColorSpace.CMYK),
            "hex": rgb_to_hex(rgb),
            "brightness": round(rgb.r * 0.299 + rgb.g * 0.587 + rgb.b * 0.114),
            "warmth": hue_warmth(hsl.h),
            "saturation": hsv.s,
            "lightness": hsl.l,
        }

    def clear_cache(self) -> None:
        self.cache.clear()


def hue_warmth(hue: float) -> str:
    """Color-wheel temperature: reds/oranges/yellows warm, greens/blues cool."""
    if 0 <= hue <= 60 or hue >= 300:
        return "warm"
    if 120 <= hue <= 240:
        return "cool"
    return "neutral"


_default_converter = ColorSpaceConverter()


def convert(color: Any, from_space: Union[ColorSpace, str], to_space: Union[ColorSpace, str]) -> Color:
    """Module-level convert() backed by a shared, lock-guarded converter."""
    return _default_converter.convert(color, from_space, to_space)
