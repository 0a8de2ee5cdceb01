# src/season_color/conversion/color_spaces.py
"""
Pure color-space conversions.

    RGB <-> XYZ <-> CIE L*a*b*     (sRGB companding, D65 white)
    RGB <-> HSL, RGB <-> HSV, RGB <-> CMYK
    Kelvin -> RGB                   (one-way, lighting simulation only)

Scalar functions take and return small NamedTuples and never raise for finite
input: results are clamped to their legal range. The numpy helpers at the
bottom do the same work on whole pixel arrays for the region sampler.
"""

from __future__ import annotations
import math
from typing import NamedTuple

import numpy as np


# ----------------------- Color value types -----------------------

class RGB(NamedTuple):
    r: int
    g: int
    b: int


class XYZ(NamedTuple):
    x: float
    y: float
    z: float


class Lab(NamedTuple):
    l: float
    a: float
    b: float


class HSL(NamedTuple):
    h: float   # [0, 360)
    s: float   # [0, 100]
    l: float   # [0, 100]


class HSV(NamedTuple):
    h: float   # [0, 360)
    s: float   # [0, 100]
    v: float   # [0, 100]


class CMYK(NamedTuple):
    c: float
    m: float
    y: float
    k: float


# ----------------------- Constants -----------------------

# D65 reference white, CIE 1931 2° observer, Y scaled to 100
D65_WHITE = XYZ(95.047, 100.000, 108.883)

SRGB_TO_XYZ = np.array([
    [0.4124564, 0.3575761, 0.1804375],
    [0.2126729, 0.7151522, 0.0721750],
    [0.0193339, 0.1191920, 0.9503041],
])

XYZ_TO_SRGB = np.array([
    [ 3.2404542, -1.5371385, -0.4985314],
    [-0.9692660,  1.8760108,  0.0415560],
    [ 0.0556434, -0.2040259,  1.0572252],
])

DECODE_THRESHOLD = 0.04045
ENCODE_THRESHOLD = 0.0031308

_DELTA = 6.0 / 29.0


# ----------------------- Small helpers -----------------------

def _clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else hi if x > hi else x


def _to_byte(x: float) -> int:
    """0..1 float -> clamped 0..255 int."""
    return int(_clamp(round(x * 255.0), 0, 255))


def _normalize_hue(h: float) -> float:
    h = h % 360.0
    # -1e-17 % 360 == 360.0 in floating point
    return 0.0 if h >= 360.0 else h


def _hue_from_channels(r: float, g: float, b: float, mx: float, diff: float) -> float:
    """Six-branch hue from normalized channels, in degrees."""
    if diff == 0:
        return 0.0
    if mx == r:
        h = (g - b) / diff + (6.0 if g < b else 0.0)
    elif mx == g:
        h = (b - r) / diff + 2.0
    else:
        h = (r - g) / diff + 4.0
    return _normalize_hue(h * 60.0)


def lab_chroma(lab: Lab) -> float:
    """C*ab = sqrt(a² + b²)."""
    return math.hypot(lab.a, lab.b)


def lab_hue(lab: Lab) -> float:
    """ab hue angle in degrees, [0, 360)."""
    if lab.a == 0 and lab.b == 0:
        return 0.0
    return _normalize_hue(math.degrees(math.atan2(lab.b, lab.a)))


# ----------------------- sRGB <-> XYZ -----------------------

def srgb_decode(c: float) -> float:
    """Companded sRGB channel (0..1) -> linear light."""
    return c / 12.92 if c <= DECODE_THRESHOLD else ((c + 0.055) / 1.055) ** 2.4


def srgb_encode(c: float) -> float:
    """Linear light -> companded sRGB channel (0..1)."""
    if c <= ENCODE_THRESHOLD:
        return 12.92 * c
    return 1.055 * (c ** (1.0 / 2.4)) - 0.055


def rgb_to_xyz(rgb: RGB) -> XYZ:
    lin = [srgb_decode(_clamp(c, 0, 255) / 255.0) for c in rgb]
    x, y, z = (SRGB_TO_XYZ @ np.array(lin)) * 100.0
    return XYZ(float(x), float(y), float(z))


def xyz_to_rgb(xyz: XYZ) -> RGB:
    lin = XYZ_TO_SRGB @ (np.array(xyz, dtype=float) / 100.0)
    # negative linear values are out of gamut; clamp before the power curve
    r, g, b = (srgb_encode(max(0.0, float(c))) for c in lin)
    return RGB(_to_byte(r), _to_byte(g), _to_byte(b))


# ----------------------- XYZ <-> Lab -----------------------

def lab_f(t: float) -> float:
    """CIE f(t): cube root above (6/29)³, linear segment below."""
    if t > _DELTA ** 3:
        return t ** (1.0 / 3.0)
    return t / (3.0 * _DELTA ** 2) + 4.0 / 29.0


def lab_f_inv(t: float) -> float:
    if t > _DELTA:
        return t ** 3
    return 3.0 * _DELTA ** 2 * (t - 4.0 / 29.0)


def xyz_to_lab(xyz: XYZ, white: XYZ = D65_WHITE) -> Lab:
    fx = lab_f(xyz.x / white.x)
    fy = lab_f(xyz.y / white.y)
    fz = lab_f(xyz.z / white.z)
    L = _clamp(116.0 * fy - 16.0, 0.0, 100.0)
    return Lab(L, 500.0 * (fx - fy), 200.0 * (fy - fz))


def lab_to_xyz(lab: Lab, white: XYZ = D65_WHITE) -> XYZ:
    fy = (lab.l + 16.0) / 116.0
    fx = fy + lab.a / 500.0
    fz = fy - lab.b / 200.0
    return XYZ(lab_f_inv(fx) * white.x, lab_f_inv(fy) * white.y, lab_f_inv(fz) * white.z)


def rgb_to_lab(rgb: RGB) -> Lab:
    return xyz_to_lab(rgb_to_xyz(rgb))


def lab_to_rgb(lab: Lab) -> RGB:
    return xyz_to_rgb(lab_to_xyz(lab))


# ----------------------- RGB <-> HSL / HSV -----------------------

def rgb_to_hsl(rgb: RGB) -> HSL:
    r, g, b = (_clamp(c, 0, 255) / 255.0 for c in rgb)
    mx, mn = max(r, g, b), min(r, g, b)
    diff, total = mx - mn, mx + mn
    l = total / 2.0
    if diff == 0:
        return HSL(0.0, 0.0, l * 100.0)
    s = diff / (2.0 - total) if l > 0.5 else diff / total
    return HSL(_hue_from_channels(r, g, b, mx, diff), _clamp(s, 0.0, 1.0) * 100.0, l * 100.0)


def _hue_to_channel(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def hsl_to_rgb(hsl: HSL) -> RGB:
    h = _normalize_hue(hsl.h) / 360.0
    s = _clamp(hsl.s, 0.0, 100.0) / 100.0
    l = _clamp(hsl.l, 0.0, 100.0) / 100.0
    if s == 0:
        gray = _to_byte(l)
        return RGB(gray, gray, gray)
    q = l * (1 + s) if l < 0.5 else l + s - l * s
    p = 2 * l - q
    return RGB(_to_byte(_hue_to_channel(p, q, h + 1 / 3)),
               _to_byte(_hue_to_channel(p, q, h)),
               _to_byte(_hue_to_channel(p, q, h - 1 / 3)))


def rgb_to_hsv(rgb: RGB) -> HSV:
    r, g, b = (_clamp(c, 0, 255) / 255.0 for c in rgb)
    mx, mn = max(r, g, b), min(r, g, b)
    diff = mx - mn
    s = 0.0 if mx == 0 else diff / mx
    return HSV(_hue_from_channels(r, g, b, mx, diff), s * 100.0, mx * 100.0)


def hsv_to_rgb(hsv: HSV) -> RGB:
    h = _normalize_hue(hsv.h) / 360.0
    s = _clamp(hsv.s, 0.0, 100.0) / 100.0
    v = _clamp(hsv.v, 0.0, 100.0) / 100.0

    i = int(math.floor(h * 6))
    f = h * 6 - i
    p = v * (1 - s)
    q = v * (1 - f * s)
    t = v * (1 - (1 - f) * s)

    r, g, b = [
        (v, t, p),
        (q, v, p),
        (p, v, t),
        (p, q, v),
        (t, p, v),
        (v, p, q),
    ][i % 6]
    return RGB(_to_byte(r), _to_byte(g), _to_byte(b))


# ----------------------- RGB <-> CMYK -----------------------

def rgb_to_cmyk(rgb: RGB) -> CMYK:
    r, g, b = (_clamp(c, 0, 255) / 255.0 for c in rgb)
    k = 1.0 - max(r, g, b)
    if k >= 1.0:
        return CMYK(0.0, 0.0, 0.0, 100.0)
    c = (1.0 - r - k) / (1.0 - k)
    m = (1.0 - g - k) / (1.0 - k)
    y = (1.0 - b - k) / (1.0 - k)
    return CMYK(*(_clamp(v * 100.0, 0.0, 100.0) for v in (c, m, y, k)))


def cmyk_to_rgb(cmyk: CMYK) -> RGB:
    c, m, y, k = (_clamp(v, 0.0, 100.0) / 100.0 for v in cmyk)
    return RGB(_to_byte((1 - c) * (1 - k)),
               _to_byte((1 - m) * (1 - k)),
               _to_byte((1 - y) * (1 - k)))


# ----------------------- Kelvin -> RGB -----------------------

def kelvin_to_rgb(kelvin: float) -> RGB:
    """
    Approximate RGB tint of a black-body light source (1000K..40000K).
    Not invertible; used to simulate salon lighting, never for classification.
    """
    temp = _clamp(kelvin, 1000.0, 40000.0) / 100.0

    if temp <= 66:
        r = 255.0
        g = 99.4708025861 * math.log(temp) - 161.1195681661
    else:
        r = 329.698727446 * ((temp - 60) ** -0.1332047592)
        g = 288.1221695283 * ((temp - 60) ** -0.0755148492)

    if temp >= 66:
        b = 255.0
    elif temp <= 19:
        b = 0.0
    else:
        b = 138.5177312231 * math.log(temp - 10) - 305.0447927307

    return RGB(*(int(_clamp(round(c), 0, 255)) for c in (r, g, b)))


# ----------------------- Hex -----------------------

def hex_to_rgb(hex_code: str) -> RGB:
    """Convert hex string (e.g., '#FF5733') to an RGB tuple."""
    hex_code = hex_code.strip().lstrip("#")
    if len(hex_code) != 6:
        raise ValueError(f"Expected #RRGGBB, got {hex_code!r}")
    return RGB(*(int(hex_code[i:i+2], 16) for i in (0, 2, 4)))


def rgb_to_hex(rgb: RGB) -> str:
    """Convert an RGB tuple to a hex color code."""
    r, g, b = (int(_clamp(round(c), 0, 255)) for c in rgb)
    return f"#{r:02X}{g:02X}{b:02X}"


# ----------------------- Array helpers (numpy) -----------------------

def srgb_to_linear(img_u8: np.ndarray) -> np.ndarray:
    """uint8 sRGB (0..255) -> linear (0..1)."""
    x = img_u8.astype(np.float64) / 255.0
    return np.where(x <= DECODE_THRESHOLD, x / 12.92, ((x + 0.055) / 1.055) ** 2.4)


def linear_to_srgb(img_lin: np.ndarray) -> np.ndarray:
    """linear (0..1) -> uint8 sRGB (0..255)."""
    x = np.clip(img_lin, 0.0, 1.0)
    x = np.where(x <= ENCODE_THRESHOLD, 12.92 * x, 1.055 * (x ** (1 / 2.4)) - 0.055)
    return np.clip(np.round(x * 255.0), 0, 255).astype(np.uint8)


def rgb_array_to_lab(rgb_u8: np.ndarray) -> np.ndarray:
    """(..., 3) uint8 RGB -> (..., 3) float Lab, same math as rgb_to_lab."""
    lin = srgb_to_linear(rgb_u8)
    xyz = (lin @ SRGB_TO_XYZ.T) * 100.0 / np.array(D65_WHITE)
    f = np.where(xyz > _DELTA ** 3, np.cbrt(xyz), xyz / (3 * _DELTA ** 2) + 4.0 / 29.0)
    L = np.clip(116.0 * f[..., 1] - 16.0, 0.0, 100.0)
    a = 500.0 * (f[..., 0] - f[..., 1])
    b = 200.0 * (f[..., 1] - f[..., 2])
    return np.stack([L, a, b], axis=-1)
