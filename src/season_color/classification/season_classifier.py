# src/season_color/classification/season_classifier.py
"""
Season classifier: one sampled color -> season, subtype, PCCS tone bucket,
warm/cool vote and a calibrated confidence.

Pipeline per color:
  validate + normalize (RGB, Lab, HSL)
  -> CIEDE2000 against every reference point, min per season
  -> nearest season (ties broken by the palette's season order)
  -> confidence from ΔE (fixed calibration table)
  -> tone bucket from (L*, saturation) against the 12 prototypes
  -> four-indicator warmth vote + descriptive characteristics
"""

from __future__ import annotations
import logging
import math
import numbers
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from season_color.config import ClassifierConfig
from season_color.conversion.color_spaces import (
    CMYK, HSL, HSV, RGB, XYZ, Lab, lab_chroma, lab_hue, rgb_to_hex,
)
from season_color.conversion.converter import ColorSpace, ColorSpaceConverter
from season_color.difference.delta_e import delta_e_2000
from season_color.errors import InvalidInputError
from season_color.palette.reference_palette import ReferencePalette, TonePrototype, default_palette

logger = logging.getLogger(__name__)


# ----------------------- Confidence calibration -----------------------

def _lerp(d: float, d0: float, d1: float, c0: float, c1: float) -> float:
    return c0 + (c1 - c0) * (d - d0) / (d1 - d0)


def confidence_from_delta_e(delta_e: float) -> float:
    """
    Map a ΔE2000 distance to a 0-100 confidence.

        ΔE <= 1   -> 100
        ΔE <= 2   -> 95
        ΔE <= 5   -> 90
        ΔE <= 10  -> 90..70 linear
        ΔE <= 20  -> 70..50 linear
        ΔE <= 50  -> 50..30 linear
        otherwise -> 30
    """
    if not math.isfinite(delta_e) or delta_e < 0:
        raise InvalidInputError(f"delta_e must be finite and >= 0, got {delta_e!r}")
    if delta_e <= 1:
        return 100.0
    if delta_e <= 2:
        return 95.0
    if delta_e <= 5:
        return 90.0
    if delta_e <= 10:
        return _lerp(delta_e, 5, 10, 90, 70)
    if delta_e <= 20:
        return _lerp(delta_e, 10, 20, 70, 50)
    if delta_e <= 50:
        return _lerp(delta_e, 20, 50, 50, 30)
    return 30.0


def confidence_level(confidence: float) -> str:
    if confidence >= 80:
        return "high"
    if confidence >= 60:
        return "medium"
    return "low"


# ----------------------- Result types -----------------------

@dataclass(frozen=True)
class ToneResult:
    name: str
    confidence: float
    distance: float
    distances: Mapping[str, float] = field(default_factory=dict)
    seasons: Tuple[str, ...] = ()


@dataclass(frozen=True)
class WarmthVote:
    label: str                      # "warm" | "neutral" | "cool"
    votes: Mapping[str, bool]
    count: int


@dataclass(frozen=True, eq=False)
class ClassificationResult:
    season: str
    subtype: Optional[str]
    confidence: float
    delta_e: float
    reference_label: str
    season_distances: Mapping[str, float]
    season_scores: Mapping[str, float]
    tone: ToneResult
    warmth: WarmthVote
    characteristics: Mapping[str, Any]
    rgb: RGB
    lab: Lab
    hsl: HSL

    @property
    def tone_bucket(self) -> str:
        return self.tone.name

    @property
    def confidence_level(self) -> str:
        return confidence_level(self.confidence)

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict view for report and UI layers."""
        return {
            "season": self.season,
            "subtype": self.subtype,
            "confidence": self.confidence,
            "confidence_level": self.confidence_level,
            "delta_e": self.delta_e,
            "reference_label": self.reference_label,
            "season_distances": dict(self.season_distances),
            "season_scores": dict(self.season_scores),
            "tone": {
                "name": self.tone.name,
                "confidence": self.tone.confidence,
                "distance": self.tone.distance,
                "seasons": list(self.tone.seasons),
            },
            "warmth": {
                "label": self.warmth.label,
                "votes": dict(self.warmth.votes),
                "count": self.warmth.count,
            },
            "characteristics": dict(self.characteristics),
            "rgb": list(self.rgb),
            "hex": rgb_to_hex(self.rgb),
            "lab": list(self.lab),
            "hsl": list(self.hsl),
        }


# ----------------------- Input normalization -----------------------

def _finite(values: Sequence[Any], what: str) -> Tuple[float, ...]:
    """Channels as plain floats; numpy scalars count as numbers, bools do not."""
    out = []
    for v in values:
        if isinstance(v, bool) or not isinstance(v, numbers.Real) or not math.isfinite(v):
            raise InvalidInputError(f"{what} channels must be finite numbers, got {tuple(values)!r}")
        out.append(float(v))
    return tuple(out)


def _in_range(value: float, lo: float, hi: float, what: str) -> None:
    if not lo <= value <= hi:
        raise InvalidInputError(f"{what}={value!r} outside [{lo}, {hi}]")


def validate_color(color: Any) -> Tuple[ColorSpace, Any]:
    """
    Identify the color's space from its type and range-check every channel.
    Bare 3-sequences are read as RGB. Raises InvalidInputError.
    """
    if isinstance(color, Lab):
        color = Lab(*_finite(color, "Lab"))
        _in_range(color.l, 0, 100, "L")
        _in_range(color.a, -128, 127, "a")
        _in_range(color.b, -128, 127, "b")
        return ColorSpace.LAB, color
    if isinstance(color, (HSL, HSV)):
        kind = "HSL" if isinstance(color, HSL) else "HSV"
        color = type(color)(*_finite(color, kind))
        _in_range(color[0], 0, 360, "h")
        _in_range(color[1], 0, 100, "s")
        _in_range(color[2], 0, 100, "l" if kind == "HSL" else "v")
        return (ColorSpace.HSL if kind == "HSL" else ColorSpace.HSV), color
    if isinstance(color, CMYK):
        color = CMYK(*_finite(color, "CMYK"))
        for name, v in zip("cmyk", color):
            _in_range(v, 0, 100, name)
        return ColorSpace.CMYK, color
    if isinstance(color, XYZ):
        color = XYZ(*_finite(color, "XYZ"))
        for name, v in zip("xyz", color):
            _in_range(v, 0, 150, name.upper())
        return ColorSpace.XYZ, color

    try:
        values = tuple(color)
    except TypeError:
        raise InvalidInputError(f"Unsupported color value: {color!r}") from None
    if len(values) != 3:
        raise InvalidInputError(f"RGB color needs 3 channels, got {len(values)}")
    values = _finite(values, "RGB")
    for name, v in zip("rgb", values):
        _in_range(v, 0, 255, name)
    return ColorSpace.RGB, RGB(*(int(round(v)) for v in values))


# ----------------------- Classifier -----------------------

class SeasonClassifier:
    """
    Nearest-reference classifier over an injected ReferencePalette.

    Public API:
      clf = SeasonClassifier(palette=default_palette())
      result = clf.classify((224, 180, 150))
      result.season, result.subtype, result.confidence, result.tone_bucket, result.warmth.label
    """

    def __init__(self, palette: Optional[ReferencePalette] = None,
                 config: Optional[ClassifierConfig] = None,
                 converter: Optional[ColorSpaceConverter] = None):
        self.palette = palette or default_palette()
        self.cfg = config or ClassifierConfig()
        self.converter = converter or ColorSpaceConverter()

    # -------------------- Public entry point --------------------

    def classify(self, color: Any) -> ClassificationResult:
        space, value = validate_color(color)
        rgb, lab, hsl = self._normalize(space, value)

        distances, nearest = self.season_distances(lab)
        season = self._pick_season(distances)
        point = nearest[season]
        delta_e = distances[season]

        tone = self.classify_tone(lab, hsl)
        warmth = self.warmth_vote(rgb, lab)

        result = ClassificationResult(
            season=season,
            subtype=point.subtype or self._nearest_subtype(season, lab),
            confidence=confidence_from_delta_e(delta_e),
            delta_e=delta_e,
            reference_label=point.label,
            season_distances=MappingProxyType(distances),
            season_scores=MappingProxyType({s: confidence_from_delta_e(d) for s, d in distances.items()}),
            tone=tone,
            warmth=warmth,
            characteristics=MappingProxyType(characteristics(rgb, lab, hsl)),
            rgb=rgb,
            lab=lab,
            hsl=hsl,
        )
        logger.debug("classified %s -> %s/%s dE=%.2f conf=%.1f tone=%s warmth=%s",
                     rgb_to_hex(rgb), result.season, result.subtype, delta_e,
                     result.confidence, tone.name, warmth.label)
        return result

    # -------------------- Season matching --------------------

    def season_distances(self, lab: Lab):
        """Min ΔE2000 per season and the reference point that achieved it."""
        distances: Dict[str, float] = {}
        nearest = {}
        for season in self.palette.seasons:
            best_point, best_d = None, math.inf
            for p in self.palette.points_for(season):
                d = delta_e_2000(lab, p.lab)
                if d < best_d:
                    best_point, best_d = p, d
            distances[season] = best_d
            nearest[season] = best_point
        return distances, nearest

    def _pick_season(self, distances: Mapping[str, float]) -> str:
        # strict "<" keeps the earlier season on ties
        best = None
        for season in self.palette.seasons:
            if best is None or distances[season] < distances[best]:
                best = season
        return best

    def _nearest_subtype(self, season: str, lab: Lab) -> Optional[str]:
        candidates = [p for p in self.palette.points_for(season) if p.subtype]
        if candidates:
            return min(candidates, key=lambda p: delta_e_2000(lab, p.lab)).subtype
        return subtype_by_rule(season, lab)

    # -------------------- Tone bucket --------------------

    def classify_tone(self, lab: Lab, hsl: HSL) -> ToneResult:
        brightness = lab.l
        saturation = lab_chroma(lab) if self.cfg.tone_saturation == "chroma" else hsl.s

        distances: Dict[str, float] = {}
        best: Optional[TonePrototype] = None
        for tone in self.palette.tones:
            d = math.hypot(brightness - tone.brightness, saturation - tone.saturation)
            distances[tone.name] = d
            if best is None or d < distances[best.name]:
                best = tone
        if best is None:
            raise InvalidInputError("palette has no tone prototypes")

        d = distances[best.name]
        conf = max(0.0, (1.0 - d / self.cfg.tone_max_distance) * 100.0)
        return ToneResult(best.name, conf, d, MappingProxyType(distances), best.seasons)

    # -------------------- Warmth vote --------------------

    def warmth_vote(self, rgb: RGB, lab: Lab) -> WarmthVote:
        cfg = self.cfg
        r, g, b = rgb
        hue = lab_hue(lab)
        votes = {
            "rgb_ratio": (r / (g + 1) > cfg.warm_red_green_ratio and r / (b + 1) > cfg.warm_red_blue_ratio),
            "lab_sign": (lab.a > cfg.warm_min_a and lab.b > cfg.warm_min_b),
            "hue_angle": cfg.warm_hue_min <= hue <= cfg.warm_hue_max,
            "chroma": lab_chroma(lab) > cfg.warm_min_chroma,
        }
        count = sum(votes.values())
        if count >= cfg.warm_votes_required:
            label = "warm"
        elif count == 0:
            label = "cool"
        else:
            label = "neutral"
        return WarmthVote(label, MappingProxyType(votes), count)

    # -------------------- Helpers --------------------

    def _normalize(self, space: ColorSpace, value: Any) -> Tuple[RGB, Lab, HSL]:
        conv = self.converter
        if space is ColorSpace.LAB:
            # keep the caller's exact Lab; RGB/HSL are derived views
            rgb = conv.convert(value, space, ColorSpace.RGB)
            return rgb, value, conv.convert(rgb, ColorSpace.RGB, ColorSpace.HSL)
        rgb = value if space is ColorSpace.RGB else conv.convert(value, space, ColorSpace.RGB)
        return rgb, conv.convert(rgb, ColorSpace.RGB, ColorSpace.LAB), conv.convert(rgb, ColorSpace.RGB, ColorSpace.HSL)


# ----------------------- Descriptive characteristics -----------------------

def _band(value: float, bands: Sequence[Tuple[float, str]], last: str) -> str:
    for bound, label in bands:
        if value > bound:
            return label
    return last


def characteristics(rgb: RGB, lab: Lab, hsl: HSL) -> Dict[str, Any]:
    """Lab-derived temperature/clarity/depth/intensity labels plus a few raw measures."""
    chroma = lab_chroma(lab)
    r, g, b = rgb
    if r >= g and r >= b:
        dominant = "red"
    elif g >= r and g >= b:
        dominant = "green"
    else:
        dominant = "blue"
    return {
        "temperature": _band(lab.b - lab.a, [(4, "very_warm"), (1, "warm"), (-1, "neutral"), (-4, "cool")], "very_cool"),
        "clarity": _band(chroma, [(20, "very_clear"), (15, "clear"), (10, "soft"), (5, "muted")], "very_muted"),
        "depth": _band(lab.l, [(75, "very_light"), (65, "light"), (55, "medium"), (45, "deep")], "very_deep"),
        "intensity": _band(chroma * lab.l / 100.0, [(18, "high"), (12, "medium"), (8, "low")], "very_low"),
        "dominant_channel": dominant,
        "chroma": chroma,
        "hue_angle": lab_hue(lab),
        "hsl_hue": hsl.h,
    }


def subtype_by_rule(season: str, lab: Lab) -> Optional[str]:
    """Lab rules for picking a subtype inside a season when no subtype reference exists."""
    L, a, b = lab
    if season == "spring":
        if L > 70 and abs(a - b) < 3:
            return "light_spring"
        return "warm_spring" if b > a + 4 else "bright_spring"
    if season == "summer":
        if L > 70:
            return "light_summer"
        return "soft_summer" if abs(a - b) < 2 else "cool_summer"
    if season == "autumn":
        if L < 60:
            return "deep_autumn"
        return "warm_autumn" if b > a + 5 else "soft_autumn"
    if season == "winter":
        if L < 60:
            return "deep_winter"
        return "cool_winter" if a > b + 3 else "clear_winter"
    return None


def classify(color: Any, palette: Optional[ReferencePalette] = None,
             config: Optional[ClassifierConfig] = None) -> ClassificationResult:
    """Classify one color against a palette (the built-in one by default)."""
    return SeasonClassifier(palette, config).classify(color)
