# src/season_color/palette/reference_palette.py
"""
ReferencePalette: the immutable reference data a SeasonClassifier matches
against.

    season/subtype -> skin-tone L*a*b* reference points
    tone name      -> (brightness, saturation) prototype
    season         -> recommended / avoid swatches

Built once per process (default_palette) or read from a JSON data file
(load_palette) and passed into the classifier, so palettes can be swapped in
tests without touching the algorithm.

JSON layout accepted by load_palette:

    {
      "seasons": ["spring", "summer", "autumn", "winter"],     (optional)
      "points": [{"season": "spring", "subtype": "light_spring",
                  "label": "Light Spring", "lab": [73.5, 10.0, 12.5]}, ...],
      "tones":  [{"name": "pale", "brightness": 85, "saturation": 20,
                  "seasons": ["spring", "summer"]}, ...],        (optional)
      "recommended": {"spring": ["#FF6B6B", ...]},                 (optional)
      "avoid": {"spring": ["#2C3E50", ...]}                        (optional)
    }
"""

from __future__ import annotations
import json
import logging
import math
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple, Union

from season_color.config import SEASON_ORDER
from season_color.conversion.color_spaces import RGB, Lab, hex_to_rgb
from season_color.errors import InvalidInputError, ReferenceDataMissingError
from season_color.palette import seasonal_palettes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReferencePoint:
    season: str
    lab: Lab
    label: str
    subtype: Optional[str] = None


@dataclass(frozen=True)
class TonePrototype:
    name: str
    brightness: float
    saturation: float
    seasons: Tuple[str, ...] = ()


@dataclass(frozen=True, eq=False)
class ReferencePalette:
    points: Tuple[ReferencePoint, ...]
    tones: Tuple[TonePrototype, ...]
    seasons: Tuple[str, ...] = SEASON_ORDER
    recommended: Mapping[str, Tuple[RGB, ...]] = field(default_factory=dict)
    avoid: Mapping[str, Tuple[RGB, ...]] = field(default_factory=dict)
    swatches: Mapping[str, Tuple[RGB, ...]] = field(default_factory=dict)   # per subtype

    def __post_init__(self):
        # freeze containers handed in by callers
        object.__setattr__(self, "points", tuple(self.points))
        object.__setattr__(self, "tones", tuple(self.tones))
        object.__setattr__(self, "seasons", tuple(self.seasons))
        for name in ("recommended", "avoid", "swatches"):
            frozen = {k: tuple(v) for k, v in getattr(self, name).items()}
            object.__setattr__(self, name, MappingProxyType(frozen))

    def points_for(self, season: str) -> Tuple[ReferencePoint, ...]:
        pts = tuple(p for p in self.points if p.season == season)
        if not pts:
            raise ReferenceDataMissingError(season)
        return pts

    def subtypes_for(self, season: str) -> Tuple[str, ...]:
        seen = []
        for p in self.points_for(season):
            if p.subtype and p.subtype not in seen:
                seen.append(p.subtype)
        return tuple(seen)

    def tone(self, name: str) -> TonePrototype:
        for t in self.tones:
            if t.name == name:
                return t
        raise KeyError(name)


# ----------------------- Builders -----------------------

def _validate_lab(values: Iterable[float], where: str) -> Lab:
    vals = tuple(float(v) for v in values)
    if len(vals) != 3 or not all(math.isfinite(v) for v in vals):
        raise InvalidInputError(f"{where}: expected 3 finite Lab values, got {vals!r}")
    return Lab(*vals)


@lru_cache(maxsize=1)
def default_palette() -> ReferencePalette:
    """The built-in 4-season / 12-subtype palette; constructed once."""
    points = []
    for season in SEASON_ORDER:
        info = seasonal_palettes.SEASONS[season]
        for cls in seasonal_palettes.SUBTYPES:
            if cls.season == season:
                points.append(ReferencePoint(season, Lab(*cls.skin_reference), cls.name, cls.subtype))
        points.append(ReferencePoint(season, Lab(*info["average"]), f"{info['name']} average"))

    tones = [TonePrototype(n, b, s, seasons) for n, b, s, seasons in seasonal_palettes.TONE_PROTOTYPES]

    palette = ReferencePalette(
        points=tuple(points),
        tones=tuple(tones),
        seasons=SEASON_ORDER,
        recommended={s: [hex_to_rgb(h) for h in seasonal_palettes.SEASONS[s]["recommended"]] for s in SEASON_ORDER},
        avoid={s: [hex_to_rgb(h) for h in seasonal_palettes.SEASONS[s]["avoid"]] for s in SEASON_ORDER},
        swatches={cls.subtype: cls.palette for cls in seasonal_palettes.SUBTYPES},
    )
    logger.debug("Default palette built: %d reference points, %d tones", len(palette.points), len(palette.tones))
    return palette


def palette_from_dict(raw: Dict) -> ReferencePalette:
    """Build a palette from the JSON-shaped dict documented above."""
    try:
        raw_points = raw["points"]
    except (KeyError, TypeError):
        raise InvalidInputError("palette data must contain a 'points' list") from None

    points = []
    for i, p in enumerate(raw_points):
        try:
            points.append(ReferencePoint(
                season=str(p["season"]),
                lab=_validate_lab(p["lab"], f"points[{i}]"),
                label=str(p.get("label", p.get("subtype") or p["season"])),
                subtype=p.get("subtype"),
            ))
        except KeyError as e:
            raise InvalidInputError(f"points[{i}] is missing {e}") from None

    if "tones" in raw:
        tones = tuple(
            TonePrototype(str(t["name"]), float(t["brightness"]), float(t["saturation"]),
                          tuple(t.get("seasons", ())))
            for t in raw["tones"]
        )
    else:
        tones = default_palette().tones

    if "seasons" in raw:
        seasons = tuple(raw["seasons"])
    else:
        # canonical order first, then anything extra in first-seen order
        present = []
        for p in points:
            if p.season not in present:
                present.append(p.season)
        seasons = tuple(s for s in SEASON_ORDER if s in present) + tuple(s for s in present if s not in SEASON_ORDER)

    def _swatch_map(key: str) -> Dict[str, Tuple[RGB, ...]]:
        return {s: tuple(hex_to_rgb(h) for h in hexes) for s, hexes in raw.get(key, {}).items()}

    return ReferencePalette(
        points=tuple(points),
        tones=tones,
        seasons=seasons,
        recommended=_swatch_map("recommended"),
        avoid=_swatch_map("avoid"),
        swatches=_swatch_map("swatches"),
    )


def load_palette(path: Union[str, Path]) -> ReferencePalette:
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)
    palette = palette_from_dict(raw)
    logger.info("Loaded palette %s (%d points, seasons=%s)", path.name, len(palette.points), ",".join(palette.seasons))
    return palette
