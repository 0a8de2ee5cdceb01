# src/season_color/difference/delta_e.py
"""
Perceptual color difference between L*a*b* colors.

CIEDE2000 is the metric used everywhere similarity is judged (season
matching, nearest swatch, harmony). CIE76 and CIE94 are kept for comparison
and for callers that want the cheaper formulas.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from season_color.conversion.color_spaces import Lab

_POW25_7 = 25.0 ** 7


# ----------------------- CIEDE2000 -----------------------

def _hue_prime(a_prime: float, b: float) -> float:
    if a_prime == 0 and b == 0:
        return 0.0
    h = math.degrees(math.atan2(b, a_prime))
    return h + 360.0 if h < 0 else h


def _delta_h_prime(c1p: float, c2p: float, h1p: float, h2p: float) -> float:
    if c1p * c2p == 0:
        return 0.0
    dh = h2p - h1p
    if abs(dh) <= 180:
        return dh
    if dh > 180:
        return dh - 360
    return dh + 360


def _mean_h_prime(c1p: float, c2p: float, h1p: float, h2p: float) -> float:
    total = h1p + h2p
    if c1p * c2p == 0:
        return total
    if abs(h1p - h2p) <= 180:
        return total / 2
    if total < 360:
        return (total + 360) / 2
    return (total - 360) / 2


def delta_e_2000(lab1: Lab, lab2: Lab, k_l: float = 1.0, k_c: float = 1.0, k_h: float = 1.0) -> float:
    """CIEDE2000 color difference (Sharma, Wu & Dalal 2005 formulation)."""
    L1, a1, b1 = lab1
    L2, a2, b2 = lab2

    # 1-2) chroma, mean chroma and the a* rescaling factor G
    c1 = math.hypot(a1, b1)
    c2 = math.hypot(a2, b2)
    c_avg = (c1 + c2) / 2
    c_avg7 = c_avg ** 7
    G = 0.5 * (1 - math.sqrt(c_avg7 / (c_avg7 + _POW25_7)))

    a1p = a1 * (1 + G)
    a2p = a2 * (1 + G)

    # 3) C', h'
    c1p = math.hypot(a1p, b1)
    c2p = math.hypot(a2p, b2)
    h1p = _hue_prime(a1p, b1)
    h2p = _hue_prime(a2p, b2)

    # 4-6) deltas
    dLp = L2 - L1
    dCp = c2p - c1p
    dhp = _delta_h_prime(c1p, c2p, h1p, h2p)
    dHp = 2 * math.sqrt(c1p * c2p) * math.sin(math.radians(dhp / 2))

    # 7) means
    Lp_avg = (L1 + L2) / 2
    Cp_avg = (c1p + c2p) / 2
    hp_avg = _mean_h_prime(c1p, c2p, h1p, h2p)

    # 8) T
    T = (1
         - 0.17 * math.cos(math.radians(hp_avg - 30))
         + 0.24 * math.cos(math.radians(2 * hp_avg))
         + 0.32 * math.cos(math.radians(3 * hp_avg + 6))
         - 0.20 * math.cos(math.radians(4 * hp_avg - 63)))

    # 9) weighting and rotation
    l50 = (Lp_avg - 50) ** 2
    SL = 1 + (0.015 * l50) / math.sqrt(20 + l50)
    SC = 1 + 0.045 * Cp_avg
    SH = 1 + 0.015 * Cp_avg * T

    d_theta = 30 * math.exp(-(((hp_avg - 275) / 25) ** 2))
    Cp_avg7 = Cp_avg ** 7
    RC = 2 * math.sqrt(Cp_avg7 / (Cp_avg7 + _POW25_7))
    RT = -RC * math.sin(math.radians(2 * d_theta))

    # 10) total
    tL = dLp / (k_l * SL)
    tC = dCp / (k_c * SC)
    tH = dHp / (k_h * SH)
    # tiny negative radicands appear from rounding only
    return math.sqrt(max(0.0, tL * tL + tC * tC + tH * tH + RT * tC * tH))


# ----------------------- CIE76 / CIE94 -----------------------

def delta_e_76(lab1: Lab, lab2: Lab) -> float:
    return math.sqrt((lab1[0] - lab2[0]) ** 2 + (lab1[1] - lab2[1]) ** 2 + (lab1[2] - lab2[2]) ** 2)


def delta_e_94(lab1: Lab, lab2: Lab, textiles: bool = False) -> float:
    """CIE94; graphic-arts weights by default, textile weights on request."""
    kL = 2.0 if textiles else 1.0
    K1 = 0.048 if textiles else 0.045
    K2 = 0.014 if textiles else 0.015

    dL = lab1[0] - lab2[0]
    da = lab1[1] - lab2[1]
    db = lab1[2] - lab2[2]
    c1 = math.hypot(lab1[1], lab1[2])
    c2 = math.hypot(lab2[1], lab2[2])
    dC = c1 - c2
    dH2 = da * da + db * db - dC * dC
    dH = math.sqrt(dH2) if dH2 > 0 else 0.0

    SC = 1 + K1 * c1
    SH = 1 + K2 * c1
    return math.sqrt((dL / kL) ** 2 + (dC / SC) ** 2 + (dH / SH) ** 2)


FORMULAS = {
    "76": delta_e_76,
    "94": delta_e_94,
    "2000": delta_e_2000,
}


# ----------------------- Similarity judgements -----------------------

@dataclass(frozen=True)
class Similarity:
    level: str
    score: int


# (upper bound, level, score); checked in order, inclusive
GENERAL_THRESHOLDS: Tuple[Tuple[float, str, int], ...] = (
    (1.0, "identical", 98),
    (2.3, "similar", 90),
    (5.0, "noticeable", 75),
    (10.0, "different", 50),
)
SKIN_TONE_THRESHOLDS: Tuple[Tuple[float, str, int], ...] = (
    (3.0, "excellent", 95),
    (6.0, "good", 85),
    (10.0, "acceptable", 70),
    (15.0, "poor", 50),
)


def assess_similarity(delta_e: float, context: str = "general") -> Similarity:
    """Bucket a ΔE into a named similarity level with a 0-100 score."""
    if context == "skin_tone":
        table, fallback = SKIN_TONE_THRESHOLDS, Similarity("bad", 30)
    elif context == "general":
        table, fallback = GENERAL_THRESHOLDS, Similarity("very_different", 25)
    else:
        raise ValueError(f"Unknown similarity context: {context!r}")
    for bound, level, score in table:
        if delta_e <= bound:
            return Similarity(level, score)
    return fallback


@dataclass(frozen=True)
class Match:
    index: int
    lab: Lab
    delta_e: float
    similarity: Similarity


def find_closest(target: Lab, candidates: Sequence[Lab], count: int = 5, formula: str = "2000") -> List[Match]:
    """Nearest candidates to target, sorted by ascending ΔE (stable on ties)."""
    fn = FORMULAS[formula]
    matches = []
    for i, lab in enumerate(candidates):
        d = fn(target, lab)
        matches.append(Match(i, lab, d, assess_similarity(d)))
    matches.sort(key=lambda m: m.delta_e)
    return matches[:count]


def analyze_harmony(labs: Sequence[Lab], formula: str = "2000") -> Optional[Dict]:
    """
    Pairwise ΔE statistics for a set of colors and an overall harmony level.
    Returns None when fewer than two colors are given.
    """
    if len(labs) < 2:
        return None
    fn = FORMULAS[formula]

    pairs = []
    for i in range(len(labs) - 1):
        for j in range(i + 1, len(labs)):
            pairs.append(((i, j), fn(labs[i], labs[j])))
    values = [d for _, d in pairs]
    avg = sum(values) / len(values)

    if avg < 10:
        level, score = "excellent", 95
    elif avg < 20:
        level, score = "good", 80
    elif avg < 35:
        level, score = "acceptable", 65
    else:
        level, score = "poor", 50

    return {
        "harmony_level": level,
        "harmony_score": score,
        "statistics": {
            "average": avg,
            "minimum": min(values),
            "maximum": max(values),
            "pairs": len(pairs),
        },
        "pairs": sorted(({"pair": p, "delta_e": d} for p, d in pairs), key=lambda x: x["delta_e"]),
    }
