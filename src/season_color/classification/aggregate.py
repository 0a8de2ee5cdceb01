# src/season_color/classification/aggregate.py
"""
Fold N per-sample classifications (skin, hair, eyes, ...) into one verdict.

    season_scores      per-season mean of each sample's ΔE-derived score
    dominant_season    argmax of season_scores (palette order breaks ties)
    confidence         the dominant season's mean score
    tone_distribution  count of samples per tone bucket
    temperature        warm / cool / neutral ratios and the dominant label
    harmony_score      100 - min(30, var(HSL hue) / 10), floored at 50
"""

from __future__ import annotations
import logging
import math
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from season_color.classification.season_classifier import (
    ClassificationResult, SeasonClassifier, confidence_level,
)
from season_color.config import ClassifierConfig
from season_color.errors import EmptyInputError
from season_color.palette.reference_palette import ReferencePalette

logger = logging.getLogger(__name__)

WARMTH_LABELS = ("warm", "cool", "neutral")


@dataclass(frozen=True, eq=False)
class GroupResult:
    season_scores: Mapping[str, float]
    dominant_season: str
    confidence: float
    tone_distribution: Mapping[str, int]
    temperature: Mapping[str, Any]
    harmony_score: int
    results: Tuple[ClassificationResult, ...]

    @property
    def confidence_level(self) -> str:
        return confidence_level(self.confidence)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dominant_season": self.dominant_season,
            "confidence": self.confidence,
            "confidence_level": self.confidence_level,
            "season_scores": dict(self.season_scores),
            "tone_distribution": dict(self.tone_distribution),
            "temperature": dict(self.temperature),
            "harmony_score": self.harmony_score,
            "samples": [r.to_dict() for r in self.results],
        }


# ----------------------- Pieces -----------------------

def harmony_score(hues: Sequence[float]) -> int:
    """Population variance of HSL hues mapped to [50, 100]; 100 for N <= 1."""
    if len(hues) <= 1:
        return 100
    variance = float(np.var(np.asarray(hues, dtype=np.float64)))
    # halves round up
    return max(50, math.floor(100 - min(30.0, variance / 10.0) + 0.5))


def temperature_distribution(results: Sequence[ClassificationResult]) -> Dict[str, Any]:
    counts = Counter(r.warmth.label for r in results)
    n = len(results)
    ratios = {label: counts.get(label, 0) / n for label in WARMTH_LABELS}
    # first label in WARMTH_LABELS wins ties
    dominant = max(WARMTH_LABELS, key=lambda label: (ratios[label], -WARMTH_LABELS.index(label)))
    return {**ratios, "dominant": dominant}


def average_season_scores(results: Sequence[ClassificationResult], seasons: Iterable[str]) -> Dict[str, float]:
    n = len(results)
    return {s: sum(r.season_scores[s] for r in results) / n for s in seasons}


# ----------------------- Analyzer -----------------------

class AggregateAnalyzer:
    """
    Group classification over one shared SeasonClassifier.

    workers > 1 classifies samples on a thread pool; samples are independent
    and results are re-ordered to input order, so the verdict does not depend
    on scheduling.
    """

    def __init__(self, classifier: Optional[SeasonClassifier] = None, workers: int = 1):
        self.classifier = classifier or SeasonClassifier()
        self.workers = max(1, int(workers))

    def analyze(self, colors: Sequence[Any]) -> GroupResult:
        colors = list(colors)
        if not colors:
            raise EmptyInputError("classify_group needs at least one color sample")

        results = self._classify_all(colors)
        return self.aggregate(results)

    def aggregate(self, results: Sequence[ClassificationResult]) -> GroupResult:
        if not results:
            raise EmptyInputError("cannot aggregate zero classification results")

        seasons = self.classifier.palette.seasons
        scores = average_season_scores(results, seasons)

        dominant = None
        for s in seasons:
            # strict ">" keeps the earlier season on ties
            if dominant is None or scores[s] > scores[dominant]:
                dominant = s

        tones = Counter(r.tone.name for r in results)
        group = GroupResult(
            season_scores=MappingProxyType(scores),
            dominant_season=dominant,
            confidence=scores[dominant],
            tone_distribution=MappingProxyType(dict(tones)),
            temperature=MappingProxyType(temperature_distribution(results)),
            harmony_score=harmony_score([r.hsl.h for r in results]),
            results=tuple(results),
        )
        logger.debug("group of %d -> %s (%.1f), harmony=%d",
                     len(results), dominant, group.confidence, group.harmony_score)
        return group

    def _classify_all(self, colors: List[Any]) -> List[ClassificationResult]:
        if self.workers == 1 or len(colors) == 1:
            return [self.classifier.classify(c) for c in colors]
        with ThreadPoolExecutor(max_workers=self.workers) as pool:
            # map() preserves input order and re-raises the first failure
            return list(pool.map(self.classifier.classify, colors))


def classify_group(colors: Sequence[Any], palette: Optional[ReferencePalette] = None,
                   config: Optional[ClassifierConfig] = None, workers: int = 1) -> GroupResult:
    """Classify every sample and aggregate into one GroupResult."""
    return AggregateAnalyzer(SeasonClassifier(palette, config), workers=workers).analyze(colors)
