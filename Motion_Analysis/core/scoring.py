"""Frequency-weighted repetitiveness scoring of spectral peaks."""

import math
from typing import Optional, Sequence, TYPE_CHECKING

from Clinical_Research.repetitive_motion_thresholds import REPETITIVE_MOTION_THRESHOLDS
from .config import DetectorConfig

if TYPE_CHECKING:
    from .spectral_analyzer import FrequencyPeak


class ScoringEngine:
    """
    Reduces a ranked peak list to a score in [0, 1].

    Each magnitude is normalized by the largest in the set, weighted by the
    band its frequency falls in, and the weighted values are averaged.
    """

    def __init__(self, config: Optional[DetectorConfig] = None):
        self.config = config or DetectorConfig()
        self._weights = REPETITIVE_MOTION_THRESHOLDS['bands']

    def weight_for(self, frequency: float) -> float:
        # Hand-flapping band sits inside the general band, so it is checked first
        low, high = self.config.hand_flapping_band_hz
        if low <= frequency <= high:
            return self._weights.HAND_FLAPPING_WEIGHT
        low, high = self.config.general_repetitive_band_hz
        if low <= frequency <= high:
            return self._weights.GENERAL_REPETITIVE_WEIGHT
        return self._weights.BASELINE_WEIGHT

    def score(self, peaks: Sequence["FrequencyPeak"]) -> float:
        if not peaks:
            return 0.0

        max_magnitude = max(p.magnitude for p in peaks)
        if not max_magnitude > 0 or not math.isfinite(max_magnitude):
            return 0.0

        total = sum(self.weight_for(p.frequency) * (p.magnitude / max_magnitude) for p in peaks)
        score = total / len(peaks)
        if not math.isfinite(score):
            return 0.0
        return min(max(score, 0.0), 1.0)

    @staticmethod
    def wrist_score(y_score: float, z_score: float) -> float:
        """Mean of the vertical and depth axis scores; the lateral axis is not part of the signature."""
        return (y_score + z_score) / 2.0
