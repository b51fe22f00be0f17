"""
Repetitive Motion Detector Module

Single entry point for repetitive motion (hand flapping) analysis. Wraps the
spectral analyzer, scoring engine, classifier, and session aggregator behind
one object built from an explicit DetectorConfig, so several detectors (one
per screening session) can run side by side.
"""

from typing import Optional, Mapping, Sequence

from .classifier import Classification, classify_repetitive_motion
from .config import DetectorConfig
from .scoring import ScoringEngine
from .session_aggregator import DetectionStats, SessionAggregator, SessionAnalysis, WristAnalysis
from .spectral_analyzer import AxisAnalysis, FrequencyPeak, SpectralAnalyzer


class RepetitiveMotionDetector:
    """FFT-based repetitive motion detector for wrist trajectories."""

    def __init__(self, config: Optional[DetectorConfig] = None):
        self.config = config or DetectorConfig()
        self.scorer = ScoringEngine(self.config)
        self.analyzer = SpectralAnalyzer(self.config, self.scorer)
        self.aggregator = SessionAggregator(self.config, self.analyzer)

    def analyze_axis(self, values: Sequence[float]) -> AxisAnalysis:
        return self.analyzer.analyze_axis(values)

    def analyze_real_time(self, values: Sequence[float], window_size: Optional[int] = None) -> AxisAnalysis:
        return self.analyzer.analyze_real_time(values, window_size)

    def score(self, peaks: Sequence[FrequencyPeak]) -> float:
        return self.scorer.score(peaks)

    @staticmethod
    def classify(score: float) -> Classification:
        return classify_repetitive_motion(score)

    def analyze_wrist(self, y_values: Sequence[float], z_values: Sequence[float]) -> WristAnalysis:
        return self.aggregator.analyze_wrist(y_values, z_values)

    def analyze_session(self,
                        left: Optional[Mapping[str, Sequence[float]]] = None,
                        right: Optional[Mapping[str, Sequence[float]]] = None) -> SessionAnalysis:
        """
        Analyze whole-session trajectories.

        Args:
            left: {'y': [...], 'z': [...]} for the left wrist, or None
            right: same for the right wrist

        Returns:
            SessionAnalysis; summary is None when neither wrist is supplied
        """
        left_result = self.analyze_wrist(left['y'], left['z']) if left is not None else None
        right_result = self.analyze_wrist(right['y'], right['z']) if right is not None else None
        return self.aggregator.aggregate(left_result, right_result)

    def detection_stats(self, session: Optional[SessionAnalysis]) -> DetectionStats:
        return self.aggregator.detection_stats(session)
