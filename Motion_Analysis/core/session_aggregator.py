"""
Session Aggregator Module

Combines per-axis analyses into per-wrist results and per-wrist results into
a whole-session summary. The summary severity is re-derived from the averaged
score, not taken from the more severe wrist.
"""

import numpy as np
from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any, Sequence

from .classifier import MotionSeverity, classify_repetitive_motion, most_severe, recommendations_for
from .config import DetectorConfig
from .scoring import ScoringEngine
from .spectral_analyzer import AxisAnalysis, SpectralAnalyzer


# -----------------------------------------------------------------------------
# Data Classes
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class WristAnalysis:
    """Repetitive motion analysis of one wrist (vertical and depth axes)."""
    y_axis: AxisAnalysis
    z_axis: AxisAnalysis
    overall_score: float
    classification: MotionSeverity
    description: str
    sample_count: int  # finite vertical-axis samples analyzed

    @classmethod
    def empty(cls) -> "WristAnalysis":
        return cls(
            y_axis=AxisAnalysis.empty(),
            z_axis=AxisAnalysis.empty(),
            overall_score=0.0,
            classification=MotionSeverity.NONE,
            description="No data available",
            sample_count=0
        )

    @property
    def dominant_frequencies(self) -> List[float]:
        """Kept peak frequencies, vertical axis first."""
        return [p.frequency for p in self.y_axis.peaks] + [p.frequency for p in self.z_axis.peaks]

    @property
    def severity_score(self) -> int:
        return self.classification.rank

    def to_dict(self) -> Dict[str, Any]:
        return {
            'y_axis': self.y_axis.to_dict(),
            'z_axis': self.z_axis.to_dict(),
            'overall_score': self.overall_score,
            'classification': self.classification.value,
            'description': self.description,
            'sample_count': self.sample_count,
            'dominant_frequencies': self.dominant_frequencies,
            'severity_score': self.severity_score
        }


@dataclass(frozen=True)
class SessionSummary:
    overall_score: float
    classification: MotionSeverity
    description: str
    wrist_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'overall_score': self.overall_score,
            'classification': self.classification.value,
            'description': self.description,
            'wrist_count': self.wrist_count
        }


@dataclass(frozen=True)
class SessionAnalysis:
    """Per-wrist results plus a summary. summary is None when no wrist contributed."""
    left_wrist: Optional[WristAnalysis] = None
    right_wrist: Optional[WristAnalysis] = None
    summary: Optional[SessionSummary] = None

    @property
    def wrists(self) -> List[WristAnalysis]:
        return [w for w in (self.left_wrist, self.right_wrist) if w is not None]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'left_wrist': self.left_wrist.to_dict() if self.left_wrist else None,
            'right_wrist': self.right_wrist.to_dict() if self.right_wrist else None,
            'summary': self.summary.to_dict() if self.summary else None
        }


@dataclass(frozen=True)
class DetectionStats:
    """Condensed result for the adaptive-question engine and report generator."""
    has_repetitive_motion: bool
    severity: MotionSeverity
    recommendations: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'has_repetitive_motion': self.has_repetitive_motion,
            'severity': self.severity.value,
            'recommendations': list(self.recommendations)
        }


# -----------------------------------------------------------------------------
# Aggregator
# -----------------------------------------------------------------------------

class SessionAggregator:
    """Builds WristAnalysis and SessionAnalysis values from raw coordinate sequences."""

    def __init__(self, config: Optional[DetectorConfig] = None, analyzer: Optional[SpectralAnalyzer] = None):
        self.config = config or DetectorConfig()
        self.analyzer = analyzer or SpectralAnalyzer(self.config)

    def analyze_wrist(self, y_values: Sequence[float], z_values: Sequence[float]) -> WristAnalysis:
        """Analyze the vertical and depth axes of one wrist. Either axis empty -> empty analysis."""
        if len(y_values) == 0 or len(z_values) == 0:
            return WristAnalysis.empty()

        y_analysis = self.analyzer.analyze_axis(y_values)
        z_analysis = self.analyzer.analyze_axis(z_values)
        overall_score = ScoringEngine.wrist_score(y_analysis.score, z_analysis.score)
        classification = classify_repetitive_motion(overall_score)

        return WristAnalysis(
            y_axis=y_analysis,
            z_axis=z_analysis,
            overall_score=overall_score,
            classification=classification.severity,
            description=classification.description,
            sample_count=int(np.count_nonzero(np.isfinite(np.asarray(y_values, dtype=np.float64))))
        )

    @staticmethod
    def aggregate(left: Optional[WristAnalysis] = None,
                  right: Optional[WristAnalysis] = None) -> SessionAnalysis:
        """Combine zero, one, or two wrists. No wrists -> no summary at all."""
        present = [w for w in (left, right) if w is not None]
        if not present:
            return SessionAnalysis(left_wrist=left, right_wrist=right)

        session_score = float(np.mean([w.overall_score for w in present]))
        classification = classify_repetitive_motion(session_score)
        summary = SessionSummary(
            overall_score=session_score,
            classification=classification.severity,
            description=classification.description,
            wrist_count=len(present)
        )
        return SessionAnalysis(left_wrist=left, right_wrist=right, summary=summary)

    @staticmethod
    def detection_stats(session: Optional[SessionAnalysis]) -> DetectionStats:
        """Most severe present label wins; recommendations follow that label."""
        if session is None:
            labels = []
        else:
            labels = [w.classification for w in session.wrists]
            if session.summary is not None:
                labels.append(session.summary.classification)

        severity = most_severe(labels)
        return DetectionStats(
            has_repetitive_motion=any(label is not MotionSeverity.NONE for label in labels),
            severity=severity,
            recommendations=list(recommendations_for(severity))
        )
