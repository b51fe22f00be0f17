"""Score-to-severity classification."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any, Iterable, Optional, Tuple

from Clinical_Research.repetitive_motion_thresholds import (
    SEVERITY_RECOMMENDATIONS, get_repetitive_motion_risk_level
)


class MotionSeverity(Enum):
    """Repetitive motion severity, ordered NONE < LOW < MEDIUM < HIGH."""
    NONE = "NONE"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @property
    def rank(self) -> int:
        return _RANK[self]

    def __lt__(self, other):
        if not isinstance(other, MotionSeverity):
            return NotImplemented
        return self.rank < other.rank


_RANK = {MotionSeverity.NONE: 0, MotionSeverity.LOW: 1,
         MotionSeverity.MEDIUM: 2, MotionSeverity.HIGH: 3}


@dataclass(frozen=True)
class Classification:
    """Severity label with its description and fixed recommendations."""
    severity: MotionSeverity
    description: str
    recommendations: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'severity': self.severity.value,
            'description': self.description,
            'recommendations': list(self.recommendations)
        }


def classify_repetitive_motion(score: float) -> Classification:
    """Pure mapping from a repetitiveness score to a severity classification."""
    level, description, recommendations = get_repetitive_motion_risk_level(score)
    return Classification(MotionSeverity(level), description, recommendations)


def recommendations_for(severity: MotionSeverity) -> Tuple[str, ...]:
    return SEVERITY_RECOMMENDATIONS[severity.value]


def most_severe(labels: Iterable[Optional[MotionSeverity]]) -> MotionSeverity:
    """Most severe of the given labels; NONE when there are none."""
    present = [label for label in labels if label is not None]
    return max(present, key=lambda s: s.rank) if present else MotionSeverity.NONE

