"""
Repetitive Motion Thresholds & Reference Values
Severity cut-offs, frequency bands, and recommendation texts used by the
repetitive motion screening pipeline.

Frequency bands follow observational reports of stereotyped hand movements:
- Hand flapping typically presents at roughly 1.5-3.5 Hz
- Broader rhythmic stereotypies (rocking, tapping) span roughly 0.5-5 Hz
"""

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class SeverityThresholds:
    """
    Repetitiveness score cut-offs.

    Each band's lower bound is exclusive:
    score > HIGH -> high, score > MEDIUM -> medium, score > LOW -> low,
    otherwise none.
    """
    HIGH: float = 0.7
    MEDIUM: float = 0.4
    LOW: float = 0.1


@dataclass(frozen=True)
class FrequencyBandWeights:
    """
    Peak weights by frequency band.

    The hand-flapping band is a subset of the general repetitive band and
    is tested first.
    """
    HAND_FLAPPING_BAND: Tuple[float, float] = (1.5, 3.5)
    GENERAL_REPETITIVE_BAND: Tuple[float, float] = (0.5, 5.0)
    PLAUSIBLE_BAND: Tuple[float, float] = (0.1, 10.0)

    HAND_FLAPPING_WEIGHT: float = 1.0
    GENERAL_REPETITIVE_WEIGHT: float = 0.7
    BASELINE_WEIGHT: float = 0.3

    CLINICAL_NOTES: str = """
    Peaks below 0.1 Hz are postural drift; peaks above 10 Hz are beyond
    voluntary limb movement at typical webcam frame rates and are treated
    as tracking jitter.
    """


# Descriptions keyed by severity value
SEVERITY_DESCRIPTIONS: Dict[str, str] = {
    'HIGH': "Strong repetitive motion patterns detected",
    'MEDIUM': "Moderate repetitive motion patterns detected",
    'LOW': "Weak repetitive motion patterns detected",
    'NONE': "No significant repetitive motion detected",
}

# Fixed recommendation lists keyed by severity value
SEVERITY_RECOMMENDATIONS: Dict[str, Tuple[str, ...]] = {
    'HIGH': (
        "Consider occupational therapy for motor skills development",
        "Monitor for other repetitive behaviors",
        "Consult with behavioral specialist",
        "Implement gentle redirection strategies",
    ),
    'MEDIUM': (
        "Continue monitoring for pattern changes",
        "Consider gentle redirection strategies",
        "Document frequency and triggers",
    ),
    'LOW': (
        "Normal developmental variation observed",
        "Continue routine monitoring",
        "Provide positive reinforcement for appropriate behaviors",
    ),
    'NONE': (
        "No specific recommendations at this time",
        "Continue routine developmental monitoring",
    ),
}


# Aggregate all thresholds
REPETITIVE_MOTION_THRESHOLDS = {
    'severity': SeverityThresholds(),
    'bands': FrequencyBandWeights(),
}


def get_repetitive_motion_risk_level(score: float) -> Tuple[str, str, Tuple[str, ...]]:
    """
    Get risk level and recommendations based on a repetitiveness score.

    Args:
        score: Repetitiveness score in [0, 1]

    Returns:
        Tuple of (risk_level, description, recommendations)
    """
    thresholds = REPETITIVE_MOTION_THRESHOLDS['severity']

    if score > thresholds.HIGH:
        level = 'HIGH'
    elif score > thresholds.MEDIUM:
        level = 'MEDIUM'
    elif score > thresholds.LOW:
        level = 'LOW'
    else:
        level = 'NONE'

    return level, SEVERITY_DESCRIPTIONS[level], SEVERITY_RECOMMENDATIONS[level]
