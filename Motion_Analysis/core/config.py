"""Detector configuration, validated once at construction."""

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from Clinical_Research.repetitive_motion_thresholds import REPETITIVE_MOTION_THRESHOLDS

_BANDS = REPETITIVE_MOTION_THRESHOLDS['bands']

TRANSFORMS = ("complex", "real_only")
TAPERS = ("hann", "none")


@dataclass(frozen=True)
class DetectorConfig:
    """
    Configuration for one repetitive motion detector.

    Each screening session owns its own instance; components receive it by
    reference. frame_rate_hz only derives the frequency axis, it does not
    control timing.
    """
    window_size: int = 100
    analysis_interval_ms: float = 1000.0
    frame_rate_hz: float = 25.1
    hand_flapping_band_hz: Tuple[float, float] = _BANDS.HAND_FLAPPING_BAND
    general_repetitive_band_hz: Tuple[float, float] = _BANDS.GENERAL_REPETITIVE_BAND
    plausible_band_hz: Tuple[float, float] = _BANDS.PLAUSIBLE_BAND
    peak_threshold_fraction: float = 0.05
    max_peaks: int = 10
    min_axis_samples: int = 10
    min_combined_samples: int = 20
    min_confidence: float = 0.0
    transform: str = "complex"
    taper: str = "hann"
    detrend: bool = True

    def __post_init__(self):
        if self.window_size <= 0:
            raise ValueError(f"window_size must be positive, got {self.window_size}")
        if self.analysis_interval_ms <= 0:
            raise ValueError(f"analysis_interval_ms must be positive, got {self.analysis_interval_ms}")
        if self.frame_rate_hz <= 0:
            raise ValueError(f"frame_rate_hz must be positive, got {self.frame_rate_hz}")

        for name in ('hand_flapping_band_hz', 'general_repetitive_band_hz', 'plausible_band_hz'):
            band = getattr(self, name)
            if len(band) != 2:
                raise ValueError(f"{name} must be a (min, max) pair, got {band!r}")
            low, high = band
            if low < 0 or low > high:
                raise ValueError(f"{name} must satisfy 0 <= min <= max, got {band!r}")
            object.__setattr__(self, name, (float(low), float(high)))

        if not 0.0 <= self.peak_threshold_fraction < 1.0:
            raise ValueError(f"peak_threshold_fraction must be in [0, 1), got {self.peak_threshold_fraction}")
        if self.max_peaks <= 0:
            raise ValueError(f"max_peaks must be positive, got {self.max_peaks}")
        if self.min_axis_samples < 2:
            raise ValueError(f"min_axis_samples must be at least 2, got {self.min_axis_samples}")
        if self.min_combined_samples < 0:
            raise ValueError(f"min_combined_samples must be non-negative, got {self.min_combined_samples}")
        if not 0.0 <= self.min_confidence <= 1.0:
            raise ValueError(f"min_confidence must be in [0, 1], got {self.min_confidence}")
        if self.transform not in TRANSFORMS:
            raise ValueError(f"transform must be one of {TRANSFORMS}, got {self.transform!r}")
        if self.taper not in TAPERS:
            raise ValueError(f"taper must be one of {TAPERS}, got {self.taper!r}")

    @property
    def nyquist_hz(self) -> float:
        return self.frame_rate_hz / 2.0

    @property
    def analysis_interval_s(self) -> float:
        return self.analysis_interval_ms / 1000.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'window_size': self.window_size,
            'analysis_interval_ms': self.analysis_interval_ms,
            'frame_rate_hz': self.frame_rate_hz,
            'hand_flapping_band_hz': list(self.hand_flapping_band_hz),
            'general_repetitive_band_hz': list(self.general_repetitive_band_hz),
            'plausible_band_hz': list(self.plausible_band_hz),
            'peak_threshold_fraction': self.peak_threshold_fraction,
            'max_peaks': self.max_peaks,
            'min_axis_samples': self.min_axis_samples,
            'min_combined_samples': self.min_combined_samples,
            'min_confidence': self.min_confidence,
            'transform': self.transform,
            'taper': self.taper,
            'detrend': self.detrend,
        }
