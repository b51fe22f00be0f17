"""
Spectral Analyzer Module

Frequency-domain analysis of one wrist coordinate. Runs a recursive radix-2
decimation-in-time FFT over a zero-padded window, extracts local magnitude
peaks, and scores them for repetitiveness.

Two transform variants are available:
- "complex": full Cooley-Tukey, magnitude = |X[k]|
- "real_only": the odd branch's imaginary part is dropped at every level.
  Magnitude ordering survives well enough for peak picking but phase is
  distorted; severity thresholds were not tuned against it.
"""

import logging
import numpy as np
from dataclasses import dataclass
from typing import Optional, List, Tuple, Dict, Any, Sequence

from .config import DetectorConfig
from .scoring import ScoringEngine

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Data Classes
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FrequencyPeak:
    """Local maximum of the magnitude spectrum."""
    frequency: float
    magnitude: float

    def to_dict(self) -> Dict[str, float]:
        return {'frequency': self.frequency, 'magnitude': self.magnitude}


@dataclass(frozen=True)
class AxisAnalysis:
    """Peaks and repetitiveness score for one coordinate axis."""
    peaks: Tuple[FrequencyPeak, ...] = ()
    score: float = 0.0
    peak_count: int = 0

    @classmethod
    def empty(cls) -> "AxisAnalysis":
        return cls()

    @property
    def dominant_frequency(self) -> Optional[float]:
        return self.peaks[0].frequency if self.peaks else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'peaks': [p.to_dict() for p in self.peaks],
            'score': self.score,
            'peak_count': self.peak_count,
            'dominant_frequency': self.dominant_frequency
        }


# -----------------------------------------------------------------------------
# Transform
# -----------------------------------------------------------------------------

def next_power_of_two(n: int) -> int:
    size = 1
    while size < n:
        size <<= 1
    return size


def _fft_complex(data: np.ndarray) -> np.ndarray:
    n = data.size
    if n == 1:
        return data.astype(np.complex128)
    even = _fft_complex(data[0::2])
    odd = _fft_complex(data[1::2])
    twiddle = np.exp(-2j * np.pi * np.arange(n // 2) / n)
    return np.concatenate([even + twiddle * odd, even - twiddle * odd])


def _fft_real_only(data: np.ndarray) -> np.ndarray:
    n = data.size
    if n == 1:
        return data.astype(np.float64)
    even = _fft_real_only(data[0::2])
    odd = _fft_real_only(data[1::2])
    # Odd imaginary part taken as zero, so only the twiddle's cosine survives
    twiddle_real = np.cos(-2 * np.pi * np.arange(n // 2) / n)
    return np.concatenate([even + twiddle_real * odd, even - twiddle_real * odd])


def fft(values: Sequence[float], transform: str = "complex") -> np.ndarray:
    """
    Radix-2 FFT of a real sequence, zero-padded to the next power of two.

    Args:
        values: Real-valued samples
        transform: "complex" or "real_only"

    Returns:
        Transform of length N = 2^k. Sequences shorter than 2 are returned unchanged.
    """
    data = np.asarray(values, dtype=np.float64)
    n = data.size
    if n < 2:
        return data

    size = next_power_of_two(n)
    if size != n:
        data = np.concatenate([data, np.zeros(size - n)])

    if transform == "real_only":
        return _fft_real_only(data)
    return _fft_complex(data)


# -----------------------------------------------------------------------------
# Analyzer
# -----------------------------------------------------------------------------

class SpectralAnalyzer:
    """
    Per-axis spectrum, peak extraction, and scoring.

    Uses the configured frame rate for the frequency axis
    (freq[i] = i * frame_rate / N); actual sample timestamps are ignored.
    """

    def __init__(self, config: Optional[DetectorConfig] = None, scorer: Optional[ScoringEngine] = None):
        self.config = config or DetectorConfig()
        self.scorer = scorer or ScoringEngine(self.config)

    def prepare(self, values: Sequence[float]) -> np.ndarray:
        """Drop non-finite values, remove the mean, and apply the taper."""
        data = np.asarray(values, dtype=np.float64)
        data = data[np.isfinite(data)]
        if data.size < 2:
            return data
        if self.config.detrend:
            data = data - np.mean(data)
        if self.config.taper == "hann":
            data = data * np.hanning(data.size)
        return data

    def spectrum(self, values: Sequence[float]) -> Tuple[np.ndarray, np.ndarray]:
        """
        Magnitude spectrum of a prepared sequence.

        Returns:
            tuple: (freqs, magnitudes), both of padded length N
        """
        transformed = fft(values, self.config.transform)
        magnitudes = np.abs(transformed)
        freqs = np.arange(magnitudes.size) * self.config.frame_rate_hz / max(magnitudes.size, 1)
        return freqs, magnitudes

    def find_peaks(self, magnitudes: np.ndarray, freqs: np.ndarray) -> List[FrequencyPeak]:
        """Local maxima in the lower half of the spectrum above threshold * max, strongest first."""
        half = magnitudes.size // 2
        if half < 2:
            return []

        floor = self.config.peak_threshold_fraction * float(np.max(magnitudes))
        idx = np.arange(1, half)
        center = magnitudes[idx]
        mask = (center > magnitudes[idx - 1]) & (center > magnitudes[idx + 1]) & (center > floor)

        peaks = [FrequencyPeak(frequency=float(freqs[i]), magnitude=float(magnitudes[i])) for i in idx[mask]]
        peaks.sort(key=lambda p: p.magnitude, reverse=True)
        return peaks

    def extract_peaks(self, values: Sequence[float]) -> List[FrequencyPeak]:
        """Top peaks restricted to the physiologically plausible band."""
        freqs, magnitudes = self.spectrum(values)
        peaks = self.find_peaks(magnitudes, freqs)[:self.config.max_peaks]

        low, high = self.config.plausible_band_hz
        nyquist = self.config.nyquist_hz
        return [
            p for p in peaks
            if low <= p.frequency <= high and 0.0 < p.frequency <= nyquist
        ]

    def analyze_axis(self, values: Sequence[float]) -> AxisAnalysis:
        """Score one coordinate sequence. Short or flat input yields the empty analysis."""
        raw = np.asarray(values, dtype=np.float64)
        raw = raw[np.isfinite(raw)]
        if raw.size < self.config.min_axis_samples:
            logger.debug("analyze_axis: %d usable samples, need %d", raw.size, self.config.min_axis_samples)
            return AxisAnalysis.empty()
        if np.ptp(raw) == 0:
            return AxisAnalysis.empty()

        peaks = self.extract_peaks(self.prepare(raw))
        score = self.scorer.score(peaks)
        return AxisAnalysis(peaks=tuple(peaks), score=score, peak_count=len(peaks))

    def analyze_real_time(self, values: Sequence[float], window_size: Optional[int] = None) -> AxisAnalysis:
        """Analyze only the trailing window_size values (defaults to the configured window)."""
        if window_size is None:
            window_size = self.config.window_size
        if window_size <= 0:
            raise ValueError(f"window_size must be positive, got {window_size}")
        data = np.asarray(values, dtype=np.float64)
        return self.analyze_axis(data[-window_size:])
