import numpy as np
import pytest

from Motion_Analysis.core.classifier import MotionSeverity, classify_repetitive_motion
from Motion_Analysis.core.config import DetectorConfig
from Motion_Analysis.core.spectral_analyzer import (
    AxisAnalysis, FrequencyPeak, SpectralAnalyzer, fft, next_power_of_two
)


@pytest.fixture
def analyzer():
    return SpectralAnalyzer(DetectorConfig(frame_rate_hz=25.0))


# -----------------------------------------------------------------------------
# Transform
# -----------------------------------------------------------------------------

@pytest.mark.parametrize("n,expected", [(1, 1), (2, 2), (3, 4), (64, 64), (100, 128), (129, 256)])
def test_next_power_of_two(n, expected):
    assert next_power_of_two(n) == expected


def test_complex_fft_matches_numpy():
    rng = np.random.default_rng(1)
    values = rng.normal(size=64)
    assert np.allclose(fft(values), np.fft.fft(values))


def test_fft_zero_pads_to_power_of_two():
    values = np.arange(100, dtype=float)
    result = fft(values)
    assert result.size == 128
    assert np.allclose(result, np.fft.fft(np.concatenate([values, np.zeros(28)])))


@pytest.mark.parametrize("values", [[], [3.5]])
def test_fft_degenerate_input_returned_unchanged(values):
    result = fft(values)
    assert list(result) == values


def test_real_only_transform_drops_odd_imaginary_part():
    result = fft([1.0, 2.0, 3.0, 4.0], transform="real_only")
    assert np.isrealobj(result)
    assert result == pytest.approx([10.0, -2.0, -2.0, -2.0])


# -----------------------------------------------------------------------------
# Peaks
# -----------------------------------------------------------------------------

def test_find_peaks_requires_local_maximum_above_threshold(analyzer):
    freqs = np.arange(8) * 25.0 / 8
    magnitudes = np.array([10.0, 1.0, 5.0, 1.0, 0.2, 0.3, 0.1, 0.0])
    peaks = analyzer.find_peaks(magnitudes, freqs)
    assert peaks == [FrequencyPeak(frequency=freqs[2], magnitude=5.0)]

    # Same local maximum, now under 5% of the global maximum
    magnitudes[0] = 200.0
    assert analyzer.find_peaks(magnitudes, freqs) == []


def test_peaks_sorted_by_magnitude_and_capped(analyzer):
    rng = np.random.default_rng(7)
    peaks = analyzer.extract_peaks(rng.normal(size=256))
    magnitudes = [p.magnitude for p in peaks]
    assert magnitudes == sorted(magnitudes, reverse=True)
    assert len(peaks) <= analyzer.config.max_peaks


def test_peaks_exclude_dc_and_frequencies_beyond_nyquist():
    analyzer = SpectralAnalyzer(DetectorConfig(frame_rate_hz=12.0))
    rng = np.random.default_rng(3)
    for _ in range(5):
        analysis = analyzer.analyze_axis(rng.normal(size=100) + 50.0)
        for peak in analysis.peaks:
            assert 0.0 < peak.frequency <= 6.0
            assert 0.1 <= peak.frequency <= 10.0


# -----------------------------------------------------------------------------
# Axis analysis
# -----------------------------------------------------------------------------

def test_short_sequence_yields_empty_analysis(analyzer):
    result = analyzer.analyze_axis([0.1, 0.5, 0.2, 0.9, 0.3, 0.7, 0.1, 0.4, 0.8])
    assert result == AxisAnalysis.empty()
    assert result.score == 0.0
    assert result.peak_count == 0
    assert result.dominant_frequency is None


def test_pure_sinusoid_in_flapping_band(analyzer, make_signal):
    result = analyzer.analyze_axis(make_signal(2.0, 64))
    assert result.dominant_frequency == pytest.approx(2.0, abs=0.5)
    assert result.score > 0.4
    assert result.peak_count == len(result.peaks) >= 1


def test_padded_sinusoid_with_offset(analyzer, make_signal):
    result = analyzer.analyze_axis(make_signal(2.0, 100, amplitude=0.05, offset=0.6))
    assert result.dominant_frequency == pytest.approx(2.0, abs=0.5)
    assert result.score > 0.4


def test_constant_sequence_scores_zero(analyzer):
    result = analyzer.analyze_axis([0.37] * 32)
    assert result.score == 0.0
    assert result.peaks == ()
    assert classify_repetitive_motion(result.score).severity is MotionSeverity.NONE


def test_non_finite_samples_are_ignored(analyzer, make_signal):
    values = make_signal(2.0, 70)
    values[[5, 30, 61]] = np.nan
    values[12] = np.inf
    result = analyzer.analyze_axis(values)
    assert np.isfinite(result.score)
    assert 0.0 <= result.score <= 1.0
    assert result.dominant_frequency == pytest.approx(2.0, abs=0.5)


def test_real_only_transform_score_stays_in_range(make_signal):
    analyzer = SpectralAnalyzer(DetectorConfig(frame_rate_hz=25.0, transform="real_only", taper="none", detrend=False))
    result = analyzer.analyze_axis(make_signal(2.0, 100, noise=0.1))
    assert 0.0 <= result.score <= 1.0
    assert all(0.0 < p.frequency <= 12.5 for p in result.peaks)


def test_frequency_axis_uses_configured_frame_rate(make_signal):
    signal = make_signal(2.0, 64)
    slow = SpectralAnalyzer(DetectorConfig(frame_rate_hz=25.0)).analyze_axis(signal)
    fast = SpectralAnalyzer(DetectorConfig(frame_rate_hz=50.0)).analyze_axis(signal)
    assert fast.dominant_frequency == pytest.approx(2 * slow.dominant_frequency)


def test_analyze_real_time_uses_trailing_window(analyzer, make_signal):
    values = np.concatenate([np.zeros(200), make_signal(2.0, 64)])
    assert analyzer.analyze_real_time(values, 64) == analyzer.analyze_axis(values[-64:])


def test_analyze_real_time_defaults_to_configured_window(make_signal):
    analyzer = SpectralAnalyzer(DetectorConfig(frame_rate_hz=25.0, window_size=64))
    values = np.concatenate([np.zeros(200), make_signal(2.0, 64)])
    assert analyzer.analyze_real_time(values) == analyzer.analyze_axis(values[-64:])


@pytest.mark.parametrize("window_size", [0, -5])
def test_analyze_real_time_rejects_non_positive_window(analyzer, make_signal, window_size):
    with pytest.raises(ValueError):
        analyzer.analyze_real_time(make_signal(2.0, 64), window_size)


def test_analysis_is_repeatable(analyzer, make_signal):
    signal = make_signal(2.4, 100, noise=0.2)
    assert analyzer.analyze_axis(signal) == analyzer.analyze_axis(signal)


def test_axis_analysis_to_dict(analyzer, make_signal):
    data = analyzer.analyze_axis(make_signal(2.0, 64)).to_dict()
    assert set(data) == {'peaks', 'score', 'peak_count', 'dominant_frequency'}
    assert data['peaks'][0]['frequency'] == data['dominant_frequency']
