import numpy as np
import pytest


@pytest.fixture
def make_signal():
    """Factory for sampled sinusoids with optional uniform noise and offset."""
    def _make(frequency, n_samples, sample_rate=25.0, amplitude=1.0, noise=0.0, offset=0.0, seed=0):
        t = np.arange(n_samples) / sample_rate
        signal = offset + amplitude * np.sin(2 * np.pi * frequency * t)
        if noise:
            rng = np.random.default_rng(seed)
            signal = signal + rng.uniform(-noise, noise, n_samples)
        return signal
    return _make
