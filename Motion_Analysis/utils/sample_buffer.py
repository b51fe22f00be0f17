"""Bounded sliding windows of wrist samples."""

import numpy as np
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Dict, Any, Tuple


class Wrist(Enum):
    """Which hand a sample belongs to."""
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class Sample:
    """One wrist position for one frame."""
    x: float
    y: float
    z: float
    confidence: float
    timestamp: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'x': self.x, 'y': self.y, 'z': self.z,
            'confidence': self.confidence,
            'timestamp': self.timestamp
        }


class WindowedSeries:
    """Insertion-ordered samples for one hand. Oldest samples drop first once full."""

    AXES = ('x', 'y', 'z')

    def __init__(self, window_size: int = 100):
        self.window_size = window_size
        self._data: deque = deque(maxlen=window_size)

    def append(self, sample: Sample):
        self._data.append(sample)

    def axis(self, name: str) -> np.ndarray:
        """Copy of one coordinate over the window, oldest first."""
        if name not in self.AXES:
            raise ValueError(f"Unknown axis {name!r}, expected one of {self.AXES}")
        return np.array([getattr(s, name) for s in self._data], dtype=np.float64)

    def samples(self) -> Tuple[Sample, ...]:
        return tuple(self._data)

    @property
    def latest(self) -> Optional[Sample]:
        return self._data[-1] if self._data else None

    def __len__(self) -> int:
        return len(self._data)

    def reset(self):
        self._data.clear()


class SampleBuffer:
    """
    One bounded WindowedSeries per wrist.

    Samples below min_confidence are dropped on append; the window keeps the
    most recent window_size accepted samples per wrist.
    """

    def __init__(self, window_size: int = 100, min_confidence: float = 0.0):
        self.window_size = window_size
        self.min_confidence = min_confidence
        self._series: Dict[Wrist, WindowedSeries] = {w: WindowedSeries(window_size) for w in Wrist}

    def append(self, wrist: Wrist, sample: Sample) -> bool:
        """Add a sample. Returns False if it was rejected for low confidence."""
        if sample.confidence < self.min_confidence:
            return False
        self._series[Wrist(wrist)].append(sample)
        return True

    def add_frame(self, left: Optional[Sample], right: Optional[Sample]):
        """Add one frame's worth of samples; a missing hand is simply skipped."""
        if left is not None:
            self.append(Wrist.LEFT, left)
        if right is not None:
            self.append(Wrist.RIGHT, right)

    def series(self, wrist: Wrist) -> WindowedSeries:
        return self._series[Wrist(wrist)]

    def axis(self, wrist: Wrist, name: str) -> np.ndarray:
        return self._series[Wrist(wrist)].axis(name)

    def count(self, wrist: Wrist) -> int:
        return len(self._series[Wrist(wrist)])

    @property
    def combined_count(self) -> int:
        """Samples held across both wrists."""
        return sum(len(s) for s in self._series.values())

    def latest(self) -> Dict[Wrist, Optional[Sample]]:
        return {w: s.latest for w, s in self._series.items()}

    def reset(self):
        for series in self._series.values():
            series.reset()

