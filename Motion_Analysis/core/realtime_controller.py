"""
Real-Time Controller Module

Keeps a sliding window of wrist samples per hand and re-runs the full
repetitive motion analysis on a fixed tick. Samples arriving between ticks
are only reflected at the next tick, so a published snapshot is at most one
interval stale.
"""

import logging
import time
import numpy as np
from dataclasses import dataclass
from typing import Optional, Dict, Any, Callable, Mapping, Sequence

from .config import DetectorConfig
from .repetitive_motion_detector import RepetitiveMotionDetector
from .session_aggregator import DetectionStats, SessionAnalysis, WristAnalysis
from .spectral_analyzer import AxisAnalysis
from ..utils.periodic_task import PeriodicTask
from ..utils.sample_buffer import SampleBuffer, Sample, Wrist

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Data Classes
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class AxisStatistics:
    """Descriptive statistics of one coordinate over the window."""
    mean: float
    variance: float
    std: float
    range: float
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'mean': self.mean,
            'variance': self.variance,
            'std': self.std,
            'range': self.range,
            'count': self.count
        }


@dataclass(frozen=True)
class MovementStats:
    """Vertical movement statistics per wrist."""
    left_wrist: Optional[AxisStatistics]
    right_wrist: Optional[AxisStatistics]
    total_frames: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'left_wrist': self.left_wrist.to_dict() if self.left_wrist else None,
            'right_wrist': self.right_wrist.to_dict() if self.right_wrist else None,
            'total_frames': self.total_frames
        }


# -----------------------------------------------------------------------------
# Controller
# -----------------------------------------------------------------------------

class RealTimeController:
    """
    Sliding-window repetitive motion monitor.

    Feed samples with add_sample/add_frame; call start() inside a running
    asyncio loop to analyze every analysis_interval_ms, or call tick()
    directly. Each published SessionAnalysis replaces the previous one.
    """
    MIN_STATS_FRAMES = 10

    def __init__(self, config: Optional[DetectorConfig] = None,
                 detector: Optional[RepetitiveMotionDetector] = None,
                 on_analysis: Optional[Callable[[SessionAnalysis], Any]] = None):
        self.config = config or DetectorConfig()
        self.detector = detector or RepetitiveMotionDetector(self.config)
        self.buffer = SampleBuffer(self.config.window_size, self.config.min_confidence)
        self.on_analysis = on_analysis
        self._latest: Optional[SessionAnalysis] = None
        self._task = PeriodicTask(self.config.analysis_interval_s, self.tick, name="repetitive-motion-analysis")

    # -------------------------------------------------------------------------
    # Ingestion
    # -------------------------------------------------------------------------

    def add_sample(self, wrist: Wrist, x: float, y: float, z: float,
                   confidence: float = 1.0, timestamp: Optional[float] = None) -> bool:
        """Append one wrist sample (timestamp in ms). Returns False if dropped for low confidence."""
        if timestamp is None:
            timestamp = time.time() * 1000
        sample = Sample(float(x), float(y), float(z), float(confidence), float(timestamp))
        return self.buffer.append(Wrist(wrist), sample)

    def add_frame(self, left: Optional[Mapping[str, float]], right: Optional[Mapping[str, float]],
                  timestamp: Optional[float] = None):
        """
        Append one frame from the hand tracker.

        Args:
            left: {'x', 'y', 'z', 'confidence'} for the left wrist, or None if not tracked
            right: same for the right wrist
            timestamp: Frame time in ms (defaults to now)
        """
        if timestamp is None:
            timestamp = time.time() * 1000
        self.buffer.add_frame(self._to_sample(left, timestamp), self._to_sample(right, timestamp))

    @staticmethod
    def _to_sample(position: Optional[Mapping[str, float]], timestamp: float) -> Optional[Sample]:
        if position is None:
            return None
        return Sample(float(position['x']), float(position['y']), float(position['z']),
                      float(position.get('confidence', 1.0)), float(timestamp))

    # -------------------------------------------------------------------------
    # Analysis
    # -------------------------------------------------------------------------

    def tick(self) -> Optional[SessionAnalysis]:
        """Analyze the current window once. Returns None (and keeps the last snapshot) if data is insufficient."""
        combined = self.buffer.combined_count
        if combined < self.config.min_combined_samples:
            logger.debug("tick skipped: %d samples, need %d", combined, self.config.min_combined_samples)
            return None

        session = self.detector.aggregator.aggregate(
            self._analyze_wrist(Wrist.LEFT),
            self._analyze_wrist(Wrist.RIGHT)
        )
        self._latest = session
        if session.summary is not None:
            logger.debug("tick: score %.3f (%s) over %d wrist(s)", session.summary.overall_score,
                         session.summary.classification.value, session.summary.wrist_count)
        if self.on_analysis is not None:
            self.on_analysis(session)
        return session

    def _analyze_wrist(self, wrist: Wrist) -> Optional[WristAnalysis]:
        if self.buffer.count(wrist) == 0:
            return None
        return self.detector.analyze_wrist(self.buffer.axis(wrist, 'y'), self.buffer.axis(wrist, 'z'))

    def analyze_real_time(self, values: Sequence[float], window_size: Optional[int] = None) -> AxisAnalysis:
        return self.detector.analyze_real_time(values, window_size)

    # -------------------------------------------------------------------------
    # Scheduling
    # -------------------------------------------------------------------------

    def start(self):
        """Start periodic analysis on the running asyncio loop."""
        self._task.start()
        logger.info("Real-time analysis started (window=%d, interval=%.0fms)",
                    self.config.window_size, self.config.analysis_interval_ms)

    def stop(self) -> bool:
        """Cancel the pending tick. Returns False if analysis was not running."""
        stopped = self._task.cancel()
        if stopped:
            logger.info("Real-time analysis stopped after %d ticks", self._task.tick_count)
        return stopped

    def advance(self, ticks: int = 1):
        """Run ticks immediately, as if the timer had fired."""
        self._task.advance(ticks)

    @property
    def is_running(self) -> bool:
        return self._task.is_running

    # -------------------------------------------------------------------------
    # Results
    # -------------------------------------------------------------------------

    @property
    def latest(self) -> Optional[SessionAnalysis]:
        return self._latest

    def detection_stats(self) -> DetectionStats:
        return self.detector.detection_stats(self._latest)

    @property
    def sample_count(self) -> int:
        return self.buffer.combined_count

    @property
    def has_data(self) -> bool:
        return self.buffer.combined_count > 0

    def current_wrist_positions(self) -> Optional[Dict[str, Any]]:
        """Most recent sample per wrist, or None if nothing has been recorded."""
        latest = self.buffer.latest()
        samples = [s for s in latest.values() if s is not None]
        if not samples:
            return None
        return {
            'left_wrist': latest[Wrist.LEFT],
            'right_wrist': latest[Wrist.RIGHT],
            'timestamp': max(s.timestamp for s in samples)
        }

    def movement_stats(self) -> Optional[MovementStats]:
        """Vertical-axis statistics per wrist; None until MIN_STATS_FRAMES frames are held."""
        total_frames = max(self.buffer.count(w) for w in Wrist)
        if total_frames < self.MIN_STATS_FRAMES:
            return None
        return MovementStats(
            left_wrist=self._axis_statistics(self.buffer.axis(Wrist.LEFT, 'y')),
            right_wrist=self._axis_statistics(self.buffer.axis(Wrist.RIGHT, 'y')),
            total_frames=total_frames
        )

    @staticmethod
    def _axis_statistics(values: np.ndarray) -> Optional[AxisStatistics]:
        if values.size < 2:
            return None
        return AxisStatistics(
            mean=float(np.mean(values)),
            variance=float(np.var(values)),
            std=float(np.std(values)),
            range=float(np.ptp(values)),
            count=int(values.size)
        )

    def clear_history(self):
        """Drop all buffered samples and the last snapshot."""
        self.buffer.reset()
        self._latest = None
        logger.info("Repetitive motion history cleared")
