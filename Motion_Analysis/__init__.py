"""
Motion Analysis Module
Repetitive motion (hand flapping) detection from wrist trajectories.
"""

from .core.config import DetectorConfig
from .core.classifier import MotionSeverity, classify_repetitive_motion
from .core.repetitive_motion_detector import RepetitiveMotionDetector
from .core.realtime_controller import RealTimeController
from .utils.sample_buffer import Sample, Wrist
