"""Core analysis algorithms."""
from .config import DetectorConfig
from .scoring import ScoringEngine
from .spectral_analyzer import SpectralAnalyzer, AxisAnalysis, FrequencyPeak, fft
from .classifier import MotionSeverity, Classification, classify_repetitive_motion, most_severe
from .session_aggregator import SessionAggregator, WristAnalysis, SessionAnalysis, SessionSummary, DetectionStats
from .repetitive_motion_detector import RepetitiveMotionDetector
from .realtime_controller import RealTimeController, MovementStats, AxisStatistics
