"""Windowing and scheduling utilities."""
from .sample_buffer import Sample, SampleBuffer, WindowedSeries, Wrist
from .periodic_task import PeriodicTask
