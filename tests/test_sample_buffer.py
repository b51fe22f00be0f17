import numpy as np
import pytest

from Motion_Analysis.utils.sample_buffer import Sample, SampleBuffer, WindowedSeries, Wrist


def _sample(i, confidence=1.0):
    return Sample(x=float(i), y=float(i) * 2, z=float(i) * 3, confidence=confidence, timestamp=1000.0 + i)


def test_window_keeps_most_recent_samples_in_order():
    series = WindowedSeries(window_size=10)
    for i in range(25):
        series.append(_sample(i))

    assert len(series) == 10
    assert [s.timestamp for s in series.samples()] == [1000.0 + i for i in range(15, 25)]


def test_window_below_capacity_keeps_everything():
    series = WindowedSeries(window_size=10)
    for i in range(4):
        series.append(_sample(i))
    assert [s.timestamp for s in series.samples()] == [1000.0, 1001.0, 1002.0, 1003.0]


def test_axis_views_are_copies():
    series = WindowedSeries(window_size=5)
    for i in range(3):
        series.append(_sample(i))

    y = series.axis('y')
    assert np.array_equal(y, [0.0, 2.0, 4.0])
    y[0] = 99.0
    assert series.axis('y')[0] == 0.0


def test_unknown_axis_rejected():
    with pytest.raises(ValueError):
        WindowedSeries().axis('w')


def test_latest_sample():
    series = WindowedSeries()
    assert series.latest is None
    series.append(_sample(7))
    assert series.latest.timestamp == 1007.0


def test_buffer_keeps_wrists_separate():
    buffer = SampleBuffer(window_size=3)
    for i in range(5):
        buffer.append(Wrist.LEFT, _sample(i))
    buffer.append(Wrist.RIGHT, _sample(100))

    assert buffer.count(Wrist.LEFT) == 3
    assert buffer.count(Wrist.RIGHT) == 1
    assert buffer.combined_count == 4
    assert np.array_equal(buffer.axis(Wrist.LEFT, 'x'), [2.0, 3.0, 4.0])


def test_low_confidence_samples_dropped():
    buffer = SampleBuffer(window_size=10, min_confidence=0.5)
    assert buffer.append(Wrist.LEFT, _sample(0, confidence=0.9))
    assert not buffer.append(Wrist.LEFT, _sample(1, confidence=0.2))
    assert buffer.count(Wrist.LEFT) == 1


def test_add_frame_skips_missing_hand():
    buffer = SampleBuffer()
    buffer.add_frame(_sample(0), None)
    buffer.add_frame(None, None)
    assert buffer.count(Wrist.LEFT) == 1
    assert buffer.count(Wrist.RIGHT) == 0


def test_wrist_accepts_enum_value():
    buffer = SampleBuffer()
    buffer.append("right", _sample(0))
    assert buffer.count(Wrist.RIGHT) == 1


def test_reset_clears_all_series():
    buffer = SampleBuffer()
    buffer.add_frame(_sample(0), _sample(1))
    buffer.reset()
    assert buffer.combined_count == 0
    assert buffer.latest() == {Wrist.LEFT: None, Wrist.RIGHT: None}
