import asyncio

import pytest

from Motion_Analysis.utils.periodic_task import PeriodicTask


@pytest.mark.parametrize("interval", [0, -1.0])
def test_interval_must_be_positive(interval):
    with pytest.raises(ValueError):
        PeriodicTask(interval, lambda: None)


def test_advance_invokes_callback_synchronously():
    calls = []
    task = PeriodicTask(1.0, lambda: calls.append(len(calls)))
    task.advance(3)
    assert calls == [0, 1, 2]
    assert task.tick_count == 3
    assert not task.is_running


def test_callback_errors_propagate():
    def boom():
        raise KeyError("bad frame")

    task = PeriodicTask(1.0, boom)
    with pytest.raises(KeyError):
        task.advance()
    assert task.tick_count == 1


def test_ticks_on_running_loop_until_cancelled():
    calls = []
    task = PeriodicTask(0.01, lambda: calls.append(1))

    async def scenario():
        task.start()
        await asyncio.sleep(0.06)
        assert task.cancel()
        seen = len(calls)
        await asyncio.sleep(0.03)
        return seen

    seen = asyncio.run(scenario())
    assert seen >= 1
    assert len(calls) == seen
    assert not task.is_running


def test_failed_tick_does_not_stop_schedule():
    calls = []

    def flaky():
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError("consumer failed")

    task = PeriodicTask(0.01, flaky)

    async def scenario():
        task.start()
        await asyncio.sleep(0.1)
        running = task.is_running
        task.cancel()
        return running

    assert asyncio.run(scenario())
    assert len(calls) >= 2
    assert task.tick_count == len(calls)


def test_cancel_when_idle():
    assert not PeriodicTask(1.0, lambda: None).cancel()


def test_start_without_loop():
    with pytest.raises(RuntimeError):
        PeriodicTask(1.0, lambda: None).start()
