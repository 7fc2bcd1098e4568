# tests/core/test_scheduler.py
"""Tests for the periodic task."""

import threading

import pytest

from sourcebit_sample.core.scheduler import PeriodicTask


class TestPeriodicTask:
    """Fixed-interval task with stop handle."""

    def test_rejects_non_positive_interval(self) -> None:
        with pytest.raises(ValueError, match="interval_seconds must be > 0"):
            PeriodicTask(0, lambda: None)

    def test_fire_runs_callback_synchronously(self) -> None:
        calls: list[int] = []
        task = PeriodicTask(60.0, lambda: calls.append(1))

        task.fire()
        task.fire()

        assert calls == [1, 1]
        assert task.fire_count == 2
        assert not task.running

    def test_fires_repeatedly_until_stopped(self) -> None:
        fired = threading.Event()
        count = {"n": 0}

        def callback() -> None:
            count["n"] += 1
            if count["n"] >= 3:
                fired.set()

        task = PeriodicTask(0.01, callback, name="test-task").start()
        try:
            assert fired.wait(5.0)
        finally:
            task.stop(timeout=5.0)

        assert not task.running
        stopped_at = task.fire_count
        assert stopped_at >= 3
        # No further firings after stop()
        threading.Event().wait(0.05)
        assert task.fire_count == stopped_at

    def test_start_twice_raises(self) -> None:
        task = PeriodicTask(60.0, lambda: None).start()
        try:
            with pytest.raises(RuntimeError, match="already started"):
                task.start()
        finally:
            task.stop(timeout=5.0)

    def test_stop_without_start_is_safe(self) -> None:
        task = PeriodicTask(60.0, lambda: None)
        task.stop()
        task.stop()
        assert not task.running

    def test_stop_before_first_interval_never_fires(self) -> None:
        calls: list[int] = []
        task = PeriodicTask(60.0, lambda: calls.append(1)).start()

        task.stop(timeout=5.0)

        assert calls == []
        assert not task.running

    def test_callback_error_ends_task(self) -> None:
        def boom() -> None:
            raise RuntimeError("boom")

        task = PeriodicTask(0.01, boom, name="failing").start()
        task._thread.join(5.0)  # type: ignore[union-attr]

        assert not task.running
        assert isinstance(task.error, RuntimeError)
        assert task.fire_count == 0
