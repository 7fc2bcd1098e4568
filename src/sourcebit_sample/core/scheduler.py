# src/sourcebit_sample/core/scheduler.py
"""Fixed-interval background task with an explicit stop handle.

Firings run sequentially on one daemon thread: a firing always completes
before the next one can start, and fire() can be called directly (e.g. from
tests) under the same lock.
"""

from __future__ import annotations

import threading
from collections.abc import Callable

import structlog

logger = structlog.get_logger()


class PeriodicTask:
    """Run a callback every `interval_seconds` until stopped.

    Usage:
        task = PeriodicTask(3.0, poll_source, name="sample-watch")
        task.start()
        ...
        task.stop()

    If the callback raises, the exception is logged, kept on `error`, and
    the task ends. Failed firings are not retried.
    """

    def __init__(
        self,
        interval_seconds: float,
        callback: Callable[[], None],
        *,
        name: str = "periodic-task",
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be > 0, got {interval_seconds}")
        self.interval_seconds = interval_seconds
        self.name = name
        self._callback = callback
        self._stop_event = threading.Event()
        self._fire_lock = threading.Lock()
        self._thread: threading.Thread | None = None
        self.fire_count = 0
        self.error: BaseException | None = None

    @property
    def running(self) -> bool:
        """Whether the background thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> PeriodicTask:
        """Start the background thread. Returns self.

        Raises:
            RuntimeError: If already started
        """
        if self._thread is not None:
            raise RuntimeError(f"Task {self.name!r} already started")
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()
        return self

    def fire(self) -> None:
        """Run the callback once, synchronously."""
        with self._fire_lock:
            self._callback()
            self.fire_count += 1

    def stop(self, timeout: float | None = None) -> None:
        """Stop the task and wait for an in-flight firing to finish.

        Safe to call more than once, or on a task that never started.
        """
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

    def _run(self) -> None:
        # wait() returns True once stop() is called
        while not self._stop_event.wait(self.interval_seconds):
            try:
                self.fire()
            except Exception as e:
                self.error = e
                logger.exception("Periodic task failed", task=self.name)
                return
