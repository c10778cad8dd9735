"""Deferred execution of the computer's move.

A scheduler returns a ScheduledTask handle. Cancelling the handle before the
delay elapses guarantees the callback never runs.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class ScheduledTask:
    def __init__(self, callback: Callable[[], None]):
        self._callback = callback
        self._lock = threading.Lock()
        self._finished = threading.Event()
        self._cancelled = False
        self._started = False
        self._timer: Optional[threading.Timer] = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def done(self) -> bool:
        return self._finished.is_set()

    def cancel(self) -> bool:
        """Cancel the task. Returns False if the callback already started."""
        with self._lock:
            if self._started:
                return False
            self._cancelled = True
        if self._timer is not None:
            self._timer.cancel()
        self._finished.set()
        return True

    def attach_timer(self, timer: threading.Timer) -> None:
        """Bind the timer that will run this task so cancel() also stops it."""
        self._timer = timer

    def wait(self, timeout: Optional[float] = None) -> bool:
        return self._finished.wait(timeout)

    def run(self) -> None:
        with self._lock:
            if self._cancelled or self._started:
                return
            self._started = True
        try:
            self._callback()
        finally:
            self._finished.set()


class ThreadScheduler:
    """Runs callbacks on a daemon threading.Timer after the delay."""

    def schedule(self, delay_s: float, callback: Callable[[], None]) -> ScheduledTask:
        task = ScheduledTask(callback)
        timer = threading.Timer(max(0.0, delay_s), task.run)
        timer.daemon = True
        task.attach_timer(timer)
        logger.debug("scheduled task in %.3fs", delay_s)
        timer.start()
        return task


class ImmediateScheduler:
    """Runs callbacks synchronously, ignoring the delay."""

    def schedule(self, delay_s: float, callback: Callable[[], None]) -> ScheduledTask:
        task = ScheduledTask(callback)
        task.run()
        return task
