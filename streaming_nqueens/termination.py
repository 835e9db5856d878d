"""Remaining-solution counter and the termination monitor.

The expansion and reporting stages are endless consume loops over unbounded
queues, so neither can tell when the search is over. The monitor is the only
observer that can: it watches the count of solutions still to be reported
and moves from ``WAITING`` to ``DONE`` once that count reaches zero.

The counter notifies a condition variable on every decrement, so the
monitor wakes as soon as the last solution is reported; ``poll_interval``
only caps how long it sleeps between re-checks.
"""

from __future__ import annotations

import threading
from enum import Enum
from time import perf_counter
from typing import Callable, List, Optional


class RemainingCounter:
    """Integer counter with an atomic decrement and wait-for-zero."""

    def __init__(self, initial: int):
        if initial < 0:
            raise ValueError(f"Remaining count cannot be negative: {initial}")
        self._value = initial
        self._cond = threading.Condition(threading.Lock())

    @property
    def value(self) -> int:
        with self._cond:
            return self._value

    def decrement(self) -> int:
        """Decrement by one and return the value held before the update."""
        with self._cond:
            previous = self._value
            self._value = previous - 1
            self._cond.notify_all()
            return previous

    def wait_for_zero(
        self, timeout: Optional[float] = None, abort: Optional[threading.Event] = None
    ) -> bool:
        """Block up to ``timeout`` seconds; True once the counter is <= 0.

        A set ``abort`` event also ends the wait (after a ``wake``); the
        return value still reflects the counter only.
        """
        with self._cond:
            self._cond.wait_for(
                lambda: self._value <= 0 or (abort is not None and abort.is_set()),
                timeout=timeout,
            )
            return self._value <= 0

    def wake(self) -> None:
        """Wake every waiter so it can re-check external conditions."""
        with self._cond:
            self._cond.notify_all()


class MonitorState(Enum):
    WAITING = "waiting"
    DONE = "done"


class TerminationMonitor:
    """Watch a ``RemainingCounter`` and signal completion when it hits zero.

    Parameters
    ----------
    counter : RemainingCounter
        Shared count of solutions not yet reported.
    poll_interval : float
        Maximum sleep between two checks of the counter, in seconds.
    """

    def __init__(self, counter: RemainingCounter, poll_interval: float = 0.2):
        if poll_interval <= 0:
            raise ValueError(f"Poll interval must be positive, got {poll_interval}")
        self.counter = counter
        self.poll_interval = poll_interval
        self._state = MonitorState.WAITING
        self._lock = threading.Lock()
        self._callbacks: List[Callable[[], None]] = []

    @property
    def state(self) -> MonitorState:
        return self._state

    @property
    def done(self) -> bool:
        return self._state is MonitorState.DONE

    def on_done(self, callback: Callable[[], None]) -> None:
        """Register a callback fired once when the monitor reaches ``DONE``."""
        with self._lock:
            if self._state is not MonitorState.DONE:
                self._callbacks.append(callback)
                return
        callback()

    def wait(
        self, abort: Optional[threading.Event] = None, timeout: Optional[float] = None
    ) -> bool:
        """Block until the counter reaches zero, ``abort`` is set or time runs out.

        Returns True when ``DONE`` was reached, False when aborted or timed
        out first. ``DONE`` is terminal: later calls return True immediately.
        """
        deadline = None if timeout is None else perf_counter() + timeout
        while not self.done:
            if abort is not None and abort.is_set():
                return False
            interval = self.poll_interval
            if deadline is not None:
                left = deadline - perf_counter()
                if left <= 0:
                    return False
                interval = min(interval, left)
            if self.counter.wait_for_zero(timeout=interval, abort=abort):
                self._finish()
        return True

    def _finish(self) -> None:
        with self._lock:
            if self._state is MonitorState.DONE:
                return
            self._state = MonitorState.DONE
            callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()
