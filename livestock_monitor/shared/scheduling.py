"""Deadline tracking for periodic redraws."""

from __future__ import annotations

import time
from typing import Callable


class IntervalScheduler:
    """Track monotonic deadlines for a fixed-cadence task.

    Deadlines advance by whole intervals from the previous deadline, so a late
    tick does not push the whole cadence back. When the task falls more than
    one interval behind, the cadence re-anchors on the current time instead of
    firing a burst of catch-up ticks.
    """

    def __init__(self, interval: float, clock: Callable[[], float] = time.monotonic) -> None:
        if interval <= 0:
            raise ValueError("Interval must be positive")
        self.interval = interval
        self._clock = clock
        self._next_deadline = clock() + interval

    def timeout(self) -> float:
        """Return the time remaining until the next deadline."""

        return max(0.0, self._next_deadline - self._clock())

    def executed(self) -> None:
        """Record that the job has run and compute the next deadline."""

        now = self._clock()
        self._next_deadline += self.interval
        if self._next_deadline <= now:
            self._next_deadline = now + self.interval

    def reset(self) -> None:
        """Restart the cadence one interval from now."""

        self._next_deadline = self._clock() + self.interval
