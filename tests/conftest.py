from __future__ import annotations

import heapq
import itertools
from typing import Callable

import pytest


class ManualTimerHandle:
    def __init__(self, deadline: float, callback: Callable[[], None]) -> None:
        self.deadline = deadline
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualTimerHost:
    """Timer host whose clock only moves when the test advances it."""

    def __init__(self) -> None:
        self.now = 0.0
        self._queue: list[tuple[float, int, ManualTimerHandle]] = []
        self._counter = itertools.count()

    def clock(self) -> float:
        return self.now

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualTimerHandle:
        handle = ManualTimerHandle(self.now + delay, callback)
        heapq.heappush(self._queue, (handle.deadline, next(self._counter), handle))
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for _, _, handle in self._queue if not handle.cancelled)

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while self._queue and self._queue[0][0] <= target:
            deadline, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self.now = max(self.now, deadline)
            handle.callback()
        self.now = target


@pytest.fixture
def timer_host() -> ManualTimerHost:
    return ManualTimerHost()
