"""Expose the asyncio event loop as a :class:`TimerHost`."""

from __future__ import annotations

import asyncio
from typing import Callable


class AsyncioTimerHost:
    """Schedule callbacks on an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


__all__ = ["AsyncioTimerHost"]
