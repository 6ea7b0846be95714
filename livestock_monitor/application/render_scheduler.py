"""Drive overlay redraws from the host event loop.

Two drivers exist, one per view:

* :class:`PeriodicRenderTask` redraws at a fixed cadence while a live feed
  streams. It is created when streaming starts and disposed when it stops;
  disposal is synchronous, so no tick can run once :meth:`dispose` returns.
* :class:`OnDemandRenderTrigger` renders a static image exactly once, as soon
  as both the decoded image and its detection results are available.

Both run on a single-threaded host loop (asyncio or Tk) and never overlap.
"""

from __future__ import annotations

import time
from typing import Callable, Protocol

from ..crosscutting.logging_setup import get_logger
from ..domain.vision.detection import DetectionBatch, FrameSize
from ..shared.scheduling import IntervalScheduler


class TimerHandle(Protocol):
    def cancel(self) -> None:
        """Drop the pending callback if it has not run yet."""


class TimerHost(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Run ``callback`` on the host loop after ``delay`` seconds."""


class PeriodicRenderTask:
    """Cancellable fixed-cadence redraw handle."""

    def __init__(
        self,
        host: TimerHost,
        interval: float,
        callback: Callable[[], None],
        logger=None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._host = host
        self._callback = callback
        self._logger = logger or get_logger(__name__)
        self._scheduler = IntervalScheduler(interval, clock)
        self._handle: TimerHandle | None = None
        self._started = False
        self._disposed = False

    @property
    def interval(self) -> float:
        return self._scheduler.interval

    @property
    def active(self) -> bool:
        return self._started and not self._disposed

    @property
    def disposed(self) -> bool:
        return self._disposed

    def start(self) -> None:
        if self._disposed:
            raise RuntimeError("A disposed render task cannot be restarted")
        if self._started:
            return
        self._started = True
        self._scheduler.reset()
        self._schedule()

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        handle, self._handle = self._handle, None
        if handle is not None:
            handle.cancel()

    def _schedule(self) -> None:
        self._handle = self._host.call_later(self._scheduler.timeout(), self._tick)

    def _tick(self) -> None:
        self._handle = None
        if self._disposed:
            return
        try:
            self._callback()
        except Exception:
            self._logger.exception("render.periodic.failed")
        self._scheduler.executed()
        if not self._disposed:
            self._schedule()


class OnDemandRenderTrigger:
    """Fire ``callback`` once both the image and its detections are ready.

    Whichever input arrives last triggers the render. A new input (a reloaded
    image or fresh results) re-arms the trigger; :meth:`reset` forgets both.
    """

    def __init__(self, callback: Callable[[FrameSize, DetectionBatch], None]) -> None:
        self._callback = callback
        self._image_size: FrameSize | None = None
        self._results: DetectionBatch | None = None
        self._fired = False

    @property
    def image_size(self) -> FrameSize | None:
        return self._image_size

    @property
    def results(self) -> DetectionBatch | None:
        return self._results

    @property
    def pending(self) -> bool:
        """True while exactly one of the two inputs has arrived."""

        return (self._image_size is None) != (self._results is None)

    def image_loaded(self, size: FrameSize) -> None:
        self._image_size = size
        self._fired = False
        self._maybe_fire()

    def results_arrived(self, batch: DetectionBatch) -> None:
        self._results = batch
        self._fired = False
        self._maybe_fire()

    def reset(self) -> None:
        self._image_size = None
        self._results = None
        self._fired = False

    def _maybe_fire(self) -> None:
        if self._fired or self._image_size is None or self._results is None:
            return
        self._fired = True
        self._callback(self._image_size, self._results)


__all__ = [
    "OnDemandRenderTrigger",
    "PeriodicRenderTask",
    "TimerHandle",
    "TimerHost",
]
