from __future__ import annotations

import time
from typing import Callable, Protocol, Sequence

from ..crosscutting.logging_setup import get_logger, overlay_context
from ..domain.camera import Camera
from ..domain.events import OVERLAY_TOPIC, STREAM_TOPIC, OverlayRendered, StreamStateChanged
from ..domain.view_state import (
    CameraSelected,
    StreamStarted,
    StreamStopped,
    StreamToggled,
    Tab,
    TabSelected,
    ViewEvent,
    ViewState,
    reduce,
)
from ..domain.vision.detection import DetectionBatch, FrameSize
from ..infrastructure.opencv_overlay import Annotation, OverlayRenderer, OverlaySurface
from ..shared.bus import EventBus
from .render_scheduler import PeriodicRenderTask, TimerHost


class LiveDetectionSource(Protocol):
    def list_cameras(self) -> Sequence[Camera]:
        """Return the cameras that can be watched."""

    def batch_for(self, camera_id: str) -> DetectionBatch:
        """Return the current detections for ``camera_id``."""


class LiveFeedController:
    """Keep one camera's overlay in step with its moving video frame.

    While streaming, a single :class:`PeriodicRenderTask` repaints the overlay
    at ``interval`` seconds whether or not the detections changed. Switching
    cameras swaps the batch the next tick paints; the cadence keeps running.
    """

    def __init__(
        self,
        renderer: OverlayRenderer,
        surface: OverlaySurface | None,
        source: LiveDetectionSource,
        host: TimerHost,
        content_probe: Callable[[], FrameSize],
        reference: FrameSize,
        interval: float,
        bus: EventBus,
        logger=None,
        initial_camera: str = "camera1",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._renderer = renderer
        self._surface = surface
        self._source = source
        self._host = host
        self._content_probe = content_probe
        self._reference = reference
        self._interval = interval
        self._bus = bus
        self._logger = logger or get_logger(__name__)
        self._clock = clock
        self._state = ViewState(tab=Tab.LIVE, camera_id=initial_camera, streaming=False)
        self._batch = source.batch_for(initial_camera)
        self._task: PeriodicRenderTask | None = None
        self._last_annotations: tuple[Annotation, ...] = ()

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def active_batch(self) -> DetectionBatch:
        return self._batch

    @property
    def streaming(self) -> bool:
        return self._task is not None and self._task.active

    @property
    def last_annotations(self) -> tuple[Annotation, ...]:
        return self._last_annotations

    def start_stream(self) -> None:
        if self.streaming:
            self._logger.info("live.stream.already_running", camera=self._state.camera_id)
            return
        self._enter_live_view()
        self._apply(StreamStarted())
        self._start_task()

    def stop_stream(self) -> None:
        if self._task is None:
            return
        self._apply(StreamStopped())
        self._stop_task()

    def toggle_stream(self) -> bool:
        """Flip between streaming and stopped; returns whether the feed now streams."""

        self._enter_live_view()
        self._apply(StreamToggled())
        if self._state.streaming:
            self._start_task()
        else:
            self._stop_task()
        return self.streaming

    def select_tab(self, tab: Tab) -> None:
        """Switch views; leaving the live view stops the stream."""

        self._apply(TabSelected(tab))
        if not self._state.streaming:
            self._stop_task()

    def select_camera(self, camera_id: str) -> None:
        if camera_id == self._state.camera_id:
            return
        self._apply(CameraSelected(camera_id))
        self._batch = self._source.batch_for(camera_id)
        self._last_annotations = ()
        self._logger.info(
            "live.camera.switched",
            camera=camera_id,
            detections=len(self._batch),
            streaming=self.streaming,
        )

    def render_now(self) -> tuple[Annotation, ...] | None:
        with overlay_context(self._state.camera_id):
            annotations = self._renderer.render(
                self._surface,
                self._batch,
                self._content_probe(),
                reference=self._reference,
            )
        if annotations is None:
            self._last_annotations = ()
            return None
        self._last_annotations = annotations
        self._bus.publish(OVERLAY_TOPIC, OverlayRendered(self._batch.source, len(annotations)))
        return annotations

    def dispose(self) -> None:
        self.select_tab(Tab.DASHBOARD)

    def _start_task(self) -> None:
        if self.streaming:
            return
        task = PeriodicRenderTask(
            self._host,
            self._interval,
            self.render_now,
            logger=self._logger,
            clock=self._clock,
        )
        self._task = task
        task.start()
        self._bus.publish(STREAM_TOPIC, StreamStateChanged(self._state.camera_id, True))
        self._logger.info("live.stream.started", camera=self._state.camera_id, interval=self._interval)

    def _stop_task(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.dispose()
        if self._surface is not None:
            self._surface.clear()
        self._last_annotations = ()
        self._bus.publish(STREAM_TOPIC, StreamStateChanged(self._state.camera_id, False))
        self._logger.info("live.stream.stopped", camera=self._state.camera_id)

    def _enter_live_view(self) -> None:
        if self._state.tab is not Tab.LIVE:
            self._apply(TabSelected(Tab.LIVE))

    def _apply(self, event: ViewEvent) -> None:
        self._state = reduce(self._state, event)


__all__ = ["LiveDetectionSource", "LiveFeedController"]
