"""Tk window playing a barn camera with its live behaviour overlay."""

from __future__ import annotations

import tkinter as tk
from pathlib import Path
from tkinter import ttk

import numpy as np

from ..application.live_feed import LiveFeedController
from ..domain.events import ERROR_TOPIC, STREAM_TOPIC, ErrorRaised, StreamStateChanged
from ..domain.vision.detection import FrameSize
from ..infrastructure.image_io import blank_frame, natural_size
from ..infrastructure.video_source import OpenCvVideoSource
from ..shared.errors import InfrastructureError
from .tk_timer import TkTimerHost
from .ui_controls import bind_combobox_selection, safe_configure, update_combobox_options
from .widgets.overlay_preview import OverlayPreview

FRAME_INTERVAL_MS = 33


class LiveViewerApp:
    def __init__(self, root: tk.Tk, container, video_root: Path) -> None:
        self.root = root
        self._video_root = video_root
        self._settings = container.settings()
        self._logger = container.logger()
        self._bus = container.bus()
        self._source = container.live_source()
        self._cameras = tuple(self._source.list_cameras())
        self._surface = container.surface()
        self._video: OpenCvVideoSource | None = None
        self._frame: np.ndarray | None = None
        self._frame_job: str | None = None
        self._controller: LiveFeedController = container.live_feed(
            surface=self._surface,
            host=TkTimerHost(root),
            content_probe=self._content_size,
        )

        self.root.title("Live Camera Feed")
        self.root.protocol("WM_DELETE_WINDOW", self.shutdown)
        self._camera_var = tk.StringVar()
        self._status_var = tk.StringVar(value="Stream stopped")
        self._build_layout()
        self._bus.subscribe(STREAM_TOPIC, self._on_stream_changed)
        self._bus.subscribe(ERROR_TOPIC, self._on_error)

    def _build_layout(self) -> None:
        self.root.rowconfigure(1, weight=1)
        self.root.columnconfigure(0, weight=1)

        controls = ttk.Frame(self.root, padding=8)
        controls.grid(row=0, column=0, sticky="ew")
        controls.columnconfigure(1, weight=1)
        ttk.Label(controls, text="Camera").grid(row=0, column=0, padx=(0, 8))
        self._camera_combo = ttk.Combobox(controls, textvariable=self._camera_var)
        self._camera_combo.grid(row=0, column=1, sticky="ew")
        update_combobox_options(
            self._camera_combo,
            self._camera_var,
            [camera.title for camera in self._cameras],
            selected=self._title_for(self._controller.state.camera_id),
        )
        bind_combobox_selection(self._camera_combo, self._on_camera_selected)
        self._toggle_button = ttk.Button(controls, text="Start Stream", command=self.toggle_stream)
        self._toggle_button.grid(row=0, column=2, padx=(8, 0))

        self._preview = OverlayPreview(self.root)
        self._preview.widget().grid(row=1, column=0, sticky="nsew")
        ttk.Label(self.root, textvariable=self._status_var, padding=4).grid(row=2, column=0, sticky="ew")

    def toggle_stream(self) -> None:
        if not self._controller.streaming:
            self._open_video(self._controller.state.camera_id)
        self._cancel_frame_job()
        if self._controller.toggle_stream():
            self._schedule_frame_updates()
        else:
            self._close_video()

    def _on_camera_selected(self, index: int) -> None:
        if not 0 <= index < len(self._cameras):
            return
        camera = self._cameras[index]
        self._controller.select_camera(camera.identifier)
        if self._controller.streaming:
            self._open_video(camera.identifier)

    def _open_video(self, camera_id: str) -> None:
        self._close_video()
        camera = self._source.camera(camera_id)
        if camera is None:
            return
        video = OpenCvVideoSource(self._video_root / camera.video_source)
        try:
            video.open()
        except InfrastructureError as exc:
            self._logger.warning("live.video.unavailable", camera=camera_id, error=str(exc))
            self._frame = blank_frame(self._settings.reference_frame)
            return
        self._video = video

    def _close_video(self) -> None:
        if self._video is not None:
            self._video.close()
        self._video = None
        self._frame = None

    def _content_size(self) -> FrameSize:
        if self._video is not None:
            return self._video.frame_size()
        if self._frame is not None:
            return natural_size(self._frame)
        return FrameSize(0, 0)

    def _schedule_frame_updates(self) -> None:
        self._frame_job = None
        if not self._controller.streaming:
            return
        if self._video is not None:
            frame = self._video.read()
            if frame is not None:
                self._frame = frame
        if self._frame is not None:
            self._preview.update(self._frame, self._surface.snapshot())
        self._frame_job = self.root.after(FRAME_INTERVAL_MS, self._schedule_frame_updates)

    def _cancel_frame_job(self) -> None:
        if self._frame_job is not None:
            self.root.after_cancel(self._frame_job)
            self._frame_job = None

    def _on_stream_changed(self, event: StreamStateChanged) -> None:
        label = "Stop Stream" if event.streaming else "Start Stream"
        safe_configure(self._toggle_button, text=label)
        camera = self._title_for(event.camera_id) or event.camera_id
        self._status_var.set(f"{'LIVE' if event.streaming else 'Stream stopped'} - {camera}")

    def _on_error(self, event: ErrorRaised) -> None:
        self._status_var.set(event.message)

    def _title_for(self, camera_id: str) -> str | None:
        camera = self._source.camera(camera_id)
        return camera.title if camera else None

    def shutdown(self) -> None:
        self._controller.dispose()
        self._cancel_frame_job()
        self._close_video()
        self._bus.unsubscribe(STREAM_TOPIC, self._on_stream_changed)
        self._bus.unsubscribe(ERROR_TOPIC, self._on_error)
        self.root.destroy()

    def run(self) -> None:
        self.root.mainloop()


__all__ = ["LiveViewerApp"]
