from __future__ import annotations

import tkinter as tk
from dataclasses import dataclass

import numpy as np
from PIL import Image, ImageTk

from ...infrastructure.image_io import compose


@dataclass
class CanvasSize:
    width: int
    height: int


class OverlayPreview:
    """Tk canvas showing a video frame with its detection overlay on top."""

    def __init__(self, parent: tk.Widget) -> None:
        self.container = tk.Frame(parent, background="black")
        self.container.rowconfigure(0, weight=1)
        self.container.columnconfigure(0, weight=1)

        self.canvas = tk.Canvas(self.container, highlightthickness=0, borderwidth=0, background="black")
        self.canvas.grid(row=0, column=0, sticky="nsew")
        self.canvas.bind("<Configure>", lambda _event: self._redraw())
        self._photo: ImageTk.PhotoImage | None = None
        self._image_id: int | None = None
        self._last_frame: np.ndarray | None = None
        self._last_overlay: np.ndarray | None = None

    def widget(self) -> tk.Widget:
        return self.container

    def update(self, frame: np.ndarray, overlay: np.ndarray | None) -> None:
        self._last_frame = frame
        self._last_overlay = overlay
        self._render()

    def _render(self) -> None:
        if self._last_frame is None:
            return
        canvas_size = self._current_canvas_size()
        if canvas_size.width <= 0 or canvas_size.height <= 0:
            return
        frame = self._last_frame
        overlay = self._last_overlay
        if overlay is not None and overlay.shape[:2] == frame.shape[:2]:
            frame = compose(frame, overlay)
        image = self._frame_to_image(frame, canvas_size)
        self._photo = ImageTk.PhotoImage(image=image)
        if self._image_id is None:
            self._image_id = self.canvas.create_image(
                canvas_size.width // 2,
                canvas_size.height // 2,
                image=self._photo,
            )
        else:
            self.canvas.itemconfig(self._image_id, image=self._photo)
            self.canvas.coords(self._image_id, canvas_size.width // 2, canvas_size.height // 2)

    @staticmethod
    def _frame_to_image(frame: np.ndarray, canvas_size: CanvasSize) -> Image.Image:
        image = Image.fromarray(np.ascontiguousarray(frame[..., ::-1]))
        width, height = image.size
        scale = min(canvas_size.width / width, canvas_size.height / height)
        if scale != 1:
            new_size = (max(1, int(width * scale)), max(1, int(height * scale)))
            image = image.resize(new_size, Image.Resampling.LANCZOS)
        return image

    def _current_canvas_size(self) -> CanvasSize:
        return CanvasSize(width=int(self.canvas.winfo_width()), height=int(self.canvas.winfo_height()))

    def _redraw(self) -> None:
        self._render()
