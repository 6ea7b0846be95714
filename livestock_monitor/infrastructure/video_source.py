from __future__ import annotations

from pathlib import Path

import cv2
import numpy as np

from ..domain.vision.detection import FrameSize
from ..shared.errors import InfrastructureError


class OpenCvVideoSource:
    """Looping reader for a recorded camera feed."""

    def __init__(self, path: str | Path) -> None:
        self._path = str(path)
        self._capture: cv2.VideoCapture | None = None

    @property
    def path(self) -> str:
        return self._path

    def open(self) -> None:
        capture = cv2.VideoCapture(self._path)
        if not capture.isOpened():
            capture.release()
            raise InfrastructureError(f"Unable to open video {self._path}")
        self._capture = capture

    def frame_size(self) -> FrameSize:
        """Size reported by the stream metadata; unknown until the video is opened."""

        if self._capture is None:
            return FrameSize(0, 0)
        width = int(self._capture.get(cv2.CAP_PROP_FRAME_WIDTH) or 0)
        height = int(self._capture.get(cv2.CAP_PROP_FRAME_HEIGHT) or 0)
        return FrameSize(width, height)

    def read(self) -> np.ndarray | None:
        if self._capture is None:
            return None
        ok, frame = self._capture.read()
        if not ok:
            self._capture.set(cv2.CAP_PROP_POS_FRAMES, 0)
            ok, frame = self._capture.read()
            if not ok:
                return None
        return frame

    def close(self) -> None:
        if self._capture is not None:
            self._capture.release()
        self._capture = None
