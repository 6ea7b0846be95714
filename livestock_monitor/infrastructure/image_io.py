"""Image decoding, overlay compositing and export helpers."""

from __future__ import annotations

from pathlib import Path

import cv2
import numpy as np

from ..domain.vision.detection import FrameSize
from ..shared.errors import InfrastructureError


def decode_image(content: bytes) -> np.ndarray:
    """Decode encoded image bytes (PNG, JPEG, ...) into a BGR array."""

    buffer = np.frombuffer(content, dtype=np.uint8)
    image = cv2.imdecode(buffer, cv2.IMREAD_COLOR) if buffer.size else None
    if image is None:
        raise InfrastructureError("Unable to decode image content")
    return image


def load_image(path: Path) -> np.ndarray:
    try:
        content = Path(path).read_bytes()
    except OSError as exc:
        raise InfrastructureError(f"Unable to read image {path}") from exc
    return decode_image(content)


def natural_size(image: np.ndarray) -> FrameSize:
    height, width = image.shape[:2]
    return FrameSize(width, height)


def compose(frame: np.ndarray, overlay: np.ndarray) -> np.ndarray:
    """Alpha-blend a BGRA ``overlay`` over a BGR ``frame`` of the same size."""

    if overlay.size == 0:
        return frame.copy()
    if overlay.shape[:2] != frame.shape[:2]:
        raise ValueError(
            f"Overlay size {overlay.shape[1::-1]} does not match frame size {frame.shape[1::-1]}"
        )
    alpha = overlay[..., 3:4].astype(np.float32) / 255.0
    blended = overlay[..., :3].astype(np.float32) * alpha + frame.astype(np.float32) * (1.0 - alpha)
    return np.clip(np.rint(blended), 0, 255).astype(np.uint8)


def save_image(path: Path, image: np.ndarray) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    if not cv2.imwrite(str(target), image):
        raise InfrastructureError(f"Unable to write image {target}")
    return target


def blank_frame(size: FrameSize, color: tuple[int, int, int] = (32, 32, 32)) -> np.ndarray:
    frame = np.zeros((size.height, size.width, 3), dtype=np.uint8)
    frame[:] = color
    return frame


__all__ = [
    "blank_frame",
    "compose",
    "decode_image",
    "load_image",
    "natural_size",
    "save_image",
]
