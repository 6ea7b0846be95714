"""OpenCV rendering of detection overlays onto a transparent BGRA surface."""

from __future__ import annotations

from dataclasses import dataclass

import cv2
import numpy as np

from ..crosscutting.logging_setup import get_logger
from ..domain.overlay.mapper import CoordinateMapper
from ..domain.vision.behavior import color_for
from ..domain.vision.detection import DetectionBatch, DetectionRecord, FrameSize

TEXT_COLOR = (255, 255, 255, 255)
BOX_THICKNESS = 3

Rect = tuple[int, int, int, int]


@dataclass(frozen=True)
class LabelStyle:
    font_face: int = cv2.FONT_HERSHEY_SIMPLEX
    font_scale: float = 0.55
    thickness: int = 2
    padding_x: int = 6
    padding_y: int = 6


PRIMARY_LABEL = LabelStyle()
SECONDARY_LABEL = LabelStyle(font_scale=0.42, thickness=1, padding_x=4, padding_y=4)


@dataclass(frozen=True)
class Annotation:
    """What was painted for one detection, in surface pixels (x1, y1, x2, y2)."""

    record_id: str
    box: Rect
    color: tuple[int, int, int]
    label: str
    label_rect: Rect
    secondary_label: str | None = None
    secondary_rect: Rect | None = None


class OverlaySurface:
    """Transparent BGRA buffer laid over an image or a video frame."""

    def __init__(self) -> None:
        self._pixels: np.ndarray | None = None
        self._released = False

    @property
    def size(self) -> FrameSize:
        if self._pixels is None:
            return FrameSize(0, 0)
        height, width = self._pixels.shape[:2]
        return FrameSize(width, height)

    def context(self) -> np.ndarray | None:
        """Return the drawable buffer, or ``None`` once the surface is released."""

        if self._released:
            return None
        if self._pixels is None:
            self._pixels = np.zeros((0, 0, 4), dtype=np.uint8)
        return self._pixels

    def resize(self, size: FrameSize) -> None:
        if self._released:
            return
        if self._pixels is None or self.size != size:
            self._pixels = np.zeros((size.height, size.width, 4), dtype=np.uint8)

    def clear(self) -> None:
        if self._pixels is not None:
            self._pixels.fill(0)

    def release(self) -> None:
        self._pixels = None
        self._released = True

    def snapshot(self) -> np.ndarray:
        """Return a copy of the current pixels."""

        pixels = self.context()
        if pixels is None:
            return np.zeros((0, 0, 4), dtype=np.uint8)
        return pixels.copy()


class OverlayRenderer:
    """Paint a detection batch onto an :class:`OverlaySurface` in one full repaint."""

    def __init__(
        self,
        logger=None,
        *,
        primary_style: LabelStyle = PRIMARY_LABEL,
        secondary_style: LabelStyle = SECONDARY_LABEL,
    ) -> None:
        self._logger = logger or get_logger(__name__)
        self._primary = primary_style
        self._secondary = secondary_style

    def render(
        self,
        surface: OverlaySurface | None,
        batch: DetectionBatch,
        content_size: FrameSize,
        reference: FrameSize | None = None,
    ) -> tuple[Annotation, ...] | None:
        """Resize, clear and redraw ``surface``; return ``None`` when the pass is skipped.

        ``content_size`` is the current size of the image or frame under the
        overlay. ``reference`` is the frame the boxes were computed in; it
        defaults to ``content_size`` for boxes already in image pixels.
        """

        if surface is None:
            self._logger.warning("overlay.render.skipped", reason="surface_missing")
            return None
        if surface.context() is None:
            self._logger.warning("overlay.render.skipped", reason="context_unavailable")
            return None
        mapper = CoordinateMapper(reference=reference or content_size, surface=content_size)
        if not mapper.ready:
            # Boxes from an earlier pass must not outlive a frame that cannot be mapped.
            surface.clear()
            self._logger.debug(
                "overlay.render.skipped",
                reason="mapper_not_ready",
                reference=mapper.reference,
                surface=mapper.surface,
            )
            return None

        surface.resize(content_size)
        surface.clear()
        canvas = surface.context()
        annotations = tuple(
            self._draw_record(canvas, record, mapper, content_size) for record in batch
        )
        self._logger.debug(
            "overlay.render.completed",
            source=batch.source,
            detections=len(annotations),
            surface=content_size,
        )
        return annotations

    def _draw_record(
        self,
        canvas: np.ndarray,
        record: DetectionRecord,
        mapper: CoordinateMapper,
        bounds: FrameSize,
    ) -> Annotation:
        mapped = mapper.map_box(record.bbox)
        x1, y1 = round(mapped.x), round(mapped.y)
        x2, y2 = round(mapped.right), round(mapped.bottom)
        color = color_for(record.behavior)
        stroke = (*color, 255)
        cv2.rectangle(canvas, (x1, y1), (x2, y2), stroke, BOX_THICKNESS, cv2.LINE_8)

        label = record.label_text
        width, height = label_extent(label, self._primary)
        # Above the box; flips just inside its top edge near the top of the surface.
        label_rect = place_label(x1, y1 - height, y1, width, height, bounds)
        _paint_label(canvas, label, self._primary, stroke, label_rect)

        secondary = record.secondary_text
        secondary_rect = None
        if secondary is not None:
            width, height = label_extent(secondary, self._secondary)
            # Below the box; flips just inside its bottom edge near the bottom of the surface.
            secondary_rect = place_label(x1, y2, y2 - height, width, height, bounds)
            _paint_label(canvas, secondary, self._secondary, stroke, secondary_rect)

        return Annotation(
            record_id=record.id,
            box=(x1, y1, x2, y2),
            color=color,
            label=label,
            label_rect=label_rect,
            secondary_label=secondary,
            secondary_rect=secondary_rect,
        )


def label_extent(text: str, style: LabelStyle) -> tuple[int, int]:
    """Return the background size that exactly fits ``text`` plus padding."""

    (text_width, text_height), baseline = cv2.getTextSize(
        text, style.font_face, style.font_scale, style.thickness
    )
    return text_width + 2 * style.padding_x, text_height + baseline + 2 * style.padding_y


def _paint_label(
    canvas: np.ndarray,
    text: str,
    style: LabelStyle,
    background: tuple[int, int, int, int],
    rect: Rect,
) -> None:
    x1, y1, x2, y2 = rect
    (_, text_height), _ = cv2.getTextSize(text, style.font_face, style.font_scale, style.thickness)
    cv2.rectangle(canvas, (x1, y1), (x2 - 1, y2 - 1), background, -1, cv2.LINE_8)
    cv2.putText(
        canvas,
        text,
        (x1 + style.padding_x, y1 + style.padding_y + text_height),
        style.font_face,
        style.font_scale,
        TEXT_COLOR,
        style.thickness,
        cv2.LINE_AA,
    )


def place_label(
    left: int,
    top: int,
    fallback_top: int,
    width: int,
    height: int,
    bounds: FrameSize,
) -> Rect:
    """Position a ``width`` x ``height`` label, flipping to ``fallback_top`` if it leaves ``bounds``.

    The result is finally clamped into the surface so the label is always
    visible; a label larger than the surface is pinned to the top-left corner.
    """

    if top < 0 or top + height > bounds.height:
        top = fallback_top
    top = min(max(0, top), max(0, bounds.height - height))
    left = min(max(0, left), max(0, bounds.width - width))
    return left, top, left + width, top + height


__all__ = [
    "Annotation",
    "LabelStyle",
    "OverlayRenderer",
    "OverlaySurface",
    "label_extent",
    "place_label",
]
