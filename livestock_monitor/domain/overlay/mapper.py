"""Reference-frame to surface coordinate mapping."""

from __future__ import annotations

from dataclasses import dataclass

from ...shared.errors import MapperNotReadyError
from ..vision.detection import BoundingBox, FrameSize


@dataclass(frozen=True)
class CoordinateMapper:
    """Scale boxes from ``reference`` pixels into ``surface`` pixels.

    Each axis is scaled independently, so a surface whose aspect ratio differs
    from the reference frame stretches the boxes rather than letterboxing them.
    """

    reference: FrameSize
    surface: FrameSize

    @property
    def ready(self) -> bool:
        return self.reference.is_known and self.surface.is_known

    @property
    def is_identity(self) -> bool:
        return self.reference == self.surface

    @property
    def scale(self) -> tuple[float, float]:
        self._ensure_ready()
        if self.is_identity:
            return 1.0, 1.0
        return (
            self.surface.width / self.reference.width,
            self.surface.height / self.reference.height,
        )

    def map_box(self, bbox: BoundingBox) -> BoundingBox:
        self._ensure_ready()
        if self.is_identity:
            return bbox
        scale_x, scale_y = self.scale
        return bbox.scaled(scale_x, scale_y)

    def _ensure_ready(self) -> None:
        if not self.ready:
            raise MapperNotReadyError(
                f"Cannot map {self.reference.as_tuple()} onto {self.surface.as_tuple()}"
            )


__all__ = ["CoordinateMapper"]
