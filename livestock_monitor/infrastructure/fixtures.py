"""Built-in camera catalog and mock live detections.

Live boxes are expressed in the 1920x1080 reference frame the barn cameras
record at.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Sequence

from ..domain.camera import Camera
from ..domain.vision.behavior import Behavior, HealthStatus
from ..domain.vision.detection import BoundingBox, DetectionBatch, DetectionRecord

CAMERAS: tuple[Camera, ...] = (
    Camera("camera1", "Barn A - Main Area", "Section 1", "videos/barn-a.mp4"),
    Camera("camera2", "Barn B - Feeding Area", "Section 2", "videos/barn-b.mp4"),
    Camera("camera3", "Outdoor Pen", "Section 3", "videos/outdoor.mp4"),
    Camera("camera4", "Isolation Area", "Section 4", "videos/isolation.mp4"),
)


def _live(
    record_id: int,
    pig_id: str,
    behavior: Behavior,
    confidence: float,
    temperature: float,
    status: str,
    bbox: tuple[float, float, float, float],
) -> DetectionRecord:
    return DetectionRecord(
        id=str(record_id),
        behavior=behavior,
        confidence=confidence,
        bbox=BoundingBox(*bbox),
        entity_label=pig_id,
        secondary_metric=temperature,
        status=HealthStatus.parse(status),
    )


LIVE_DETECTIONS: Mapping[str, tuple[DetectionRecord, ...]] = {
    "camera1": (
        _live(1, "PIG-001", Behavior.EATING, 0.92, 38.5, "healthy", (150, 100, 120, 150)),
        _live(2, "PIG-003", Behavior.WALKING, 0.88, 38.3, "healthy", (550, 200, 100, 130)),
        _live(4, "PIG-012", Behavior.LYING, 0.91, 38.6, "healthy", (750, 150, 130, 140)),
    ),
    "camera2": (
        _live(5, "PIG-005", Behavior.EATING, 0.94, 38.4, "healthy", (200, 150, 140, 160)),
        _live(6, "PIG-008", Behavior.INVESTIGATING, 0.87, 38.7, "healthy", (600, 250, 110, 140)),
    ),
    "camera3": (
        _live(7, "PIG-010", Behavior.WALKING, 0.89, 38.5, "healthy", (300, 200, 130, 150)),
        _live(8, "PIG-014", Behavior.LYING, 0.93, 38.3, "healthy", (700, 180, 120, 140)),
    ),
    "camera4": (
        _live(3, "PIG-007", Behavior.SLEEPING, 0.95, 39.2, "warning", (450, 350, 140, 110)),
        _live(9, "PIG-015", Behavior.LYING, 0.88, 39.5, "sick", (250, 300, 130, 120)),
    ),
}


@dataclass
class InMemoryLiveDetectionSource:
    """Deterministic per-camera batches standing in for a live detection feed."""

    cameras: Sequence[Camera] = CAMERAS
    detections: Mapping[str, Sequence[DetectionRecord]] = field(default_factory=lambda: LIVE_DETECTIONS)

    def list_cameras(self) -> Sequence[Camera]:
        return tuple(self.cameras)

    def camera(self, camera_id: str) -> Camera | None:
        for camera in self.cameras:
            if camera.identifier == camera_id:
                return camera
        return None

    def batch_for(self, camera_id: str) -> DetectionBatch:
        return DetectionBatch(records=tuple(self.detections.get(camera_id, ())), source=camera_id)


__all__ = ["CAMERAS", "LIVE_DETECTIONS", "InMemoryLiveDetectionSource"]
