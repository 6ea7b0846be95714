from .behavior import BEHAVIOR_COLORS, DEFAULT_COLOR, Behavior, HealthStatus, color_for
from .detection import BoundingBox, DetectionBatch, DetectionRecord, FrameSize

__all__ = [
    "BEHAVIOR_COLORS",
    "DEFAULT_COLOR",
    "Behavior",
    "BoundingBox",
    "DetectionBatch",
    "DetectionRecord",
    "FrameSize",
    "HealthStatus",
    "color_for",
]
