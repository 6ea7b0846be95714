"""Domain entities and value objects for behaviour detections."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from .behavior import Behavior, HealthStatus

DEFAULT_ENTITY_LABEL = "Pig"


@dataclass(frozen=True)
class FrameSize:
    """Pixel dimensions of a reference frame or a drawing surface."""

    width: int
    height: int

    @property
    def is_known(self) -> bool:
        return self.width > 0 and self.height > 0

    def as_tuple(self) -> tuple[int, int]:
        return self.width, self.height


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box with a top-left origin, in the units of its frame."""

    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("Bounding box width and height must be non-negative")

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def scaled(self, scale_x: float, scale_y: float) -> "BoundingBox":
        return BoundingBox(
            x=self.x * scale_x,
            y=self.y * scale_y,
            width=self.width * scale_x,
            height=self.height * scale_y,
        )

    def as_tuple(self) -> tuple[float, float, float, float]:
        """Return the bounding box as ``(x, y, width, height)``."""

        return self.x, self.y, self.width, self.height


@dataclass(frozen=True)
class DetectionRecord:
    """Represents a single detected animal and its behaviour."""

    id: str
    behavior: Behavior
    confidence: float
    bbox: BoundingBox
    entity_label: str | None = None
    secondary_metric: float | None = None
    status: HealthStatus = HealthStatus.UNKNOWN
    filename: str | None = None
    timestamp: str | None = None

    @property
    def confidence_text(self) -> str:
        return f"{self.confidence * 100:.1f}%"

    @property
    def label_text(self) -> str:
        entity = self.entity_label or DEFAULT_ENTITY_LABEL
        return f"{entity} - {self.behavior.display_name}: {self.confidence_text}"

    @property
    def secondary_text(self) -> str | None:
        if self.secondary_metric is None:
            return None
        return f"Temp: {self.secondary_metric:.1f}C"


@dataclass(frozen=True)
class DetectionBatch:
    """Ordered detections from one analysis or one camera; replaced wholesale."""

    records: tuple[DetectionRecord, ...] = field(default_factory=tuple)
    source: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "records", tuple(self.records))

    def __iter__(self) -> Iterator[DetectionRecord]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    @classmethod
    def empty(cls, source: str = "") -> "DetectionBatch":
        return cls(records=(), source=source)


__all__ = [
    "DEFAULT_ENTITY_LABEL",
    "BoundingBox",
    "DetectionBatch",
    "DetectionRecord",
    "FrameSize",
]
