"""Wire models exchanged with the livestock inference service."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .vision.behavior import Behavior
from .vision.detection import BoundingBox, DetectionBatch, DetectionRecord


class DetectionModel(BaseModel):
    """Represents a single stored or freshly predicted detection."""

    model_config = ConfigDict(allow_inf_nan=False)

    id: str = Field(..., description="Identifier assigned by the service.")
    filename: str = Field("", description="Name of the analysed image.")
    confidence: float = Field(..., description="Model confidence in [0, 1].")
    bbox: tuple[float, float, float, float] = Field(..., description="x, y, width, height in image pixels.")
    class_id: int = Field(..., description="Index into the behaviour taxonomy.")
    timestamp: str = Field("", description="ISO-8601 creation time.")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: object) -> object:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    def to_record(self) -> DetectionRecord:
        x, y, width, height = self.bbox
        return DetectionRecord(
            id=self.id,
            behavior=Behavior.from_class_id(self.class_id),
            confidence=self.confidence,
            bbox=BoundingBox(x=x, y=y, width=max(0.0, width), height=max(0.0, height)),
            filename=self.filename or None,
            timestamp=self.timestamp or None,
        )


class PredictionResponseModel(BaseModel):
    filename: str
    detections: list[DetectionModel] = Field(default_factory=list)

    def to_batch(self) -> DetectionBatch:
        return DetectionBatch(
            records=tuple(detection.to_record() for detection in self.detections),
            source=self.filename,
        )


class TensorModel(BaseModel):
    name: str
    shape: list[int | str]


class HealthResponseModel(BaseModel):
    status: str
    model: str
    input: TensorModel
    outputs: list[TensorModel] = Field(default_factory=list)


class DeleteResponseModel(BaseModel):
    deleted: str

    @field_validator("deleted", mode="before")
    @classmethod
    def _coerce_deleted(cls, value: object) -> object:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


__all__ = [
    "DeleteResponseModel",
    "DetectionModel",
    "HealthResponseModel",
    "PredictionResponseModel",
    "TensorModel",
]
