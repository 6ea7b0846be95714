from __future__ import annotations

from dataclasses import dataclass

OVERLAY_TOPIC = "overlay.rendered"
STREAM_TOPIC = "live.stream"
ANALYSIS_TOPIC = "analysis.completed"
ERROR_TOPIC = "errors"


@dataclass(frozen=True)
class OverlayRendered:
    source: str
    detections: int


@dataclass(frozen=True)
class StreamStateChanged:
    camera_id: str
    streaming: bool


@dataclass(frozen=True)
class AnalysisCompleted:
    filename: str
    detections: int
    average_confidence: float


@dataclass(frozen=True)
class ErrorRaised:
    """Transient message for the user; never retried automatically."""

    message: str
    exception: Exception | None = None
