"""Use cases over the detections stored by the inference service."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Mapping

from ..domain.events import ERROR_TOPIC, ErrorRaised
from ..domain.vision.behavior import Behavior
from ..domain.vision.detection import DetectionBatch, DetectionRecord
from ..infrastructure.livestock_api import LivestockApiClient
from ..shared.bus import EventBus
from ..shared.errors import InfrastructureError


@dataclass(frozen=True)
class HistorySummary:
    total: int
    average_confidence: float
    per_behavior: Mapping[Behavior, int]


def summarize_history(records: Iterable[DetectionRecord]) -> HistorySummary:
    """Count records per behaviour; ``UNKNOWN`` is listed only when present."""

    records = tuple(records)
    counts = Counter(record.behavior for record in records)
    per_behavior = {behavior: counts[behavior] for behavior in Behavior if behavior is not Behavior.UNKNOWN}
    if counts[Behavior.UNKNOWN]:
        per_behavior[Behavior.UNKNOWN] = counts[Behavior.UNKNOWN]
    average = sum(record.confidence for record in records) / len(records) if records else 0.0
    return HistorySummary(total=len(records), average_confidence=average, per_behavior=per_behavior)


class ListDetectionsUseCase:
    def __init__(self, api: LivestockApiClient, bus: EventBus, logger) -> None:
        self._api = api
        self._bus = bus
        self._logger = logger

    async def execute(self) -> DetectionBatch | None:
        try:
            models = await self._api.list_detections()
        except InfrastructureError as exc:
            self._logger.warning("history.load.failed", error=str(exc))
            self._bus.publish(ERROR_TOPIC, ErrorRaised(str(exc), exc))
            return None
        batch = DetectionBatch(records=tuple(model.to_record() for model in models), source="history")
        self._logger.info("history.loaded", total=len(batch))
        return batch


class DeleteDetectionUseCase:
    def __init__(self, api: LivestockApiClient, bus: EventBus, logger) -> None:
        self._api = api
        self._bus = bus
        self._logger = logger

    async def execute(self, detection_id: str) -> bool:
        try:
            response = await self._api.delete_detection(detection_id)
        except InfrastructureError as exc:
            self._logger.warning("history.delete.failed", detection_id=detection_id, error=str(exc))
            self._bus.publish(ERROR_TOPIC, ErrorRaised("Failed to delete detection", exc))
            return False
        self._logger.info("history.deleted", detection_id=response.deleted)
        return True


def only_behavior(batch: DetectionBatch, behavior: Behavior) -> DetectionBatch:
    """Return the records of ``batch`` classified as ``behavior``, in order."""

    return DetectionBatch(
        records=tuple(record for record in batch if record.behavior is behavior),
        source=batch.source,
    )


__all__ = [
    "DeleteDetectionUseCase",
    "HistorySummary",
    "ListDetectionsUseCase",
    "only_behavior",
    "summarize_history",
]
