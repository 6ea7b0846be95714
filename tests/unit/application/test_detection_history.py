from __future__ import annotations

import asyncio

import pytest

from livestock_monitor.application.check_health import CheckServiceHealthUseCase
from livestock_monitor.application.detection_history import (
    DeleteDetectionUseCase,
    ListDetectionsUseCase,
    only_behavior,
    summarize_history,
)
from livestock_monitor.crosscutting.logging_setup import get_logger
from livestock_monitor.domain.api_models import (
    DeleteResponseModel,
    DetectionModel,
    HealthResponseModel,
)
from livestock_monitor.domain.events import ERROR_TOPIC
from livestock_monitor.domain.vision.behavior import Behavior
from livestock_monitor.shared.bus import EventBus
from livestock_monitor.shared.errors import LivestockApiError


def _model(detection_id: str, class_id: int, confidence: float = 0.8) -> DetectionModel:
    return DetectionModel(
        id=detection_id,
        confidence=confidence,
        bbox=(0, 0, 10, 10),
        class_id=class_id,
    )


class FakeApi:
    def __init__(self, models=(), error: Exception | None = None) -> None:
        self.models = list(models)
        self.error = error
        self.deleted: list[str] = []

    async def list_detections(self):
        if self.error is not None:
            raise self.error
        return self.models

    async def delete_detection(self, detection_id: str):
        if self.error is not None:
            raise self.error
        self.deleted.append(detection_id)
        return DeleteResponseModel(deleted=detection_id)

    async def check_health(self):
        return HealthResponseModel.model_validate(
            {
                "status": "ok",
                "model": "pigs.onnx",
                "input": {"name": "images", "shape": [1, 3, 640, 640]},
                "outputs": [{"name": "output0", "shape": ["batch", 10, 8400]}],
            }
        )


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def logger():
    return get_logger("tests")


def test_list_detections_builds_history_batch(bus, logger) -> None:
    api = FakeApi([_model("a", 3), _model("b", 0)])

    batch = asyncio.run(ListDetectionsUseCase(api, bus, logger).execute())

    assert batch.source == "history"
    assert [record.behavior for record in batch] == [Behavior.EATING, Behavior.LYING]


def test_list_failure_publishes_error(bus, logger) -> None:
    errors: list = []
    bus.subscribe(ERROR_TOPIC, errors.append)
    api = FakeApi(error=LivestockApiError("Failed to fetch detections", 503))

    assert asyncio.run(ListDetectionsUseCase(api, bus, logger).execute()) is None
    assert errors[0].message == "Failed to fetch detections"


def test_delete_detection(bus, logger) -> None:
    api = FakeApi()

    assert asyncio.run(DeleteDetectionUseCase(api, bus, logger).execute("a")) is True
    assert api.deleted == ["a"]


def test_delete_failure_publishes_error(bus, logger) -> None:
    errors: list = []
    bus.subscribe(ERROR_TOPIC, errors.append)
    api = FakeApi(error=LivestockApiError("Failed to delete detection", 404))

    assert asyncio.run(DeleteDetectionUseCase(api, bus, logger).execute("a")) is False
    assert errors[0].message == "Failed to delete detection"


def test_summary_counts_every_behaviour() -> None:
    records = [_model("a", 3, 0.9).to_record(), _model("b", 3, 0.7).to_record(), _model("c", 5, 0.8).to_record()]

    summary = summarize_history(records)

    assert summary.total == 3
    assert summary.average_confidence == pytest.approx(0.8)
    assert summary.per_behavior[Behavior.EATING] == 2
    assert summary.per_behavior[Behavior.MOUNTED] == 1
    assert summary.per_behavior[Behavior.WALKING] == 0
    assert Behavior.UNKNOWN not in summary.per_behavior


def test_summary_lists_unknown_only_when_present() -> None:
    summary = summarize_history([_model("a", 12).to_record()])

    assert summary.per_behavior[Behavior.UNKNOWN] == 1


def test_empty_summary() -> None:
    summary = summarize_history([])

    assert summary.total == 0
    assert summary.average_confidence == 0.0


def test_only_behavior_keeps_order(bus, logger) -> None:
    api = FakeApi([_model("a", 3), _model("b", 4), _model("c", 3)])
    batch = asyncio.run(ListDetectionsUseCase(api, bus, logger).execute())

    eating = only_behavior(batch, Behavior.EATING)

    assert [record.id for record in eating] == ["a", "c"]
    assert eating.source == "history"
    assert len(only_behavior(batch, Behavior.MOUNTED)) == 0


def test_health_description(logger) -> None:
    health = asyncio.run(CheckServiceHealthUseCase(FakeApi(), logger).execute())

    assert health.input_shape == (1, 3, 640, 640)
    assert health.describe() == (
        "status=ok model=pigs.onnx input=images[1, 3, 640, 640] outputs=[output0['batch', 10, 8400]]"
    )
