"""Upload a still image for behaviour analysis and draw the results over it."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from ..crosscutting.logging_setup import get_logger, overlay_context
from ..domain.events import ANALYSIS_TOPIC, ERROR_TOPIC, AnalysisCompleted, ErrorRaised
from ..domain.vision.detection import DetectionBatch, FrameSize
from ..infrastructure.image_io import compose, decode_image, natural_size
from ..infrastructure.livestock_api import LivestockApiClient
from ..infrastructure.opencv_overlay import Annotation, OverlayRenderer, OverlaySurface
from ..shared.bus import EventBus
from ..shared.errors import ApplicationError, InfrastructureError
from .render_scheduler import OnDemandRenderTrigger


@dataclass(frozen=True)
class PredictionSummary:
    total: int
    average_confidence: float


def summarize_prediction(batch: DetectionBatch) -> PredictionSummary:
    if not batch:
        return PredictionSummary(total=0, average_confidence=0.0)
    average = sum(record.confidence for record in batch) / len(batch)
    return PredictionSummary(total=len(batch), average_confidence=average)


class ImageAnalysisController:
    """On-demand overlay for one uploaded image.

    Boxes come back in the image's natural pixels, so the image itself is the
    reference frame and the overlay is drawn at natural size. The render fires
    once both the decoded image and the prediction are available.
    """

    def __init__(
        self,
        api: LivestockApiClient,
        renderer: OverlayRenderer,
        surface: OverlaySurface | None,
        bus: EventBus,
        logger=None,
    ) -> None:
        self._api = api
        self._renderer = renderer
        self._surface = surface
        self._bus = bus
        self._logger = logger or get_logger(__name__)
        self._trigger = OnDemandRenderTrigger(self._render)
        self._filename: str | None = None
        self._content: bytes | None = None
        self._image: np.ndarray | None = None
        self._annotations: tuple[Annotation, ...] = ()
        self._render_count = 0
        self._selection = 0

    @property
    def image(self) -> np.ndarray | None:
        return self._image

    @property
    def results(self) -> DetectionBatch | None:
        return self._trigger.results

    @property
    def annotations(self) -> tuple[Annotation, ...]:
        return self._annotations

    @property
    def render_count(self) -> int:
        return self._render_count

    def select_image(self, filename: str, content: bytes) -> None:
        """Replace the current image; previous results are discarded."""

        self._trigger.reset()
        self._selection += 1
        self._annotations = ()
        self._filename = filename
        self._content = content
        self._image = None
        if self._surface is not None:
            self._surface.clear()

    def image_decoded(self) -> FrameSize:
        """Decode the selected image and report it as loaded."""

        if self._content is None:
            raise ApplicationError("No image selected")
        self._image = decode_image(self._content)
        size = natural_size(self._image)
        self._trigger.image_loaded(size)
        return size

    async def analyze(self) -> DetectionBatch | None:
        """Submit the selected image; returns ``None`` when the request failed."""

        if self._filename is None or self._content is None:
            raise ApplicationError("No image selected")
        filename, selection = self._filename, self._selection
        try:
            response = await self._api.predict_image(filename, self._content)
        except InfrastructureError as exc:
            self._logger.warning("analysis.failed", filename=filename, error=str(exc))
            self._bus.publish(ERROR_TOPIC, ErrorRaised(str(exc), exc))
            return None
        if selection != self._selection:
            # Another image was selected while the request was in flight.
            self._logger.info("analysis.discarded", filename=filename)
            return None

        batch = response.to_batch()
        summary = summarize_prediction(batch)
        for index, record in enumerate(batch, start=1):
            self._logger.debug(
                "analysis.detection",
                index=index,
                behavior=record.behavior.display_name,
                confidence=record.confidence,
            )
        self._trigger.results_arrived(batch)
        self._bus.publish(
            ANALYSIS_TOPIC,
            AnalysisCompleted(filename, summary.total, summary.average_confidence),
        )
        return batch

    def annotated_image(self) -> np.ndarray:
        """Return the image with the current overlay composited on top."""

        if self._image is None:
            raise ApplicationError("No decoded image to annotate")
        if self._surface is None or self._surface.size != natural_size(self._image):
            return self._image.copy()
        return compose(self._image, self._surface.snapshot())

    def _render(self, size: FrameSize, batch: DetectionBatch) -> None:
        with overlay_context(batch.source or self._filename or "upload"):
            annotations = self._renderer.render(self._surface, batch, size)
        if annotations is None:
            return
        self._annotations = annotations
        self._render_count += 1


__all__ = ["ImageAnalysisController", "PredictionSummary", "summarize_prediction"]
