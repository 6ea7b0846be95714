"""Composition root wiring settings, adapters and use cases."""

from __future__ import annotations

from dependency_injector import containers, providers

from ..application.analyze_image import ImageAnalysisController
from ..application.check_health import CheckServiceHealthUseCase
from ..application.detection_history import DeleteDetectionUseCase, ListDetectionsUseCase
from ..application.live_feed import LiveFeedController
from ..crosscutting.config import load_settings
from ..crosscutting.logging_setup import get_logger, setup_logging
from ..infrastructure.fixtures import InMemoryLiveDetectionSource
from ..infrastructure.livestock_api import LivestockApiClient
from ..infrastructure.opencv_overlay import OverlayRenderer, OverlaySurface
from ..shared.bus import EventBus


class ApplicationContainer(containers.DeclarativeContainer):
    settings = providers.Singleton(load_settings)

    #region Extras
    logging = providers.Resource(
        setup_logging,
        level=settings.provided.log_level,
        json_output=settings.provided.log_json,
    )
    logger = providers.Singleton(get_logger, "livestock_monitor")
    bus = providers.Singleton(EventBus)
    #endregion

    #region Infrastructure
    api_client = providers.Factory(
        LivestockApiClient,
        base_url=settings.provided.api_base_url,
        timeout=settings.provided.api_timeout,
        logger=logger,
    )
    renderer = providers.Singleton(OverlayRenderer, logger=logger)
    surface = providers.Factory(OverlaySurface)
    live_source = providers.Singleton(InMemoryLiveDetectionSource)
    #endregion

    #region Use cases
    image_analysis = providers.Factory(
        ImageAnalysisController,
        api=api_client,
        renderer=renderer,
        surface=surface,
        bus=bus,
        logger=logger,
    )
    # ``host`` and ``content_probe`` come from the view hosting the feed.
    live_feed = providers.Factory(
        LiveFeedController,
        renderer=renderer,
        surface=surface,
        source=live_source,
        reference=settings.provided.reference_frame,
        interval=settings.provided.refresh_interval,
        bus=bus,
        logger=logger,
        initial_camera=settings.provided.default_camera,
    )
    list_detections = providers.Factory(ListDetectionsUseCase, api=api_client, bus=bus, logger=logger)
    delete_detection = providers.Factory(DeleteDetectionUseCase, api=api_client, bus=bus, logger=logger)
    check_health = providers.Factory(CheckServiceHealthUseCase, api=api_client, logger=logger)
    #endregion


__all__ = ["ApplicationContainer"]
