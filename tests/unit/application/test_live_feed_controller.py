from __future__ import annotations

import pytest

from livestock_monitor.application.live_feed import LiveFeedController
from livestock_monitor.domain.events import OVERLAY_TOPIC, STREAM_TOPIC
from livestock_monitor.domain.view_state import Tab
from livestock_monitor.domain.vision.detection import FrameSize
from livestock_monitor.infrastructure.fixtures import InMemoryLiveDetectionSource
from livestock_monitor.infrastructure.opencv_overlay import OverlayRenderer, OverlaySurface
from livestock_monitor.shared.bus import EventBus

REFERENCE = FrameSize(1920, 1080)


class Probe:
    def __init__(self, size: FrameSize) -> None:
        self.size = size

    def __call__(self) -> FrameSize:
        return self.size


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def surface() -> OverlaySurface:
    return OverlaySurface()


@pytest.fixture
def probe() -> Probe:
    return Probe(FrameSize(960, 540))


@pytest.fixture
def controller(timer_host, bus, surface, probe) -> LiveFeedController:
    return LiveFeedController(
        renderer=OverlayRenderer(),
        surface=surface,
        source=InMemoryLiveDetectionSource(),
        host=timer_host,
        content_probe=probe,
        reference=REFERENCE,
        interval=0.1,
        bus=bus,
        clock=timer_host.clock,
    )


def _collect(bus: EventBus, topic: str) -> list:
    events: list = []
    bus.subscribe(topic, events.append)
    return events


def test_initial_state(controller: LiveFeedController) -> None:
    assert controller.state.tab is Tab.LIVE
    assert controller.state.camera_id == "camera1"
    assert not controller.streaming
    assert [record.id for record in controller.active_batch] == ["1", "2", "4"]


def test_streaming_repaints_every_interval(controller, timer_host, bus) -> None:
    rendered = _collect(bus, OVERLAY_TOPIC)

    controller.start_stream()
    timer_host.advance(0.35)

    assert controller.streaming
    assert len(rendered) == 3
    assert all(event.source == "camera1" and event.detections == 3 for event in rendered)


def test_boxes_follow_the_displayed_frame_size(controller, timer_host, probe) -> None:
    controller.start_stream()
    timer_host.advance(0.1)
    assert controller.last_annotations[0].box == (75, 50, 135, 125)

    probe.size = FrameSize(1920, 1080)
    timer_host.advance(0.1)
    assert controller.last_annotations[0].box == (150, 100, 270, 250)


def test_start_stream_twice_keeps_single_task(controller, timer_host, bus) -> None:
    rendered = _collect(bus, OVERLAY_TOPIC)

    controller.start_stream()
    controller.start_stream()
    timer_host.advance(0.15)

    assert len(rendered) == 1
    assert timer_host.pending == 1


def test_stop_stream_cancels_and_clears(controller, timer_host, bus, surface) -> None:
    stream_events = _collect(bus, STREAM_TOPIC)
    controller.start_stream()
    timer_host.advance(0.1)
    assert surface.snapshot().any()

    controller.stop_stream()
    rendered = _collect(bus, OVERLAY_TOPIC)
    timer_host.advance(1.0)

    assert not controller.streaming
    assert not controller.state.streaming
    assert rendered == []
    assert not surface.snapshot().any()
    assert controller.last_annotations == ()
    assert [event.streaming for event in stream_events] == [True, False]


def test_restart_after_stop(controller, timer_host, bus) -> None:
    controller.start_stream()
    controller.stop_stream()
    rendered = _collect(bus, OVERLAY_TOPIC)

    controller.start_stream()
    timer_host.advance(0.25)

    assert len(rendered) == 2
    assert timer_host.pending == 1


def test_camera_switch_keeps_cadence(controller, timer_host, bus) -> None:
    rendered = _collect(bus, OVERLAY_TOPIC)
    controller.start_stream()
    timer_host.advance(0.15)

    controller.select_camera("camera2")
    timer_host.advance(0.1)

    assert controller.state.camera_id == "camera2"
    assert controller.streaming
    assert [event.source for event in rendered] == ["camera1", "camera2"]
    assert {annotation.record_id for annotation in controller.last_annotations} == {"5", "6"}
    assert timer_host.pending == 1


def test_selecting_same_camera_is_a_no_op(controller) -> None:
    batch = controller.active_batch

    controller.select_camera("camera1")

    assert controller.active_batch is batch


def test_unknown_camera_renders_nothing(controller, timer_host, surface) -> None:
    controller.start_stream()
    controller.select_camera("camera9")
    timer_host.advance(0.1)

    assert controller.last_annotations == ()
    assert not surface.snapshot().any()


def test_unknown_frame_size_skips_render(controller, timer_host, probe, bus) -> None:
    rendered = _collect(bus, OVERLAY_TOPIC)
    probe.size = FrameSize(0, 0)

    controller.start_stream()
    timer_host.advance(0.3)

    assert rendered == []
    assert controller.streaming


def test_dispose_stops_stream(controller, timer_host) -> None:
    controller.start_stream()
    controller.dispose()
    controller.dispose()

    assert timer_host.pending == 0
    assert not controller.streaming


def test_switch_before_new_frame_size_is_known_drops_old_boxes(controller, timer_host, probe, surface) -> None:
    probe.size = REFERENCE
    controller.start_stream()
    timer_host.advance(0.1)
    assert surface.snapshot().any()

    controller.select_camera("camera2")
    assert controller.last_annotations == ()
    probe.size = FrameSize(0, 0)
    timer_host.advance(0.3)

    assert not surface.snapshot().any()
    assert controller.last_annotations == ()

    probe.size = REFERENCE
    timer_host.advance(0.1)
    assert {annotation.record_id for annotation in controller.last_annotations} == {"5", "6"}


def test_toggle_stream(controller, timer_host, bus) -> None:
    stream_events = _collect(bus, STREAM_TOPIC)

    assert controller.toggle_stream() is True
    timer_host.advance(0.1)
    assert controller.state.streaming and len(controller.last_annotations) == 3

    assert controller.toggle_stream() is False
    assert not controller.state.streaming
    assert timer_host.pending == 0
    assert [event.streaming for event in stream_events] == [True, False]


def test_leaving_live_tab_stops_stream(controller, timer_host, surface) -> None:
    controller.start_stream()
    timer_host.advance(0.1)

    controller.select_tab(Tab.UPLOAD)

    assert controller.state.tab is Tab.UPLOAD
    assert not controller.streaming
    assert timer_host.pending == 0
    assert not surface.snapshot().any()


def test_starting_from_another_tab_returns_to_live(controller) -> None:
    controller.select_tab(Tab.DETECTIONS)

    controller.start_stream()

    assert controller.state.tab is Tab.LIVE
    assert controller.state.streaming
    controller.dispose()
