from __future__ import annotations

import pytest

from livestock_monitor.domain.overlay.mapper import CoordinateMapper
from livestock_monitor.domain.vision.detection import BoundingBox, FrameSize
from livestock_monitor.shared.errors import MapperNotReadyError

REFERENCE = FrameSize(1920, 1080)


@pytest.mark.parametrize(
    "box",
    [
        BoundingBox(150, 100, 120, 150),
        BoundingBox(0.1, 0.7, 33.3, 0.0),
        BoundingBox(1919.5, 1079.25, 0.5, 0.75),
    ],
)
def test_identity_when_reference_matches_surface(box: BoundingBox) -> None:
    mapper = CoordinateMapper(reference=FrameSize(1280, 720), surface=FrameSize(1280, 720))

    mapped = mapper.map_box(box)

    assert mapped == box
    assert mapper.scale == (1.0, 1.0)


def test_scales_each_axis_independently() -> None:
    mapper = CoordinateMapper(reference=REFERENCE, surface=FrameSize(960, 270))

    mapped = mapper.map_box(BoundingBox(150, 100, 120, 150))

    assert mapped.as_tuple() == pytest.approx((75, 25, 60, 37.5))


@pytest.mark.parametrize("factor", [0.25, 0.5, 1.5, 2.0, 3.0])
def test_scaling_the_surface_scales_the_output(factor: float) -> None:
    box = BoundingBox(550, 200, 100, 130)
    base_surface = FrameSize(640, 360)
    base = CoordinateMapper(REFERENCE, base_surface).map_box(box)

    scaled_surface = FrameSize(int(base_surface.width * factor), int(base_surface.height * factor))
    scaled = CoordinateMapper(REFERENCE, scaled_surface).map_box(box)

    assert scaled.as_tuple() == pytest.approx(tuple(value * factor for value in base.as_tuple()))


@pytest.mark.parametrize(
    ("reference", "surface"),
    [
        (FrameSize(0, 1080), FrameSize(640, 360)),
        (FrameSize(1920, 0), FrameSize(640, 360)),
        (REFERENCE, FrameSize(0, 0)),
    ],
)
def test_not_ready_without_dimensions(reference: FrameSize, surface: FrameSize) -> None:
    mapper = CoordinateMapper(reference=reference, surface=surface)

    assert not mapper.ready
    with pytest.raises(MapperNotReadyError):
        mapper.map_box(BoundingBox(1, 1, 1, 1))
