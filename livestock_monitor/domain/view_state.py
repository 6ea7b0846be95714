"""Explicit dashboard view state and its pure transitions."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Union


class Tab(Enum):
    DASHBOARD = "dashboard"
    LIVE = "live"
    GPS = "gps"
    HEALTH = "health"
    UPLOAD = "upload"
    DETECTIONS = "detections"


@dataclass(frozen=True)
class ViewState:
    tab: Tab = Tab.DASHBOARD
    camera_id: str = "camera1"
    streaming: bool = False


@dataclass(frozen=True)
class TabSelected:
    tab: Tab


@dataclass(frozen=True)
class CameraSelected:
    camera_id: str


@dataclass(frozen=True)
class StreamStarted:
    pass


@dataclass(frozen=True)
class StreamStopped:
    pass


@dataclass(frozen=True)
class StreamToggled:
    pass


ViewEvent = Union[TabSelected, CameraSelected, StreamStarted, StreamStopped, StreamToggled]


def reduce(state: ViewState, event: ViewEvent) -> ViewState:
    """Return the state that follows ``event``; ``state`` is never modified."""

    if isinstance(event, TabSelected):
        # Streaming only lives on the live tab.
        streaming = state.streaming and event.tab is Tab.LIVE
        return replace(state, tab=event.tab, streaming=streaming)
    if isinstance(event, CameraSelected):
        return replace(state, camera_id=event.camera_id)
    if isinstance(event, StreamStarted):
        return replace(state, streaming=True)
    if isinstance(event, StreamStopped):
        return replace(state, streaming=False)
    if isinstance(event, StreamToggled):
        return replace(state, streaming=not state.streaming)
    raise TypeError(f"Unsupported view event: {event!r}")


__all__ = [
    "CameraSelected",
    "StreamStarted",
    "StreamStopped",
    "StreamToggled",
    "Tab",
    "TabSelected",
    "ViewEvent",
    "ViewState",
    "reduce",
]
