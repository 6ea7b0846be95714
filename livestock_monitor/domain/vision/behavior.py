"""Behaviour taxonomy reported by the inference service and its overlay palette."""

from __future__ import annotations

from enum import Enum
from typing import Mapping


class Behavior(Enum):
    LYING = 0
    SLEEPING = 1
    INVESTIGATING = 2
    EATING = 3
    WALKING = 4
    MOUNTED = 5
    UNKNOWN = -1

    @property
    def display_name(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_class_id(cls, class_id: object) -> "Behavior":
        """Map a model class index to a behaviour; anything outside the taxonomy is ``UNKNOWN``."""

        if isinstance(class_id, bool) or not isinstance(class_id, int) or class_id < 0:
            return cls.UNKNOWN
        try:
            return cls(class_id)
        except ValueError:
            return cls.UNKNOWN

    @classmethod
    def from_name(cls, name: str) -> "Behavior":
        try:
            return cls[name.strip().upper()]
        except (KeyError, AttributeError):
            return cls.UNKNOWN


class HealthStatus(Enum):
    """Badge severity shown next to an animal. Not used by the overlay."""

    HEALTHY = "Healthy"
    WARNING = "Warning"
    SICK = "Sick"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: str | None) -> "HealthStatus":
        if not value:
            return cls.UNKNOWN
        for status in cls:
            if status.value.lower() == value.strip().lower():
                return status
        return cls.UNKNOWN


DEFAULT_COLOR = "#6B7280"

BEHAVIOR_COLORS: Mapping[Behavior, str] = {
    Behavior.LYING: "#10B981",
    Behavior.SLEEPING: "#3B82F6",
    Behavior.INVESTIGATING: "#06B6D4",
    Behavior.EATING: "#0EA5E9",
    Behavior.WALKING: "#6366F1",
    Behavior.MOUNTED: "#8B5CF6",
    Behavior.UNKNOWN: DEFAULT_COLOR,
}


def hex_to_bgr(value: str) -> tuple[int, int, int]:
    """Convert ``#RRGGBB`` into the BGR channel order OpenCV draws with."""

    digits = value.lstrip("#")
    if len(digits) != 6:
        raise ValueError(f"Expected #RRGGBB colour, got {value!r}")
    red, green, blue = (int(digits[index : index + 2], 16) for index in (0, 2, 4))
    return blue, green, red


def color_for(behavior: Behavior) -> tuple[int, int, int]:
    return hex_to_bgr(BEHAVIOR_COLORS[behavior])


__all__ = [
    "BEHAVIOR_COLORS",
    "DEFAULT_COLOR",
    "Behavior",
    "HealthStatus",
    "color_for",
    "hex_to_bgr",
]
