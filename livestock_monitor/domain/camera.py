from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Camera:
    identifier: str
    name: str
    location: str
    video_source: str

    @property
    def title(self) -> str:
        return f"{self.name} ({self.location})"
