"""Application configuration loading helpers."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..domain.vision.detection import FrameSize


class AppSettings(BaseSettings):
    """Runtime configuration read from ``LIVESTOCK_`` environment variables.

    An optional ``.env`` file in the working directory is honoured as well.
    """

    model_config = SettingsConfigDict(env_prefix="LIVESTOCK_", env_file=".env", extra="ignore")

    api_base_url: str = Field("http://localhost:8000", description="Inference service base URL.")
    api_timeout: float = Field(30.0, gt=0, description="Request timeout in seconds.")
    reference_width: int = Field(1920, gt=0, description="Source frame width assumed for live boxes.")
    reference_height: int = Field(1080, gt=0, description="Source frame height assumed for live boxes.")
    refresh_interval: float = Field(0.1, gt=0, description="Live overlay redraw period in seconds.")
    default_camera: str = Field("camera1", description="Camera selected when the live view opens.")
    log_level: str = Field("INFO", description="Standard logging level name.")
    log_json: bool = Field(False, description="Emit JSON log lines instead of console output.")

    @property
    def reference_frame(self) -> FrameSize:
        return FrameSize(self.reference_width, self.reference_height)


def load_settings(**overrides) -> AppSettings:
    """Load configuration values from the current environment."""

    return AppSettings(**overrides)


__all__ = ["AppSettings", "load_settings"]
