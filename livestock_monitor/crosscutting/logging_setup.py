"""structlog configuration for the monitor.

Log events carry the camera or upload they concern through
:func:`overlay_context`, which binds ``source`` into structlog's context
variables for the duration of a render pass or an analysis request.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from enum import Enum
from typing import Any, Iterator

import structlog
from structlog.typing import EventDict, WrappedLogger

from ..domain.vision.detection import FrameSize


def readable_domain_values(_logger: WrappedLogger, _method: str, event_dict: EventDict) -> EventDict:
    """Render frame sizes as ``WxH`` and enums by their value."""

    for key, value in event_dict.items():
        if isinstance(value, FrameSize):
            event_dict[key] = f"{value.width}x{value.height}"
        elif isinstance(value, Enum):
            event_dict[key] = value.value
    return event_dict


def setup_logging(level: str = "INFO", *, json_output: bool = False) -> None:
    """Route structlog through the standard library at ``level``."""

    logging.basicConfig(level=level.upper(), format="%(message)s")
    renderer = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            readable_domain_values,
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@contextmanager
def overlay_context(source: str, **values: Any) -> Iterator[None]:
    """Tag every event logged inside the block with ``source`` (camera id or filename)."""

    with structlog.contextvars.bound_contextvars(source=source, **values):
        yield


def get_logger(name: str, **kwargs: Any) -> structlog.stdlib.BoundLogger:
    logger = structlog.get_logger(name)
    if kwargs:
        logger = logger.bind(**kwargs)
    return logger


__all__ = ["get_logger", "overlay_context", "readable_domain_values", "setup_logging"]
