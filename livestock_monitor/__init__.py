"""Behaviour-detection overlays for livestock monitoring."""

__version__ = "0.1.0"
