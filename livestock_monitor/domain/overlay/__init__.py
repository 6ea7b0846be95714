from .mapper import CoordinateMapper

__all__ = ["CoordinateMapper"]
