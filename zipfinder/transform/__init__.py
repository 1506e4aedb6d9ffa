"""Geometry tests and spatial conversions."""

from .bounds import bounding_box_of
from .intersection import intersects
from .raycast import contains

__all__ = ["bounding_box_of", "contains", "intersects"]
