"""Plotter backends that turtles and the renderer can drive."""

from .grbl import Config, GRBL
from .mock import MockPlotter

__all__ = ["Config", "GRBL", "MockPlotter"]
