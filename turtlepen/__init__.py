"""Top-level package for the turtlepen toolkit.

Turtles record what they draw; the drawing routines in :mod:`turtlepen.shapes`
are built on the turtle step primitive, and finished drawings can be exported
as SVG, plotted on a GRBL pen plotter or served over HTTP.
"""

from .errors import TurtlePenError, InvalidArgumentError, DeviceConnectionError
from .geometry import Drawing, Segment, Polyline, XY
from .turtles import Cursor, Turtle, PlotterTurtle, ScreenTurtle
from .shapes import polyline, polygon, square, arc, circle, arc_steps

__all__ = [
    "TurtlePenError",
    "InvalidArgumentError",
    "DeviceConnectionError",
    "Drawing",
    "Segment",
    "Polyline",
    "XY",
    "Cursor",
    "Turtle",
    "PlotterTurtle",
    "ScreenTurtle",
    "polyline",
    "polygon",
    "square",
    "arc",
    "circle",
    "arc_steps",
]
