"""Turtles: objects that own a cursor and leave a trail when they move.

Every drawing routine in :mod:`turtlepen.shapes` talks to a turtle through the
same small vocabulary: ``fd``, ``bk``, ``lt``, ``rt``, ``pu``, ``pd``,
``set_color`` and ``finish``.  :class:`Turtle` records what it draws into a
:class:`~turtlepen.geometry.Drawing`; the subclasses mirror the same motion
onto a pen plotter or onto a standard library ``turtle`` window.
"""
from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import Any, Optional

from .config import TurtleSettings
from .errors import InvalidArgumentError
from .geometry import DEFAULT_COLOR, Drawing, Segment, XY
from .toolpath import Transform


def check_number(value: Any, name: str) -> float:
    """Return ``value`` as a float, rejecting non-numbers, bools and NaN/inf."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidArgumentError(f"{name} must be a real number, got {value!r}")
    value = float(value)
    if not math.isfinite(value):
        raise InvalidArgumentError(f"{name} must be finite, got {value!r}")
    return value


@dataclass
class Cursor:
    """Position, heading and pen state of a turtle.

    The default cursor sits at the origin facing along +x with the pen down.
    Headings are in degrees, counter-clockwise, normalised into ``[0, 360)``.
    """

    x: float = 0.0
    y: float = 0.0
    heading: float = 0.0
    pen_down: bool = True
    color: str = DEFAULT_COLOR

    @property
    def position(self) -> XY:
        return (self.x, self.y)

    def ahead(self, distance: float) -> XY:
        a = math.radians(self.heading)
        return (self.x + distance * math.cos(a), self.y + distance * math.sin(a))

    def turned(self, angle: float) -> float:
        h = (self.heading + angle) % 360.0
        # a tiny negative sum wraps to exactly 360.0
        return 0.0 if h >= 360.0 else h


class Turtle:
    """Recording turtle.  Pen-down moves are stored as segments."""

    def __init__(
        self,
        *,
        settings: Optional[TurtleSettings] = None,
        cursor: Optional[Cursor] = None,
        drawing: Optional[Drawing] = None,
    ) -> None:
        self.settings = settings or TurtleSettings()
        self.cursor = cursor or Cursor(color=self.settings.default_color)
        self.drawing = drawing if drawing is not None else Drawing()

    def __repr__(self) -> str:
        c = self.cursor
        return (
            f"{type(self).__name__}(x={c.x:.3f}, y={c.y:.3f}, heading={c.heading:.3f}, "
            f"pen_down={c.pen_down}, segments={len(self.drawing)})"
        )

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def position(self) -> XY:
        return self.cursor.position

    @property
    def heading(self) -> float:
        return self.cursor.heading

    @property
    def is_down(self) -> bool:
        return self.cursor.pen_down

    # ------------------------------------------------------------------
    # Drawing capability
    # ------------------------------------------------------------------
    def fd(self, distance: float) -> None:
        """Move forward, leaving a segment if the pen is down."""
        distance = check_number(distance, "distance")
        start = self.cursor.position
        end = self.cursor.ahead(distance)
        self.cursor.x, self.cursor.y = end
        drawn = self.cursor.pen_down
        if drawn:
            self.drawing.add(Segment(start=start, end=end, color=self.cursor.color))
        self._on_move(start, end, drawn)

    def bk(self, distance: float) -> None:
        self.fd(-check_number(distance, "distance"))

    def lt(self, angle: float) -> None:
        """Turn left (counter-clockwise) by ``angle`` degrees."""
        self.cursor.heading = self.cursor.turned(check_number(angle, "angle"))
        self._on_turn()

    def rt(self, angle: float) -> None:
        self.lt(-check_number(angle, "angle"))

    def pu(self) -> None:
        if self.cursor.pen_down:
            self.cursor.pen_down = False
            self._on_pen(False)

    def pd(self) -> None:
        if not self.cursor.pen_down:
            self.cursor.pen_down = True
            self._on_pen(True)

    def set_color(self, color: str) -> None:
        if not isinstance(color, str) or not color:
            raise InvalidArgumentError(f"color must be a non-empty string, got {color!r}")
        self.cursor.color = color
        self._on_color(color)

    def finish(self) -> Drawing:
        """Flush pending output and return the recorded drawing."""
        self._on_finish()
        return self.drawing

    # ------------------------------------------------------------------
    # Hooks for mirroring turtles
    # ------------------------------------------------------------------
    def _on_move(self, start: XY, end: XY, drawn: bool) -> None:
        pass

    def _on_turn(self) -> None:
        pass

    def _on_pen(self, down: bool) -> None:
        pass

    def _on_color(self, color: str) -> None:
        pass

    def _on_finish(self) -> None:
        pass


class PlotterTurtle(Turtle):
    """Turtle that draws live on a plotter device while recording.

    ``device`` is anything with the :class:`~turtlepen.device.MockPlotter`
    motion API.  Turtle coordinates are mapped onto the bed by ``transform``;
    the default puts the turtle origin at the bed origin, one unit per mm.
    """

    def __init__(self, device, *, transform: Optional[Transform] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.device = device
        self.transform = transform or Transform()
        self._device_xy: Optional[XY] = None  # last bed position with the pen down

    def _on_move(self, start: XY, end: XY, drawn: bool) -> None:
        if not drawn:
            return
        sx, sy = self.transform.apply(*start)
        if self._device_xy != (sx, sy):
            self.device.travel_to(sx, sy, lift=True)
            self.device.pen_down()
        ex, ey = self.transform.apply(*end)
        self.device.draw_xy(ex, ey)
        self._device_xy = (ex, ey)

    def _on_pen(self, down: bool) -> None:
        if not down:
            self.device.pen_up()
            self._device_xy = None

    def _on_finish(self) -> None:
        self.device.pen_up()
        self._device_xy = None
        self.device.wait_idle()


class ScreenTurtle(Turtle):
    """Turtle that also animates the standard library ``turtle`` window."""

    def __init__(self, screen_turtle=None, **kwargs) -> None:
        super().__init__(**kwargs)
        if screen_turtle is None:
            import turtle

            screen_turtle = turtle.Turtle()
        self.screen_turtle = screen_turtle
        self.screen_turtle.penup()
        self.screen_turtle.goto(*self.cursor.position)
        if self.cursor.pen_down:
            self.screen_turtle.pendown()
        self.screen_turtle.pencolor(self.cursor.color)
        self.screen_turtle.setheading(self.cursor.heading)

    def _on_move(self, start: XY, end: XY, drawn: bool) -> None:
        self.screen_turtle.goto(*end)

    def _on_turn(self) -> None:
        self.screen_turtle.setheading(self.cursor.heading)

    def _on_pen(self, down: bool) -> None:
        if down:
            self.screen_turtle.pendown()
        else:
            self.screen_turtle.penup()

    def _on_color(self, color: str) -> None:
        self.screen_turtle.pencolor(color)

    def _on_finish(self) -> None:
        self.screen_turtle.getscreen().update()


__all__ = ["Cursor", "Turtle", "PlotterTurtle", "ScreenTurtle", "check_number"]
