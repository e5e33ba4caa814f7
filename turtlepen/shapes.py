"""Drawing routines built on the turtle step primitive.

Each routine takes the turtle to draw with as its first argument and leaves
it wherever the drawing ends.  Arguments are checked up front so a bad call
raises :class:`~turtlepen.errors.InvalidArgumentError` before anything is
drawn.
"""
from __future__ import annotations

import math
from typing import Any, Tuple

from .config import TurtleSettings
from .errors import InvalidArgumentError
from .turtles import check_number

_DEFAULT_SETTINGS = TurtleSettings()


def check_count(value: Any, name: str, *, minimum: int = 0) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise InvalidArgumentError(f"{name} must be >= {minimum}, got {value}")
    return value


def _settings(t) -> TurtleSettings:
    return getattr(t, "settings", None) or _DEFAULT_SETTINGS


def arc_steps(r: float, angle: float, segment_length: float = 3.0) -> Tuple[int, float, float]:
    """Return ``(n, step_length, step_angle)`` approximating an arc.

    ``n`` is chosen so each chord is close to ``segment_length`` units:
    ``n = floor(arc_length / segment_length) + 1``.  A zero sweep needs no
    steps at all.
    """

    r = check_number(r, "r")
    angle = check_number(angle, "angle")
    segment_length = check_number(segment_length, "segment_length")
    if r <= 0:
        raise InvalidArgumentError(f"r must be positive, got {r}")
    if segment_length <= 0:
        raise InvalidArgumentError(f"segment_length must be positive, got {segment_length}")
    if angle == 0:
        return 0, 0.0, 0.0
    arc_length = 2 * math.pi * r * abs(angle) / 360.0
    n = int(arc_length / segment_length) + 1
    return n, arc_length / n, angle / n


def polyline(t, n: int, length: float, angle: float) -> None:
    """Draw ``n`` segments of ``length``, turning left ``angle`` degrees after each.

    A negative ``length`` draws backward unless the turtle's settings forbid
    it.
    """

    n = check_count(n, "n")
    length = check_number(length, "length")
    angle = check_number(angle, "angle")
    if length < 0 and not _settings(t).allow_negative_length:
        raise InvalidArgumentError(f"length must not be negative, got {length}")
    for _ in range(n):
        t.fd(length)
        t.lt(angle)


def polygon(t, n: int, length: float) -> None:
    """Draw a regular ``n``-gon with sides of ``length``."""
    n = check_count(n, "n", minimum=1)
    polyline(t, n, length, 360.0 / n)


def square(t, length: float) -> None:
    polygon(t, 4, length)


def arc(t, r: float, angle: float) -> None:
    """Draw an arc of radius ``r`` sweeping ``angle`` degrees.

    The arc starts at the turtle's position, tangent to its heading, and bends
    to the left; a negative ``angle`` bends to the right.  How many chords are
    used is derived from the radius, not chosen by the caller.
    """

    n, step_length, step_angle = arc_steps(r, angle, _settings(t).arc_segment_length)
    polyline(t, n, step_length, step_angle)


def circle(t, r: float) -> None:
    arc(t, r, 360)


__all__ = ["arc_steps", "check_count", "polyline", "polygon", "square", "arc", "circle"]
