"""Shared test helpers."""
from __future__ import annotations


def heading_delta(a: float, b: float) -> float:
    """Smallest absolute difference between two headings in degrees."""
    d = (a - b) % 360.0
    return min(d, 360.0 - d)


class FakeScreenTurtle:
    """Stand-in for ``turtle.Turtle`` that records the calls it receives."""

    def __init__(self) -> None:
        self.calls = []
        self.screen = self

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)

        def record(*args):
            self.calls.append((name, args))

        return record

    def getscreen(self):
        return self.screen
