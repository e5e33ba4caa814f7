"""In-memory mock plotter used for development and unit tests."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..errors import DeviceConnectionError
from .grbl import Config

XY = Tuple[float, float]


@dataclass
class MockPlotter:
    """Small simulation that mimics the :class:`GRBL` API.

    Every motion is appended to ``path`` as ``(x, y, pen_is_down)`` so tests can
    check what a real plotter would have drawn.
    """

    cfg: Config = field(default_factory=Config)
    require_connection: bool = False

    def __post_init__(self) -> None:
        self.position: XY = (0.0, 0.0)
        self.pen_pos: float = 1.0
        self.path: List[Tuple[float, float, bool]] = []
        self.connected = False

    # Connection ---------------------------------------------------------
    def connect(self) -> "MockPlotter":
        self.connected = True
        return self

    def close(self) -> None:
        self.connected = False

    def _check(self) -> None:
        if self.require_connection and not self.connected:
            raise DeviceConnectionError("Device is not connected")

    # Status -------------------------------------------------------------
    @property
    def is_pen_down(self) -> bool:
        return self.pen_pos < 0.5

    def status(self) -> dict:
        return {"state": "Idle", "wpos": (*self.position, 0.0)}

    def is_idle(self) -> bool:
        return True

    def wait_idle(self, timeout: float = 30.0, poll: float = 0.05) -> None:
        self._check()

    # Motion -------------------------------------------------------------
    def move_xy(self, x: Optional[float] = None, y: Optional[float] = None, *, feed: Optional[int] = None, wait: bool = True):
        self._check()
        nx = self.position[0] if x is None else float(x)
        ny = self.position[1] if y is None else float(y)
        self.position = (nx, ny)
        self.path.append((nx, ny, self.is_pen_down))
        return []

    def draw_xy(self, x: float, y: float, wait: bool = False):
        return self.move_xy(x, y, wait=wait)

    # Pen control -------------------------------------------------------
    def pen_set(self, pos: float, *, wait: bool = False) -> None:
        self._check()
        self.pen_pos = float(max(0.0, min(1.0, pos)))

    def pen_up(self, *, wait: bool = False) -> None:
        self.pen_set(1.0)

    def pen_down(self, *, wait: bool = False) -> None:
        self.pen_set(0.0)

    # Convenience -------------------------------------------------------
    def travel_to(self, x: float, y: float, lift: bool = True) -> None:
        if lift:
            self.pen_up()
        self.move_xy(x, y)

    def set_origin_here(self) -> None:
        self.position = (0.0, 0.0)

    def drawn_segments(self) -> List[Tuple[XY, XY]]:
        """Return the pen-down moves as ``(start, end)`` pairs."""
        out: List[Tuple[XY, XY]] = []
        prev: XY = (0.0, 0.0)
        for x, y, down in self.path:
            if down:
                out.append((prev, (x, y)))
            prev = (x, y)
        return out


__all__ = ["MockPlotter"]
