"""Geometry primitives recorded by turtles.

A turtle session produces a :class:`Drawing`: an ordered list of
:class:`Segment` objects, one per pen-down move.  The drawing itself knows
nothing about turtles, devices or the web server so it can be shared by all of
them.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple
import math

XY = Tuple[float, float]

DEFAULT_COLOR = "#111111"


# ---------------------------------------------------------------------------
# Primitives
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Segment:
    """Straight trail left by a single pen-down move."""

    start: XY
    end: XY
    color: str = DEFAULT_COLOR

    @property
    def length(self) -> float:
        return math.hypot(self.end[0] - self.start[0], self.end[1] - self.start[1])

    @property
    def heading(self) -> float:
        """Direction of travel in degrees, normalised into ``[0, 360)``."""
        ang = math.degrees(math.atan2(self.end[1] - self.start[1], self.end[0] - self.start[0]))
        ang %= 360.0
        return 0.0 if ang >= 360.0 else ang


@dataclass
class Polyline:
    """Ordered set of points drawn with one color."""

    pts: List[XY]
    color: str = DEFAULT_COLOR


# ---------------------------------------------------------------------------
# Drawing container
# ---------------------------------------------------------------------------


@dataclass
class Drawing:
    """Collection of segments emitted during a turtle session."""

    segments: List[Segment] = field(default_factory=list)

    def add(self, *segments: Segment) -> "Drawing":
        for seg in segments:
            if not isinstance(seg, Segment):
                raise TypeError(f"Unsupported object: {type(seg)!r}")
            self.segments.append(seg)
        return self

    def clone(self) -> "Drawing":
        return Drawing(segments=list(self.segments))

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segments)

    # ----------------------------- high level info ---------------------------
    def bounding_box(self) -> Optional[Tuple[XY, XY]]:
        xs: List[float] = []
        ys: List[float] = []
        for seg in self.segments:
            for x, y in (seg.start, seg.end):
                xs.append(x)
                ys.append(y)
        if not xs:
            return None
        return (min(xs), min(ys)), (max(xs), max(ys))

    def total_length(self) -> float:
        return sum(seg.length for seg in self.segments)

    def colors(self) -> List[str]:
        seen: List[str] = []
        for seg in self.segments:
            if seg.color not in seen:
                seen.append(seg.color)
        return seen

    def polylines(self, *, join_tol: float = 1e-6) -> List[Polyline]:
        """Chain consecutive segments that share an endpoint and a color.

        Turtles draw continuously, so a square comes out as a single polyline
        of five points rather than four separate segments.  A pen lift, a
        jump or a color change starts a new polyline.
        """

        chains: List[Polyline] = []
        for seg in self.segments:
            if chains:
                last = chains[-1]
                tail = last.pts[-1]
                if (
                    last.color == seg.color
                    and math.hypot(tail[0] - seg.start[0], tail[1] - seg.start[1]) <= join_tol
                ):
                    last.pts.append(seg.end)
                    continue
            chains.append(Polyline(pts=[seg.start, seg.end], color=seg.color))
        return chains

    # ------------------------------- serialisation ---------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "segments": [
                {
                    "start": [float(seg.start[0]), float(seg.start[1])],
                    "end": [float(seg.end[0]), float(seg.end[1])],
                    "color": seg.color,
                }
                for seg in self.segments
            ]
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Drawing":
        drawing = Drawing()
        for item in data.get("segments", []):
            sx, sy = item["start"]
            ex, ey = item["end"]
            drawing.add(
                Segment(
                    start=(float(sx), float(sy)),
                    end=(float(ex), float(ey)),
                    color=str(item.get("color", DEFAULT_COLOR)),
                )
            )
        return drawing

    def strokes(self) -> List[Dict[str, Any]]:
        """Return a list of strokes suitable for front-end rendering."""
        return [
            {
                "points": [[float(x), float(y)] for x, y in poly.pts],
                "color": poly.color,
            }
            for poly in self.polylines()
        ]


__all__ = ["XY", "DEFAULT_COLOR", "Segment", "Polyline", "Drawing"]
