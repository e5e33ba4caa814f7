"""Mapping turtle coordinates onto a plotter bed."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from .config import PlotterSettings, Workspace
from .errors import InvalidArgumentError
from .geometry import Drawing, XY


@dataclass
class Transform:
    """Geometric transform applied to turtle coordinates."""

    scale: float = 1.0
    rotation_deg: float = 0.0
    offset_x: float = 0.0
    offset_y: float = 0.0
    origin_x: float = 0.0
    origin_y: float = 0.0

    def apply(self, x: float, y: float) -> XY:
        x -= self.origin_x
        y -= self.origin_y
        theta = math.radians(self.rotation_deg)
        cos_t = math.cos(theta)
        sin_t = math.sin(theta)
        sx = x * self.scale
        sy = y * self.scale
        rx = sx * cos_t - sy * sin_t
        ry = sx * sin_t + sy * cos_t
        return rx + self.offset_x, ry + self.offset_y


def drawing_bounds(drawing: Drawing, transform: Transform) -> Tuple[float, float, float, float]:
    """Return ``(xmin, xmax, ymin, ymax)`` of the transformed drawing."""
    xmin = ymin = float("inf")
    xmax = ymax = float("-inf")
    for seg in drawing:
        for px, py in (seg.start, seg.end):
            x, y = transform.apply(px, py)
            xmin = min(xmin, x)
            ymin = min(ymin, y)
            xmax = max(xmax, x)
            ymax = max(ymax, y)
    if xmin == float("inf"):
        return (0.0, 0.0, 0.0, 0.0)
    return xmin, xmax, ymin, ymax


def fits_workspace(bounds: Tuple[float, float, float, float], workspace: Workspace) -> bool:
    xmin, xmax, ymin, ymax = bounds
    if xmax - xmin > workspace.width_mm + 1e-6:
        return False
    if ymax - ymin > workspace.height_mm + 1e-6:
        return False
    if xmin < -1e-6 or ymin < -1e-6:
        return False
    if xmax > workspace.width_mm + 1e-6 or ymax > workspace.height_mm + 1e-6:
        return False
    return True


def bed_transform(drawing: Drawing, settings: PlotterSettings) -> Transform:
    """Centre ``drawing`` on the bed, shrinking it into the margins if asked to.

    Turtle units are converted with ``settings.units_per_mm``.  The drawing is
    never enlarged.
    """

    if not settings.units_per_mm > 0:
        raise InvalidArgumentError(f"units_per_mm must be positive, got {settings.units_per_mm}")
    ws = settings.workspace
    scale = 1.0 / settings.units_per_mm
    bbox = drawing.bounding_box()
    if bbox is None:
        return Transform(scale=scale, offset_x=ws.width_mm / 2.0, offset_y=ws.height_mm / 2.0)
    (x0, y0), (x1, y1) = bbox
    if settings.fit_to_workspace:
        avail_w = max(0.0, ws.width_mm - 2 * ws.margin_mm)
        avail_h = max(0.0, ws.height_mm - 2 * ws.margin_mm)
        w = (x1 - x0) * scale
        h = (y1 - y0) * scale
        factors = [1.0]
        if w > 0:
            factors.append(avail_w / w)
        if h > 0:
            factors.append(avail_h / h)
        scale *= min(factors)
    return Transform(
        scale=scale,
        origin_x=0.5 * (x0 + x1),
        origin_y=0.5 * (y0 + y1),
        offset_x=ws.width_mm / 2.0,
        offset_y=ws.height_mm / 2.0,
    )


__all__ = ["Transform", "drawing_bounds", "fits_workspace", "bed_transform"]
