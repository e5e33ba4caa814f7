"""Replaying a recorded :class:`~turtlepen.geometry.Drawing` on a plotter.

A :class:`~turtlepen.turtles.PlotterTurtle` draws while the turtle moves; the
renderer instead plots a finished drawing, which lets it centre and scale the
drawing on the bed first and report progress along the way.
"""
from __future__ import annotations

import time
from dataclasses import dataclass
from threading import Event
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from .config import PlotterSettings
from .geometry import Drawing, Polyline, XY
from .toolpath import Transform, bed_transform, drawing_bounds, fits_workspace

ProgressCallback = Callable[[int, Dict[str, Any]], None]
StatusCallback = Callable[[str], None]


@dataclass
class RenderOptions:
    settle_down_s: float = 0.05
    settle_up_s: float = 0.03
    flush_every: int = 200
    feed_travel: Optional[int] = None
    return_home: bool = True


class PlotRenderer:
    """Execute a :class:`Drawing` on a GRBL-like device."""

    def __init__(
        self,
        device,
        *,
        settings: Optional[PlotterSettings] = None,
        options: Optional[RenderOptions] = None,
    ) -> None:
        self.g = device
        self.settings = settings or PlotterSettings()
        self.options = options or RenderOptions()
        self._cur_xy: Optional[XY] = None

    # ------------------------------------------------------------------
    # Public helpers
    # ------------------------------------------------------------------
    def transform_for(self, drawing: Drawing) -> Transform:
        return bed_transform(drawing, self.settings)

    def plan(
        self,
        drawing: Drawing,
        *,
        transform: Optional[Transform] = None,
        colors: Optional[Union[str, Iterable[str]]] = None,
    ) -> List[Polyline]:
        """Return the bed-space polylines that :meth:`run` would draw."""

        transform = transform or self.transform_for(drawing)
        colors_set = None
        if colors is not None:
            colors_set = set([colors] if isinstance(colors, str) else list(colors))
        plan: List[Polyline] = []
        for poly in drawing.polylines():
            if colors_set is not None and poly.color not in colors_set:
                continue
            plan.append(Polyline(pts=[transform.apply(x, y) for x, y in poly.pts], color=poly.color))
        return plan

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------
    def run(
        self,
        drawing: Drawing,
        *,
        transform: Optional[Transform] = None,
        colors: Optional[Union[str, Iterable[str]]] = None,
        stop_event: Optional[Event] = None,
        progress_cb: Optional[ProgressCallback] = None,
        status_cb: Optional[StatusCallback] = None,
    ) -> None:
        """Plot the drawing and optionally report progress."""

        opts = self.options
        transform = transform or self.transform_for(drawing)

        def report(msg: str) -> None:
            if status_cb:
                status_cb(msg)
            else:
                print(msg)

        bounds = drawing_bounds(drawing, transform)
        if not fits_workspace(bounds, self.settings.workspace):
            xmin, xmax, ymin, ymax = bounds
            report(
                f"Warning: drawing spans x {xmin:.2f}..{xmax:.2f} mm, y {ymin:.2f}..{ymax:.2f} mm "
                f"and does not fit the {self.settings.workspace.width_mm:.0f} x "
                f"{self.settings.workspace.height_mm:.0f} mm workspace."
            )

        plan = self.plan(drawing, transform=transform, colors=colors)
        total_segments = sum(max(0, len(p.pts) - 1) for p in plan)
        report(f"Plotting {len(plan)} polylines, {total_segments} segments.")
        progressed = 0

        def report_progress(delta: int) -> None:
            nonlocal progressed
            progressed += delta
            if progress_cb:
                progress_cb(progressed, {"total": total_segments})

        self._cur_xy = None
        for poly in plan:
            self._run_polyline(poly, opts, stop_event=stop_event, report_progress=report_progress)

        self.g.pen_up()
        if opts.settle_up_s > 0:
            time.sleep(opts.settle_up_s)
        if opts.return_home:
            self.g.move_xy(0.0, 0.0, feed=self._travel_feed(), wait=True)
            self._cur_xy = (0.0, 0.0)
        report("Plot finished.")

    # ------------------------------------------------------------------
    # runners
    # ------------------------------------------------------------------
    def _run_polyline(
        self,
        poly: Polyline,
        opts: RenderOptions,
        *,
        stop_event: Optional[Event],
        report_progress: Callable[[int], None],
    ) -> None:
        pts = poly.pts
        if len(pts) < 2:
            return
        if stop_event and stop_event.is_set():
            raise RuntimeError("Render cancelled")

        x0, y0 = pts[0]
        if self._cur_xy != (x0, y0):
            self._travel_to(x0, y0, opts)
        self.g.pen_down()
        if opts.settle_down_s > 0:
            time.sleep(opts.settle_down_s)

        for i in range(1, len(pts)):
            if stop_event and stop_event.is_set():
                raise RuntimeError("Render cancelled")
            ex, ey = pts[i]
            self.g.draw_xy(ex, ey, wait=False)
            if i % opts.flush_every == 0:
                self.g.wait_idle()
            report_progress(1)

        self.g.wait_idle()
        self._cur_xy = pts[-1]

    # ------------------------------------------------------------------
    # internal helpers
    # ------------------------------------------------------------------
    def _travel_feed(self) -> Optional[int]:
        opts = self.options
        return opts.feed_travel if opts.feed_travel is not None else getattr(self.g.cfg, "feed_travel", None)

    def _travel_to(self, x: float, y: float, opts: RenderOptions) -> None:
        self.g.pen_up()
        if opts.settle_up_s > 0:
            time.sleep(opts.settle_up_s)
        self.g.move_xy(x, y, feed=self._travel_feed(), wait=True)
        self._cur_xy = (x, y)


__all__ = ["PlotRenderer", "RenderOptions"]
