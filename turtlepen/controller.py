"""High level orchestration for the turtlepen server and CLI."""
from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Optional

from .commands import run_commands
from .config import PlotterSettings, TurtleSettings
from .device import MockPlotter
from .geometry import Drawing
from .rendering import PlotRenderer, RenderOptions
from .svg import drawing_to_svg
from .turtles import Turtle


@dataclass
class JobState:
    job_state: str = "idle"  # idle | running | cancelling | cancelled | error
    last_error: Optional[str] = None
    progress_current: int = 0
    progress_total: int = 0
    last_status: Optional[str] = None


@dataclass
class TurtleController:
    """Own the session turtle, its drawing and the plotter it is sent to."""

    device: Any = field(default_factory=MockPlotter)
    turtle_settings: TurtleSettings = field(default_factory=TurtleSettings)
    plotter_settings: PlotterSettings = field(default_factory=PlotterSettings)
    renderer_options: RenderOptions = field(default_factory=RenderOptions)

    def __post_init__(self) -> None:
        self.turtle = Turtle(settings=self.turtle_settings)
        self.renderer = PlotRenderer(
            self.device, settings=self.plotter_settings, options=self.renderer_options
        )
        self._lock = threading.Lock()
        self._state = JobState()
        self._job_thread: Optional[threading.Thread] = None
        self._stop_event: Optional[threading.Event] = None

    # ------------------------------------------------------------------
    # Device lifecycle
    # ------------------------------------------------------------------
    def connect(self) -> None:
        self.device.connect()

    def close(self) -> None:
        self.device.close()

    # ------------------------------------------------------------------
    # Drawing session
    # ------------------------------------------------------------------
    def draw(self, commands: Iterable[Dict[str, Any]]) -> int:
        """Run drawing commands on the session turtle.

        The batch runs on a copy of the turtle, which replaces the session
        turtle only if every command succeeds.
        """
        with self._lock:
            trial = Turtle(
                settings=self.turtle_settings,
                cursor=replace(self.turtle.cursor),
                drawing=self.turtle.drawing.clone(),
            )
            count = run_commands(trial, commands)
            self.turtle = trial
            return count

    def reset(self) -> None:
        with self._lock:
            self.turtle = Turtle(settings=self.turtle_settings)

    @property
    def drawing(self) -> Drawing:
        return self.turtle.drawing

    def cursor_state(self) -> Dict[str, Any]:
        with self._lock:
            c = self.turtle.cursor
            return {
                "x": c.x,
                "y": c.y,
                "heading": c.heading,
                "pen_down": c.pen_down,
                "color": c.color,
            }

    def drawing_summary(self) -> Dict[str, Any]:
        with self._lock:
            drawing = self.turtle.drawing.clone()
        bbox = drawing.bounding_box()
        bbox_list = None
        if bbox is not None:
            (x0, y0), (x1, y1) = bbox
            bbox_list = [[x0, y0], [x1, y1]]
        return {
            "segments": len(drawing),
            "total_length": drawing.total_length(),
            "bounding_box": bbox_list,
            "colors": drawing.colors(),
        }

    def drawing_strokes(self) -> Dict[str, Any]:
        with self._lock:
            return {"strokes": self.turtle.drawing.strokes()}

    def drawing_svg(self) -> str:
        with self._lock:
            drawing = self.turtle.drawing.clone()
        return drawing_to_svg(drawing)

    # ------------------------------------------------------------------
    # Job control
    # ------------------------------------------------------------------
    def start_job(self, *, options: Optional[Dict[str, Any]] = None) -> threading.Thread:
        options = options or {}
        with self._lock:
            if self._job_thread and self._job_thread.is_alive():
                raise RuntimeError("Job already running")
            drawing = self.turtle.drawing.clone()
            self._state = JobState(job_state="running")
            stop_event = threading.Event()
            self._stop_event = stop_event

        def progress_cb(done: int, extra: Dict[str, Any]) -> None:
            with self._lock:
                self._state.progress_current = done
                self._state.progress_total = int(extra.get("total", 0))

        def status_cb(msg: str) -> None:
            with self._lock:
                self._state.last_status = msg

        def worker() -> None:
            try:
                self.renderer.run(
                    drawing,
                    colors=options.get("colors"),
                    stop_event=stop_event,
                    progress_cb=progress_cb,
                    status_cb=status_cb,
                )
                with self._lock:
                    self._state.job_state = "idle" if not stop_event.is_set() else "cancelled"
            except RuntimeError as exc:
                with self._lock:
                    if stop_event.is_set() and "cancelled" in str(exc).lower():
                        self._state.job_state = "cancelled"
                        self._state.last_error = None
                    else:
                        self._state.job_state = "error"
                        self._state.last_error = str(exc)
            except Exception as exc:  # pragma: no cover - runtime safety
                with self._lock:
                    self._state.job_state = "error"
                    self._state.last_error = str(exc)
            finally:
                with self._lock:
                    self._stop_event = None

        thread = threading.Thread(target=worker, daemon=True)
        self._job_thread = thread
        thread.start()
        return thread

    def stop_job(self) -> None:
        with self._lock:
            if not self._stop_event:
                return
            self._state.job_state = "cancelling"
            self._stop_event.set()

    def job_status(self) -> Dict[str, Any]:
        with self._lock:
            state = self._state
            thread_alive = self._job_thread.is_alive() if self._job_thread else False
            return {
                "job_state": state.job_state,
                "thread_alive": thread_alive,
                "progress": {
                    "current": state.progress_current,
                    "total": state.progress_total,
                },
                "last_status": state.last_status,
                "last_error": state.last_error,
            }

    def device_status(self) -> Dict[str, Any]:
        try:
            status = self.device.status()
        except Exception as exc:  # pragma: no cover - runtime safety
            status = {"state": "error", "error": str(exc)}
        else:
            wpos = status.get("wpos")
            if isinstance(wpos, tuple):
                status = dict(status)
                status["wpos"] = list(wpos)
        return status


__all__ = ["TurtleController", "JobState"]
