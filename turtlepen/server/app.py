"""FastAPI application exposing a turtle drawing session over HTTP."""
from __future__ import annotations

from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from ..controller import TurtleController
from ..errors import InvalidArgumentError


def create_controller() -> TurtleController:
    controller = TurtleController()
    controller.connect()
    return controller


controller = create_controller()
app = FastAPI(title="turtlepen drawing server")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def index() -> Response:
    return Response(content=controller.drawing_svg(), media_type="image/svg+xml")


@app.get("/api/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/api/status")
def status() -> Dict[str, Any]:
    return {
        "job": controller.job_status(),
        "device": controller.device_status(),
        "drawing": controller.drawing_summary(),
        "cursor": controller.cursor_state(),
    }


@app.post("/api/draw")
def draw(commands: List[Dict[str, Any]]) -> Dict[str, Any]:
    try:
        count = controller.draw(commands)
    except InvalidArgumentError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {
        "ok": True,
        "executed": count,
        "cursor": controller.cursor_state(),
        "drawing": controller.drawing_summary(),
    }


@app.get("/api/drawing")
def get_drawing() -> Dict[str, Any]:
    return controller.drawing_strokes()


@app.get("/api/drawing.svg")
def get_drawing_svg() -> Response:
    return Response(content=controller.drawing_svg(), media_type="image/svg+xml")


@app.delete("/api/drawing")
def clear_drawing() -> Dict[str, Any]:
    controller.reset()
    return {"ok": True}


@app.post("/api/job/start")
def start_job(payload: Dict[str, Any] | None = None) -> Dict[str, Any]:
    try:
        controller.start_job(options=payload or {})
    except RuntimeError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return {"ok": True}


@app.post("/api/job/stop")
def stop_job() -> Dict[str, Any]:
    controller.stop_job()
    return {"ok": True}


__all__ = ["app", "controller", "create_controller"]
