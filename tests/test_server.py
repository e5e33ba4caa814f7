import pytest
from fastapi.testclient import TestClient

from turtlepen.rendering import RenderOptions
from turtlepen.server.app import app, controller


@pytest.fixture
def client():
    controller.reset()
    controller.renderer.options = RenderOptions(settle_down_s=0.0, settle_up_s=0.0)
    return TestClient(app)


def test_health(client):
    assert client.get("/api/health").json() == {"status": "ok"}


def test_draw_returns_cursor_and_summary(client):
    res = client.post("/api/draw", json=[{"op": "polygon", "n": 5, "length": 40}])
    assert res.status_code == 200
    body = res.json()
    assert body["executed"] == 1
    assert body["drawing"]["segments"] == 5
    assert abs(body["cursor"]["heading"] % 360.0) < 1e-6 or abs(body["cursor"]["heading"] - 360.0) < 1e-6


def test_invalid_command_is_rejected(client):
    res = client.post("/api/draw", json=[{"op": "polygon", "n": 0, "length": 40}])
    assert res.status_code == 400
    assert "n must be" in res.json()["detail"]


def test_rejected_batch_draws_nothing(client):
    res = client.post(
        "/api/draw", json=[{"op": "fd", "distance": 10}, {"op": "polygon", "n": 0, "length": 5}]
    )
    assert res.status_code == 400
    state = client.get("/api/status").json()
    assert state["drawing"]["segments"] == 0
    assert state["cursor"]["x"] == 0.0


def test_drawing_strokes_and_svg(client):
    client.post("/api/draw", json=[{"op": "square", "length": 10}])
    strokes = client.get("/api/drawing").json()["strokes"]
    assert len(strokes) == 1
    assert len(strokes[0]["points"]) == 5

    res = client.get("/api/drawing.svg")
    assert res.headers["content-type"].startswith("image/svg+xml")
    assert res.text.count("<path") == 1


def test_delete_resets_session(client):
    client.post("/api/draw", json=[{"op": "fd", "distance": 10}])
    assert client.delete("/api/drawing").json() == {"ok": True}
    status = client.get("/api/status").json()
    assert status["drawing"]["segments"] == 0
    assert status["cursor"]["x"] == 0.0


def test_job_start_plots_drawing(client):
    client.post("/api/draw", json=[{"op": "square", "length": 10}])
    assert client.post("/api/job/start").json() == {"ok": True}
    controller._job_thread.join(timeout=5)
    job = client.get("/api/status").json()["job"]
    assert job["job_state"] == "idle"
    assert job["progress"]["current"] == 4
    assert client.post("/api/job/stop").json() == {"ok": True}
