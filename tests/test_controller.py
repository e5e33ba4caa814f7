import pytest

from turtlepen import InvalidArgumentError
from turtlepen.controller import TurtleController
from turtlepen.device import MockPlotter
from turtlepen.rendering import RenderOptions


def _controller():
    return TurtleController(
        device=MockPlotter(),
        renderer_options=RenderOptions(settle_down_s=0.0, settle_up_s=0.0),
    )


def test_draw_and_summary():
    c = _controller()
    c.draw([{"op": "square", "length": 10}])
    summary = c.drawing_summary()
    assert summary["segments"] == 4
    assert abs(summary["total_length"] - 40.0) < 1e-9
    assert summary["colors"] == ["#111111"]
    assert c.cursor_state()["pen_down"] is True


def test_reset_clears_drawing_and_cursor():
    c = _controller()
    c.draw([{"op": "fd", "distance": 10}, {"op": "lt", "angle": 45}])
    c.reset()
    assert c.drawing_summary()["segments"] == 0
    assert c.cursor_state()["heading"] == 0.0
    assert c.drawing_summary()["bounding_box"] is None


def test_job_runs_to_completion():
    c = _controller()
    c.draw([{"op": "polygon", "n": 6, "length": 15}])
    c.start_job().join(timeout=5)
    status = c.job_status()
    assert status["job_state"] == "idle"
    assert status["progress"] == {"current": 6, "total": 6}
    assert status["last_status"] == "Plot finished."
    assert len(c.device.drawn_segments()) == 6


def test_stop_without_job_is_noop():
    c = _controller()
    c.stop_job()
    assert c.job_status()["job_state"] == "idle"


def test_device_status_lists_position():
    status = _controller().device_status()
    assert status["wpos"] == [0.0, 0.0, 0.0]


def test_failed_batch_leaves_session_untouched():
    c = _controller()
    c.draw([{"op": "fd", "distance": 5}])
    with pytest.raises(InvalidArgumentError):
        c.draw([{"op": "fd", "distance": 10}, {"op": "polygon", "n": 0, "length": 5}])
    assert c.drawing_summary()["segments"] == 1
    assert c.cursor_state()["x"] == 5.0
