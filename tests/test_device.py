from collections import deque

import pytest

from turtlepen.device import GRBL, Config, MockPlotter
from turtlepen.errors import DeviceConnectionError


class FakeSerial:
    """Serial port double that answers GRBL commands."""

    def __init__(self, port, baudrate, timeout, *, status="<Idle|WPos:1.000,2.000,0.000|FS:0,0>", reply="ok"):
        self.port = port
        self.baudrate = baudrate
        self.timeout = timeout
        self.is_open = True
        self.written = []
        self._status = status
        self._reply = reply
        self._lines = deque()

    def write(self, data: bytes) -> None:
        if data == b"?":
            self._lines.append(self._status.encode() + b"\r\n")
            return
        text = data.decode().strip()
        if text:
            self.written.append(text)
            self._lines.append(self._reply.encode() + b"\r\n")

    def flush(self) -> None:
        pass

    def readline(self) -> bytes:
        return self._lines.popleft() if self._lines else b""

    def reset_input_buffer(self) -> None:
        self._lines.clear()

    def close(self) -> None:
        self.is_open = False


def _grbl(**serial_kwargs):
    cfg = Config(port="loop://", wake_delay_s=0.0, read_timeout_s=0.01)
    return GRBL(cfg, serial_factory=lambda *a, **kw: FakeSerial(*a, **kw, **serial_kwargs)).connect()


def test_connect_sets_absolute_millimetres():
    g = _grbl()
    assert g.is_connected
    assert g.ser.written == ["G90", "G21"]
    assert g.ser.port == "loop://"


def test_moves_are_clipped_to_bed():
    g = _grbl()
    g.move_xy(10, 20)
    g.draw_xy(500, -5)
    assert g.ser.written[-2:] == ["G0 X10.000 Y20.000 F3000", "G1 X300.000 Y0.000 F3000"]


def test_pen_commands_use_servo_calibration():
    g = _grbl()
    g.pen_up()
    g.pen_down()
    assert g.ser.written[-2:] == ["M3 S40", "M3 S90"]


def test_status_parses_work_position():
    g = _grbl()
    status = g.status()
    assert status["state"] == "Idle"
    assert status["wpos"] == (1.0, 2.0, 0.0)
    assert g.is_idle()


def test_status_derives_work_position_from_offsets():
    g = _grbl(status="<Run|MPos:5.000,5.000,0.000|WCO:1.000,2.000,0.000>")
    status = g.status()
    assert status["state"] == "Run"
    assert status["wpos"] == (4.0, 3.0, 0.0)
    assert not g.is_idle()


def test_error_reply_raises():
    g = GRBL(
        Config(wake_delay_s=0.0, read_timeout_s=0.01),
        serial_factory=lambda *a, **kw: FakeSerial(*a, **kw, reply="error:20"),
    )
    with pytest.raises(DeviceConnectionError):
        g.connect()


def test_commands_require_connection():
    g = GRBL(Config())
    with pytest.raises(DeviceConnectionError):
        g.move_xy(1, 1)


def test_close_releases_port():
    g = _grbl()
    ser = g.ser
    g.close()
    assert not ser.is_open
    assert not g.is_connected


def test_wait_idle_times_out_when_busy():
    g = _grbl(status="<Run|WPos:0,0,0>")
    with pytest.raises(TimeoutError):
        g.wait_idle(timeout=0.05, poll=0.01)


def test_mock_plotter_tracks_pen_state():
    m = MockPlotter()
    m.travel_to(5, 5)
    m.pen_down()
    m.draw_xy(10, 5)
    assert m.path == [(5.0, 5.0, False), (10.0, 5.0, True)]
    assert m.drawn_segments() == [((5.0, 5.0), (10.0, 5.0))]


def test_mock_plotter_can_require_connection():
    m = MockPlotter(require_connection=True)
    with pytest.raises(DeviceConnectionError):
        m.move_xy(1, 1)
    m.connect()
    m.move_xy(1, 1)
    assert m.position == (1.0, 1.0)
