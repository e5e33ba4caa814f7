"""GRBL device helper.

Drives a servo-pen plotter running GRBL over a serial port.  Only the
commands a turtle drawing needs are exposed: absolute travel and draw moves,
pen up/down through the spindle PWM and status polling.
"""
from __future__ import annotations

import re
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

import serial
from serial.tools import list_ports

from ..config import ServoCalibration
from ..errors import DeviceConnectionError

_STATUS_STATE = re.compile(r"^<\s*([A-Za-z]+)(?=[|,>])")
_STATUS_WPOS = re.compile(r"WPos:([^|>]+)")
_STATUS_MPOS = re.compile(r"MPos:([^|>]+)")
_STATUS_WCO = re.compile(r"WCO:([^|>]+)")


@dataclass
class Config:
    # Serial
    port: str = "/dev/ttyUSB0"
    baudrate: int = 115200
    read_timeout_s: float = 1.0
    wake_delay_s: float = 2.0

    # Workspace (mm)
    x_max: float = 300.0
    y_max: float = 245.0

    # Feeds (mm/min)
    feed_travel: int = 3000
    feed_draw: int = 3000

    # Servo calibration (pos=0 -> down, pos=1 -> up)
    servo: ServoCalibration = field(default_factory=ServoCalibration)

    # Safety
    clip_to_bed: bool = True


class GRBL:
    """Minimal GRBL wrapper used by plotter turtles and the renderer."""

    def __init__(self, cfg: Optional[Config] = None, *, serial_factory: Optional[Callable[..., object]] = None) -> None:
        self.cfg = cfg or Config()
        self.ser = None
        self._serial_factory = serial_factory or serial.Serial
        self._pen_pos: float = 1.0  # last commanded position [0..1], default up

    @staticmethod
    def enumerate_ports() -> List[str]:
        return [p.device for p in list_ports.comports()]

    # -------- Connection / basic I/O --------
    def connect(self) -> "GRBL":
        try:
            self.ser = self._serial_factory(
                self.cfg.port, baudrate=self.cfg.baudrate, timeout=self.cfg.read_timeout_s
            )
        except serial.SerialException as exc:  # pragma: no cover - hardware dependent
            raise DeviceConnectionError(str(exc)) from exc
        if self.cfg.wake_delay_s > 0:
            time.sleep(self.cfg.wake_delay_s)
        self._writeln("\r\n")  # wake
        self.flush_input()
        self.cmd("G90")  # absolute coordinates
        self.cmd("G21")  # millimeters
        return self

    def close(self) -> None:
        if self.ser is not None and self.ser.is_open:
            self.ser.close()
        self.ser = None

    @property
    def is_connected(self) -> bool:
        return bool(self.ser is not None and self.ser.is_open)

    def _require_connection(self):
        if not self.is_connected:
            raise DeviceConnectionError("Device is not connected")
        return self.ser

    def _writeln(self, s: str) -> None:
        ser = self._require_connection()
        if not s.endswith("\n"):
            s += "\n"
        ser.write(s.encode("ascii"))
        ser.flush()

    def _readlines_until_timeout(self) -> List[str]:
        ser = self._require_connection()
        lines: List[str] = []
        t0 = time.monotonic()
        while True:
            line = ser.readline().decode(errors="ignore").strip()
            if line:
                lines.append(line)
                if line.lower().startswith("ok"):
                    break
                if line.lower().startswith("error"):
                    raise DeviceConnectionError(f"GRBL rejected command: {line}")
            elif time.monotonic() - t0 > self.cfg.read_timeout_s:
                break
        return lines

    def cmd(self, gcode: str, wait_ok: bool = True) -> List[str]:
        self._writeln(gcode)
        return self._readlines_until_timeout() if wait_ok else []

    def flush_input(self) -> None:
        self._require_connection().reset_input_buffer()

    # -------- Status / idle waiting --------
    def status(self) -> Dict[str, Optional[object]]:
        ser = self._require_connection()
        ser.write(b"?")
        ser.flush()
        line = ser.readline().decode(errors="ignore").strip()

        state = None
        wpos = None
        m = _STATUS_STATE.search(line)
        if m:
            state = m.group(1)

        m_w = _STATUS_WPOS.search(line)
        if m_w:
            wpos = tuple(float(v) for v in m_w.group(1).split(",")[:3])
        else:
            m_m = _STATUS_MPOS.search(line)
            if m_m:
                mpos = [float(v) for v in m_m.group(1).split(",")[:3]]
                m_c = _STATUS_WCO.search(line)
                if m_c:
                    wco = [float(v) for v in m_c.group(1).split(",")[:3]]
                    wpos = tuple(mp - wc for mp, wc in zip(mpos, wco))
                else:
                    wpos = tuple(mpos)

        return {"raw": line, "state": state, "wpos": wpos}

    def is_idle(self) -> bool:
        s = self.status().get("state", None)
        return (s or "").upper() == "IDLE"

    def wait_idle(self, timeout: float = 30.0, poll: float = 0.05) -> None:
        t0 = time.monotonic()
        while time.monotonic() - t0 < timeout:
            if self.is_idle():
                return
            time.sleep(poll)
        raise TimeoutError("GRBL did not become IDLE in time.")

    # -------- Movement --------
    def move_xy(
        self,
        x: Optional[float] = None,
        y: Optional[float] = None,
        *,
        feed: Optional[int] = None,
        wait: bool = True,
    ) -> List[str]:
        if feed is None:
            feed = self.cfg.feed_travel
        parts = ["G0"]
        if x is not None:
            parts.append(f"X{self._clip_x(x):.3f}")
        if y is not None:
            parts.append(f"Y{self._clip_y(y):.3f}")
        parts.append(f"F{feed}")
        out = self.cmd(" ".join(parts))
        if wait:
            self.wait_idle()
        return out

    def draw_xy(self, x: float, y: float, wait: bool = False) -> List[str]:
        """Move in drawing mode."""

        out = self.cmd(
            f"G1 X{self._clip_x(x):.3f} Y{self._clip_y(y):.3f} F{self.cfg.feed_draw}"
        )
        if wait:
            self.wait_idle()
        return out

    # -------- Pen control --------
    def pen_set(self, pos: float, *, wait: bool = False) -> None:
        """Set servo to absolute pos in [0..1]."""

        target = self.cfg.servo.clamp(float(pos))
        self.cmd(f"M3 S{self.cfg.servo.to_pwm(target)}")
        self._pen_pos = target
        if wait:
            self.wait_idle()

    def pen_up(self, *, wait: bool = False) -> None:
        self.pen_set(1.0, wait=wait)

    def pen_down(self, *, wait: bool = False) -> None:
        self.pen_set(0.0, wait=wait)

    def travel_to(self, x: float, y: float, lift: bool = True) -> None:
        if lift:
            self.pen_up()
        self.move_xy(x, y, wait=True)

    def set_origin_here(self) -> None:
        self.cmd("G92 X0 Y0 Z0")

    # -------- Clipping --------
    def _clip_x(self, x: float) -> float:
        return max(0.0, min(self.cfg.x_max, x)) if self.cfg.clip_to_bed else x

    def _clip_y(self, y: float) -> float:
        return max(0.0, min(self.cfg.y_max, y)) if self.cfg.clip_to_bed else y


__all__ = ["Config", "GRBL"]
