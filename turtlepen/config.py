"""Configuration models for turtles and plotter output."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class TurtleSettings:
    """Behaviour switches shared by every turtle implementation."""

    arc_segment_length: float = 3.0  # target chord length when approximating arcs
    allow_negative_length: bool = True  # negative lengths draw backward
    default_color: str = "#111111"


@dataclass
class Workspace:
    """Physical dimensions of the plotting surface."""

    width_mm: float = 300.0
    height_mm: float = 245.0
    margin_mm: float = 10.0


@dataclass
class ServoCalibration:
    """Servo calibration expressed as raw PWM values."""

    up: int = 40
    down: int = 90

    def clamp(self, value: float) -> float:
        return max(0.0, min(1.0, value))

    def to_pwm(self, value: float) -> int:
        value = self.clamp(value)
        return int(round(self.down + value * (self.up - self.down)))


@dataclass
class PlotterSettings:
    """Aggregate settings used when a drawing is sent to a plotter."""

    workspace: Workspace = field(default_factory=Workspace)
    servo: ServoCalibration = field(default_factory=ServoCalibration)
    units_per_mm: float = 1.0  # turtle units per millimetre on the bed
    fit_to_workspace: bool = True


__all__ = ["TurtleSettings", "Workspace", "ServoCalibration", "PlotterSettings"]
