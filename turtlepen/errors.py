"""Exception types raised by turtlepen."""

from __future__ import annotations


class TurtlePenError(Exception):
    """Base class for all turtlepen errors."""


class InvalidArgumentError(TurtlePenError, ValueError):
    """Raised when a drawing routine is called with an argument it cannot draw."""


class DeviceConnectionError(TurtlePenError, RuntimeError):
    """Raised when a plotter operation fails due to connectivity issues."""


__all__ = ["TurtlePenError", "InvalidArgumentError", "DeviceConnectionError"]
