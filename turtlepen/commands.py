"""Executing drawing commands expressed as plain dicts.

The HTTP API and the command line both describe drawings as a list of
commands such as ``{"op": "polygon", "n": 5, "length": 80}``.  Each op maps
onto a turtle method or a routine from :mod:`turtlepen.shapes`.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Tuple

from . import shapes
from .errors import InvalidArgumentError

# op name -> (callable taking the turtle first, argument names in order)
OPS: Dict[str, Tuple[Callable[..., None], Tuple[str, ...]]] = {
    "fd": (lambda t, distance: t.fd(distance), ("distance",)),
    "bk": (lambda t, distance: t.bk(distance), ("distance",)),
    "lt": (lambda t, angle: t.lt(angle), ("angle",)),
    "rt": (lambda t, angle: t.rt(angle), ("angle",)),
    "pu": (lambda t: t.pu(), ()),
    "pd": (lambda t: t.pd(), ()),
    "color": (lambda t, color: t.set_color(color), ("color",)),
    "polyline": (shapes.polyline, ("n", "length", "angle")),
    "polygon": (shapes.polygon, ("n", "length")),
    "square": (shapes.square, ("length",)),
    "arc": (shapes.arc, ("r", "angle")),
    "circle": (shapes.circle, ("r",)),
}


def parse_command(command: Dict[str, Any]) -> Tuple[str, List[Any]]:
    """Validate a command dict and return ``(op, positional_args)``."""
    if not isinstance(command, dict):
        raise InvalidArgumentError(f"command must be an object, got {command!r}")
    op = command.get("op")
    if op not in OPS:
        raise InvalidArgumentError(f"Unknown op: {op!r}")
    _, names = OPS[op]
    unknown = set(command) - set(names) - {"op"}
    if unknown:
        raise InvalidArgumentError(f"Unexpected arguments for {op}: {sorted(unknown)}")
    missing = [name for name in names if name not in command]
    if missing:
        raise InvalidArgumentError(f"Missing arguments for {op}: {missing}")
    return op, [command[name] for name in names]


def run_command(t, command: Dict[str, Any]) -> None:
    op, args = parse_command(command)
    func, _ = OPS[op]
    func(t, *args)


def run_commands(t, commands: Iterable[Dict[str, Any]]) -> int:
    """Run every command on ``t`` and return how many were executed.

    Every command is checked for a known op and the right argument names
    before the first one runs.
    """

    commands = list(commands)
    for command in commands:
        parse_command(command)
    for command in commands:
        run_command(t, command)
    return len(commands)


__all__ = ["OPS", "parse_command", "run_command", "run_commands"]
