"""Command line interface.

Examples::

    turtlepen draw polygon 5 80 --svg pentagon.svg
    turtlepen draw --script flower.json --json flower.json.out
    turtlepen draw circle 50 --plot --port /dev/ttyUSB0
    turtlepen serve --port 8000
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .commands import OPS, run_commands
from .config import PlotterSettings
from .errors import TurtlePenError
from .turtles import Turtle


def _parse_value(text: str) -> Any:
    for cast in (int, float):
        try:
            return cast(text)
        except ValueError:
            continue
    return text


def command_from_args(op: str, values: Sequence[str]) -> Dict[str, Any]:
    if op not in OPS:
        raise TurtlePenError(f"Unknown op: {op!r}. Choose from: {', '.join(sorted(OPS))}")
    _, names = OPS[op]
    if len(values) != len(names):
        raise TurtlePenError(f"{op} takes {len(names)} argument(s): {' '.join(names) or '(none)'}")
    command: Dict[str, Any] = {"op": op}
    for name, value in zip(names, values):
        command[name] = value if name == "color" else _parse_value(value)
    return command


def _load_script(path: Path) -> List[Dict[str, Any]]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise TurtlePenError(f"{path}: cannot read script ({exc.strerror or exc})") from exc
    except json.JSONDecodeError as exc:
        raise TurtlePenError(f"{path}: invalid JSON ({exc.msg} at line {exc.lineno})") from exc
    if isinstance(data, dict):
        data = data.get("commands", [])
    if not isinstance(data, list):
        raise TurtlePenError(f"{path}: expected a list of commands")
    return data


def _make_turtle(args: argparse.Namespace) -> Turtle:
    if args.screen:
        from .turtles import ScreenTurtle

        return ScreenTurtle()
    return Turtle()


def cmd_draw(args: argparse.Namespace) -> int:
    commands: List[Dict[str, Any]] = []
    if args.script:
        commands.extend(_load_script(Path(args.script)))
    if args.op:
        commands.append(command_from_args(args.op, args.values))
    if not commands:
        raise TurtlePenError("Nothing to draw: give an op or --script")

    t = _make_turtle(args)
    run_commands(t, commands)
    drawing = t.finish()
    print(f"Drew {len(drawing)} segments, total length {drawing.total_length():.2f}.")

    if args.svg:
        from .svg import write_svg

        write_svg(drawing, args.svg)
        print(f"Wrote {args.svg}")
    if args.json:
        Path(args.json).write_text(json.dumps(drawing.to_dict(), indent=2), encoding="utf-8")
        print(f"Wrote {args.json}")
    if args.plot:
        from .device import GRBL, Config
        from .rendering import PlotRenderer

        settings = PlotterSettings(units_per_mm=args.units_per_mm)
        device = GRBL(Config(port=args.port, servo=settings.servo)).connect()
        try:
            PlotRenderer(device, settings=settings).run(drawing)
        finally:
            device.close()
    if args.screen:
        import turtle

        turtle.done()
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("turtlepen.server.app:app", host=args.host, port=args.port, reload=False)
    return 0


def cmd_ports(args: argparse.Namespace) -> int:
    from .device import GRBL

    for port in GRBL.enumerate_ports():
        print(port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="turtlepen", description="Turtle drawing toolkit")
    sub = parser.add_subparsers(dest="command", required=True)

    draw = sub.add_parser("draw", help="run drawing commands")
    draw.add_argument("op", nargs="?", help=f"one of: {', '.join(sorted(OPS))}")
    draw.add_argument("values", nargs="*", help="arguments for the op, in order")
    draw.add_argument("--script", help="JSON file with a list of commands")
    draw.add_argument("--svg", help="write the drawing as SVG")
    draw.add_argument("--json", help="write the drawing as JSON")
    draw.add_argument("--screen", action="store_true", help="animate in a turtle window")
    draw.add_argument("--plot", action="store_true", help="plot on a GRBL device")
    draw.add_argument("--port", default="/dev/ttyUSB0", help="serial port for --plot")
    draw.add_argument("--units-per-mm", type=float, default=1.0)
    draw.set_defaults(func=cmd_draw)

    serve = sub.add_parser("serve", help="run the HTTP server")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8000)
    serve.set_defaults(func=cmd_serve)

    ports = sub.add_parser("ports", help="list serial ports")
    ports.set_defaults(func=cmd_ports)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return args.func(args)
    except TurtlePenError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
