"""Example script that builds a flower from arcs and sends it to the server."""
from __future__ import annotations

import requests


def petal_commands(r: float, angle: float) -> list:
    """Two arcs back to back, ending where the petal started."""
    return [
        {"op": "arc", "r": r, "angle": angle},
        {"op": "lt", "angle": 180 - angle},
        {"op": "arc", "r": r, "angle": angle},
        {"op": "lt", "angle": 180 - angle},
    ]


def flower_commands(petals: int = 7, r: float = 60.0, angle: float = 60.0) -> list:
    commands = []
    for _ in range(petals):
        commands.extend(petal_commands(r, angle))
        commands.append({"op": "lt", "angle": 360.0 / petals})
    return commands


def main() -> None:
    base = "http://localhost:8000"
    requests.delete(f"{base}/api/drawing", timeout=5).raise_for_status()
    res = requests.post(f"{base}/api/draw", json=flower_commands(), timeout=5)
    res.raise_for_status()
    print(res.json())


if __name__ == "__main__":
    main()
