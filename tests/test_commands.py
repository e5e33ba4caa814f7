import pytest

from turtlepen import InvalidArgumentError, Turtle
from turtlepen.commands import parse_command, run_commands


def test_run_commands_draws_shapes():
    t = Turtle()
    count = run_commands(
        t,
        [
            {"op": "color", "color": "red"},
            {"op": "polygon", "n": 5, "length": 20},
            {"op": "pu"},
            {"op": "fd", "distance": 50},
            {"op": "pd"},
            {"op": "circle", "r": 10},
        ],
    )
    assert count == 6
    assert len(t.drawing) == 5 + 21
    assert t.drawing.colors() == ["red"]


def test_parse_command_orders_arguments():
    assert parse_command({"op": "polyline", "angle": 30, "n": 3, "length": 5}) == ("polyline", [3, 5, 30])


@pytest.mark.parametrize(
    "command",
    [
        {"op": "teleport"},
        {"op": "fd"},
        {"op": "fd", "distance": 1, "speed": 2},
        ["fd", 10],
        {},
    ],
)
def test_bad_commands_raise(command):
    with pytest.raises(InvalidArgumentError):
        parse_command(command)


def test_malformed_command_stops_before_drawing():
    t = Turtle()
    with pytest.raises(InvalidArgumentError):
        run_commands(t, [{"op": "fd", "distance": 10}, {"op": "jump"}])
    assert len(t.drawing) == 0


def test_bad_values_surface_from_shapes():
    with pytest.raises(InvalidArgumentError):
        run_commands(Turtle(), [{"op": "polygon", "n": 0, "length": 10}])
