import json

import pytest

from turtlepen.cli import command_from_args, main
from turtlepen.errors import TurtlePenError


def test_command_from_args_parses_numbers():
    assert command_from_args("polygon", ["5", "80.5"]) == {"op": "polygon", "n": 5, "length": 80.5}
    assert command_from_args("color", ["10"]) == {"op": "color", "color": "10"}


def test_command_from_args_checks_arity():
    with pytest.raises(TurtlePenError):
        command_from_args("arc", ["10"])
    with pytest.raises(TurtlePenError):
        command_from_args("spin", [])


def test_draw_writes_svg_and_json(tmp_path, capsys):
    svg = tmp_path / "pentagon.svg"
    out = tmp_path / "pentagon.json"
    assert main(["draw", "polygon", "5", "80", "--svg", str(svg), "--json", str(out)]) == 0
    assert "Drew 5 segments" in capsys.readouterr().out
    assert svg.read_text().count("<path") == 1
    assert len(json.loads(out.read_text())["segments"]) == 5


def test_draw_runs_script(tmp_path, capsys):
    script = tmp_path / "script.json"
    script.write_text(json.dumps({"commands": [{"op": "circle", "r": 10}, {"op": "square", "length": 5}]}))
    assert main(["draw", "--script", str(script)]) == 0
    assert "Drew 25 segments" in capsys.readouterr().out


def test_invalid_arguments_exit_with_error(capsys):
    assert main(["draw", "polygon", "0", "10"]) == 2
    assert "error:" in capsys.readouterr().err
    assert main(["draw"]) == 2


def test_missing_script_is_reported(tmp_path, capsys):
    assert main(["draw", "--script", str(tmp_path / "nope.json")]) == 2
    assert "cannot read script" in capsys.readouterr().err


def test_malformed_script_is_reported(tmp_path, capsys):
    script = tmp_path / "bad.json"
    script.write_text("[{\"op\": \"fd\",")
    assert main(["draw", "--script", str(script)]) == 2
    assert "invalid JSON" in capsys.readouterr().err
