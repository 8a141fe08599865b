import json
import logging
import sys
from pathlib import Path

import pytest

from spsearch import cli
from spsearch.logging import setup_root_logger

DIAMOND_YAML = """
nodes: [S, A, B, T, Z]
edges:
  - [S, A, 1]
  - [S, B, 4]
  - [A, B, 1]
  - [A, T, 5]
  - [B, T, 1]
"""


def extract_json_from_stdout(output: str) -> str:
    """Return the first balanced JSON object found in ``output``."""
    json_start = output.find("{")
    if json_start == -1:
        return output
    depth = 0
    for i in range(json_start, len(output)):
        if output[i] == "{":
            depth += 1
        elif output[i] == "}":
            depth -= 1
            if depth == 0:
                return output[json_start : i + 1]
    return output


@pytest.fixture
def diamond_file(tmp_path: Path) -> Path:
    path = tmp_path / "diamond.yaml"
    path.write_text(DIAMOND_YAML)
    return path


def run_cli(argv):
    with pytest.raises(SystemExit) as exc_info:
        cli.main(argv)
    return exc_info.value.code


def test_path_prints_distance_and_path(diamond_file, capsys) -> None:
    code = run_cli(["--quiet", "path", str(diamond_file), "S", "T"])
    out = capsys.readouterr().out
    assert code == cli.EXIT_OK
    assert "Distance: 3" in out
    assert "Path: S -> A -> B -> T" in out


def test_path_json(diamond_file, capsys) -> None:
    code = run_cli(["--quiet", "path", str(diamond_file), "S", "T", "--json"])
    data = json.loads(extract_json_from_stdout(capsys.readouterr().out))
    assert code == cli.EXIT_OK
    assert data == {
        "source": "S",
        "destination": "T",
        "distance": 3.0,
        "path": ["S", "A", "B", "T"],
    }


def test_path_json_stdout_is_only_json(diamond_file, capsys) -> None:
    setup_root_logger()
    root = logging.getLogger("spsearch")
    # The package handler was bound to stdout at import; add one on capsys
    handler = logging.StreamHandler(sys.stdout)
    root.addHandler(handler)
    try:
        code = run_cli(["path", str(diamond_file), "S", "T", "--json"])
    finally:
        root.removeHandler(handler)
    out = capsys.readouterr().out
    assert code == cli.EXIT_OK
    assert root.level == logging.WARNING
    assert json.loads(out)["path"] == ["S", "A", "B", "T"]


def test_path_no_path_flag(diamond_file, capsys) -> None:
    code = run_cli(["--quiet", "path", str(diamond_file), "S", "T", "--no-path"])
    out = capsys.readouterr().out
    assert code == cli.EXIT_OK
    assert "Distance: 3" in out
    assert "Path:" not in out


def test_path_unreachable(diamond_file, capsys) -> None:
    code = run_cli(["--quiet", "path", str(diamond_file), "S", "Z"])
    assert code == cli.EXIT_UNREACHABLE
    assert "Z is unreachable from S" in capsys.readouterr().out


def test_path_unreachable_json(diamond_file, capsys) -> None:
    code = run_cli(["--quiet", "path", str(diamond_file), "T", "S", "--json"])
    data = json.loads(extract_json_from_stdout(capsys.readouterr().out))
    assert code == cli.EXIT_UNREACHABLE
    assert data["distance"] is None
    assert data["path"] is None


def test_numeric_node_tokens(tmp_path: Path, capsys) -> None:
    path = tmp_path / "numeric.yaml"
    path.write_text("edges:\n  - [1, 2, 0.5]\n  - [2, 3, 0.25]\n")
    code = run_cli(["--quiet", "path", str(path), "1", "3", "--json"])
    data = json.loads(extract_json_from_stdout(capsys.readouterr().out))
    assert code == cli.EXIT_OK
    assert data["path"] == [1, 2, 3]
    assert data["distance"] == 0.75


def test_edge_list_file(tmp_path: Path, capsys) -> None:
    path = tmp_path / "edges.txt"
    path.write_text("a b 2\nb c 2\na c 5\n")
    assert run_cli(["--quiet", "path", str(path), "a", "c"]) == cli.EXIT_OK
    assert "Distance: 4" in capsys.readouterr().out


def test_unknown_node(diamond_file, capsys) -> None:
    code = run_cli(["--quiet", "path", str(diamond_file), "S", "nope"])
    assert code == cli.EXIT_ERROR
    assert "ERROR: KeyError" in capsys.readouterr().out


def test_missing_file(tmp_path: Path, capsys) -> None:
    code = run_cli(["--quiet", "path", str(tmp_path / "none.yaml"), "S", "T"])
    assert code == cli.EXIT_ERROR
    assert "Graph file not found" in capsys.readouterr().out


def test_invalid_graph_file(tmp_path: Path, capsys) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("vertices: []\n")
    assert run_cli(["--quiet", "inspect", str(path)]) == cli.EXIT_ERROR
    assert "ERROR: ValueError" in capsys.readouterr().out


def test_inspect(diamond_file, capsys) -> None:
    cli.main(["--quiet", "inspect", str(diamond_file)])
    out = capsys.readouterr().out
    assert "Nodes: 5" in out
    assert "Edges: 5" in out
    assert "Neighbors" in out
    lines = [line.split("|") for line in out.splitlines() if line.startswith("   S ")]
    assert [cell.strip() for cell in lines[0]] == ["S", "2", "0", "2"]


def test_no_arguments_prints_help(capsys) -> None:
    assert run_cli([]) == 0
    assert "usage: spsearch" in capsys.readouterr().out


def test_verbose_sets_debug_level(diamond_file) -> None:
    run_cli(["--verbose", "path", str(diamond_file), "S", "T"])
    assert logging.getLogger("spsearch").level == logging.DEBUG
    run_cli(["path", str(diamond_file), "S", "T"])
    assert logging.getLogger("spsearch").level == logging.INFO


class TestHelpers:
    def test_format_distance(self) -> None:
        assert cli._format_distance(3.0) == "3"
        assert cli._format_distance(0.125) == "0.125"
        assert cli._format_distance(2.5) == "2.5"
        assert cli._format_distance(float("inf")) == "inf"

    def test_format_table(self) -> None:
        assert cli._format_table(["a"], []) == ""
        table = cli._format_table(["Node", "N"], [["S", "2"]], min_width=4)
        assert table.splitlines() == [
            "   Node | N   ",
            "   -----+-----",
            "   S    | 2   ",
        ]
