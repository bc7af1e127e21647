import json

import pytest

from dijkstrax.cli import EXAMPLE_CSV, main


@pytest.fixture
def edges_file(tmp_path):
    p = tmp_path / "g.csv"
    p.write_text(EXAMPLE_CSV, encoding="utf-8")
    return str(p)


def test_example_prints_csv(capsys):
    assert main(["--example"]) == 0
    assert capsys.readouterr().out == EXAMPLE_CSV


def test_distances_and_parents(edges_file, capsys):
    assert main(["--edges", edges_file, "--source", "0"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["distances"] == [0, 2, 3, 4]
    assert out["parents"] == [0, 0, 1, 2]
    assert out["completed"] is True
    assert out["counters"]["included"] == 4


def test_target_path_and_trace(edges_file, capsys):
    assert main(["--edges", edges_file, "--target", "2", "--trace"]) == 0
    captured = capsys.readouterr()
    out = json.loads(captured.out)
    assert out["target"] == 2
    assert out["distance"] == 3
    assert out["path"] == [0, 1, 2]
    assert out["completed"] is False
    assert "include vertex 2 (parent = 1, dist = 3)" in captured.err.splitlines()


def test_unreachable_vertices_are_null(edges_file, capsys):
    assert main(["--edges", edges_file, "--source", "3", "--target", "0"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["distances"] == [None, None, None, 0]
    assert out["parents"] == [None, None, None, 3]
    assert out["distance"] is None
    assert out["path"] == []


def test_undirected_multi_source(edges_file, capsys):
    assert main(["--edges", edges_file, "--sources", "3,0", "--undirected"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["sources"] == [3, 0]
    assert out["distances"] == [0, 2, 1, 0]


def test_random_graph(capsys):
    assert main(["--random", "--n", "8", "--m", "20", "--seed", "1"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert len(out["distances"]) == 8
    assert out["distances"][0] == 0


def test_info_logging_goes_to_stderr(edges_file, capsys):
    assert main(["--edges", edges_file, "--log-level", "info", "--log-json"]) == 0
    err = capsys.readouterr().err.splitlines()
    run = json.loads(err[-1])
    assert run["event"] == "run"
    assert run["n"] == 4


@pytest.mark.parametrize(
    "argv",
    [
        ["--edges", "does-not-exist.csv"],
        ["--source", "9"],
        ["--sources", "0,x"],
        ["--max-seconds", "-1"],
    ],
)
def test_input_errors_exit_64(edges_file, capsys, argv):
    if argv[0] != "--edges":
        argv = ["--edges", edges_file] + argv
    assert main(argv) == 64
    assert capsys.readouterr().err.startswith("error: ")


def test_plot_writes_image(edges_file, tmp_path, capsys):
    import matplotlib

    matplotlib.use("Agg")
    target = tmp_path / "tree.png"
    assert main(["--edges", edges_file, "--plot", str(target), "--layout", "shell"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["plot"] == str(target)
    assert target.stat().st_size > 0


def test_deadline_stop_is_warned(edges_file, capsys):
    assert main(["--edges", edges_file, "--max-seconds", "1e-9"]) == 0
    captured = capsys.readouterr()
    assert json.loads(captured.out)["completed"] is False
    assert captured.err.startswith("warning run.deadline max_seconds=1e-09")


def test_target_stop_is_not_warned(edges_file, capsys):
    assert main(["--edges", edges_file, "--target", "1"]) == 0
    assert capsys.readouterr().err == ""
