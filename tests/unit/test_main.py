# tests/unit/test_main.py — v2
"""Tests for main.py — CLI argument parsing and commands."""

from __future__ import annotations

import json

import networkx as nx
import pytest

from flexalgo.main import _build_parser, _parse_options, main


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Run from an empty directory so no .env file is picked up."""
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def graph_file(tmp_path, teams_graph):
    path = tmp_path / "teams.json"
    path.write_text(json.dumps(nx.node_link_data(teams_graph, edges="edges")))
    return path


class TestParser:
    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            _build_parser().parse_args(["--version"])
        assert exc.value.code == 0
        assert "flexalgo" in capsys.readouterr().out

    def test_run_args(self):
        args = _build_parser().parse_args(
            ["run", "exp.louvain", "g.json", "-o", "resolution=2", "--option", "seed=3"],
        )
        assert args.algorithm == "exp.louvain"
        assert args.option == ["resolution=2", "seed=3"]

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out


class TestParseOptions:
    def test_json_values(self):
        assert _parse_options(["maxPasses=3", "direction=outgoing", "weightAttribute=[\"w\"]"]) == {
            "maxPasses": 3, "direction": "outgoing", "weightAttribute": ["w"],
        }

    def test_invalid_pair(self):
        with pytest.raises(ValueError, match="KEY=VALUE"):
            _parse_options(["novalue"])


class TestCommands:
    def test_list(self, capsys):
        assert main(["list"]) == 0
        out = capsys.readouterr().out
        assert "exp.louvain" in out
        assert "exp.filterDFS" in out

    def test_run_louvain(self, graph_file, capsys):
        assert main(["run", "exp.louvain", str(graph_file)]) == 0
        record = json.loads(capsys.readouterr().out)
        assert len(record["communities"]) == 3

    def test_run_pagerank_with_options(self, graph_file, capsys):
        assert main(["run", "exp.pagerankv", str(graph_file), "-o", "maxIterations=5"]) == 0
        record = json.loads(capsys.readouterr().out)
        assert record["iterations"] <= 5
        assert sum(record["scores"].values()) == pytest.approx(1.0)

    def test_run_bfs(self, graph_file, capsys):
        code = main(["run", "exp.filterBFS", str(graph_file), "--start", "alice", "--max-depth", "1"])
        assert code == 0
        record = json.loads(capsys.readouterr().out)
        assert record["visited"][0] == "alice"
        assert set(record["visited"]) == {"alice", "bob", "carol", "dave"}

    def test_run_dfs_integer_start(self, tmp_path, chain_graph, capsys):
        path = tmp_path / "chain.json"
        path.write_text(json.dumps(nx.node_link_data(chain_graph, edges="edges")))
        assert main(["run", "exp.filterDFS", str(path), "--start", "0", "--max-visited", "2"]) == 0
        record = json.loads(capsys.readouterr().out)
        assert record["visited"][:2] == [0, 1]

    def test_traversal_requires_start(self, graph_file):
        assert main(["run", "exp.filterBFS", str(graph_file)]) == 1

    def test_unknown_algorithm(self, graph_file):
        assert main(["run", "exp.nope", str(graph_file)]) == 1

    def test_missing_graph_file(self, tmp_path):
        assert main(["run", "exp.louvain", str(tmp_path / "none.json")]) == 1
