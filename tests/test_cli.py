"""
Tests for the wgraph command-line front end.

Each test writes a snapshot or YAML description into a temporary directory,
runs `main(argv)`, and checks the JSON printed to stdout and the exit code.
"""

import json
import os
import tempfile

import networkx as nx
import pytest

from wgraph_core import __version__
from wgraph_core.cli import main, parse_args

DAG_SNAPSHOT = "D 4 5\n1\n2\n3\n4\n1 2 1.0\n1 3 4.0\n2 3 2.0\n2 4 5.0\n3 4 1.0\n"
CYCLE_SNAPSHOT = "D 3 3\n1\n2\n3\n1 2 1.0\n2 3 1.0\n3 1 1.0\n"
UNDIRECTED_YAML = """
vertices: [a, b, c, d, e, f]
edges:
  - [a, b]
  - [c, d]
  - [d, e, 2.5]
"""


@pytest.fixture
def workdir():
    with tempfile.TemporaryDirectory() as tmp:
        yield tmp


def write(directory, name, text):
    path = os.path.join(directory, name)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
    return path


def run_json(capsys, argv):
    code = main(argv)
    out = capsys.readouterr().out
    return code, (json.loads(out) if out.strip() else None)


class TestArgumentParsing:
    def test_defaults(self):
        args = parse_args(["graph.txt"])
        assert args.path == "graph.txt"
        assert args.algorithm is None
        assert args.vertex_type == "int"
        assert args.verbose == 0

    def test_unknown_algorithm_is_usage_error(self):
        with pytest.raises(SystemExit) as excinfo:
            parse_args(["graph.txt", "--algorithm", "nope"])
        assert excinfo.value.code == 2

    def test_version(self, capsys):
        assert main(["--version"]) == 0
        assert capsys.readouterr().out.strip() == __version__

    def test_missing_path(self, capsys):
        assert main([]) == 2
        assert "missing graph path" in capsys.readouterr().err


class TestAlgorithms:
    def test_summary_without_algorithm(self, capsys, workdir):
        path = write(workdir, "g.txt", DAG_SNAPSHOT)
        code, payload = run_json(capsys, [path])
        assert code == 0
        assert payload == {"vertices": 4, "edges": 5}

    def test_dijkstra(self, capsys, workdir):
        path = write(workdir, "g.txt", DAG_SNAPSHOT)
        code, payload = run_json(capsys, [path, "--algorithm", "dijkstra", "--source", "1"])
        assert code == 0
        assert payload == {
            "algorithm": "dijkstra",
            "result": {"1": 0.0, "2": 1.0, "3": 3.0, "4": 4.0},
        }

    def test_unreachable_distance_is_null(self, capsys, workdir):
        path = write(workdir, "g.txt", DAG_SNAPSHOT)
        code, payload = run_json(capsys, [path, "--algorithm", "bfs", "--source", "3"])
        assert code == 0
        assert payload["result"] == {"1": None, "2": None, "3": 0.0, "4": 1.0}

    def test_path(self, capsys, workdir):
        path = write(workdir, "g.txt", DAG_SNAPSHOT)
        code, payload = run_json(
            capsys, [path, "--algorithm", "path", "--source", "1", "--target", "4"]
        )
        assert code == 0
        assert payload["result"] == [1, 2, 3, 4]

    def test_kahn(self, capsys, workdir):
        path = write(workdir, "g.txt", DAG_SNAPSHOT)
        code, payload = run_json(capsys, [path, "--algorithm", "kahn"])
        assert code == 0
        assert payload["result"] == [1, 2, 3, 4]

    def test_hasse_result_is_a_graph_description(self, capsys, workdir):
        path = write(workdir, "g.txt", DAG_SNAPSHOT)
        code, payload = run_json(capsys, [path, "--algorithm", "hasse"])
        assert code == 0
        assert payload["result"]["directed"] is True
        assert payload["result"]["edges"] == [[1, 2, 1.0], [2, 3, 1.0], [3, 4, 1.0]]

    def test_yaml_components(self, capsys, workdir):
        path = write(workdir, "g.yaml", UNDIRECTED_YAML)
        code, payload = run_json(capsys, [path, "--yaml", "--algorithm", "components"])
        assert code == 0
        assert payload["result"] == [["a", "b"], ["c", "d", "e"], ["f"]]

    def test_yaml_string_source(self, capsys, workdir):
        path = write(workdir, "g.yaml", UNDIRECTED_YAML)
        code, payload = run_json(
            capsys, [path, "--yaml", "--algorithm", "dijkstra", "--source", "c"]
        )
        assert code == 0
        assert payload["result"]["e"] == 3.5
        assert payload["result"]["a"] is None

    def test_string_vertex_snapshot(self, capsys, workdir):
        path = write(workdir, "g.txt", "U 2 1\nx\ny\nx y 2.0\n")
        code, payload = run_json(
            capsys, [path, "--vertex-type", "str", "--algorithm", "diameter"]
        )
        assert code == 0
        assert payload["result"] == 2.0

    def test_out_file(self, capsys, workdir):
        path = write(workdir, "g.txt", DAG_SNAPSHOT)
        out = os.path.join(workdir, "result.json")
        assert main([path, "--algorithm", "sinks", "--out", out]) == 0
        assert capsys.readouterr().out == ""
        with open(out, encoding="utf-8") as f:
            assert json.load(f)["result"] == [4]


class TestErrors:
    def test_cycle_is_graph_error(self, capsys, workdir):
        path = write(workdir, "g.txt", CYCLE_SNAPSHOT)
        assert main([path, "--algorithm", "kahn"]) == 1
        assert capsys.readouterr().out == ""

    def test_lattice_on_cycle_is_false(self, capsys, workdir):
        path = write(workdir, "g.txt", CYCLE_SNAPSHOT)
        code, payload = run_json(capsys, [path, "--algorithm", "lattice"])
        assert code == 0
        assert payload["result"] is False

    def test_unknown_source_vertex(self, workdir):
        path = write(workdir, "g.txt", DAG_SNAPSHOT)
        assert main([path, "--algorithm", "dijkstra", "--source", "99"]) == 1
        assert main([path, "--algorithm", "dijkstra", "--source", "abc"]) == 1

    def test_missing_source_is_usage_error(self, capsys, workdir):
        path = write(workdir, "g.txt", DAG_SNAPSHOT)
        assert main([path, "--algorithm", "dijkstra"]) == 2
        assert "--source" in capsys.readouterr().err

    def test_missing_target_is_usage_error(self, workdir):
        path = write(workdir, "g.txt", DAG_SNAPSHOT)
        assert main([path, "--algorithm", "path", "--source", "1"]) == 2

    def test_wrong_graph_kind(self, workdir):
        path = write(workdir, "g.txt", DAG_SNAPSHOT)
        assert main([path, "--algorithm", "components"]) == 1

    def test_malformed_snapshot(self, workdir):
        path = write(workdir, "g.txt", "D 2 1\n1\n2\n")
        assert main([path]) == 1

    def test_missing_file(self, workdir):
        assert main([os.path.join(workdir, "nope.txt")]) == 2

    def test_unparsable_yaml(self, capsys, workdir):
        path = write(workdir, "g.yaml", "edges: [[1, 2]\n")
        assert main([path, "--yaml"]) == 1
        assert capsys.readouterr().out == ""

    def test_mixed_vertex_types_in_yaml(self, workdir):
        path = write(workdir, "g.yaml", "vertices: [1, a]\n")
        assert main([path, "--yaml"]) == 1


class TestAnalysisModes:
    def test_validate(self, capsys, workdir):
        path = write(workdir, "g.txt", DAG_SNAPSHOT)
        code, payload = run_json(capsys, [path, "--validate"])
        assert code == 0
        assert payload == {"issues": {}}

    def test_stats(self, capsys, workdir):
        path = write(workdir, "g.txt", DAG_SNAPSHOT)
        code, payload = run_json(capsys, [path, "--stats"])
        assert code == 0
        assert payload["basic_stats"]["edges"] == 5
        assert payload["order_metrics"]["partial_order"] is True

    def test_stats_infinite_weight_is_null(self, capsys, workdir):
        path = write(workdir, "g.txt", "D 2 1\n1\n2\n1 2 inf\n")
        code, payload = run_json(capsys, [path, "--stats"])
        assert code == 0
        assert payload["basic_stats"]["total_weight"] is None

    def test_export_graphml(self, capsys, workdir):
        path = write(workdir, "g.txt", DAG_SNAPSHOT)
        out = os.path.join(workdir, "g.graphml")
        assert main([path, "--export-graphml", out]) == 0
        G = nx.read_graphml(out)
        assert G.number_of_edges() == 5
