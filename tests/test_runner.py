"""AlgorithmRunner dispatch / validation and TracePlayer navigation."""

import logging

import pytest

from algorithms import AlgorithmNotImplemented
from algorithms.execution import INF
from engine import AlgorithmRunner, TracePlayer
from graph import GraphValidationError, NodeState

from conftest import build_graph, replay


GRAPH_DATA = {
    "nodes": [{"id": "A", "x": 0, "y": 0}, {"id": "B", "x": 1, "y": 0}, {"id": "C", "x": 2, "y": 0}],
    "edges": [
        {"id": "ab", "source": "A", "target": "B", "weight": 1},
        {"id": "bc", "source": "B", "target": "C", "weight": 2},
    ],
}


class TestRunner:
    def test_accepts_plain_dict(self):
        execution = AlgorithmRunner(GRAPH_DATA).run("bfs", "A")
        assert execution.algorithm == "bfs"
        assert execution.steps

    def test_start_defaults_to_first_node(self):
        runner = AlgorithmRunner(GRAPH_DATA)
        assert runner.run("dfs").to_dict() == runner.run("dfs", "A").to_dict()

    def test_unknown_algorithm(self):
        with pytest.raises(AlgorithmNotImplemented):
            AlgorithmRunner(GRAPH_DATA).run("quantum-sort")

    def test_unknown_start(self):
        with pytest.raises(GraphValidationError, match="start node"):
            AlgorithmRunner(GRAPH_DATA).run("bfs", "Z")

    def test_astar_needs_end(self):
        runner = AlgorithmRunner(GRAPH_DATA)
        with pytest.raises(GraphValidationError):
            runner.run("astar", "A")
        with pytest.raises(GraphValidationError, match="end node"):
            runner.run_astar("A", "Z")
        assert runner.run_astar("A", "C").outcome.path == ("A", "B", "C")

    def test_dangling_edge_is_rejected_eagerly(self, caplog):
        data = {"nodes": [{"id": "A"}], "edges": [{"id": "e", "source": "A", "target": "Q"}]}
        with caplog.at_level(logging.WARNING, logger="engine.runner"):
            with pytest.raises(GraphValidationError):
                AlgorithmRunner(data).run("bfs")
        assert "Rejected bfs run" in caplog.text

    def test_empty_graph(self):
        with pytest.raises(GraphValidationError):
            AlgorithmRunner({"nodes": [], "edges": []}).run("bfs")
        assert AlgorithmRunner({"nodes": [], "edges": []}).run("kruskal").outcome.mst_weight == 0

    def test_runner_copies_its_input(self):
        g = build_graph("AB", [("A", "B")])
        runner = AlgorithmRunner(g)
        g.create_node("C")
        assert "C" not in runner.graph.nodes

    def test_convenience_wrappers(self):
        runner = AlgorithmRunner(GRAPH_DATA)
        assert runner.run_dijkstra("A").outcome.distances["C"] == 3
        assert runner.run_bellman_ford("A").outcome.distances["C"] == 3
        assert runner.run_prims().outcome.mst_weight == 3
        assert runner.run_kruskals().outcome.mst_weight == 3
        assert runner.run_ford_fulkerson("A", "C").outcome.max_flow == 1
        assert runner.run_ford_fulkerson("A").outcome.max_flow == 1
        assert runner.run_bfs().algorithm == "bfs"
        assert runner.run_dfs().algorithm == "dfs"
        fw = runner.run_floyd_warshall()
        assert fw.steps[-1].matrix["C"]["A"] == 3

    def test_floyd_warshall_directed_option(self):
        data = {
            "nodes": [{"id": "A"}, {"id": "B"}, {"id": "C"}],
            "edges": [
                {"id": "e1", "source": "A", "target": "B", "weight": 2},
                {"id": "e2", "source": "B", "target": "C", "weight": 3},
                {"id": "e3", "source": "A", "target": "C", "weight": 10},
            ],
        }
        runner = AlgorithmRunner(data)
        matrix = runner.run_floyd_warshall(directed=True).steps[-1].matrix
        assert matrix["A"] == {"A": 0, "B": 2, "C": 5}
        assert matrix["B"] == {"A": INF, "B": 0, "C": 3}
        assert matrix["C"] == {"A": INF, "B": INF, "C": 0}

        symmetric = runner.run_floyd_warshall().steps[-1].matrix
        assert symmetric["C"]["A"] == 5
        assert runner.run("floyd-warshall", directed=False).to_dict() == \
            runner.run_floyd_warshall().to_dict()

    def test_directed_option_on_fixed_mode_algorithm(self):
        runner = AlgorithmRunner(GRAPH_DATA)
        with pytest.raises(GraphValidationError, match="fixed directed edge mode"):
            runner.run("dijkstra", "A", directed=False)
        with pytest.raises(GraphValidationError, match="fixed undirected edge mode"):
            runner.run("bfs", "A", directed=True)

    def test_hyphen_and_underscore_keys(self):
        runner = AlgorithmRunner(GRAPH_DATA)
        assert runner.run("bellman_ford", "A").algorithm == "bellman-ford"

    def test_logs_outcome(self, caplog):
        with caplog.at_level(logging.INFO, logger="engine.runner"):
            AlgorithmRunner(GRAPH_DATA).run("kruskal")
        assert "kruskal finished" in caplog.text


class TestPlayer:
    @pytest.fixture
    def player(self):
        g = build_graph("ABC", [("A", "B"), ("B", "C")])
        return TracePlayer(g, AlgorithmRunner(g).run("bfs", "A"))

    def test_starts_before_first_step(self, player):
        assert player.current_idx == -1
        assert player.current_step is None
        assert all(n.state is NodeState.DEFAULT for n in player.graph.nodes.values())

    def test_next_then_prev_restores_graph(self, player):
        before = player.graph.to_dict()
        assert player.next_step()
        assert player.graph.nodes["A"].state is NodeState.CURRENT
        assert player.prev_step()
        assert player.graph.to_dict() == before
        assert not player.prev_step()

    def test_jump_to_end_matches_replay(self, player):
        player.jump_to_end()
        assert player.is_complete
        assert not player.next_step()
        expected = replay(build_graph("ABC", [("A", "B"), ("B", "C")]), player.execution)
        assert player.graph.to_dict() == expected.to_dict()

    def test_goto_and_rewind(self, player):
        assert player.goto_step(3)
        assert player.current_step.id == 3
        snapshot = player.graph.to_dict()
        player.jump_to_end()
        assert player.goto_step(3)
        assert player.graph.to_dict() == snapshot
        player.rewind()
        assert player.current_idx == -1
        assert all(not e.is_active for e in player.graph.edges.values())

    def test_goto_out_of_range(self, player):
        assert not player.goto_step(len(player.execution.steps))
        assert not player.goto_step(-2)
        assert player.current_idx == -1

    def test_player_does_not_touch_source_graph(self):
        g = build_graph("AB", [("A", "B")])
        player = TracePlayer(g, AlgorithmRunner(g).run("bfs"))
        player.jump_to_end()
        assert g.nodes["A"].state is NodeState.DEFAULT
