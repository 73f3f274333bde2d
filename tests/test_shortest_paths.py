"""Dijkstra, Bellman-Ford and A*."""

import itertools

import pytest

from algorithms.astar import astar, heuristic
from algorithms.bellman_ford import bellman_ford
from algorithms.dijkstra import dijkstra
from algorithms.execution import INF

from conftest import build_graph, replay


def brute_force_distances(graph, start):
    """Cheapest simple directed path to every node, by enumerating orderings."""
    best = {nid: INF for nid in graph.nodes}
    best[start] = 0
    others = [n for n in graph.nodes if n != start]
    for r in range(1, len(others) + 1):
        for perm in itertools.permutations(others, r):
            cost, prev = 0, start
            for nxt in perm:
                weights = [e.weight for _, e in graph.outgoing(prev) if e.target == nxt]
                if not weights:
                    break
                cost += min(weights)
                prev = nxt
            else:
                best[perm[-1]] = min(best[perm[-1]], cost)
    return best


RANDOMISH = build_graph("ABCDE", [
    ("A", "B", 4), ("A", "C", 1), ("C", "B", 2), ("B", "D", 1),
    ("C", "D", 5), ("D", "E", 3), ("E", "A", 1), ("C", "E", 9),
])


class TestDijkstra:
    def test_prefers_cheaper_two_hop_route(self, weighted_triangle):
        execution = dijkstra(weighted_triangle, "A")
        assert execution.outcome.distances == {"A": 0, "B": 1, "C": 3}

    def test_matches_brute_force(self):
        execution = dijkstra(RANDOMISH, "A")
        assert execution.outcome.distances == brute_force_distances(RANDOMISH, "A")

    def test_update_step_sets_distance_and_activates_edge(self, weighted_triangle):
        updates = [s for s in dijkstra(weighted_triangle, "A").steps if s.code_line == 15]
        assert updates[0].description == "Updated distance to B: 1"
        assert updates[0].node_updates[0]["distance"] == 1
        assert updates[0].edge_updates[0]["isActive"] is True
        assert updates[0].matrix["A"]["B"] == 1

    def test_unreachable_node_stays_infinite(self):
        g = build_graph("ABC", [("A", "B", 1)])
        execution = dijkstra(g, "A")
        assert execution.outcome.distances["C"] == INF
        assert execution.steps[-1].description == "Dijkstra complete - shortest path algorithm finished"

    def test_direction_is_respected(self):
        g = build_graph("AB", [("B", "A", 1)])
        assert dijkstra(g, "A").outcome.distances["B"] == INF

    def test_stale_entries_are_skipped(self):
        g = build_graph("ABC", [("A", "C", 5), ("A", "B", 1), ("B", "C", 1)])
        steps = dijkstra(g, "A").steps
        assert any(s.description == "Node C already processed" for s in steps)


class TestBellmanFord:
    def test_matches_dijkstra_on_non_negative_graph(self):
        assert (
            bellman_ford(RANDOMISH, "A").outcome.distances
            == dijkstra(RANDOMISH, "A").outcome.distances
        )

    def test_handles_negative_edge(self):
        g = build_graph("ABC", [("A", "B", 4), ("A", "C", 1), ("B", "C", -5)])
        execution = bellman_ford(g, "A")
        assert execution.outcome.status == "complete"
        assert execution.outcome.distances["C"] == -1

    def test_negative_cycle_is_terminal(self, negative_cycle):
        execution = bellman_ford(negative_cycle, "A")
        last = execution.steps[-1]
        assert "negative weight cycle" in last.description.lower()
        assert not any("complete" in s.description.lower() for s in execution.steps)
        assert execution.outcome.status == "negative_cycle"
        assert any(u.get("isError") for u in last.edge_updates)

    def test_completion_marks_reachable_visited(self):
        g = build_graph("ABC", [("A", "B", 2)])
        final = replay(g, bellman_ford(g, "A"))
        assert final.nodes["B"].state.value == "visited"
        assert final.nodes["C"].state.value == "default"

    def test_converges_early(self):
        g = build_graph("ABCD", [("A", "B", 1), ("B", "C", 1), ("C", "D", 1)])
        steps = bellman_ford(g, "A").steps
        assert any(s.description.startswith("No updates in pass") for s in steps)


class TestAStar:
    def test_finds_shortest_path(self):
        g = build_graph(
            [("A", 0, 0), ("B", 1, 0), ("C", 2, 0), ("D", 1, 5)],
            [("A", "B", 1), ("B", "C", 1), ("A", "D", 1), ("D", "C", 1), ("A", "C", 5)],
        )
        execution = astar(g, "A", "C")
        assert execution.outcome.status == "path_found"
        assert execution.outcome.path == ("A", "B", "C")
        assert execution.outcome.total_distance == 2

        last = execution.steps[-1]
        assert last.description.startswith("🎯 Path found")
        assert last.result == ["A", "B", "C"]
        assert {u["id"] for u in last.edge_updates} == {"e0", "e1"}

    def test_path_edges_are_activated_on_replay(self):
        g = build_graph([("A", 0, 0), ("B", 1, 0)], [("A", "B", 1)])
        execution = astar(g, "A", "B")
        final = replay(g, execution)
        assert final.edges["e0"].is_active
        assert final.nodes["A"].state.value == "path"
        assert final.nodes["B"].state.value == "path"

    def test_no_path(self):
        g = build_graph("ABC", [("A", "B", 1)])
        execution = astar(g, "A", "C")
        assert execution.outcome.status == "no_path"
        assert execution.steps[-1].description == "No path from A to C"

    def test_without_coordinates_matches_dijkstra(self):
        execution = astar(RANDOMISH, "A", "E")
        assert execution.outcome.total_distance == dijkstra(RANDOMISH, "A").outcome.distances["E"]

    def test_terminates_with_negative_cycle(self):
        g = build_graph("ABC", [("A", "B", -2), ("B", "A", -1)])
        assert astar(g, "A", "C").outcome.status == "no_path"

    def test_heuristic_is_euclidean(self):
        g = build_graph([("A", 0, 0), ("B", 3, 4), "C"])
        assert heuristic(g, "A", "B") == pytest.approx(5)
        assert heuristic(g, "A", "C") == 0

    def test_start_equals_goal(self):
        g = build_graph("AB", [("A", "B", 1)])
        execution = astar(g, "A", "A")
        assert execution.outcome.path == ("A",)
        assert execution.outcome.total_distance == 0


@pytest.mark.parametrize("algo", [dijkstra, bellman_ford])
def test_malformed_weight_ends_with_error_step(algo):
    g = build_graph("AB", [("A", "B", "heavy")])
    execution = algo(g, "A")
    assert len(execution.steps) == 1
    assert execution.outcome.status == "error"
    assert execution.steps[0].edge_updates == ({"id": "e0", "isError": True},)
    assert "malformed" in execution.steps[0].description
