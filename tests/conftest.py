"""Shared fixtures: small graphs built from terse tuples."""

import pytest

from graph import Graph


def build_graph(nodes, edges=()):
    """
    nodes : "ABC" | ["A", "B"] | [("A", x, y), ...]
    edges : [(source, target), (source, target, weight), ...]; ids are e0, e1, …
    """
    g = Graph()
    for item in nodes:
        if isinstance(item, tuple):
            node_id, x, y = item
            g.create_node(node_id, x=x, y=y)
        else:
            g.create_node(item)
    for i, item in enumerate(edges):
        weight = item[2] if len(item) > 2 else None
        g.create_edge(f"e{i}", item[0], item[1], weight)
    return g


def replay(graph, execution):
    """Apply every step of `execution` to a copy of `graph` and return it."""
    g = graph.copy()
    for step in execution.steps:
        g.apply_updates(step.node_updates, step.edge_updates)
    return g


@pytest.fixture
def make_graph():
    return build_graph


@pytest.fixture
def path_graph():
    """A - B - C - D in a line, plus an isolated E."""
    return build_graph("ABCDE", [("A", "B"), ("B", "C"), ("C", "D")])


@pytest.fixture
def weighted_triangle():
    """A→B 1, B→C 2, A→C 5, each given in both directions."""
    edges = []
    for u, v, w in [("A", "B", 1), ("B", "C", 2), ("A", "C", 5)]:
        edges += [(u, v, w), (v, u, w)]
    return build_graph("ABC", edges)


@pytest.fixture
def negative_cycle():
    return build_graph("AB", [("A", "B", -2), ("B", "A", -1)])


@pytest.fixture
def mst_triangle():
    return build_graph("ABC", [("A", "B", 1), ("B", "C", 2), ("A", "C", 3)])
