"""
ford_fulkerson.py — Maximum Flow (Edmonds–Karp)
=================================================
Ford–Fulkerson with breadth-first augmenting paths.  Edges are DIRECTED;
an edge's weight is its capacity (1 when absent), and parallel edges add
up.

Loop:
  1. BFS from source to sink over edges with positive residual capacity
     (neighbours scanned in node order).  No path → stop.
  2. Bottleneck = smallest residual capacity along the path.
  3. Subtract it on every forward edge, add it on every reverse edge.
  4. Add it to the running max flow.

Records one "augment path" step per iteration carrying the path
(`result`) and the residual matrix after the update (`matrix`), and a
terminal step with the max-flow value.
"""

from collections import deque
from typing import Dict, List, Optional

from graph import Graph, NodeState
from algorithms.step import DistanceSnapshot, PathSnapshot
from algorithms.execution import (
    AlgorithmExecution, Outcome, TraceBuilder, COMPLETE, ERROR, fmt,
)

Residual = Dict[str, Dict[str, float]]


PSEUDOCODE: List[str] = [
    "function EdmondsKarp(graph, source, sink):",                  # 1
    "    residual[u][v] = capacity(u, v) for each edge",           # 2
    "    maxFlow = 0",                                             # 3
    "    while path = BFS(residual, source, sink) exists:",        # 4
    "        bottleneck = min(residual[u][v] for (u, v) in path)", # 5
    "        for (u, v) in path:",                                 # 6
    "            residual[u][v] -= bottleneck",                    # 7
    "            residual[v][u] += bottleneck",                    # 8
    "        maxFlow += bottleneck",                               # 9
    "    return maxFlow",                                          # 10
]


def ford_fulkerson(graph: Graph, source: str, sink: Optional[str] = None) -> AlgorithmExecution:
    """
    Args:
        graph  : The flow network (read only).
        source : Source node id.
        sink   : Sink node id (defaults to the last node).
    """

    trace = TraceBuilder(graph, "ford-fulkerson")
    label = trace.label

    if trace.halt_on_malformed_weights():
        return trace.finish(Outcome(ERROR))

    nodes = graph.node_ids()
    if sink is None:
        sink = nodes[-1]

    residual: Residual = {u: {v: 0 for v in nodes} for u in nodes}
    for edge in graph.edges.values():
        residual[edge.source][edge.target] += edge.weight

    def matrix() -> Residual:
        return {u: dict(row) for u, row in residual.items()}

    trace.add(
        f"Built residual capacities; source {label(source)}, sink {label(sink)}",
        2,
        nodes=[
            {"id": source, "state": NodeState.CURRENT.value},
            {"id": sink, "state": NodeState.CURRENT.value},
        ] if source != sink else [{"id": source, "state": NodeState.CURRENT.value}],
        snapshot=DistanceSnapshot(matrix()),
    )

    max_flow = 0
    if source == sink:
        trace.add(f"Source and sink are the same node; maximum flow: {fmt(max_flow)}", 10)
        return trace.finish(Outcome(COMPLETE, max_flow=max_flow))

    while True:
        path = _bfs_path(residual, nodes, source, sink)
        if path is None:
            break

        hops = list(zip(path, path[1:]))
        bottleneck = min(residual[u][v] for u, v in hops)
        for u, v in hops:
            residual[u][v] -= bottleneck
            residual[v][u] += bottleneck
        max_flow += bottleneck

        path_edges = []
        for u, v in hops:
            edge = graph.get_edge_between(u, v)
            if edge is not None:
                path_edges.append({"id": edge.id, "isActive": True})

        trace.add(
            f"Augmenting path {trace.path_label(path)} with bottleneck {fmt(bottleneck)} "
            f"(flow so far {fmt(max_flow)})",
            9,
            nodes=[{"id": n, "state": NodeState.VISITED.value} for n in path],
            edges=path_edges,
            snapshot=PathSnapshot(tuple(path), matrix()),
        )

    trace.add(
        f"No more augmenting paths. Maximum flow: {fmt(max_flow)}",
        10,
        snapshot=DistanceSnapshot(matrix()),
    )
    return trace.finish(Outcome(COMPLETE, max_flow=max_flow))


# ---------------------------------------------------------------------------
def _bfs_path(residual: Residual, nodes: List[str], source: str, sink: str) -> Optional[List[str]]:
    """Shortest (by hops) source → sink path over positive residual capacity."""
    parent: Dict[str, Optional[str]] = {source: None}
    queue = deque([source])
    while queue:
        u = queue.popleft()
        for v in nodes:
            if v not in parent and residual[u][v] > 0:
                parent[v] = u
                if v == sink:
                    path = [v]
                    while parent[path[-1]] is not None:
                        path.append(parent[path[-1]])
                    path.reverse()
                    return path
                queue.append(v)
    return None
