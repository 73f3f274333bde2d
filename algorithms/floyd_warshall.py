"""
floyd_warshall.py — Floyd–Warshall (All-Pairs Shortest Paths)
===============================================================
The signature "matrix algorithm".  The snapshot exposes the full NxN
distance matrix as `{i: {j: dist}}` so the UI can render it as a live grid.

Initialisation:
  dist[v][v] = 0, everything else ∞, then for every edge u-v:
    • default (symmetric)  : dist[u][v] = dist[v][u] = weight
    • directed=True        : dist[u][v] = weight only
  Parallel edges keep the smallest weight.

Structure:
  for k in nodes:          ← "intermediate" node
      for i in nodes:
          for j in nodes:
              if dist[i][k] + dist[k][j] < dist[i][j]:
                  dist[i][j] = dist[i][k] + dist[k][j]

Records a step for:
  1. Initialisation (matrix)
  2. Each (i, j) relaxation that actually improves the matrix
  3. End of each k-round (matrix; k marked visited)
  4. Completion (final matrix)
"""

from typing import Dict, List

from graph import Graph, NodeState
from algorithms.step import DistanceSnapshot
from algorithms.execution import (
    AlgorithmExecution, Outcome, TraceBuilder, COMPLETE, ERROR, INF, fmt,
)


PSEUDOCODE: List[str] = [
    "function FloydWarshall(graph):",                              # 1
    "    dist[i][j] = ∞ for all i, j; dist[v][v] = 0",             # 2
    "    for each edge (u, v, w): dist[u][v] = dist[v][u] = w",    # 3
    "    for k in V:",                                             # 4
    "        for i in V:",                                         # 5
    "            for j in V:",                                     # 6
    "                if dist[i][k] + dist[k][j] < dist[i][j]:",    # 7
    "                    dist[i][j] = dist[i][k] + dist[k][j]",    # 8
    "    return dist",                                             # 9
]


def floyd_warshall(graph: Graph, directed: bool = False) -> AlgorithmExecution:
    """
    Args:
        graph    : The graph (read only).
        directed : Seed the matrix from `source → target` only.
    """

    trace = TraceBuilder(graph, "floyd-warshall")
    label = trace.label

    if trace.halt_on_malformed_weights():
        return trace.finish(Outcome(ERROR))

    nodes = graph.node_ids()
    dist: Dict[str, Dict[str, float]] = {
        i: {j: (0 if i == j else INF) for j in nodes} for i in nodes
    }

    for edge in graph.edges.values():
        u, v, w = edge.source, edge.target, edge.weight
        if w < dist[u][v]:
            dist[u][v] = w
        if not directed and w < dist[v][u]:
            dist[v][u] = w

    def matrix() -> DistanceSnapshot:
        return DistanceSnapshot({i: dict(row) for i, row in dist.items()})

    trace.add(
        f"Initialised {len(nodes)}×{len(nodes)} distance matrix from "
        f"{'directed' if directed else 'undirected'} edges",
        3,
        snapshot=matrix(),
    )

    # ==============================================================
    # MAIN TRIPLE LOOP
    # ==============================================================
    for k in nodes:
        for i in nodes:
            for j in nodes:
                via = dist[i][k] + dist[k][j]
                if via < dist[i][j]:
                    old = dist[i][j]
                    dist[i][j] = via
                    trace.add(
                        f"dist[{label(i)}][{label(j)}] improved via {label(k)}: "
                        f"{fmt(old)} → {fmt(via)}",
                        8,
                    )

        trace.add(
            f"Finished intermediate node {label(k)}",
            4,
            nodes=[{"id": k, "state": NodeState.VISITED.value}],
            snapshot=matrix(),
        )

    trace.add("Floyd-Warshall complete - all-pairs shortest paths computed", 9, snapshot=matrix())
    return trace.finish(Outcome(COMPLETE))
