"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Single-source shortest distances over DIRECTED edges (`source → target`
only).  To model an undirected weighted graph, supply one edge per
direction.

The frontier is a plain list of (distance, node_id) entries that is fully
re-sorted before every pop.  Stale duplicate entries are left in place and
filtered by the visited check when they surface.

Records a step at:
  1. Initialise distances            (distance table)
  2. Pop an already-visited node     →  skip
  3. Pop a node                      →  VISITED (distance table)
  4. Successful relaxation           →  distance updated, edge ACTIVE (distance table)
  5. Pop an ∞ entry                  →  stop early
  6. Frontier empty                  →  complete

The distance table is `{start_id: {node_id: distance}}`.

Correctness note: Dijkstra requires non-negative weights.  With negative
edges the trace is still well-formed, just not necessarily shortest.
"""

from typing import Dict, List, Tuple

from graph import Graph, NodeState
from algorithms.step import DistanceSnapshot
from algorithms.execution import (
    AlgorithmExecution, Outcome, TraceBuilder, COMPLETE, ERROR, INF, fmt,
)


PSEUDOCODE: List[str] = [
    "function Dijkstra(graph, startNode):",                        # 1
    "    distances = {v: ∞ for v in V}; distances[startNode] = 0",  # 2
    "    pq = [(0, startNode)]",                                   # 3
    "    visited = new Set()",                                     # 4
    "    while pq is not empty:",                                  # 5
    "        sort pq by distance",                                 # 6
    "        currentDist, current = pq.popFirst()",                # 7
    "        if current in visited:",                              # 8
    "            continue",                                        # 9
    "        if currentDist == ∞: break",                          # 10
    "        visited.add(current)",                                # 11
    "        for neighbor, weight in graph.outgoing(current):",    # 12
    "            newDist = distances[current] + weight",           # 13
    "            if newDist < distances[neighbor]:",               # 14
    "                distances[neighbor] = newDist",               # 15
    "                pq.push((newDist, neighbor))",                # 16
    "    return distances",                                        # 17
]


def dijkstra(graph: Graph, start: str) -> AlgorithmExecution:
    trace = TraceBuilder(graph, "dijkstra")
    label = trace.label

    if trace.halt_on_malformed_weights():
        return trace.finish(Outcome(ERROR))

    dist: Dict[str, float] = {nid: INF for nid in graph.nodes}
    dist[start] = 0
    pq: List[Tuple[float, str]] = [(0, start)]
    visited: set = set()

    def table() -> DistanceSnapshot:
        return DistanceSnapshot({start: dict(dist)})

    trace.add(
        f"Starting Dijkstra from {label(start)}",
        2,
        nodes=[{"id": start, "state": NodeState.CURRENT.value, "distance": 0}],
        snapshot=table(),
    )

    while pq:
        pq.sort(key=lambda entry: entry[0])
        current_dist, current = pq.pop(0)

        if current in visited:
            trace.add(f"Node {label(current)} already processed", 8)
            continue

        if current_dist == INF:
            trace.add("Remaining nodes are unreachable, stopping early", 10)
            break

        visited.add(current)
        trace.add(
            f"Processing {label(current)} (distance: {fmt(current_dist)})",
            11,
            nodes=[{"id": current, "state": NodeState.VISITED.value}],
            snapshot=table(),
        )

        for nbr, edge in graph.outgoing(current):
            new_dist = dist[current] + edge.weight
            if new_dist < dist[nbr]:
                dist[nbr] = new_dist
                pq.append((new_dist, nbr))
                trace.add(
                    f"Updated distance to {label(nbr)}: {fmt(new_dist)}",
                    15,
                    nodes=[{"id": nbr, "distance": new_dist, "state": NodeState.CURRENT.value}],
                    edges=[{"id": edge.id, "isActive": True}],
                    snapshot=table(),
                )

    trace.add("Dijkstra complete - shortest path algorithm finished", 17)
    return trace.finish(Outcome(COMPLETE, distances=dict(dist)))
