"""
bellman_ford.py — Bellman–Ford Algorithm
=========================================
Single-source shortest paths that tolerate NEGATIVE edge weights and
detect negative cycles.  Edges are DIRECTED (`source → target`).

Structure:
  • Up to |V|-1 passes relaxing every edge, in input order.
  • Early stop after a pass that changed nothing.
  • One more scan over every edge: if anything still relaxes, a negative
    cycle is reachable.

Records a step for:
  1. Initialisation                        (distance table)
  2. Each edge examined in each pass
  3. Each successful relaxation            (distance table)
  4. Early convergence
  5. Negative-cycle detection  → terminal, and NO completion step follows
  6. Completion                → reachable nodes marked visited

The missing completion step after a detected cycle is part of the
contract: it is how a consumer tells the two endings apart.
"""

from typing import Dict, List

from graph import Graph, NodeState
from algorithms.step import DistanceSnapshot
from algorithms.execution import (
    AlgorithmExecution, Outcome, TraceBuilder, COMPLETE, ERROR, NEGATIVE_CYCLE, INF, fmt,
)


PSEUDOCODE: List[str] = [
    "function BellmanFord(graph, startNode):",                     # 1
    "    distances = {v: ∞ for v in V}; distances[startNode] = 0",  # 2
    "    for i in 1 … |V| - 1:",                                   # 3
    "        updated = false",                                     # 4
    "        for (u, v, w) in graph.edges:",                       # 5
    "            if distances[u] + w < distances[v]:",             # 6
    "                distances[v] = distances[u] + w",             # 7
    "                updated = true",                              # 8
    "        if not updated: break",                               # 9
    "    for (u, v, w) in graph.edges:",                           # 10
    "        if distances[u] + w < distances[v]:",                 # 11
    "            return \"negative weight cycle\"",                 # 12
    "    return distances",                                        # 13
]


def bellman_ford(graph: Graph, start: str) -> AlgorithmExecution:
    trace = TraceBuilder(graph, "bellman-ford")
    label = trace.label

    if trace.halt_on_malformed_weights():
        return trace.finish(Outcome(ERROR))

    dist: Dict[str, float] = {nid: INF for nid in graph.nodes}
    dist[start] = 0
    edges = list(graph.edges.values())
    passes = graph.node_count() - 1

    def table() -> DistanceSnapshot:
        return DistanceSnapshot({start: dict(dist)})

    trace.add(
        f"Starting Bellman-Ford from {label(start)}: up to {passes} pass(es) over {len(edges)} edge(s)",
        2,
        nodes=[{"id": start, "state": NodeState.CURRENT.value, "distance": 0}],
        snapshot=table(),
    )

    # ==============================================================
    # RELAXATION PASSES
    # ==============================================================
    for pass_no in range(1, passes + 1):
        updated = False

        for edge in edges:
            u, v, w = edge.source, edge.target, edge.weight
            trace.add(
                f"Pass {pass_no}: checking edge {label(u)} → {label(v)} "
                f"({fmt(dist[u])} + {fmt(w)} vs {fmt(dist[v])})",
                6,
            )
            if dist[u] + w < dist[v]:
                dist[v] = dist[u] + w
                updated = True
                trace.add(
                    f"Updated distance to {label(v)}: {fmt(dist[v])}",
                    7,
                    nodes=[{"id": v, "distance": dist[v], "state": NodeState.CURRENT.value}],
                    edges=[{"id": edge.id, "isActive": True}],
                    snapshot=table(),
                )

        if not updated:
            trace.add(f"No updates in pass {pass_no}, distances converged early", 9)
            break

    # ==============================================================
    # NEGATIVE-CYCLE CHECK
    # ==============================================================
    for edge in edges:
        u, v, w = edge.source, edge.target, edge.weight
        if dist[u] + w < dist[v]:
            trace.add(
                f"⚠️ Negative weight cycle detected via edge {label(u)} → {label(v)}",
                12,
                nodes=[{"id": v, "state": NodeState.ERROR.value}],
                edges=[{"id": edge.id, "isError": True}],
                snapshot=table(),
            )
            return trace.finish(Outcome(NEGATIVE_CYCLE, distances=dict(dist)))

    reachable = [nid for nid in graph.nodes if dist[nid] != INF]
    trace.add(
        "Bellman-Ford complete - no negative cycles found",
        13,
        nodes=[{"id": nid, "state": NodeState.VISITED.value} for nid in reachable],
        snapshot=table(),
    )
    return trace.finish(Outcome(COMPLETE, distances=dict(dist)))
