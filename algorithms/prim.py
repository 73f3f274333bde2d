"""
prim.py — Prim's Minimum Spanning Tree
========================================
Grows one tree from the start node.  Edges are undirected here.

The frontier is lazy: when a node joins the tree every edge incident to
it is appended, and nothing is ever removed early.  An edge whose
endpoints are both in the tree by the time it is popped is skipped as a
cycle.  The frontier is re-sorted by weight (stable) before each pop.

Stops when the tree has |V|-1 edges or the frontier runs dry.  On a
disconnected graph that means fewer than |V|-1 edges, which is a normal
outcome, not an error.

Snapshot: `list` = nodes in the tree, in join order.
"""

from typing import List

from graph import Graph, GraphEdge, NodeState
from algorithms.step import TreeSnapshot
from algorithms.execution import (
    AlgorithmExecution, Outcome, TraceBuilder, COMPLETE, ERROR, fmt,
)


PSEUDOCODE: List[str] = [
    "function Prim(graph, startNode):",                            # 1
    "    visited = {startNode}",                                   # 2
    "    frontier = edges incident to startNode",                  # 3
    "    mst = []",                                                # 4
    "    while frontier not empty and |mst| < |V| - 1:",           # 5
    "        sort frontier by weight",                             # 6
    "        edge = frontier.popFirst()",                          # 7
    "        if both endpoints of edge in visited:",               # 8
    "            continue  // would create a cycle",               # 9
    "        next = endpoint of edge not in visited",              # 10
    "        visited.add(next); mst.add(edge)",                    # 11
    "        frontier.extend(edges incident to next)",             # 12
    "    return mst",                                              # 13
]


def prim(graph: Graph, start: str) -> AlgorithmExecution:
    trace = TraceBuilder(graph, "prim")
    label = trace.label

    if trace.halt_on_malformed_weights():
        return trace.finish(Outcome(ERROR))

    tree_nodes: List[str] = [start]
    visited = {start}
    frontier: List[GraphEdge] = list(graph.incident_edges(start))
    mst: List[GraphEdge] = []
    target_size = graph.node_count() - 1

    trace.add(
        f"Starting Prim's MST from {label(start)}",
        2,
        nodes=[{"id": start, "state": NodeState.VISITED.value}],
        snapshot=TreeSnapshot(tuple(tree_nodes)),
    )

    while frontier and len(mst) < target_size:
        frontier.sort(key=lambda e: e.weight)
        edge = frontier.pop(0)
        u, v = edge.source, edge.target

        if u in visited and v in visited:
            trace.add(
                f"Skip edge {label(u)}-{label(v)} (weight {fmt(edge.weight)}): would create a cycle",
                9,
            )
            continue

        nxt = v if u in visited else u
        visited.add(nxt)
        tree_nodes.append(nxt)
        mst.append(edge)
        frontier.extend(graph.incident_edges(nxt))
        trace.add(
            f"Added edge {label(u)}-{label(v)} (weight {fmt(edge.weight)}) to MST",
            11,
            nodes=[{"id": nxt, "state": NodeState.VISITED.value}],
            edges=[{"id": edge.id, "inTree": True, "isActive": True}],
            snapshot=TreeSnapshot(tuple(tree_nodes)),
        )

    weight = sum(e.weight for e in mst)
    trace.add(
        f"Prim's MST complete: {len(mst)} edge(s), total weight {fmt(weight)}",
        13,
        snapshot=TreeSnapshot(tuple(tree_nodes)),
    )
    return trace.finish(Outcome(COMPLETE, mst_weight=weight))
