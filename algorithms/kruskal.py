"""
kruskal.py — Kruskal's Minimum Spanning Tree
==============================================
Sorts every edge by weight once (stable, so ties keep input order) and
accepts an edge whenever its endpoints sit in different union-find sets.

The union-find is deliberately plain: `find` chases parents recursively
with no path compression, and `union` hangs one root under the other with
no rank.  The parent array is what the live panel shows, so keeping it
uncompressed keeps it readable.

Stops as soon as |V|-1 edges are accepted.

Snapshot: `array` = parent of each node, in node order.
"""

from typing import Dict, List

from graph import Graph, NodeState
from algorithms.step import UnionFindSnapshot
from algorithms.execution import (
    AlgorithmExecution, Outcome, TraceBuilder, COMPLETE, ERROR, fmt,
)


PSEUDOCODE: List[str] = [
    "function Kruskal(graph):",                                    # 1
    "    edges = sort graph.edges by weight",                      # 2
    "    parent = {v: v for v in V}",                              # 3
    "    mst = []",                                                # 4
    "    for edge (u, v) in edges:",                               # 5
    "        if find(u) != find(v):",                              # 6
    "            mst.add(edge)",                                   # 7
    "            union(u, v)",                                     # 8
    "        else: skip  // same set",                             # 9
    "        if |mst| == |V| - 1: break",                          # 10
    "    return mst",                                              # 11
]


class UnionFind:
    """Parent-pointer forest keyed by node id."""

    def __init__(self, node_ids: List[str]):
        self.order:  List[str]      = list(node_ids)
        self.parent: Dict[str, str] = {n: n for n in node_ids}

    def find(self, x: str) -> str:
        if self.parent[x] == x:
            return x
        return self.find(self.parent[x])

    def union(self, x: str, y: str) -> None:
        root_x, root_y = self.find(x), self.find(y)
        if root_x != root_y:
            self.parent[root_x] = root_y

    def snapshot(self) -> UnionFindSnapshot:
        return UnionFindSnapshot(tuple(self.parent[n] for n in self.order))


def kruskal(graph: Graph) -> AlgorithmExecution:
    trace = TraceBuilder(graph, "kruskal")
    label = trace.label

    if trace.halt_on_malformed_weights():
        return trace.finish(Outcome(ERROR))

    edges = sorted(graph.edges.values(), key=lambda e: e.weight)
    uf = UnionFind(graph.node_ids())
    mst = []
    target_size = graph.node_count() - 1

    trace.add(
        f"Sorted {len(edges)} edge(s) by weight; every node starts in its own set",
        3,
        snapshot=uf.snapshot(),
    )

    for edge in edges:
        if len(mst) >= target_size:
            break
        u, v = edge.source, edge.target

        if uf.find(u) != uf.find(v):
            mst.append(edge)
            uf.union(u, v)
            trace.add(
                f"Added edge {label(u)}-{label(v)} (weight {fmt(edge.weight)}) to MST",
                7,
                nodes=[
                    {"id": u, "state": NodeState.VISITED.value},
                    {"id": v, "state": NodeState.VISITED.value},
                ],
                edges=[{"id": edge.id, "inTree": True, "isActive": True}],
                snapshot=uf.snapshot(),
            )
        else:
            trace.add(
                f"Skip edge {label(u)}-{label(v)} (weight {fmt(edge.weight)}): same set",
                9,
                snapshot=uf.snapshot(),
            )

    weight = sum(e.weight for e in mst)
    trace.add(
        f"Kruskal's MST complete: {len(mst)} edge(s), total weight {fmt(weight)}",
        11,
        snapshot=uf.snapshot(),
    )
    return trace.finish(Outcome(COMPLETE, mst_weight=weight))
