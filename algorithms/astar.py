"""
astar.py — A* Search
=====================
Goal-directed shortest path over DIRECTED edges.

Heuristic: straight-line (Euclidean) distance in node (x, y) coordinates
to the goal.  If either node has no coordinates the heuristic is 0 for
that pair, and A* degrades to uniform-cost search.

The open set is a list of node ids re-sorted by fScore before each pop.
An expanded node is closed and never re-expanded, which also keeps the
search finite when negative edges form a cycle.

Records a step at:
  1. Initialise g / f scores                 (score table)
  2. Pop the lowest-f node                   →  VISITED (score table)
  3. Successful relaxation                   →  CURRENT, edge ACTIVE (score table)
  4. Goal popped                             →  path found, `result` = path, return
  5. Open set empty                          →  no path (terminal)

The score table is `{"gScore": {...}, "fScore": {...}}`.
"""

from typing import Dict, List, Optional, Tuple

from graph import Graph, NodeState
from algorithms.step import DistanceSnapshot, PathSnapshot
from algorithms.execution import (
    AlgorithmExecution, Outcome, TraceBuilder, ERROR, NO_PATH, PATH_FOUND, INF, fmt,
)


PSEUDOCODE: List[str] = [
    "function AStar(graph, start, goal):",                             # 1
    "    openSet = [start]",                                           # 2
    "    gScore = {v: ∞}; gScore[start] = 0",                          # 3
    "    fScore = {v: ∞}; fScore[start] = h(start, goal)",             # 4
    "    cameFrom = {}",                                               # 5
    "    while openSet is not empty:",                                 # 6
    "        current = node in openSet with lowest fScore",            # 7
    "        if current == goal:",                                     # 8
    "            return reconstructPath(cameFrom, current)",           # 9
    "        openSet.remove(current); closed.add(current)",            # 10
    "        for neighbor, weight in graph.outgoing(current):",        # 11
    "            tentative = gScore[current] + weight",                # 12
    "            if tentative < gScore[neighbor]:",                    # 13
    "                cameFrom[neighbor] = current",                    # 14
    "                gScore[neighbor] = tentative",                    # 15
    "                fScore[neighbor] = tentative + h(neighbor, goal)",# 16
    "                if neighbor not in openSet: openSet.add(neighbor)",# 17
    "    return failure",                                              # 18
]


def heuristic(graph: Graph, node_id: str, goal: str) -> float:
    """Euclidean distance to the goal, 0 when coordinates are missing."""
    return graph.nodes[node_id].distance_to(graph.nodes[goal])


def astar(graph: Graph, start: str, end: str) -> AlgorithmExecution:
    """
    Args:
        graph : The graph (read only).
        start : Start node id.
        end   : Goal node id.
    """

    trace = TraceBuilder(graph, "astar")
    label = trace.label

    if trace.halt_on_malformed_weights():
        return trace.finish(Outcome(ERROR))

    g_score: Dict[str, float] = {nid: INF for nid in graph.nodes}
    f_score: Dict[str, float] = {nid: INF for nid in graph.nodes}
    came_from: Dict[str, Tuple[str, str]] = {}          # node -> (previous node, edge id)
    closed: set = set()

    g_score[start] = 0
    f_score[start] = heuristic(graph, start, end)
    open_set: List[str] = [start]

    def scores() -> DistanceSnapshot:
        return DistanceSnapshot({"gScore": dict(g_score), "fScore": dict(f_score)})

    trace.add(
        f"Starting A* from {label(start)} to {label(end)} "
        f"(h = {fmt(f_score[start])})",
        4,
        nodes=[{"id": start, "state": NodeState.CURRENT.value, "distance": 0}],
        snapshot=scores(),
    )

    while open_set:
        open_set.sort(key=lambda nid: f_score[nid])
        current = open_set.pop(0)

        if current == end:
            path = _reconstruct(came_from, current)
            path_edges = [came_from[n][1] for n in path[1:]]
            trace.add(
                f"🎯 Path found: {trace.path_label(path)} (cost {fmt(g_score[end])})",
                9,
                nodes=[{"id": n, "state": NodeState.PATH.value} for n in path],
                edges=[{"id": eid, "isActive": True} for eid in path_edges],
                snapshot=PathSnapshot(tuple(path)),
            )
            return trace.finish(Outcome(
                PATH_FOUND,
                path=tuple(path),
                total_distance=g_score[end],
                distances=dict(g_score),
            ))

        closed.add(current)
        trace.add(
            f"Expanding {label(current)} (g = {fmt(g_score[current])}, f = {fmt(f_score[current])})",
            10,
            nodes=[{"id": current, "state": NodeState.VISITED.value}],
            snapshot=scores(),
        )

        for nbr, edge in graph.outgoing(current):
            if nbr in closed:
                continue
            tentative = g_score[current] + edge.weight
            if tentative < g_score[nbr]:
                came_from[nbr] = (current, edge.id)
                g_score[nbr] = tentative
                f_score[nbr] = tentative + heuristic(graph, nbr, end)
                if nbr not in open_set:
                    open_set.append(nbr)
                trace.add(
                    f"Updated {label(nbr)}: g = {fmt(tentative)}, f = {fmt(f_score[nbr])}",
                    16,
                    nodes=[{"id": nbr, "state": NodeState.CURRENT.value, "distance": tentative}],
                    edges=[{"id": edge.id, "isActive": True}],
                    snapshot=scores(),
                )

    trace.add(f"No path from {label(start)} to {label(end)}", 18)
    return trace.finish(Outcome(NO_PATH, distances=dict(g_score)))


# ---------------------------------------------------------------------------
def _reconstruct(came_from: Dict[str, Tuple[str, str]], target: str) -> List[str]:
    path: List[str] = [target]
    cur: Optional[str] = target
    while cur in came_from:
        cur = came_from[cur][0]
        path.append(cur)
    path.reverse()
    return path
