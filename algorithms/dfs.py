"""
dfs.py — Depth-First Search
=============================
Iterative DFS using an explicit stack (no Python recursion limit issues).

Records a step at:
  1. Push start node                 →  CURRENT
  2. Pop a node                      →  VISITED (or skipped if seen)
  3. Push an unseen neighbour        →  CURRENT, connecting edge ACTIVE
  4. End of each outer iteration     →  stack snapshot
  5. Stack empty                     →  complete

A neighbour is pushed only if it is neither visited nor already on the
stack, so every node is pushed at most once.  Edges are bidirectional.
"""

from typing import List

from graph import Graph, NodeState
from algorithms.step import StackSnapshot
from algorithms.execution import AlgorithmExecution, Outcome, TraceBuilder, COMPLETE


PSEUDOCODE: List[str] = [
    "function DFS(graph, startNode):",                         # 1
    "    stack = [startNode]",                                 # 2
    "    visited = new Set()",                                 # 3
    "    while stack is not empty:",                           # 4
    "        current = stack.pop()",                           # 5
    "        if current in visited:",                          # 6
    "            continue",                                    # 7
    "        visited.add(current)",                            # 8
    "        for neighbor in graph.neighbors(current):",       # 9
    "            if neighbor not in visited and not stacked:", # 10
    "                stack.push(neighbor)",                    # 11
    "    return visited",                                      # 12
]


def dfs(graph: Graph, start: str) -> AlgorithmExecution:
    trace   = TraceBuilder(graph, "dfs")
    label   = trace.label
    stack   = [start]
    visited: set = set()

    trace.add(
        f"Starting DFS from node {label(start)}",
        2,
        nodes=[{"id": start, "state": NodeState.CURRENT.value}],
        snapshot=StackSnapshot(tuple(stack)),
    )

    while stack:
        current = stack.pop()

        if current in visited:
            trace.add(f"Node {label(current)} already visited, skip", 6)
        else:
            visited.add(current)
            trace.add(
                f"Visited node {label(current)}",
                8,
                nodes=[{"id": current, "state": NodeState.VISITED.value}],
            )

            for nbr, edge in graph.neighbours(current):
                if nbr in visited or nbr in stack:
                    continue
                stack.append(nbr)
                trace.add(
                    f"Pushed {label(nbr)} onto stack",
                    11,
                    nodes=[{"id": nbr, "state": NodeState.CURRENT.value}],
                    edges=[{"id": edge.id, "isActive": True}],
                    snapshot=StackSnapshot(tuple(stack)),
                )

        trace.add(
            f"Stack: [{', '.join(label(n) for n in stack)}]",
            4,
            snapshot=StackSnapshot(tuple(stack)),
        )

    trace.add("DFS complete - all reachable nodes visited", 12)
    return trace.finish(Outcome(COMPLETE))
