"""
bfs.py — Breadth-First Search
==============================
Records a step at every meaningful event:
  1. Start node placed in the queue  →  CURRENT
  2. Dequeue a node                  →  VISITED (or skipped if seen)
  3. Enqueue an unseen neighbour     →  CURRENT, connecting edge ACTIVE
  4. End of each outer iteration     →  queue snapshot for the live panel
  5. Queue empty                     →  complete

Edges are treated as bidirectional (either endpoint may be the current
node).  Neighbour order is edge insertion order.

Pseudocode lines are 1-based and match the PSEUDOCODE constant exported
alongside the function so the UI can highlight them live.
"""

from collections import deque
from typing import List

from graph import Graph, NodeState
from algorithms.step import QueueSnapshot
from algorithms.execution import AlgorithmExecution, Outcome, TraceBuilder, COMPLETE


# ---------------------------------------------------------------------------
# Pseudocode — line N is PSEUDOCODE[N - 1]
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "function BFS(graph, startNode):",                         # 1
    "    queue = [startNode]",                                 # 2
    "    visited = new Set()",                                 # 3
    "    while queue is not empty:",                           # 4
    "        current = queue.dequeue()",                       # 5
    "        if current in visited:",                          # 6
    "            continue",                                    # 7
    "        visited.add(current)",                            # 8
    "        for neighbor in graph.neighbors(current):",       # 9
    "            if neighbor not in visited and not queued:",  # 10
    "                queue.enqueue(neighbor)",                 # 11
    "    return visited",                                      # 12
]


def bfs(graph: Graph, start: str) -> AlgorithmExecution:
    """
    Breadth-first traversal of everything reachable from `start`.

    Args:
        graph : The graph to traverse (read only).
        start : Starting node id.
    """

    trace   = TraceBuilder(graph, "bfs")
    label   = trace.label
    queue   = deque([start])
    visited: set = set()

    trace.add(
        f"Starting BFS from node {label(start)}",
        2,
        nodes=[{"id": start, "state": NodeState.CURRENT.value}],
        snapshot=QueueSnapshot(tuple(queue)),
    )

    while queue:
        current = queue.popleft()

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
                if nbr in visited or nbr in queue:
                    continue
                queue.append(nbr)
                trace.add(
                    f"Added {label(nbr)} to queue",
                    11,
                    nodes=[{"id": nbr, "state": NodeState.CURRENT.value}],
                    edges=[{"id": edge.id, "isActive": True}],
                    snapshot=QueueSnapshot(tuple(queue)),
                )

        trace.add(
            f"Queue: [{', '.join(label(n) for n in queue)}]",
            4,
            snapshot=QueueSnapshot(tuple(queue)),
        )

    trace.add("BFS complete - all reachable nodes visited", 12)
    return trace.finish(Outcome(COMPLETE))
