"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the engine knows about.

    from algorithms import REGISTRY, get_algorithm, get_algorithm_code

REGISTRY is a dict:
    {
        "bfs": AlgoInfo(key, label, fn, pseudocode, edge_mode, needs_start, …),
        …
    }

`edge_mode` documents how the algorithm reads edge orientation:

    "undirected" – any edge is usable in both directions
                   (bfs, dfs, prim, kruskal, floyd-warshall)
    "directed"   – only source → target is followed
                   (dijkstra, bellman-ford, astar, ford-fulkerson)

This split is intentional.  Model an undirected weighted graph for a
"directed" algorithm with one edge per direction.

An algorithm with `directed_option` lets the caller override its edge mode
per run (floyd-warshall: `directed=True` seeds the matrix one way only).

Adding a new algorithm is: write the function + PSEUDOCODE, add one entry
here.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms.bfs            import bfs            as _bfs,      PSEUDOCODE as _bfs_pc
from algorithms.dfs            import dfs            as _dfs,      PSEUDOCODE as _dfs_pc
from algorithms.dijkstra       import dijkstra       as _dijkstra, PSEUDOCODE as _dij_pc
from algorithms.bellman_ford   import bellman_ford   as _bf,       PSEUDOCODE as _bf_pc
from algorithms.astar          import astar          as _astar,    PSEUDOCODE as _ast_pc
from algorithms.prim           import prim           as _prim,     PSEUDOCODE as _prim_pc
from algorithms.kruskal        import kruskal        as _kruskal,  PSEUDOCODE as _kru_pc
from algorithms.floyd_warshall import floyd_warshall as _fw,       PSEUDOCODE as _fw_pc
from algorithms.ford_fulkerson import ford_fulkerson as _ff,       PSEUDOCODE as _ff_pc

from algorithms.step import AlgorithmStep
from algorithms.execution import AlgorithmExecution, OperationLogEntry, Outcome


NOT_IMPLEMENTED: List[str] = ["Algorithm not implemented"]


class AlgorithmNotImplemented(LookupError):
    """The requested algorithm key is not in the registry."""


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                    # registry key, e.g. "bfs"
    label:            str                    # human label, e.g. "Breadth-First Search"
    fn:               Callable               # the traced implementation
    pseudocode:       List[str]              # lines for the code panel
    edge_mode:        str       = "undirected"
    needs_start:      bool      = True       # takes a start / source node
    needs_end:        bool      = False      # takes an end / sink node
    end_optional:     bool      = False      # end may be omitted
    start_param:      str       = "start"    # keyword the function takes
    end_param:        str       = "end"
    directed_option:  bool      = False      # accepts directed=True|False
    tags:             List[str] = field(default_factory=list)
    complexity_time:  str       = ""
    description:      str       = ""

    def to_dict(self) -> dict:
        return {
            "key":            self.key,
            "label":          self.label,
            "edgeMode":       self.edge_mode,
            "needsStart":     self.needs_start,
            "needsEnd":       self.needs_end,
            "endOptional":    self.end_optional,
            "directedOption": self.directed_option,
            "tags":           list(self.tags),
            "complexityTime": self.complexity_time,
            "description":    self.description,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "bfs": AlgoInfo(
        key="bfs", label="Breadth-First Search", fn=_bfs, pseudocode=_bfs_pc,
        tags=["traversal"], complexity_time="O(V + E)",
        description="Explores layer by layer from the start node.",
    ),

    "dfs": AlgoInfo(
        key="dfs", label="Depth-First Search", fn=_dfs, pseudocode=_dfs_pc,
        tags=["traversal"], complexity_time="O(V + E)",
        description="Dives deep before backtracking.",
    ),

    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", fn=_dijkstra, pseudocode=_dij_pc,
        edge_mode="directed", tags=["weighted", "shortest-path"],
        complexity_time="O(E² log E)",
        description="Greedily settles the closest node. Needs non-negative weights.",
    ),

    "bellman-ford": AlgoInfo(
        key="bellman-ford", label="Bellman–Ford", fn=_bf, pseudocode=_bf_pc,
        edge_mode="directed", tags=["weighted", "shortest-path", "negative-edges"],
        complexity_time="O(V · E)",
        description="Handles negative edges and detects negative cycles.",
    ),

    "astar": AlgoInfo(
        key="astar", label="A* Search", fn=_astar, pseudocode=_ast_pc,
        edge_mode="directed", needs_end=True,
        tags=["weighted", "shortest-path", "heuristic"],
        complexity_time="O(V² log V)",
        description="Dijkstra guided by straight-line distance to the goal.",
    ),

    "prim": AlgoInfo(
        key="prim", label="Prim's MST", fn=_prim, pseudocode=_prim_pc,
        tags=["weighted", "mst"], complexity_time="O(E² log E)",
        description="Grows a minimum spanning tree from the start node.",
    ),

    "kruskal": AlgoInfo(
        key="kruskal", label="Kruskal's MST", fn=_kruskal, pseudocode=_kru_pc,
        needs_start=False, tags=["weighted", "mst", "union-find"],
        complexity_time="O(E log E + E · V)",
        description="Adds the cheapest edges that join different components.",
    ),

    "floyd-warshall": AlgoInfo(
        key="floyd-warshall", label="Floyd–Warshall", fn=_fw, pseudocode=_fw_pc,
        needs_start=False, directed_option=True, tags=["weighted", "all-pairs"],
        complexity_time="O(V³)",
        description="All-pairs shortest paths. Watch the matrix evolve!",
    ),

    "ford-fulkerson": AlgoInfo(
        key="ford-fulkerson", label="Ford–Fulkerson (Edmonds–Karp)", fn=_ff, pseudocode=_ff_pc,
        edge_mode="directed", needs_end=True, end_optional=True,
        start_param="source", end_param="sink",
        tags=["weighted", "max-flow"], complexity_time="O(V · E²)",
        description="Pushes flow along shortest augmenting paths until none remain.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def _normalise(key: str) -> str:
    return key.strip().lower().replace("_", "-")


def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key ("bellman_ford" and "bellman-ford" both work), or None."""
    if not isinstance(key, str):
        return None
    return REGISTRY.get(_normalise(key))


def require_algorithm(key: str) -> AlgoInfo:
    info = get_algorithm(key)
    if info is None:
        raise AlgorithmNotImplemented(f"Unknown algorithm: {key}")
    return info


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def get_algorithm_code(key: str) -> List[str]:
    """Pseudocode listing for `key`; a one-line placeholder for unknown keys."""
    info = get_algorithm(key)
    return list(info.pseudocode) if info else list(NOT_IMPLEMENTED)


__all__ = [
    "AlgoInfo",
    "AlgorithmNotImplemented",
    "AlgorithmExecution",
    "AlgorithmStep",
    "OperationLogEntry",
    "Outcome",
    "REGISTRY",
    "NOT_IMPLEMENTED",
    "get_algorithm",
    "require_algorithm",
    "list_algorithms",
    "get_algorithm_code",
]
