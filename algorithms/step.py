"""
step.py — Algorithm Step (Trace Delta)
======================================
Every algorithm records a sequence of AlgorithmStep objects.
A step is a DIFF, not a frame:

    • `node_updates` / `edge_updates` hold partial dicts keyed by "id",
      carrying only the fields that changed in this step.
    • `code_line` is the 1-based line of the algorithm's PSEUDOCODE
      listing that is executing.
    • `description` says in plain words what happened.
    • `snapshot` optionally carries a view of the algorithm's internal
      data structure (queue, stack, distance table, …) for live panels.

Replaying every step's updates, in order, against the input graph
reproduces the algorithm's final declared state exactly.

Snapshots are a tagged union: one small frozen dataclass per algorithm
family.  Each knows which named slot(s) of the external step shape it
fills (`queue`, `stack`, `result`, `list`, `array`, `matrix`), so a
player that already reads those slots keeps working, while a BFS step
can never accidentally carry a distance matrix.
"""

import copy
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

Matrix = Dict[str, Dict[str, float]]


# ---------------------------------------------------------------------------
# Auxiliary snapshots
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class QueueSnapshot:
    """BFS frontier, front of the queue first."""
    queue: Tuple[str, ...]

    def slots(self) -> Dict[str, Any]:
        return {"queue": list(self.queue)}


@dataclass(frozen=True)
class StackSnapshot:
    """DFS frontier, top of the stack last."""
    stack: Tuple[str, ...]

    def slots(self) -> Dict[str, Any]:
        return {"stack": list(self.stack)}


@dataclass(frozen=True)
class DistanceSnapshot:
    """Distance table as a map of maps (single-source rows, gScore/fScore, or all-pairs)."""
    matrix: Matrix

    def slots(self) -> Dict[str, Any]:
        return {"matrix": copy.deepcopy(self.matrix)}


@dataclass(frozen=True)
class PathSnapshot:
    """A result path, optionally with the table it was computed from."""
    result: Tuple[str, ...]
    matrix: Optional[Matrix] = None

    def slots(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"result": list(self.result)}
        if self.matrix is not None:
            data["matrix"] = copy.deepcopy(self.matrix)
        return data


@dataclass(frozen=True)
class TreeSnapshot:
    """Prim: nodes in the growing tree, in join order."""
    nodes: Tuple[str, ...]

    def slots(self) -> Dict[str, Any]:
        return {"list": list(self.nodes)}


@dataclass(frozen=True)
class UnionFindSnapshot:
    """Kruskal: parent of every node, in node order."""
    parents: Tuple[str, ...]

    def slots(self) -> Dict[str, Any]:
        return {"array": list(self.parents)}


Snapshot = Union[
    QueueSnapshot,
    StackSnapshot,
    DistanceSnapshot,
    PathSnapshot,
    TreeSnapshot,
    UnionFindSnapshot,
]

# node-id sequence slots, in the order they are rendered
SEQUENCE_SLOTS = ("queue", "stack", "result", "list", "array")


# ---------------------------------------------------------------------------
# Step
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class AlgorithmStep:
    """
    Attributes:
        id           : 0-based sequence number within the run.
        description  : Human-readable account of this step.
        code_line    : 1-based line in the algorithm's PSEUDOCODE.
        node_updates : Read-only partial node dicts, each with an "id".
        edge_updates : Read-only partial edge dicts, each with an "id".
        snapshot     : Optional auxiliary snapshot.
    """

    id:           int
    description:  str
    code_line:    int
    node_updates: Tuple[Mapping[str, Any], ...] = ()
    edge_updates: Tuple[Mapping[str, Any], ...] = ()
    snapshot:     Optional[Snapshot]            = None

    # -- slot accessors --
    @property
    def aux(self) -> Dict[str, Any]:
        return self.snapshot.slots() if self.snapshot is not None else {}

    @property
    def queue(self) -> Optional[List[str]]:
        return self.aux.get("queue")

    @property
    def stack(self) -> Optional[List[str]]:
        return self.aux.get("stack")

    @property
    def result(self) -> Optional[List[str]]:
        return self.aux.get("result")

    @property
    def matrix(self) -> Optional[Matrix]:
        return self.aux.get("matrix")

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id":          self.id,
            "description": self.description,
            "codeLine":    self.code_line,
            "nodeUpdates": [dict(u) for u in self.node_updates],
            "edgeUpdates": [dict(u) for u in self.edge_updates],
        }
        data.update(self.aux)
        return data
