"""
execution.py — Trace Builder & Execution Container
===================================================
One TraceBuilder per run.  The algorithm owns it exclusively, appends to
it synchronously, and freezes it with `finish()` into an
AlgorithmExecution that is never mutated afterwards.

Usage inside an algorithm:
    trace = TraceBuilder(graph, "bfs")
    trace.add("Visited node A", 8, nodes=[{"id": "A", "state": "visited"}])
    ...
    return trace.finish(Outcome(COMPLETE))

The execution always comes back with `current_step = 0` and
`is_complete = False`; moving through it is the player's business.

The operation log is a presentational projection built alongside the
steps: one entry per step, node ids resolved to labels, and a cumulative
"visited so far" list recomputed from every step emitted up to that point.
"""

import copy
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from graph import Graph, NodeState
from algorithms.step import AlgorithmStep, Snapshot, SEQUENCE_SLOTS


# ---------------------------------------------------------------------------
# Outcome statuses
# ---------------------------------------------------------------------------
COMPLETE       = "complete"
PATH_FOUND     = "path_found"
NO_PATH        = "no_path"
NEGATIVE_CYCLE = "negative_cycle"
ERROR          = "error"

INF = float("inf")


def fmt(value: float) -> str:
    """Render a distance / weight for a step description."""
    if value == INF:
        return "∞"
    if value == -INF:
        return "-∞"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, float):
        return f"{value:.2f}".rstrip("0").rstrip(".")
    return str(value)


@dataclass(frozen=True)
class Outcome:
    """
    Terminal summary of a run.  Negative cycles and missing paths are
    ordinary outcomes here, never exceptions.
    """

    status:         str
    path:           Tuple[str, ...]            = ()
    total_distance: Optional[float]            = None
    mst_weight:     Optional[float]            = None
    max_flow:       Optional[float]            = None
    distances:      Optional[Dict[str, float]] = None

    @property
    def path_found(self) -> bool:
        return self.status == PATH_FOUND

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"status": self.status}
        if self.path:
            data["path"] = list(self.path)
        if self.total_distance is not None:
            data["totalDistance"] = self.total_distance
        if self.mst_weight is not None:
            data["mstWeight"] = self.mst_weight
        if self.max_flow is not None:
            data["maxFlow"] = self.max_flow
        if self.distances is not None:
            data["distances"] = dict(self.distances)
        return data


# ---------------------------------------------------------------------------
# Operation log
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class OperationLogEntry:
    step_id:     int
    description: str
    visited:     Tuple[str, ...]            # labels
    slots:       Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "step":        self.step_id,
            "description": self.description,
            "visited":     list(self.visited),
        }
        data.update(copy.deepcopy(self.slots))
        return data


# ---------------------------------------------------------------------------
# Execution
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class AlgorithmExecution:
    """
    Attributes:
        algorithm     : Registry key of the algorithm that produced the trace.
        steps         : Ordered, immutable step sequence.
        operation_log : One OperationLogEntry per step.
        outcome       : Terminal summary.
        current_step  : Always 0 from the engine.
        is_complete   : Always False from the engine.
    """

    algorithm:     str
    steps:         Tuple[AlgorithmStep, ...]
    operation_log: Tuple[OperationLogEntry, ...]
    outcome:       Outcome
    current_step:  int  = 0
    is_complete:   bool = False

    @property
    def last_step(self) -> Optional[AlgorithmStep]:
        return self.steps[-1] if self.steps else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "algorithm":    self.algorithm,
            "steps":        [s.to_dict() for s in self.steps],
            "currentStep":  self.current_step,
            "isComplete":   self.is_complete,
            "operationLog": [e.to_dict() for e in self.operation_log],
            "outcome":      self.outcome.to_dict(),
        }


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------
class TraceBuilder:
    """
    Mutable accumulator for a single run.

    Attributes:
        graph         : The (read-only) graph being traced, used for labels.
        algorithm     : Registry key recorded on the finished execution.
        steps         : Steps appended so far.
        operation_log : Log entries appended so far.
    """

    def __init__(self, graph: Graph, algorithm: str):
        self.graph:         Graph                   = graph
        self.algorithm:     str                     = algorithm
        self.steps:         List[AlgorithmStep]     = []
        self.operation_log: List[OperationLogEntry] = []

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------
    def add(
        self,
        description: str,
        code_line: int,
        nodes: Iterable[Mapping[str, Any]] = (),
        edges: Iterable[Mapping[str, Any]] = (),
        snapshot: Optional[Snapshot] = None,
    ) -> AlgorithmStep:
        step = AlgorithmStep(
            id=len(self.steps),
            description=description,
            code_line=code_line,
            node_updates=tuple(MappingProxyType(dict(u)) for u in nodes),
            edge_updates=tuple(MappingProxyType(dict(u)) for u in edges),
            snapshot=snapshot,
        )
        self.steps.append(step)
        self.operation_log.append(self._log_entry(step))
        return step

    def halt_on_malformed_weights(self) -> bool:
        """
        Record a terminal error step if any edge weight is not a number.
        Returns True when the caller should stop.
        """
        bad = self.graph.malformed_edges()
        if not bad:
            return False
        names = ", ".join(
            f"{self.label(e.source)}-{self.label(e.target)} ({e.raw_weight!r})" for e in bad
        )
        self.add(
            f"Cannot run: malformed edge weight on {names}",
            1,
            edges=[{"id": e.id, "isError": True} for e in bad],
        )
        return True

    def finish(self, outcome: Outcome) -> AlgorithmExecution:
        return AlgorithmExecution(
            algorithm=self.algorithm,
            steps=tuple(self.steps),
            operation_log=tuple(self.operation_log),
            outcome=outcome,
        )

    # ------------------------------------------------------------------
    # Labels
    # ------------------------------------------------------------------
    def label(self, node_id: str) -> str:
        return self.graph.label_of(node_id)

    def path_label(self, path: Iterable[str]) -> str:
        return " → ".join(self.label(n) for n in path)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _visited_so_far(self) -> Tuple[str, ...]:
        seen: List[str] = []
        for step in self.steps:
            for update in step.node_updates:
                if update.get("state") == NodeState.VISITED.value and update["id"] not in seen:
                    seen.append(update["id"])
        return tuple(self.label(n) for n in seen)

    def _log_entry(self, step: AlgorithmStep) -> OperationLogEntry:
        slots: Dict[str, Any] = {}
        for key, value in step.aux.items():
            if key in SEQUENCE_SLOTS:
                slots[key] = [self.label(n) for n in value]
            elif key == "matrix":
                slots[key] = self._label_matrix(value)
        return OperationLogEntry(
            step_id=step.id,
            description=step.description,
            visited=self._visited_so_far(),
            slots=slots,
        )

    def _label_key(self, key: str) -> str:
        return self.label(key) if key in self.graph.nodes else key

    def _label_matrix(self, matrix: Mapping[str, Mapping[str, float]]) -> Dict[str, Dict[str, float]]:
        return {
            self._label_key(row): {self._label_key(col): v for col, v in cells.items()}
            for row, cells in matrix.items()
        }
