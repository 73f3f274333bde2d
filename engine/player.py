"""
player.py — Trace Player
=========================
The reference consumer of an AlgorithmExecution.  It owns a private copy
of the input graph and moves through the trace by applying step deltas
forward and reverting them backward.

Position model:
    current_idx == -1       → nothing applied, the graph is the input graph
    current_idx == i        → steps[0..i] applied, steps[i] is on screen
    current_idx == last     → is_complete

Reverting is exact: before a step is applied the player stores the prior
value of every field that step touches, so `prev_step()` restores what
was there rather than guessing a default.

There is no timer here; play / pause / speed belong to whoever drives the
player.
"""

from typing import Any, Dict, List, Mapping, Optional, Tuple

from graph import Graph
from algorithms import AlgorithmExecution, AlgorithmStep

Updates = List[Dict[str, Any]]


class TracePlayer:
    """
    Attributes:
        execution   : The trace being played (never mutated).
        current_idx : Index of the last applied step, -1 before the first.
    """

    def __init__(self, graph: Graph, execution: AlgorithmExecution):
        self._graph:      Graph                        = graph.copy()
        self.execution:   AlgorithmExecution           = execution
        self.current_idx: int                          = -1
        self._undo:       List[Tuple[Updates, Updates]] = []

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def next_step(self) -> bool:
        """Apply one step.  Returns False if already at the end."""
        target = self.current_idx + 1
        if target >= len(self.execution.steps):
            return False
        self._apply(self.execution.steps[target])
        self.current_idx = target
        return True

    def prev_step(self) -> bool:
        """Revert one step.  Returns False if nothing is applied."""
        if self.current_idx < 0:
            return False
        node_undo, edge_undo = self._undo.pop()
        self._graph.apply_updates(node_undo, edge_undo)
        self.current_idx -= 1
        return True

    def goto_step(self, idx: int) -> bool:
        """Move to step `idx` (-1 for the untouched graph)."""
        if not -1 <= idx < len(self.execution.steps):
            return False
        while self.current_idx < idx:
            self.next_step()
        while self.current_idx > idx:
            self.prev_step()
        return True

    def rewind(self) -> None:
        self.goto_step(-1)

    def jump_to_end(self) -> None:
        self.goto_step(len(self.execution.steps) - 1)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def graph(self) -> Graph:
        return self._graph

    @property
    def current_step(self) -> Optional[AlgorithmStep]:
        if 0 <= self.current_idx < len(self.execution.steps):
            return self.execution.steps[self.current_idx]
        return None

    @property
    def is_complete(self) -> bool:
        return self.current_idx == len(self.execution.steps) - 1

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _apply(self, step: AlgorithmStep) -> None:
        node_undo = _undo_entries(self._graph.get_node, step.node_updates)
        edge_undo = _undo_entries(self._graph.get_edge, step.edge_updates)
        self._graph.apply_updates(step.node_updates, step.edge_updates)
        self._undo.append((node_undo, edge_undo))


def _undo_entries(lookup, updates) -> List[Dict[str, Any]]:
    """Prior values of every field `updates` touch, newest first."""
    undo = []
    for update in updates:
        item = lookup(update["id"])
        if item is not None:
            undo.append(_prior(item.to_dict(), update))
    # reverting a step must undo its updates in reverse order
    undo.reverse()
    return undo


def _prior(current: Dict[str, Any], update: Mapping[str, Any]) -> Dict[str, Any]:
    return {key: current.get(key) for key in update}
