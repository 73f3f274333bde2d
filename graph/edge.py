"""
edge.py — Graph Edge
====================
Connects two nodes by id.  Carries a weight and three presentation flags
(`is_active`, `in_tree`, `is_error`) that only change when a step's
`edgeUpdates` entry is applied.

Design decisions:
  - `source` and `target` are node-id strings, NOT node references.
    This keeps edges serialisable and avoids circular references.
  - An edge is stored with an orientation, but whether that orientation
    matters is decided by the algorithm, not by the edge.  See
    `Graph.neighbours` vs `Graph.outgoing`.
  - Weight defaults to 1 when absent.  A weight that is present but not a
    finite number is kept as `raw_weight` and flagged `malformed`, so the
    run can end with an explanatory step instead of propagating NaN.
"""

import math
from numbers import Real
from typing import Optional, Dict, Any, Mapping


DEFAULT_WEIGHT = 1

# external camelCase name -> attribute
_FLAG_FIELDS = {
    "isActive": "is_active",
    "inTree":   "in_tree",
    "isError":  "is_error",
}


def _parse_weight(raw: Any):
    """Return (weight, malformed)."""
    if raw is None:
        return DEFAULT_WEIGHT, False
    if isinstance(raw, bool):
        return None, True
    if isinstance(raw, Real):
        if math.isnan(raw):
            return None, True
        return raw, False
    if isinstance(raw, str):
        try:
            value = float(raw)
        except ValueError:
            return None, True
        if math.isnan(value):
            return None, True
        return (int(value) if value.is_integer() else value), False
    return None, True


class GraphEdge:
    """
    Attributes:
        id         : Unique identifier.
        source     : ID of the tail node.
        target     : ID of the head node.
        weight     : Numeric cost / capacity (1 when absent, None when malformed).
        raw_weight : Whatever the caller supplied.
        malformed  : True if `raw_weight` could not be read as a number.
        is_active  : Highlighted by the current algorithm.
        in_tree    : Part of a spanning tree.
        is_error   : Implicated in a failure.
    """

    __slots__ = ("id", "source", "target", "weight", "raw_weight", "malformed",
                 "is_active", "in_tree", "is_error")

    def __init__(
        self,
        edge_id: str,
        source: str,
        target: str,
        weight: Any = None,
        is_active: bool = False,
        in_tree: bool = False,
        is_error: bool = False,
    ):
        self.id:         str   = edge_id
        self.source:     str   = source
        self.target:     str   = target
        self.raw_weight: Any   = weight
        self.weight, self.malformed = _parse_weight(weight)
        self.is_active:  bool  = is_active
        self.in_tree:    bool  = in_tree
        self.is_error:   bool  = is_error

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def touches(self, node_id: str) -> bool:
        return self.source == node_id or self.target == node_id

    def other_end(self, node_id: str) -> Optional[str]:
        """Given one endpoint, return the other, ignoring orientation."""
        if node_id == self.source:
            return self.target
        if node_id == self.target:
            return self.source
        return None

    # ------------------------------------------------------------------
    # Step application
    # ------------------------------------------------------------------
    def apply_update(self, update: Mapping[str, Any]) -> None:
        """Shallow-merge a partial edge dict (external field names)."""
        for key, value in update.items():
            if key == "id":
                continue
            if key in _FLAG_FIELDS:
                setattr(self, _FLAG_FIELDS[key], bool(value))
            elif key == "weight":
                self.raw_weight = value
                self.weight, self.malformed = _parse_weight(value)
            else:
                raise KeyError(f"Unknown edge field: {key!r}")

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id":       self.id,
            "source":   self.source,
            "target":   self.target,
            "isActive": self.is_active,
            "inTree":   self.in_tree,
            "isError":  self.is_error,
        }
        if self.raw_weight is not None:
            data["weight"] = self.raw_weight
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GraphEdge":
        return cls(
            edge_id=data["id"],
            source=data["source"],
            target=data["target"],
            weight=data.get("weight"),
            is_active=bool(data.get("isActive", False)),
            in_tree=bool(data.get("inTree", False)),
            is_error=bool(data.get("isError", False)),
        )

    def copy(self) -> "GraphEdge":
        return GraphEdge(self.id, self.source, self.target, self.raw_weight,
                         self.is_active, self.in_tree, self.is_error)

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"GraphEdge({self.source} → {self.target}, w={self.weight}, id={self.id})"

    def __eq__(self, other) -> bool:
        return isinstance(other, GraphEdge) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
